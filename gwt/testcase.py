"""
unittest Integration

``ScenarioTestCase`` starts a fresh scenario from any builder method, so a
test reads ``self.given(...).when(...).then(...)``. Every builder method is
delegated explicitly; ``ScenarioSurface`` lists them.
"""

from __future__ import annotations

import unittest
from typing import Any, Callable, ClassVar, List, Optional, Protocol, Type

from .builder import DEFAULT_ACTION_KEY, DEFAULT_PRINCIPAL_KEY, Scenario
from .config import ScenarioConfig
from .expectations import TestCaseExpectation


class ScenarioSurface(Protocol):
    """Public builder methods available to tests."""

    def fake(self, facade: Any) -> Scenario: ...

    def acting_as(
        self,
        principal: Any,
        as_: Optional[str] = ...,
        provider: Any = ...,
        guard: Optional[str] = ...,
        abilities: Optional[List[str]] = ...,
    ) -> Scenario: ...

    def given(self, condition: Any, as_: Optional[str] = ...) -> Scenario: ...

    def when(self, action: Callable, as_: Optional[str] = ...) -> Scenario: ...

    def then(self, assertion: Callable) -> Scenario: ...

    def throws(self, exception: Type[BaseException], message: Optional[str] = ...) -> Scenario: ...


class ScenarioTestCase(unittest.TestCase):
    """
    Base class for given/when/then tests.

    Set ``scenario_config`` on a subclass (or in ``setUp``) to configure
    ``acting_as``.
    """

    scenario_config: ClassVar[Optional[ScenarioConfig]] = None

    def scenario(self) -> Scenario:
        """A new scenario whose ``throws`` expectations use this test case."""
        return Scenario(self.scenario_config, expectation=TestCaseExpectation(self))

    def fake(self, facade: Any) -> Scenario:
        return self.scenario().fake(facade)

    def acting_as(
        self,
        principal: Any,
        as_: Optional[str] = DEFAULT_PRINCIPAL_KEY,
        provider: Any = None,
        guard: Optional[str] = None,
        abilities: Optional[List[str]] = None,
    ) -> Scenario:
        return self.scenario().acting_as(principal, as_, provider, guard, abilities)

    def given(self, condition: Any, as_: Optional[str] = None) -> Scenario:
        return self.scenario().given(condition, as_)

    def when(self, action: Callable, as_: Optional[str] = DEFAULT_ACTION_KEY) -> Scenario:
        return self.scenario().when(action, as_)

    def then(self, assertion: Callable) -> Scenario:
        return self.scenario().then(assertion)

    def throws(self, exception: Type[BaseException], message: Optional[str] = "") -> Scenario:
        return self.scenario().throws(exception, message)
