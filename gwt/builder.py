"""
Scenario Builder

Fluent given/when/then surface. Builder calls only accumulate state; the
conditions, actions and assertion run when ``then`` is called.

Usage:
    (
        Scenario()
        .given(lambda: 10, as_="a")
        .given(lambda: 20, as_="b")
        .when(lambda a, b: a + b, as_="sum")
        .then(check_sum)
    )
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Type

from .config import ScenarioConfig, validate_auth_provider
from .errors import ConfigurationError, UnsupportedFacadeError
from .evaluator import evaluate, run_assertion
from .expectations import ExpectationSink, PytestExpectation
from .registry import CallbackRegistry, Deferred, as_condition
from .store import ParameterStore

logger = logging.getLogger(__name__)

DEFAULT_ACTION_KEY = "response"
DEFAULT_PRINCIPAL_KEY = "user"


class Scenario:
    """
    One given/when/then scenario.

    Each test should build its own instance; the store and registries are
    not meant to be shared.
    """

    def __init__(
        self,
        config: Optional[ScenarioConfig] = None,
        expectation: Optional[ExpectationSink] = None,
    ):
        """
        Args:
            config: Auth configuration used by ``acting_as``
            expectation: Sink receiving ``throws`` declarations
        """
        self.config = config or ScenarioConfig()
        self.expectation = expectation if expectation is not None else PytestExpectation()
        self.conditions = CallbackRegistry("conditions")
        self.actions = CallbackRegistry("actions")
        self._store = ParameterStore()

    @property
    def store(self) -> ParameterStore:
        """Values stored so far."""
        return self._store

    def fake(self, facade: Any) -> "Scenario":
        """
        Activate the fake of a facade right away.

        Raises:
            UnsupportedFacadeError: facade has no callable ``fake``
        """
        fake = getattr(facade, "fake", None)
        if not callable(fake):
            raise UnsupportedFacadeError(facade)

        logger.debug("Faking %r", facade)
        fake()
        return self

    def acting_as(
        self,
        principal: Any,
        as_: Optional[str] = DEFAULT_PRINCIPAL_KEY,
        provider: Any = None,
        guard: Optional[str] = None,
        abilities: Optional[List[str]] = None,
    ) -> "Scenario":
        """
        Authenticate as ``principal`` before the actions run.

        The provider call is registered as a condition, so the principal it
        returns is injectable under ``as_``.

        Args:
            principal: User (or other principal) to act as
            as_: Store key for the principal
            provider: Auth provider; defaults to the configured one
            guard: Guard name; defaults to the configured guard
            abilities: Abilities/scopes granted to the principal

        Raises:
            UnsupportedAuthProviderError: provider lacks ``acting_as``
            UnknownGuardError: guard is not configured
            ConfigurationError: no provider given or configured
        """
        if provider is None:
            provider = self.config.auth_provider
        if provider is None:
            raise ConfigurationError("No auth provider configured for acting_as")

        validate_auth_provider(provider)
        guard = self.config.guard_for(guard)

        def act():
            return provider.acting_as(principal, abilities, guard)

        return self.given(Deferred(act), as_)

    def given(self, condition: Any, as_: Optional[str] = None) -> "Scenario":
        """
        Add a condition.

        Callables are run when the scenario is evaluated and their result is
        stored; any other value is stored right away. Wrap a value in
        ``Literal`` to store a callable as a value.

        Args:
            condition: Callable, plain value, ``Literal`` or ``Deferred``
            as_: Store key; defaults to the runtime type name of the value
        """
        condition = as_condition(condition)
        if isinstance(condition, Deferred):
            self.conditions.add(condition.callback, as_)
        else:
            key = self._store.set(as_, condition.value)
            logger.debug("Stored given value under %r", key)
        return self

    def when(self, action: Callable, as_: Optional[str] = DEFAULT_ACTION_KEY) -> "Scenario":
        """Add an action. Its result is stored under ``as_``."""
        self.actions.add(action, as_)
        return self

    def then(self, assertion: Callable) -> "Scenario":
        """
        Evaluate conditions, then actions, then run ``assertion``.

        Callbacks run once; calling ``then`` again only runs the new
        assertion against the values already stored.
        """
        with self.expectation.guard():
            evaluate(self.conditions, self._store)
            evaluate(self.actions, self._store)
            run_assertion(assertion, self._store)
        return self

    def throws(self, exception: Type[BaseException], message: Optional[str] = "") -> "Scenario":
        """Expect ``then`` to raise ``exception``, optionally containing ``message``."""
        self.expectation.expect_exception(exception)
        if message:
            self.expectation.expect_exception_message(message)
        return self
