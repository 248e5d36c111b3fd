"""
Exception Expectations

A scenario declares an expected exception with ``throws`` before ``then``
runs. The sink records it and wraps the evaluation pipeline in a guard that
consumes the matching exception, so raising it is the passing path.
"""

from __future__ import annotations

import contextlib
import re
import unittest
from abc import ABC, abstractmethod
from typing import ContextManager, Optional, Protocol, Type

import pytest


class ExpectationSink(Protocol):
    """What a scenario needs from the test to expect an exception."""

    def expect_exception(self, kind: Type[BaseException]) -> None: ...

    def expect_exception_message(self, message: str) -> None: ...

    def guard(self) -> ContextManager: ...


class _Expectation(ABC):
    """Records one pending expectation. Cleared once its guard has run."""

    def __init__(self):
        self.kind: Optional[Type[BaseException]] = None
        self.message: str = ""

    def expect_exception(self, kind: Type[BaseException]) -> None:
        self.kind = kind

    def expect_exception_message(self, message: str) -> None:
        self.message = message

    @property
    def pending(self) -> bool:
        return self.kind is not None

    @contextlib.contextmanager
    def guard(self):
        if not self.pending:
            yield
            return

        kind, message = self.kind, self.message
        self.kind, self.message = None, ""
        with self._raises(kind, message):
            yield

    @abstractmethod
    def _raises(self, kind: Type[BaseException], message: str) -> ContextManager:
        """Context manager that passes only if ``kind`` (with ``message``) is raised."""


class PytestExpectation(_Expectation):
    """Expectation checked with ``pytest.raises``; the message is a substring match."""

    def _raises(self, kind: Type[BaseException], message: str) -> ContextManager:
        if message:
            return pytest.raises(kind, match=re.escape(message))
        return pytest.raises(kind)


class TestCaseExpectation(_Expectation):
    """Expectation checked with ``unittest.TestCase.assertRaises``."""

    __test__ = False

    def __init__(self, test_case: unittest.TestCase):
        super().__init__()
        self.test_case = test_case

    def _raises(self, kind: Type[BaseException], message: str) -> ContextManager:
        if message:
            return self.test_case.assertRaisesRegex(kind, re.escape(message))
        return self.test_case.assertRaises(kind)
