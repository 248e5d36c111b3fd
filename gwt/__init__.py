"""
Given/When/Then Scenarios

Fluent test scenarios whose steps receive earlier results by name or type:

    Scenario().given(lambda: 10, as_="a").when(lambda a: a * 2).then(check)
"""

from .builder import Scenario
from .config import ScenarioConfig
from .errors import (
    ConfigurationError,
    ScenarioError,
    UnknownGuardError,
    UnsupportedAuthProviderError,
    UnsupportedFacadeError,
)
from .evaluator import evaluate, run_assertion
from .expectations import ExpectationSink, PytestExpectation, TestCaseExpectation
from .registry import CallbackEntry, CallbackRegistry, Deferred, Literal
from .resolver import resolve_arguments
from .signature import ParameterSpec, Signature, describe
from .store import ParameterStore
from .testcase import ScenarioSurface, ScenarioTestCase

__all__ = [
    "Scenario",
    "ScenarioConfig",
    "ScenarioError",
    "ConfigurationError",
    "UnsupportedFacadeError",
    "UnsupportedAuthProviderError",
    "UnknownGuardError",
    "evaluate",
    "run_assertion",
    "ExpectationSink",
    "PytestExpectation",
    "TestCaseExpectation",
    "CallbackEntry",
    "CallbackRegistry",
    "Literal",
    "Deferred",
    "resolve_arguments",
    "ParameterSpec",
    "Signature",
    "describe",
    "ParameterStore",
    "ScenarioSurface",
    "ScenarioTestCase",
]
