"""Shared pytest configuration for the scenario tests."""

from __future__ import annotations

import pytest

from gwt import ScenarioConfig
from tests.support.fakes import FakeAuth, FakeMail

pytest_plugins = ["gwt.plugin", "pytester"]


@pytest.fixture(autouse=True)
def reset_fakes():
    FakeAuth.reset()
    FakeMail.reset()
    yield
    FakeAuth.reset()
    FakeMail.reset()


@pytest.fixture
def auth_config() -> ScenarioConfig:
    return ScenarioConfig.create(auth_provider=FakeAuth, auth_guard="web", auth_guards=["web", "api"])


@pytest.fixture
def call_log() -> list[str]:
    return []
