"""
pytest Plugin

Enable in a conftest.py:

    pytest_plugins = ["gwt.plugin"]

Options:
    --gwt-config PATH    YAML scenario config (ini: gwt_config)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from .builder import Scenario
from .config import ScenarioConfig
from .expectations import PytestExpectation


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--gwt-config",
        action="store",
        default=None,
        help="Path to the given/when/then scenario config (YAML)",
    )
    parser.addini("gwt_config", "Path to the given/when/then scenario config (YAML)", default="")


def _config_path(config: pytest.Config) -> Path | None:
    value = config.getoption("--gwt-config") or config.getini("gwt_config")
    if not value:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = Path(config.rootpath) / path
    return path


@pytest.fixture(scope="session")
def scenario_config(request: pytest.FixtureRequest) -> ScenarioConfig:
    path = _config_path(request.config)
    if path is None:
        return ScenarioConfig()
    return ScenarioConfig.from_file(path)


@pytest.fixture
def scenario(scenario_config: ScenarioConfig) -> Scenario:
    return Scenario(scenario_config, expectation=PytestExpectation())
