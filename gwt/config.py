"""
Scenario Configuration

Holds the auth provider used by ``acting_as`` and the guard it acts under.
The configuration is built once (per test session, or per test) and passed
to each scenario; it is validated when it is built.

YAML layout:

    auth:
      provider: myapp.testing.auth:FakeAuth
      guard: api
      guards:
        web: {driver: session}
        api: {driver: token}

``guards`` may also be a plain list of names.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import yaml

from .errors import ConfigurationError, UnknownGuardError, UnsupportedAuthProviderError

logger = logging.getLogger(__name__)

AUTH_ENTRY_POINT = "acting_as"


@dataclass(frozen=True)
class ScenarioConfig:
    """Auth settings shared by the scenarios of a test suite."""

    auth_provider: Optional[Any] = None
    auth_guard: Optional[str] = None
    auth_guards: Tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        auth_provider: Union[str, Any, None] = None,
        auth_guard: Optional[str] = None,
        auth_guards: Iterable[str] = (),
    ) -> "ScenarioConfig":
        """
        Build and validate a configuration.

        Args:
            auth_provider: Provider object, or import path "module:attr"
            auth_guard: Guard to act under by default
            auth_guards: Guard names declared by the application

        Raises:
            UnsupportedAuthProviderError: provider lacks ``acting_as``
            UnknownGuardError: ``auth_guard`` is not one of ``auth_guards``
            ConfigurationError: provider import path cannot be resolved
        """
        guards = tuple(auth_guards)
        provider = None
        if auth_provider is not None:
            provider = validate_auth_provider(resolve_auth_provider(auth_provider))
        if auth_guard:
            validate_guard(auth_guard, guards)

        return cls(auth_provider=provider, auth_guard=auth_guard or None, auth_guards=guards)

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "ScenarioConfig":
        """Build from a parsed config document (see module docstring)."""
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Scenario config must be a mapping, got {type(data).__name__}")

        auth = data.get("auth") or {}
        if not isinstance(auth, dict):
            raise ConfigurationError("'auth' section must be a mapping")

        guards = auth.get("guards") or ()
        if isinstance(guards, dict):
            guards = list(guards)
        elif isinstance(guards, str):
            guards = [guards]

        return cls.create(
            auth_provider=auth.get("provider"),
            auth_guard=auth.get("guard"),
            auth_guards=[str(g) for g in guards],
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ScenarioConfig":
        """Load a YAML config file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Scenario config not found: {path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in scenario config {path}: {e}") from e

        logger.debug("Loaded scenario config from %s", path)
        return cls.from_mapping(data)

    def guard_for(self, guard: Optional[str] = None) -> Optional[str]:
        """Effective guard: an explicit one (validated) or the configured default."""
        if guard:
            validate_guard(guard, self.auth_guards)
            return guard
        return self.auth_guard


def resolve_auth_provider(provider: Union[str, Any]) -> Any:
    """Import a provider given as "package.module:attr" (or "package.module.attr")."""
    if not isinstance(provider, str):
        return provider

    module_name, sep, attr = provider.partition(":")
    if not sep:
        module_name, _, attr = provider.rpartition(".")
    if not module_name or not attr:
        raise ConfigurationError(f"Invalid auth provider path: {provider!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import auth provider module {module_name!r}: {e}") from e

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigurationError(f"Auth provider {provider!r} not found") from e
    return obj


def validate_auth_provider(provider: Any) -> Any:
    """Return ``provider`` if it exposes a callable ``acting_as``."""
    if not callable(getattr(provider, AUTH_ENTRY_POINT, None)):
        raise UnsupportedAuthProviderError(provider)
    return provider


def validate_guard(guard: str, guards: Iterable[str]) -> str:
    guards = tuple(guards)
    if guard not in guards:
        raise UnknownGuardError(guard, guards)
    return guard
