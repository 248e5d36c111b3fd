"""
Scenario Errors

Only configuration problems are raised by the engine itself. Failures from
conditions, actions and assertions propagate unchanged.
"""


class ScenarioError(Exception):
    """Base class for errors raised by the scenario engine."""


class ConfigurationError(ScenarioError):
    """Test setup is invalid. Raised before any scenario evaluation."""


class UnsupportedFacadeError(ConfigurationError, TypeError):
    """Facade does not expose a callable ``fake`` entry point."""

    def __init__(self, facade: object):
        self.facade = facade
        super().__init__(f"{_describe(facade)} does not contain the method fake.")


class UnsupportedAuthProviderError(ConfigurationError, TypeError):
    """Auth provider does not expose a callable ``acting_as`` entry point."""

    def __init__(self, provider: object):
        self.provider = provider
        super().__init__(f"{_describe(provider)} does not contain the method acting_as.")


class UnknownGuardError(ConfigurationError, LookupError):
    """Guard name is not declared in the auth configuration."""

    def __init__(self, guard: str, known):
        self.guard = guard
        self.known = tuple(known)
        available = ", ".join(self.known) or "(none)"
        super().__init__(f"Auth guard [{guard}] is not defined. Available: {available}")


def _describe(obj: object) -> str:
    if isinstance(obj, type):
        return f"Class {obj.__qualname__}"
    return f"Object {obj!r}"
