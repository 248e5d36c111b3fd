"""
Parameter Store

Insertion-ordered mapping of string keys to values produced while a
scenario is evaluated. Values stored without a key are filed under the
name of their runtime type.
"""

from __future__ import annotations

import builtins
from typing import Any, Dict, Iterator, List, Optional, Tuple

_MISSING = object()


def type_name(cls: type) -> str:
    """
    Name used for a runtime type when inferring keys and matching types.

    Builtins use their bare name (``int``, ``list``, ``NoneType``); every
    other class is qualified with its module (``app.models.User``).
    """
    if cls.__module__ == builtins.__name__:
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def key_for(value: Any) -> str:
    """Inferred key for a value stored without an explicit key."""
    return type_name(type(value))


def type_matches(value: Any, declared: str) -> bool:
    """True if the runtime type of ``value`` is the declared type name."""
    cls = type(value)
    return declared in (type_name(cls), cls.__qualname__, cls.__name__)


class ParameterStore:
    """Ordered key/value store shared by every step of one scenario."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = {}
        for key, value in (values or {}).items():
            self.set(key, value)

    def set(self, key: Optional[str], value: Any) -> str:
        """Store ``value`` under ``key`` (or its inferred key) and return the key used."""
        key = key or key_for(value)
        self._values[key] = value
        return key

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def find_by_type(self, declared: str, default: Any = None) -> Any:
        """First stored value, in insertion order, whose runtime type is ``declared``."""
        for value in self._values.values():
            if type_matches(value, declared):
                return value
        return default

    def lookup(self, key: str) -> Tuple[bool, Any]:
        """Presence-aware lookup: ``(True, value)`` or ``(False, None)``."""
        value = self._values.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def keys(self) -> List[str]:
        return list(self._values)

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._values.items())

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParameterStore({self._values!r})"
