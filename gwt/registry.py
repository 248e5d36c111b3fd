"""
Callback Registry

Ordered collection of condition or action callbacks. Entries are either
keyed, replacing any earlier entry with the same key in place, or appended
anonymously. Draining hands every entry out once and empties the registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from .signature import Signature, describe


@dataclass(frozen=True)
class Literal:
    """A value handed to ``given`` that is stored as-is."""

    value: Any


@dataclass(frozen=True)
class Deferred:
    """A callback handed to ``given`` that runs when the scenario is evaluated."""

    callback: Callable


Condition = Union[Literal, Deferred]


def as_condition(obj: Any) -> Condition:
    """Classify a raw ``given`` argument. Explicit variants pass through."""
    if isinstance(obj, (Literal, Deferred)):
        return obj
    if callable(obj):
        return Deferred(obj)
    return Literal(obj)


@dataclass
class CallbackEntry:
    """A registered callback, its optional key and its signature description."""

    callback: Callable
    key: Optional[str] = None
    signature: Optional[Signature] = field(default=None, repr=False)

    @classmethod
    def create(cls, callback: Callable, key: Optional[str] = None) -> "CallbackEntry":
        return cls(callback=callback, key=key or None, signature=describe(callback))


class CallbackRegistry:
    """Insertion-ordered callbacks for one phase (conditions or actions)."""

    def __init__(self, name: str = "callbacks"):
        self.name = name
        self._entries: List[CallbackEntry] = []
        self._positions: Dict[str, int] = {}

    def add(self, callback: Callable, key: Optional[str] = None) -> CallbackEntry:
        """
        Register ``callback``.

        Args:
            callback: Callable to evaluate later
            key: Store key for its result. Empty or None appends anonymously.

        Returns:
            The registered entry
        """
        entry = CallbackEntry.create(callback, key)
        if entry.key is None:
            self._entries.append(entry)
            return entry

        position = self._positions.get(entry.key)
        if position is None:
            self._positions[entry.key] = len(self._entries)
            self._entries.append(entry)
        else:
            self._entries[position] = entry
        return entry

    def drain_all(self) -> List[CallbackEntry]:
        """Return every entry in insertion order and empty the registry."""
        entries, self._entries = self._entries, []
        self._positions = {}
        return entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        keys = [entry.key for entry in self._entries]
        return f"CallbackRegistry({self.name!r}, keys={keys!r})"
