"""
Scenario Evaluator

Runs registered callbacks one at a time with injected arguments and merges
their results back into the parameter store.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .registry import CallbackRegistry
from .resolver import resolve_arguments
from .signature import describe
from .store import ParameterStore

logger = logging.getLogger(__name__)


def evaluate(registry: CallbackRegistry, store: ParameterStore) -> ParameterStore:
    """
    Drain ``registry`` and run each callback against the growing store.

    A result other than None is stored under the entry key, or under the
    name of its runtime type for anonymous entries. Exceptions raised by a
    callback propagate immediately; the remaining callbacks are dropped.

    Returns:
        The same store, updated
    """
    entries = registry.drain_all()
    if not entries:
        return store

    logger.debug("Evaluating %d %s", len(entries), registry.name)
    for entry in entries:
        arguments = resolve_arguments(entry.signature, store)
        result = entry.callback(*arguments)

        if result is not None:
            key = store.set(entry.key, result)
            logger.debug("Stored result of %r under %r", entry.callback, key)

    return store


def run_assertion(assertion: Callable, store: ParameterStore) -> Any:
    """Invoke the assertion with injected arguments. Its result is not stored."""
    arguments = resolve_arguments(describe(assertion), store)
    logger.debug("Running assertion %r with %d argument(s)", assertion, len(arguments))
    return assertion(*arguments)
