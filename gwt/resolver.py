"""
Parameter Resolver

Computes the positional arguments for a callback from the values stored so
far.

Per declared parameter, in declaration order:
1. A stored value whose key equals the parameter name always wins.
2. Otherwise the store is scanned with its keys sorted in descending
   order (integer-like keys by number, so "10" sorts above "9"), and
   the *last* value whose runtime type is one of the declared types
   is used. Among several values of the same type this picks the one
   whose key sorts first ascending ("a" over "b").
3. Parameters without a match are left out of the argument list, so a
   required parameter without a value fails when the callback is called.

Matching is presence-based: falsy values such as 0, "" or None are valid
matches.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Any, List, Optional, Tuple

from .signature import ParameterSpec, Signature
from .store import ParameterStore

logger = logging.getLogger(__name__)


def resolve_arguments(signature: Optional[Signature], store: ParameterStore) -> List[Any]:
    """
    Positional arguments for a callback with the given signature.

    Args:
        signature: Signature description, or None if it could not be determined
        store: Values produced so far

    Returns:
        One value per matched parameter, in declaration order. Empty when
        the signature is unknown.
    """
    if signature is None:
        return []

    entries = sort_descending(store.items())

    arguments = []
    for param in signature.parameters:
        found, value = find_matching_param(param, store, entries)
        if found:
            arguments.append(value)
        else:
            logger.debug("No value to inject for parameter %r", param.name)
    return arguments


def find_matching_param(
    param: ParameterSpec,
    store: ParameterStore,
    entries: Optional[List[Tuple[str, Any]]] = None,
) -> Tuple[bool, Any]:
    """
    Find the value to inject for one parameter.

    Args:
        param: The declared parameter
        store: Values produced so far
        entries: Store items already sorted by key, descending

    Returns:
        ``(True, value)`` on a name or type match, ``(False, None)`` otherwise
    """
    found, value = store.lookup(param.name)
    if found:
        logger.debug("Injecting %r by name", param.name)
        return True, value

    if entries is None:
        entries = sort_descending(store.items())

    matched_key = None
    for key, candidate in entries:
        if param.accepts(candidate):
            # Keep scanning: the last match in descending key order wins
            matched_key, value = key, candidate

    if matched_key is None:
        return False, None

    logger.debug("Injecting %r by type from key %r", param.name, matched_key)
    return True, value


_INTEGER_KEY = re.compile(r"^(0|-?[1-9][0-9]*)$")


def _compare_keys(a: str, b: str) -> int:
    # Integer-like keys ("9", "10") compare by number, anything else as strings
    if _INTEGER_KEY.match(a) and _INTEGER_KEY.match(b):
        a_num, b_num = int(a), int(b)
        return (a_num > b_num) - (a_num < b_num)
    return (a > b) - (a < b)


def sort_descending(items: List[Tuple[str, Any]]) -> List[Tuple[str, Any]]:
    """Store items sorted by key, descending, with integer-like keys ordered numerically."""
    return sorted(items, key=functools.cmp_to_key(lambda x, y: _compare_keys(x[0], y[0])), reverse=True)
