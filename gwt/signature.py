"""
Callback Signatures

Describes the positional parameters of a callback once, at registration,
so injection works on plain data instead of live introspection.
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .store import type_matches, type_name

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class ParameterSpec:
    """A declared parameter: its name and the type names it accepts."""

    name: str
    types: Tuple[str, ...] = ()

    def accepts(self, value: Any) -> bool:
        """True if the runtime type of ``value`` is one of the declared types."""
        return any(type_matches(value, declared) for declared in self.types)


@dataclass(frozen=True)
class Signature:
    """Positional parameters of a callback, in declaration order."""

    parameters: Tuple[ParameterSpec, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.parameters)


def describe(callback: Callable) -> Optional[Signature]:
    """
    Build the signature description of ``callback``.

    Returns None when the parameter list cannot be determined (some builtins
    and C extensions), in which case nothing is injected.
    """
    try:
        sig = inspect.signature(callback)
    except (TypeError, ValueError, NameError) as e:
        logger.debug("No signature for %r: %s", callback, e)
        return None

    namespace = _namespace(callback)
    parameters = []
    for param in sig.parameters.values():
        if param.kind not in _POSITIONAL:
            continue
        annotation = _evaluate(param.annotation, namespace)
        parameters.append(ParameterSpec(param.name, declared_types(annotation)))

    return Signature(tuple(parameters))


def declared_types(annotation: Any) -> Tuple[str, ...]:
    """
    Flatten an annotation into the ordered type names it declares.

    Unions expand to their members, ``Annotated`` to its first argument and
    parametrised generics to their origin. ``Any`` and missing annotations
    declare nothing.
    """
    if annotation is inspect.Parameter.empty or annotation is Any:
        return ()
    if isinstance(annotation, str):
        return _string_types(annotation)
    if isinstance(annotation, typing.ForwardRef):
        return _string_types(annotation.__forward_arg__)

    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return declared_types(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        names = []
        for member in typing.get_args(annotation):
            for name in declared_types(member):
                if name not in names:
                    names.append(name)
        return tuple(names)
    if isinstance(origin, type):
        return (type_name(origin),)
    if annotation is None:
        return (type_name(type(None)),)
    if isinstance(annotation, type):
        return (type_name(annotation),)
    return ()


_TYPING_ALIASES = {
    "List": "list",
    "Dict": "dict",
    "Set": "set",
    "FrozenSet": "frozenset",
    "Tuple": "tuple",
    "Type": "type",
}


def _string_types(annotation: str) -> Tuple[str, ...]:
    # Unresolved string annotations, e.g. "Order | None", "Union[int, str]", "list[Order]"
    names = []
    for name in _string_members(annotation):
        if name.startswith("typing."):
            name = name[len("typing."):]
        name = _TYPING_ALIASES.get(name, name)
        if name == "None":
            name = type_name(type(None))
        if name and name != "Any" and name not in names:
            names.append(name)
    return tuple(names)


def _string_members(text: str) -> List[str]:
    text = text.strip().strip("'\"").strip()
    parts = _split_top_level(text, "|")
    if len(parts) > 1:
        return [name for part in parts for name in _string_members(part)]

    start = text.find("[")
    if start == -1 or not text.endswith("]"):
        return [text]

    head = text[:start].strip()
    args = _split_top_level(text[start + 1:-1], ",")
    if head in ("Union", "typing.Union"):
        return [name for arg in args for name in _string_members(arg)]
    if head in ("Optional", "typing.Optional"):
        return _string_members(args[0]) + ["None"]
    if head in ("Annotated", "typing.Annotated"):
        return _string_members(args[0])
    return [head]


def _split_top_level(text: str, separator: str) -> List[str]:
    parts = []
    depth = 0
    current = []
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _evaluate(annotation: Any, namespace: Dict[str, Any]) -> Any:
    """Evaluate one string annotation. Unresolvable ones are returned unchanged."""
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, namespace)
    except Exception as e:
        logger.debug("Could not resolve annotation %r: %s", annotation, e)
        return annotation


def _namespace(callback: Callable) -> Dict[str, Any]:
    # Module globals of the callback, overlaid with its closure variables
    target = callback
    while isinstance(target, functools.partial):
        target = target.func
    if isinstance(target, type):
        target = target.__init__
    elif not inspect.isroutine(target) and hasattr(target, "__call__"):
        target = target.__call__
    target = inspect.unwrap(target)

    namespace = dict(getattr(target, "__globals__", {}))
    try:
        namespace.update(inspect.getclosurevars(target).nonlocals)
    except TypeError:
        pass
    return namespace
