"""Type tags used to match validators to the values they are bound to.

A type tag is a stable string generated from a statically declared type, for
example ``"int"``, ``"list[str]"``, ``"dict[str, bool]"``, ``"Optional[str]"``
or ``"myapp.models.User"``. Validators expose their tag as ``type_name`` and
record validators compare it with the annotation of the field they are bound
to.
"""

from __future__ import annotations

import types
from typing import Any, Union, get_args, get_origin


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def type_name(tp: Any) -> str:
    """Generate the type tag for a declared type.

    Args:
        tp: A type or a typing construct (``list[int]``, ``X | None``, ...)

    Returns:
        Deterministic type tag string
    """
    if tp is None or tp is type(None):
        return "None"
    if tp is Any:
        return "Any"

    if _is_union(tp):
        args = get_args(tp)
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            inner = type_name(members[0])
        else:
            inner = f"Union[{', '.join(type_name(arg) for arg in members)}]"
        if len(members) < len(args):
            return f"Optional[{inner}]"
        return inner

    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)
        base = getattr(origin, "__name__", str(origin))
        if not args:
            return base
        return f"{base}[{', '.join(type_name(arg) for arg in args)}]"

    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__name__
        return f"{tp.__module__}.{tp.__qualname__}"

    return str(tp)


def is_instance(value: Any, tp: Any) -> bool:
    """Check a runtime value against a declared type.

    Containers are checked recursively. ``bool`` values are not accepted
    where ``int`` is declared, and ``int`` values are not accepted where
    ``float`` is declared.
    """
    if tp is Any:
        return True
    if tp is None or tp is type(None):
        return value is None

    if _is_union(tp):
        return any(is_instance(value, arg) for arg in get_args(tp))

    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)
        if origin is list:
            return isinstance(value, list) and (
                not args or all(is_instance(item, args[0]) for item in value)
            )
        if origin is dict:
            return isinstance(value, dict) and (
                not args
                or all(
                    is_instance(k, args[0]) and is_instance(v, args[1])
                    for k, v in value.items()
                )
            )
        if isinstance(origin, type):
            return isinstance(value, origin)
        return False

    if tp is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if tp is float:
        return isinstance(value, float)
    if isinstance(tp, type):
        return isinstance(value, tp)
    return False


def type_name_of(value: Any) -> str:
    """Describe the runtime type of a value.

    Only the outer container type is reported (``list``, ``dict``), since
    element types cannot be known for empty or mixed containers.
    """
    return type_name(type(value))


__all__ = ["is_instance", "type_name", "type_name_of"]
