"""
Decode entry points.
"""

from __future__ import annotations

from typing import Any, overload

from kungfu import Error, Ok, Result

from wireform._cow import Borrowed, Cow, Owned, into_cow
from wireform._errors import DecodeError
from wireform._policy import DEFAULT_POLICY, Policy
from wireform._types import Array, WireValue
from wireform.decode._engine import decode_one
from wireform.shape import shape_of

# ═══════════════════════════════════════════════════════════════════════════════
# from_wire_value() — Single Value
# ═══════════════════════════════════════════════════════════════════════════════


@overload
def from_wire_value[T](
    tp: type[T],
    value: WireValue | Cow[WireValue],
    *,
    policy: Policy | None = None,
) -> T: ...


@overload
def from_wire_value(
    tp: Any,
    value: WireValue | Cow[WireValue],
    *,
    policy: Policy | None = None,
) -> Any: ...


def from_wire_value(
    tp: Any,
    value: WireValue | Cow[WireValue],
    *,
    policy: Policy | None = None,
) -> Any:
    """
    Build a `tp` from one wire value.

    A bare value (or Borrowed(value)) is read without modification.
    Owned(value) lets the decoder move items out of every Array it walks,
    leaving those arrays empty.

    Example:
        from wireform import decode as D

        user = D.from_wire_value(User, reply)
        users = D.from_wire_value(list[User], Owned(pipelined_reply))

    Raises:
        DecodeError: on the first mismatch; no partial result is returned.
    """
    return decode_one(shape_of(tp), into_cow(value), policy or DEFAULT_POLICY)


# ═══════════════════════════════════════════════════════════════════════════════
# from_wire_values() — Pre-flattened List
# ═══════════════════════════════════════════════════════════════════════════════


@overload
def from_wire_values[T](
    tp: type[T],
    values: list[WireValue] | Cow[list[WireValue]],
    *,
    policy: Policy | None = None,
) -> T: ...


@overload
def from_wire_values(
    tp: Any,
    values: list[WireValue] | Cow[list[WireValue]],
    *,
    policy: Policy | None = None,
) -> Any: ...


def from_wire_values(
    tp: Any,
    values: list[WireValue] | Cow[list[WireValue]],
    *,
    policy: Policy | None = None,
) -> Any:
    """
    Build a `tp` from a list of values treated as the items of one Array.

    Meant for flattened key/value replies such as a hash read:

        D.from_wire_values(User, [data("name"), data("ann"), data("age"), data("31")])
    """
    match values:
        case Borrowed(items) | Owned(items):
            wrapped: Cow[WireValue] = values.rewrap(Array(items))
        case _:
            wrapped = Borrowed(Array(values))
    return from_wire_value(tp, wrapped, policy=policy)


# ═══════════════════════════════════════════════════════════════════════════════
# try_*() — Result Forms
# ═══════════════════════════════════════════════════════════════════════════════


@overload
def try_from_wire_value[T](
    tp: type[T],
    value: WireValue | Cow[WireValue],
    *,
    policy: Policy | None = None,
) -> Result[T, DecodeError]: ...


@overload
def try_from_wire_value(
    tp: Any,
    value: WireValue | Cow[WireValue],
    *,
    policy: Policy | None = None,
) -> Result[Any, DecodeError]: ...


def try_from_wire_value(
    tp: Any,
    value: WireValue | Cow[WireValue],
    *,
    policy: Policy | None = None,
) -> Result[Any, DecodeError]:
    """
    from_wire_value() returning Ok(value) or Error(DecodeError).

    Example:
        match D.try_from_wire_value(User, reply):
            case Ok(user):
                return user
            case Error(e):
                logger.warning("decode.failed", kind=e.kind.name, at=e.location)
    """
    try:
        return Ok(from_wire_value(tp, value, policy=policy))
    except DecodeError as e:
        return Error(e)


def try_from_wire_values(
    tp: Any,
    values: list[WireValue] | Cow[list[WireValue]],
    *,
    policy: Policy | None = None,
) -> Result[Any, DecodeError]:
    try:
        return Ok(from_wire_values(tp, values, policy=policy))
    except DecodeError as e:
        return Error(e)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "from_wire_value",
    "from_wire_values",
    "try_from_wire_value",
    "try_from_wire_values",
)
