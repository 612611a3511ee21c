"""
Encode entry points.
"""

from __future__ import annotations

from typing import Any

from kungfu import Error, Ok, Result

from wireform._errors import EncodeError, EncodeErrorKind
from wireform._policy import DEFAULT_POLICY, Policy
from wireform._types import Array, ByteString, WireValue
from wireform.encode._engine import encode
from wireform.shape import AnyShape, MapShape, Shape, StructShape, shape_of

# ═══════════════════════════════════════════════════════════════════════════════
# to_wire_value() — Single Value
# ═══════════════════════════════════════════════════════════════════════════════


def to_wire_value(value: Any, *, tp: Any = None, policy: Policy | None = None) -> WireValue:
    """
    Encode a host value as one wire value.

    With `tp` the annotation drives the encoding (widths, Optional, F32...);
    without it the shape is inferred from the runtime type of each value.

    Example:
        from wireform import encode as E

        E.to_wire_value(User(name="ann", age=31))
        # Array([b"name", b"ann", b"age", b"31"])

        E.to_wire_value(3.14159, tp=F32)   # ByteString(b"3.14159")

    Raises:
        EncodeError: UNSUPPORTED_OPERATION for values with no wire mapping,
            CUSTOM for values that do not fit their annotation.
    """
    shape: Shape = AnyShape() if tp is None else shape_of(tp)
    return encode(shape, value, policy or DEFAULT_POLICY)


# ═══════════════════════════════════════════════════════════════════════════════
# to_wire_values() / to_wire_map() — Field Lists
# ═══════════════════════════════════════════════════════════════════════════════


def to_wire_values(value: Any, *, tp: Any = None, policy: Policy | None = None) -> list[WireValue]:
    """
    Flatten a struct or mapping into [key, value, key, value, ...].

    The list is ready to be appended to a multi-field write command.
    """
    return _pairs(value, tp, policy).items


def to_wire_map(value: Any, *, tp: Any = None, policy: Policy | None = None) -> dict[str, WireValue]:
    """
    Encode a struct or mapping as field name -> wire value.

    Keys must encode to UTF-8 text.
    """
    items = _pairs(value, tp, policy).items
    result: dict[str, WireValue] = {}
    for key, item in zip(items[::2], items[1::2]):
        match key:
            case ByteString(raw):
                try:
                    result[raw.decode("utf-8")] = item
                except UnicodeDecodeError as e:
                    raise EncodeError(EncodeErrorKind.CUSTOM, f"field name {raw!r} is not UTF-8") from e
            case _:
                raise EncodeError(EncodeErrorKind.CUSTOM, f"field name must be text, got {key.describe()}")
    return result


def _pairs(value: Any, tp: Any, policy: Policy | None) -> Array:
    shape = shape_of(type(value) if tp is None else tp)
    if not isinstance(shape, StructShape | MapShape):
        raise EncodeError(
            EncodeErrorKind.UNSUPPORTED_OPERATION,
            f"expected a struct or mapping, got {type(value).__qualname__}",
        )
    match encode(shape, value, policy or DEFAULT_POLICY):
        case Array() as result:
            return result
        case other:
            raise EncodeError(
                EncodeErrorKind.CUSTOM,
                f"{type(value).__qualname__} encoded as {other.describe()}, expected an Array",
            )


# ═══════════════════════════════════════════════════════════════════════════════
# try_*() — Result Forms
# ═══════════════════════════════════════════════════════════════════════════════


def try_to_wire_value(
    value: Any, *, tp: Any = None, policy: Policy | None = None
) -> Result[WireValue, EncodeError]:
    """
    to_wire_value() returning Ok(wire value) or Error(EncodeError).

    Example:
        match E.try_to_wire_value(user):
            case Ok(reply):
                send(reply)
            case Error(e):
                logger.warning("encode.failed", kind=e.kind.name)
    """
    try:
        return Ok(to_wire_value(value, tp=tp, policy=policy))
    except EncodeError as e:
        return Error(e)


def try_to_wire_values(
    value: Any, *, tp: Any = None, policy: Policy | None = None
) -> Result[list[WireValue], EncodeError]:
    try:
        return Ok(to_wire_values(value, tp=tp, policy=policy))
    except EncodeError as e:
        return Error(e)


def try_to_wire_map(
    value: Any, *, tp: Any = None, policy: Policy | None = None
) -> Result[dict[str, WireValue], EncodeError]:
    try:
        return Ok(to_wire_map(value, tp=tp, policy=policy))
    except EncodeError as e:
        return Error(e)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "to_wire_value",
    "to_wire_values",
    "to_wire_map",
    "try_to_wire_value",
    "try_to_wire_values",
    "try_to_wire_map",
)
