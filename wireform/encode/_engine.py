"""
Encode engine — interpret a Shape against a host value.

Numbers are always written as decimal text, never as Integer, matching
how the store itself hands numbers back in bulk replies.
"""

from __future__ import annotations

import collections.abc as abc
import math
from typing import Any

import structlog

from wireform._errors import EncodeError, EncodeErrorKind
from wireform._policy import Policy
from wireform._types import NULL, ByteString, WireValue, data
from wireform.encode._accumulator import EncodeAccumulator
from wireform.shape import (
    AnyShape,
    BoolShape,
    BytesShape,
    EnumShape,
    FloatShape,
    IntShape,
    MapShape,
    OptionalShape,
    SeqShape,
    Shape,
    StrShape,
    StructShape,
    TupleShape,
    UnitShape,
    UnsupportedShape,
    shape_of,
    to_single,
)

logger = structlog.get_logger(__name__)

_NOT_SEQUENCES = (str, bytes, bytearray, memoryview, abc.Mapping)

# ═══════════════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════════════


def encode(shape: Shape, value: Any, policy: Policy) -> WireValue:
    """Encode `value` as `shape`."""
    match shape:
        case AnyShape():
            inferred = shape_of(type(value))
            if isinstance(inferred, AnyShape):
                raise _unsupported(f"no wire mapping for {type(value).__qualname__}")
            return encode(inferred, value, policy)
        case UnitShape():
            if value is not None:
                raise _mismatch("None", value)
            return NULL
        case OptionalShape(inner=inner):
            return NULL if value is None else encode(inner, value, policy)
        case BoolShape():
            _expect(value, bool, "bool")
            return data(b"1" if value else b"0")
        case IntShape(width=width):
            _expect(value, int, "int")
            if width is not None and not width.contains(value):
                raise EncodeError(EncodeErrorKind.CUSTOM, f"int out of range for {width} ({width.min}..{width.max})")
            return data(_int_text(value))
        case FloatShape(single=single):
            _expect(value, (int, float), "float")
            return data(_float_text(_as_float(value), single))
        case StrShape(char=char):
            _expect(value, str, "str")
            if char and len(value) != 1:
                raise EncodeError(EncodeErrorKind.CUSTOM, f"expected a single character, got {value!r}")
            return _utf8(value)
        case BytesShape():
            _expect(value, (bytes, bytearray, memoryview), "bytes")
            return ByteString(bytes(value))
        case SeqShape(elem=elem):
            if isinstance(value, _NOT_SEQUENCES) or not isinstance(value, abc.Iterable):
                raise _mismatch("a sequence", value)
            acc = EncodeAccumulator()
            for item in value:
                acc.push(encode(elem, item, policy))
            return acc.finish()
        case TupleShape(elems=elems):
            return _tuple(elems, value, policy)
        case MapShape():
            return _map(shape, value, policy)
        case StructShape():
            return _struct(shape, value, policy)
        case EnumShape(cls=cls):
            _expect(value, cls, cls.__qualname__)
            return data(value.name)
        case UnsupportedShape(reason=reason):
            raise _unsupported(reason)
    raise _unsupported(f"unknown shape {shape!r}")


# ═══════════════════════════════════════════════════════════════════════════════
# Pieces
# ═══════════════════════════════════════════════════════════════════════════════


def _tuple(elems: tuple[Shape, ...], value: Any, policy: Policy) -> WireValue:
    if not isinstance(value, tuple):
        raise _mismatch("a tuple", value)
    if len(value) != len(elems):
        raise EncodeError(
            EncodeErrorKind.CUSTOM,
            f"expected a tuple of {len(elems)} elements, got {len(value)}",
        )
    acc = EncodeAccumulator()
    for elem, item in zip(elems, value):
        acc.push(encode(elem, item, policy))
    return acc.finish()


def _map(shape: MapShape, value: Any, policy: Policy) -> WireValue:
    if not isinstance(value, abc.Mapping):
        raise _mismatch("a mapping", value)
    acc = EncodeAccumulator()
    for key, item in value.items():
        acc.push_pair(encode(shape.key, key, policy), encode(shape.value, item, policy))
    return acc.finish()


def _struct(shape: StructShape, value: Any, policy: Policy) -> WireValue:
    _expect(value, shape.cls, shape.cls.__qualname__)
    acc = EncodeAccumulator()
    for spec in shape.fields:
        field_value = getattr(value, spec.attr)
        if field_value is None and policy.omit_absent_fields:
            logger.debug("encode.field_omitted", struct=shape.cls.__qualname__, field=spec.name)
            continue
        acc.push_pair(data(spec.name), encode(spec.shape, field_value, policy))
    return acc.finish()


def _int_text(value: int) -> str:
    try:
        return str(int(value))
    except ValueError as e:
        # Digit-count limit on int -> str conversion.
        raise EncodeError(EncodeErrorKind.CUSTOM, f"cannot write {value.bit_length()}-bit int as text: {e}") from e


def _as_float(value: int | float) -> float:
    try:
        return float(value)
    except OverflowError as e:
        raise EncodeError(EncodeErrorKind.CUSTOM, f"{type(value).__qualname__} too large for a float") from e


def _float_text(number: float, single: bool) -> str:
    if not single or not math.isfinite(number):
        return repr(number)
    # Shortest text that reads back as the same single-precision value.
    rounded = to_single(number)
    for digits in range(1, 10):
        text = f"{rounded:.{digits}g}"
        if to_single(float(text)) == rounded:
            return text
    return repr(rounded)


def _utf8(text: str) -> ByteString:
    try:
        return ByteString(text.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise EncodeError(EncodeErrorKind.CUSTOM, f"cannot encode {text!r} as UTF-8: {e.reason}") from e


def _expect(value: Any, types: type | tuple[type, ...], name: str) -> None:
    if not isinstance(value, types):
        raise _mismatch(name, value)


def _mismatch(expected: str, value: Any) -> EncodeError:
    return EncodeError(
        EncodeErrorKind.CUSTOM,
        f"expected {expected}, got {type(value).__qualname__}",
    )


def _unsupported(reason: str) -> EncodeError:
    return EncodeError(EncodeErrorKind.UNSUPPORTED_OPERATION, reason)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("encode",)
