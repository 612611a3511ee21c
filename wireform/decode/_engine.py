"""
Decode engine — interpret a Shape against the wire tree.

Every call consumes exactly one value from its cursor. Composite shapes
descend into a nested Array with a fresh cursor per element, so scalar
and composite elements go through the same one-shot path.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Iterator
from typing import Any

import structlog

from wireform._cow import Cow, CowIter, Owned
from wireform._errors import DecodeError, DecodeErrorKind, PathSegment, end_of_stream, wrong_value
from wireform._policy import OnDuplicate, OnUnknown, Overflow, Policy
from wireform._types import Array, ByteString, Integer, Null, WireValue
from wireform.decode._cursor import DecodeCursor, utf8
from wireform.shape import (
    AnyShape,
    BoolShape,
    BytesShape,
    EnumShape,
    FloatShape,
    IntShape,
    IntWidth,
    MapShape,
    OptionalShape,
    SeqShape,
    Shape,
    StrShape,
    StructShape,
    TupleShape,
    UnitShape,
    UnsupportedShape,
    to_single,
)

logger = structlog.get_logger(__name__)

_TRUE = frozenset({"1", "true", "True"})
_FALSE = frozenset({"0", "false", "False"})

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_UINT_TEXT = re.compile(r"\+?[0-9]+")
_FLOAT_TEXT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

# ═══════════════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════════════


def decode(shape: Shape, cursor: DecodeCursor, policy: Policy) -> Any:
    """Decode the next value of `cursor` as `shape`."""
    match shape:
        case BoolShape():
            return _bool(cursor.read_string())
        case IntShape(width=width):
            return _int(cursor.next().value, width, policy)
        case FloatShape(single=single):
            return _float(cursor.next().value, single)
        case StrShape(char=char):
            return _str(cursor.read_string(), char)
        case BytesShape(host=host):
            return _bytes(cursor.next_bytes(), host)
        case UnitShape():
            return _unit(cursor.next().value)
        case AnyShape():
            return _any(cursor.next())
        case OptionalShape(inner=inner):
            return _optional(inner, cursor, policy)
        case SeqShape():
            return _seq(shape, cursor, policy)
        case TupleShape():
            return _tuple(shape, cursor, policy)
        case MapShape():
            return _map(shape, cursor, policy)
        case StructShape():
            return _struct(shape, cursor, policy)
        case EnumShape(cls=cls):
            return _enum(cls, cursor.read_string())
        case UnsupportedShape(reason=reason, payload_variant=True):
            raise DecodeError(DecodeErrorKind.WRONG_VALUE, reason)
        case UnsupportedShape(reason=reason):
            raise DecodeError(DecodeErrorKind.UNSUPPORTED_OPERATION, reason)
    raise DecodeError(DecodeErrorKind.UNSUPPORTED_OPERATION, f"unknown shape {shape!r}")


def decode_one(shape: Shape, value: Cow[WireValue], policy: Policy) -> Any:
    """Decode a single value through a fresh length-1 cursor."""
    return decode(shape, DecodeCursor.single(value), policy)


def _at(segment: PathSegment, shape: Shape, value: Cow[WireValue], policy: Policy) -> Any:
    try:
        return decode_one(shape, value, policy)
    except DecodeError as e:
        raise e.within(segment) from e.__cause__


# ═══════════════════════════════════════════════════════════════════════════════
# Scalars
# ═══════════════════════════════════════════════════════════════════════════════


def _bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise DecodeError(
        DecodeErrorKind.WRONG_VALUE,
        f"expected 1/0/true/false/True/False, got {text!r}",
    )


def _int(value: WireValue, width: IntWidth | None, policy: Policy) -> int:
    match value:
        case ByteString(data):
            return _parse_int(utf8(data), width)
        case Integer(number):
            return _cast_int(number, width, policy)
    raise wrong_value("ByteString or Integer", value)


def _parse_int(text: str, width: IntWidth | None) -> int:
    pattern = _UINT_TEXT if width is not None and not width.signed else _INT_TEXT
    if not pattern.fullmatch(text):
        raise DecodeError(DecodeErrorKind.PARSE, f"invalid integer {_preview(text)}")
    try:
        number = int(text)
    except ValueError as e:
        # Digit-count limit on str -> int conversion.
        raise DecodeError(DecodeErrorKind.PARSE, f"invalid integer {_preview(text)}: {e}") from e
    if width is not None and not width.contains(number):
        raise DecodeError(DecodeErrorKind.PARSE, f"{_preview(text)} out of range for {width}")
    return number


def _preview(text: str) -> str:
    return repr(text) if len(text) <= 32 else f"{text[:32]!r}... ({len(text)} chars)"


def _cast_int(number: int, width: IntWidth | None, policy: Policy) -> int:
    if width is None or width.contains(number):
        return number
    if policy.overflow is Overflow.CHECK:
        raise DecodeError(DecodeErrorKind.WRONG_VALUE, f"{Integer(number).describe()} does not fit {width}")
    wrapped = width.wrap(number)
    logger.debug("decode.int_wrapped", value=number, width=str(width), result=wrapped)
    return wrapped


def _float(value: WireValue, single: bool) -> float:
    match value:
        case ByteString(data):
            text = utf8(data)
            if not _FLOAT_TEXT.fullmatch(text):
                raise DecodeError(DecodeErrorKind.PARSE, f"invalid float {_preview(text)}")
            number = float(text)
        case Integer(integer):
            try:
                number = float(integer)
            except OverflowError as e:
                raise DecodeError(DecodeErrorKind.WRONG_VALUE, f"{value.describe()} does not fit a float") from e
        case _:
            raise wrong_value("ByteString or Integer", value)
    return to_single(number) if single else number


def _str(text: str, char: bool) -> str:
    if char and len(text) != 1:
        raise DecodeError(DecodeErrorKind.WRONG_VALUE, f"expected a single character, got {text!r}")
    return text


def _bytes(data: bytes, host: type) -> bytes | bytearray | memoryview:
    if host is memoryview:
        return memoryview(data)
    if host is bytearray:
        return bytearray(data)
    return data


def _unit(value: WireValue) -> None:
    match value:
        case Null() | ByteString():
            return None
    raise wrong_value("Null or ByteString", value)


def _any(value: Cow[WireValue]) -> Any:
    match value.value:
        case ByteString(data):
            return data
        case Integer(number):
            return number
        case Null():
            return None
        case Array(items):
            return [_any(item) for item in CowIter(value.rewrap(items))]


# ═══════════════════════════════════════════════════════════════════════════════
# Composites
# ═══════════════════════════════════════════════════════════════════════════════


def _optional(inner: Shape, cursor: DecodeCursor, policy: Policy) -> Any:
    # Peek only: the value stays on the cursor for the inner decode.
    match cursor.peek():
        case None | Null():
            return None
        case ByteString() | Integer():
            return decode(inner, cursor, policy)
        case other:
            raise wrong_value("ByteString, Integer or Null", other)


def _seq(shape: SeqShape, cursor: DecodeCursor, policy: Policy) -> Any:
    items = CowIter(cursor.next_array())
    return shape.build(_elements(shape.elem, items, policy))


def _elements(shape: Shape, items: CowIter, policy: Policy) -> Iterator[Any]:
    for index, value in enumerate(items):
        yield _at(index, shape, value, policy)


def _tuple(shape: TupleShape, cursor: DecodeCursor, policy: Policy) -> Any:
    items = CowIter(cursor.next_array())
    values = []
    for index, elem in enumerate(shape.elems):
        value = next(items, None)
        if value is None:
            raise end_of_stream().within(index)
        values.append(_at(index, elem, value, policy))

    extra = operator.length_hint(items)
    if extra:
        raise DecodeError(
            DecodeErrorKind.WRONG_VALUE,
            f"expected {len(shape.elems)} elements, got {len(shape.elems) + extra}",
        )
    return shape.build(values)


def _pipelined(items: Cow[list[WireValue]], policy: Policy) -> Cow[list[WireValue]]:
    """Unwrap a single-element Array wrapping an Array, exactly once."""
    match items.value:
        case [Array(inner)] if policy.unwrap_pipelined:
            logger.debug("decode.pipelined_unwrap", length=len(inner))
            if isinstance(items, Owned):
                items.value.clear()
            return items.rewrap(inner)
    return items


def _map(shape: MapShape, cursor: DecodeCursor, policy: Policy) -> dict[Any, Any]:
    items = CowIter(_pipelined(cursor.next_array(), policy))
    result: dict[Any, Any] = {}
    for index, key_value in enumerate(items):
        key = _at(2 * index, shape.key, key_value, policy)
        try:
            hash(key)
        except TypeError as e:
            raise DecodeError(
                DecodeErrorKind.WRONG_VALUE,
                f"map key of type {type(key).__qualname__} is not hashable",
                (2 * index,),
            ) from e
        segment = key if isinstance(key, str) else 2 * index + 1
        value = next(items, None)
        if value is None:
            raise end_of_stream().within(segment)
        result[key] = _at(segment, shape.value, value, policy)
    return result


def _struct(shape: StructShape, cursor: DecodeCursor, policy: Policy) -> Any:
    items = CowIter(_pipelined(cursor.next_array(), policy))
    specs = {spec.name: spec for spec in shape.fields}
    values: dict[str, Any] = {}

    for key_value in items:
        name = DecodeCursor.single(key_value).read_string()
        value = next(items, None)
        if value is None:
            raise end_of_stream().within(name)

        spec = specs.get(name)
        if spec is None:
            if policy.on_unknown is OnUnknown.REJECT:
                raise DecodeError(
                    DecodeErrorKind.UNKNOWN_FIELD,
                    f"unknown field {name!r}; expected one of {list(specs)}",
                )
            logger.debug("decode.field_ignored", struct=shape.cls.__qualname__, field=name)
            continue
        if name in values and policy.on_duplicate is OnDuplicate.REJECT:
            raise DecodeError(DecodeErrorKind.DUPLICATE_FIELD, f"duplicate field {name!r}")
        values[name] = _at(name, spec.shape, value, policy)

    for spec in shape.fields:
        if spec.name in values or spec.has_default:
            continue
        if isinstance(spec.shape, OptionalShape):
            values[spec.name] = None
            continue
        raise DecodeError(DecodeErrorKind.MISSING_FIELD, f"missing field {spec.name!r}")

    try:
        return shape.build(**values)
    except (TypeError, ValueError) as e:
        raise DecodeError(DecodeErrorKind.CUSTOM, f"{shape.cls.__qualname__}: {e}") from e


def _enum(cls: type, name: str) -> Any:
    try:
        return cls[name]  # type: ignore[index]
    except KeyError:
        raise DecodeError(
            DecodeErrorKind.UNKNOWN_VARIANT,
            f"unknown variant {name!r}; expected one of {list(cls.__members__)}",  # type: ignore[attr-defined]
        ) from None


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("decode", "decode_one")
