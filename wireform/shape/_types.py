"""
Shape types — the expected-shape tree both engines walk.

Annotations are analyzed once into these nodes; decode interprets a shape
against the wire tree, encode interprets it against a host value.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Annotated, Any

# ═══════════════════════════════════════════════════════════════════════════════
# Width Markers — Annotated[...] metadata
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class IntWidth:
    """Fixed-width integer marker, e.g. Annotated[int, IntWidth(8, signed=False)]."""

    bits: int
    signed: bool = True

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def wrap(self, value: int) -> int:
        """Two's complement truncation to this width."""
        value &= (1 << self.bits) - 1
        if self.signed and value > self.max:
            value -= 1 << self.bits
        return value

    def __str__(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bits}"


@dataclass(frozen=True, slots=True)
class FloatWidth:
    """Float precision marker; 32 rounds through single precision."""

    bits: int


@dataclass(frozen=True, slots=True)
class CharMarker:
    """Marks a str that must hold exactly one code point."""


CHAR = CharMarker()

I8 = Annotated[int, IntWidth(8)]
I16 = Annotated[int, IntWidth(16)]
I32 = Annotated[int, IntWidth(32)]
I64 = Annotated[int, IntWidth(64)]
U8 = Annotated[int, IntWidth(8, signed=False)]
U16 = Annotated[int, IntWidth(16, signed=False)]
U32 = Annotated[int, IntWidth(32, signed=False)]
U64 = Annotated[int, IntWidth(64, signed=False)]
F32 = Annotated[float, FloatWidth(32)]
F64 = Annotated[float, FloatWidth(64)]
Char = Annotated[str, CHAR]


def to_single(number: float) -> float:
    """Round through IEEE-754 single precision; out of range becomes +-inf."""
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


# ═══════════════════════════════════════════════════════════════════════════════
# Scalar Shapes
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class BoolShape:
    pass


@dataclass(frozen=True, slots=True)
class IntShape:
    """Integer; width None means unbounded Python int."""

    width: IntWidth | None = None


@dataclass(frozen=True, slots=True)
class FloatShape:
    single: bool = False


@dataclass(frozen=True, slots=True)
class StrShape:
    char: bool = False


@dataclass(frozen=True, slots=True)
class BytesShape:
    """Raw bytes; host is bytes, bytearray or memoryview."""

    host: type = bytes


@dataclass(frozen=True, slots=True)
class UnitShape:
    pass


@dataclass(frozen=True, slots=True)
class AnyShape:
    """Whatever the wire holds, as bytes / int / list / None."""


# ═══════════════════════════════════════════════════════════════════════════════
# Composite Shapes
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OptionalShape:
    inner: Shape


@dataclass(frozen=True, slots=True)
class SeqShape:
    """Homogeneous sequence; build turns decoded elements into the host collection."""

    elem: Shape
    build: Callable[[Iterable[Any]], Any] = list


@dataclass(frozen=True, slots=True)
class TupleShape:
    """Fixed arity, positional. NamedTuples land here too."""

    elems: tuple[Shape, ...]
    build: Callable[[Iterable[Any]], Any] = tuple


@dataclass(frozen=True, slots=True)
class MapShape:
    key: Shape
    value: Shape


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """
    One named struct field.

    name: key on the wire (pydantic alias when set).
    attr: attribute read on encode.
    annotation: resolved lazily so self-referential structs work.
    """

    name: str
    attr: str
    annotation: Any
    has_default: bool

    @property
    def shape(self) -> Shape:
        from wireform.shape._analyze import shape_of

        return shape_of(self.annotation)


@dataclass(frozen=True, slots=True)
class StructShape:
    """Named fields in declaration order; build receives kwargs keyed by wire name."""

    cls: type
    fields: tuple[FieldSpec, ...]
    build: Callable[..., Any]

    def field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None


@dataclass(frozen=True, slots=True)
class EnumShape:
    """Unit variants only, matched by member name."""

    cls: type


@dataclass(frozen=True, slots=True)
class UnsupportedShape:
    """
    An annotation with no wire mapping.

    payload_variant marks sum types whose members carry data (A | B),
    the counterpart of non-unit enum variants.
    """

    reason: str
    payload_variant: bool = False


type Shape = (
    BoolShape
    | IntShape
    | FloatShape
    | StrShape
    | BytesShape
    | UnitShape
    | AnyShape
    | OptionalShape
    | SeqShape
    | TupleShape
    | MapShape
    | StructShape
    | EnumShape
    | UnsupportedShape
)

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "IntWidth",
    "FloatWidth",
    "CharMarker",
    "CHAR",
    "I8",
    "I16",
    "I32",
    "I64",
    "U8",
    "U16",
    "U32",
    "U64",
    "F32",
    "F64",
    "Char",
    "to_single",
    "BoolShape",
    "IntShape",
    "FloatShape",
    "StrShape",
    "BytesShape",
    "UnitShape",
    "AnyShape",
    "OptionalShape",
    "SeqShape",
    "TupleShape",
    "MapShape",
    "FieldSpec",
    "StructShape",
    "EnumShape",
    "UnsupportedShape",
    "Shape",
)
