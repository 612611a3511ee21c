"""
Shape — annotations as an expected-shape tree.

    from wireform import shape as S

    S.shape_of(list[S.U8])          # SeqShape(elem=IntShape(u8))
    S.shape_of(User)                # StructShape(cls=User, fields=(...))
"""

from wireform.shape._types import (
    IntWidth,
    FloatWidth,
    CharMarker,
    CHAR,
    I8,
    I16,
    I32,
    I64,
    U8,
    U16,
    U32,
    U64,
    F32,
    F64,
    Char,
    to_single,
    BoolShape,
    IntShape,
    FloatShape,
    StrShape,
    BytesShape,
    UnitShape,
    AnyShape,
    OptionalShape,
    SeqShape,
    TupleShape,
    MapShape,
    FieldSpec,
    StructShape,
    EnumShape,
    UnsupportedShape,
    Shape,
)
from wireform.shape._analyze import shape_of

__all__ = (
    # Markers
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
    # Shapes
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
    # Analysis
    "shape_of",
)
