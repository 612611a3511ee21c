"""
Tests for annotation analysis.

Tests cover:
- Scalars and width markers
- Collections, tuples and maps
- Optional and payload-carrying unions
- Dataclasses, pydantic models, NamedTuples, enums, NewTypes
- Self-referential structs and caching
"""

from __future__ import annotations

import math
from collections import OrderedDict, defaultdict, deque
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, NewType, Optional

from pydantic import BaseModel, Field

from wireform import shape as S

UserId = NewType("UserId", int)

type Ids = list[UserId]


class Color(Enum):
    RED = 1
    GREEN = 2


class Point(NamedTuple):
    x: int
    y: S.U16


@dataclass
class Settings:
    mode: str
    retries: S.U8 = 3
    tags: list[str] = field(default_factory=list)


@dataclass
class Node:
    name: str
    children: list[Node]


class Account(BaseModel):
    user_name: str = Field(alias="userName")
    level: S.U8
    note: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Scalars
# ═══════════════════════════════════════════════════════════════════════════════


def test_scalars():
    assert S.shape_of(bool) == S.BoolShape()
    assert S.shape_of(int) == S.IntShape()
    assert S.shape_of(float) == S.FloatShape()
    assert S.shape_of(str) == S.StrShape()
    assert S.shape_of(bytes) == S.BytesShape(bytes)
    assert S.shape_of(memoryview) == S.BytesShape(memoryview)
    assert S.shape_of(None) == S.UnitShape()
    assert S.shape_of(Any) == S.AnyShape()


def test_width_markers():
    assert S.shape_of(S.U8) == S.IntShape(S.IntWidth(8, signed=False))
    assert S.shape_of(S.I64) == S.IntShape(S.IntWidth(64))
    assert S.shape_of(S.F32) == S.FloatShape(single=True)
    assert S.shape_of(S.F64) == S.FloatShape(single=False)
    assert S.shape_of(S.Char) == S.StrShape(char=True)


def test_int_width_bounds_and_wrap():
    u8 = S.IntWidth(8, signed=False)
    i8 = S.IntWidth(8)

    assert (u8.min, u8.max) == (0, 255)
    assert (i8.min, i8.max) == (-128, 127)
    assert u8.wrap(300) == 44
    assert i8.wrap(200) == -56
    assert str(u8) == "u8"


def test_to_single():
    assert S.to_single(3.14159) != 3.14159
    assert S.to_single(0.5) == 0.5
    assert S.to_single(1e40) == math.inf
    assert S.to_single(-1e40) == -math.inf


# ═══════════════════════════════════════════════════════════════════════════════
# Collections
# ═══════════════════════════════════════════════════════════════════════════════


def test_sequences_keep_host_collection():
    assert S.shape_of(list[int]) == S.SeqShape(S.IntShape(), list)
    assert S.shape_of(Sequence[str]) == S.SeqShape(S.StrShape(), list)
    assert S.shape_of(set[str]) == S.SeqShape(S.StrShape(), set)
    assert S.shape_of(frozenset[str]) == S.SeqShape(S.StrShape(), frozenset)
    assert S.shape_of(deque[int]) == S.SeqShape(S.IntShape(), deque)
    assert S.shape_of(tuple[int, ...]) == S.SeqShape(S.IntShape(), tuple)


def test_fixed_tuple():
    shape = S.shape_of(tuple[S.U8, str])
    assert isinstance(shape, S.TupleShape)
    assert shape.elems == (S.IntShape(S.IntWidth(8, signed=False)), S.StrShape())


def test_maps():
    assert S.shape_of(dict[str, int]) == S.MapShape(S.StrShape(), S.IntShape())
    assert S.shape_of(Mapping[str, bytes]) == S.MapShape(S.StrShape(), S.BytesShape())
    assert S.shape_of(dict) == S.MapShape(S.AnyShape(), S.AnyShape())


# ═══════════════════════════════════════════════════════════════════════════════
# Unions
# ═══════════════════════════════════════════════════════════════════════════════


def test_optional():
    assert S.shape_of(int | None) == S.OptionalShape(S.IntShape())
    assert S.shape_of(Optional[str]) == S.OptionalShape(S.StrShape())


def test_payload_union_is_unsupported():
    shape = S.shape_of(int | str)
    assert isinstance(shape, S.UnsupportedShape)
    assert shape.payload_variant


def test_unknown_class_is_unsupported():
    shape = S.shape_of(complex)
    assert isinstance(shape, S.UnsupportedShape)
    assert not shape.payload_variant


# ═══════════════════════════════════════════════════════════════════════════════
# Named Types
# ═══════════════════════════════════════════════════════════════════════════════


def test_dataclass_fields_in_declaration_order():
    shape = S.shape_of(Settings)

    assert isinstance(shape, S.StructShape)
    assert [f.name for f in shape.fields] == ["mode", "retries", "tags"]
    assert [f.has_default for f in shape.fields] == [False, True, True]
    assert shape.field("retries").shape == S.IntShape(S.IntWidth(8, signed=False))
    assert shape.field("missing") is None


def test_pydantic_model_uses_alias_and_markers():
    shape = S.shape_of(Account)

    assert isinstance(shape, S.StructShape)
    assert [f.name for f in shape.fields] == ["userName", "level", "note"]
    assert shape.field("userName").attr == "user_name"
    assert shape.field("level").shape == S.IntShape(S.IntWidth(8, signed=False))
    assert shape.field("note").has_default


def test_namedtuple_is_positional():
    shape = S.shape_of(Point)

    assert isinstance(shape, S.TupleShape)
    assert shape.elems == (S.IntShape(), S.IntShape(S.IntWidth(16, signed=False)))
    assert shape.build([1, 2]) == Point(1, 2)


def test_enum_newtype_and_alias():
    assert S.shape_of(Color) == S.EnumShape(Color)
    assert S.shape_of(UserId) == S.IntShape()
    assert S.shape_of(Ids) == S.SeqShape(S.IntShape(), list)


def test_self_referential_struct():
    shape = S.shape_of(Node)
    children = shape.field("children").shape

    assert isinstance(children, S.SeqShape)
    assert children.elem is shape


def test_shapes_are_cached():
    assert S.shape_of(list[int]) is S.shape_of(list[int])


class Label(str):
    pass


def test_builtin_subclasses():
    assert S.shape_of(OrderedDict) == S.MapShape(S.AnyShape(), S.AnyShape())
    assert S.shape_of(defaultdict) == S.MapShape(S.AnyShape(), S.AnyShape())
    assert S.shape_of(OrderedDict[str, int]) == S.MapShape(S.StrShape(), S.IntShape())
    assert S.shape_of(deque) == S.SeqShape(S.AnyShape(), deque)
    assert S.shape_of(Label) == S.StrShape()
    assert S.shape_of(Point) != S.SeqShape(S.AnyShape(), tuple)
