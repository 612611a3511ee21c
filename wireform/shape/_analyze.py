"""
Annotation analysis — turn a Python type annotation into a Shape.
"""

from __future__ import annotations

import collections
import collections.abc as abc
import dataclasses
import functools
import types
import typing
from enum import Enum
from typing import Annotated, Any, NewType, TypeAliasType, get_args, get_origin

from pydantic import BaseModel

from wireform.shape._types import (
    AnyShape,
    BoolShape,
    BytesShape,
    CharMarker,
    EnumShape,
    FieldSpec,
    FloatShape,
    FloatWidth,
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
)

# ═══════════════════════════════════════════════════════════════════════════════
# Origin Tables
# ═══════════════════════════════════════════════════════════════════════════════

_SEQUENCE_BUILDERS: dict[Any, Any] = {
    list: list,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Collection: list,
    abc.Iterable: list,
    collections.deque: collections.deque,
    set: set,
    abc.MutableSet: set,
    frozenset: frozenset,
    abc.Set: frozenset,
}

_MAP_ORIGINS = (dict, abc.Mapping, abc.MutableMapping)

_BARE_SEQUENCES: tuple[tuple[type, Any], ...] = (
    (list, list),
    (tuple, tuple),
    (collections.deque, collections.deque),
    (set, set),
    (frozenset, frozenset),
)

# ═══════════════════════════════════════════════════════════════════════════════
# shape_of() — Entry Point
# ═══════════════════════════════════════════════════════════════════════════════


def shape_of(tp: Any) -> Shape:
    """
    Analyze an annotation.

    Results are cached per annotation; unhashable annotations are analyzed
    every time.

    Example:
        shape_of(list[int])      # SeqShape(elem=IntShape(width=None), build=list)
        shape_of(U8 | None)      # OptionalShape(inner=IntShape(width=IntWidth(8, False)))
    """
    try:
        hash(tp)
    except TypeError:
        return _analyze(tp)
    return _cached(tp)


@functools.cache
def _cached(tp: Any) -> Shape:
    return _analyze(tp)


def _analyze(tp: Any) -> Shape:
    origin = get_origin(tp)

    if origin is Annotated:
        base, *extras = get_args(tp)
        return _annotated(shape_of(base), extras)
    if tp is None or tp is types.NoneType:
        return UnitShape()
    if tp is Any or tp is object:
        return AnyShape()
    if isinstance(tp, NewType):
        return shape_of(tp.__supertype__)
    if isinstance(tp, TypeAliasType):
        return shape_of(tp.__value__)
    if origin is typing.Union or origin is types.UnionType:
        return _union(get_args(tp))
    if origin is not None:
        return _generic(origin, get_args(tp))
    if isinstance(tp, type):
        return _class(tp)

    return UnsupportedShape(f"no wire mapping for {tp!r}")


# ═══════════════════════════════════════════════════════════════════════════════
# Pieces
# ═══════════════════════════════════════════════════════════════════════════════


def _annotated(shape: Shape, extras: list[Any]) -> Shape:
    for marker in extras:
        match shape, marker:
            case IntShape(), IntWidth():
                shape = IntShape(marker)
            case FloatShape(), FloatWidth(bits=bits):
                shape = FloatShape(single=bits == 32)
            case StrShape(), CharMarker():
                shape = StrShape(char=True)
    return shape


def _union(args: tuple[Any, ...]) -> Shape:
    present = [a for a in args if a is not types.NoneType and a is not None]
    if len(present) == 1 and len(present) < len(args):
        return OptionalShape(shape_of(present[0]))
    names = " | ".join(getattr(a, "__name__", repr(a)) for a in args)
    return UnsupportedShape(
        f"{names}: variants carrying payloads are not supported",
        payload_variant=True,
    )


def _generic(origin: Any, args: tuple[Any, ...]) -> Shape:
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return SeqShape(shape_of(args[0]), tuple)
        return TupleShape(tuple(shape_of(a) for a in args), tuple)

    if origin in _SEQUENCE_BUILDERS:
        elem = shape_of(args[0]) if args else AnyShape()
        return SeqShape(elem, _SEQUENCE_BUILDERS[origin])

    if origin in _MAP_ORIGINS or (isinstance(origin, type) and issubclass(origin, abc.Mapping)):
        if not args:
            return MapShape(AnyShape(), AnyShape())
        return MapShape(shape_of(args[0]), shape_of(args[1]))

    return UnsupportedShape(f"no wire mapping for {origin!r}[...]")


def _class(tp: type) -> Shape:
    # Enum before the scalars: IntEnum / StrEnum are int / str subclasses.
    if issubclass(tp, Enum):
        return EnumShape(tp)
    # Named types before the builtins they may subclass.
    if dataclasses.is_dataclass(tp):
        return _dataclass(tp)
    if issubclass(tp, BaseModel):
        return _model(tp)
    if issubclass(tp, tuple) and hasattr(tp, "_fields"):
        return _namedtuple(tp)
    if issubclass(tp, bool):
        return BoolShape()
    if issubclass(tp, int):
        return IntShape()
    if issubclass(tp, float):
        return FloatShape()
    if issubclass(tp, str):
        return StrShape()
    for base in (bytes, bytearray, memoryview):
        if issubclass(tp, base):
            return BytesShape(base)
    if issubclass(tp, abc.Mapping):
        return MapShape(AnyShape(), AnyShape())
    for base, build in _BARE_SEQUENCES:
        if issubclass(tp, base):
            return SeqShape(AnyShape(), build)

    return UnsupportedShape(f"no wire mapping for {tp.__qualname__}")


def _hints(tp: type) -> dict[str, Any] | UnsupportedShape:
    try:
        return typing.get_type_hints(tp, include_extras=True)
    except NameError as e:
        return UnsupportedShape(f"cannot resolve annotations of {tp.__qualname__}: {e}")


def _dataclass(tp: type) -> Shape:
    hints = _hints(tp)
    if isinstance(hints, UnsupportedShape):
        return hints

    fields = tuple(
        FieldSpec(
            name=f.name,
            attr=f.name,
            annotation=hints.get(f.name, Any),
            has_default=(
                f.default is not dataclasses.MISSING
                or f.default_factory is not dataclasses.MISSING
            ),
        )
        for f in dataclasses.fields(tp)
        if f.init
    )
    return StructShape(tp, fields, tp)


def _model(tp: type[BaseModel]) -> Shape:
    fields = []
    for attr, info in tp.model_fields.items():
        annotation = info.annotation
        # pydantic moves Annotated metadata into info.metadata
        markers = [m for m in info.metadata if isinstance(m, (IntWidth, FloatWidth, CharMarker))]
        if markers:
            annotation = Annotated[annotation, *markers]
        fields.append(
            FieldSpec(
                name=info.alias or attr,
                attr=attr,
                annotation=annotation,
                has_default=not info.is_required(),
            )
        )
    return StructShape(tp, tuple(fields), tp)


def _namedtuple(tp: type) -> Shape:
    hints = _hints(tp)
    if isinstance(hints, UnsupportedShape):
        return hints

    names: tuple[str, ...] = tp._fields  # type: ignore[attr-defined]
    return TupleShape(
        tuple(shape_of(hints.get(name, Any)) for name in names),
        lambda items: tp(*items),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("shape_of",)
