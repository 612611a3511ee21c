"""
Shared fixtures: compact builders for wire value trees.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from wireform import NULL, Array, ByteString, Integer, Null, Policy, WireValue, data


def _wire(item: Any) -> WireValue:
    match item:
        case ByteString() | Integer() | Array() | Null():
            return item
        case None:
            return NULL
        case str() | bytes():
            return data(item)
        case int():
            return Integer(item)
        case list():
            return Array([_wire(i) for i in item])
    raise TypeError(f"no wire form for {item!r}")


@pytest.fixture
def wire() -> Callable[[Any], WireValue]:
    """
    Build a wire tree from plain Python: str/bytes -> ByteString, int -> Integer,
    None -> Null, list -> Array.

    Example:
        wire(["name", "ann", "age", "31"])
    """
    return _wire


@pytest.fixture
def flat() -> Callable[..., list[WireValue]]:
    """Flattened key/value items, as a hash read returns them."""

    def build(*items: Any) -> list[WireValue]:
        return [_wire(i) for i in items]

    return build


@pytest.fixture
def policy() -> Policy:
    return Policy()


@pytest.fixture
def int_digit_limit() -> Iterator[int]:
    """Pin the int <-> str digit limit so oversized numbers fail the same way everywhere."""
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(640)
    yield 640
    sys.set_int_max_str_digits(previous)
