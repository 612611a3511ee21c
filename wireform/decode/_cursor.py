"""
Decode cursor — one exhaustible, peekable sequence of wire values.

A fresh cursor is created for every decode entry point and for every
descent into a nested Array. Nothing carries over between cursors.
"""

from __future__ import annotations

from wireform._cow import Cow, CowIter
from wireform._errors import DecodeError, DecodeErrorKind, end_of_stream, wrong_value
from wireform._types import Array, ByteString, WireValue


class DecodeCursor:
    __slots__ = ("_values", "_peeked")

    def __init__(self, values: CowIter) -> None:
        self._values = values
        self._peeked: Cow[WireValue] | None = None

    @classmethod
    def single(cls, value: Cow[WireValue]) -> DecodeCursor:
        """Cursor over exactly one value (a length-1 sequence)."""
        return cls(CowIter.of_one(value))

    def peek(self) -> WireValue | None:
        """Next value without consuming it; None when exhausted."""
        if self._peeked is None:
            self._peeked = next(self._values, None)
        return None if self._peeked is None else self._peeked.value

    def next(self) -> Cow[WireValue]:
        if self._peeked is not None:
            value, self._peeked = self._peeked, None
            return value
        value = next(self._values, None)
        if value is None:
            raise end_of_stream()
        return value

    def next_array(self) -> Cow[list[WireValue]]:
        cow = self.next()
        match cow.value:
            case Array(items):
                return cow.rewrap(items)
            case other:
                raise wrong_value("Array", other)

    def next_bytes(self) -> bytes:
        cow = self.next()
        match cow.value:
            case ByteString(data):
                return data
            case other:
                raise wrong_value("ByteString", other)

    def read_string(self) -> str:
        return utf8(self.next_bytes())


def utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(DecodeErrorKind.ENCODING, f"invalid UTF-8: {e.reason}") from e


__all__ = ("DecodeCursor", "utf8")
