"""
Encode accumulator — ordered buffer for one composite under construction.
"""

from __future__ import annotations

from wireform._types import Array, WireValue


class EncodeAccumulator:
    """
    Collects encoded children in order and releases them as one Array.

    Example:
        acc = EncodeAccumulator()
        acc.push_pair(data("a"), data("x"))
        acc.finish()   # Array([ByteString(b"a"), ByteString(b"x")])
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[WireValue] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, value: WireValue) -> None:
        self._items.append(value)

    def push_pair(self, key: WireValue, value: WireValue) -> None:
        """Flattened key/value: key then value, adjacent."""
        self._items.append(key)
        self._items.append(value)

    def finish(self) -> Array:
        """Release the buffer; the accumulator is empty afterwards."""
        items, self._items = self._items, []
        return Array(items)


__all__ = ("EncodeAccumulator",)
