"""
Borrowed-or-owned values and the dual-mode iterator.

A decode over borrowed input leaves the caller's tree untouched. A decode
over owned input moves every value out of the arrays it walks, so the
source tree is consumed as the decode proceeds and its items can be freed
early on large replies.

    CowIter(Borrowed(items))  →  yields Borrowed(v) for v in items
    CowIter(Owned(items))     →  yields Owned(v), draining items
"""

from __future__ import annotations

from dataclasses import dataclass

from wireform._types import WireValue

# ═══════════════════════════════════════════════════════════════════════════════
# Borrowed / Owned
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Borrowed[T]:
    """A reference into a longer-lived input tree."""

    value: T

    def rewrap[U](self, value: U) -> Borrowed[U]:
        """Wrap a value derived from this one in the same mode."""
        return Borrowed(value)


@dataclass(frozen=True, slots=True)
class Owned[T]:
    """A value the decoder may consume."""

    value: T

    def rewrap[U](self, value: U) -> Owned[U]:
        """Wrap a value derived from this one in the same mode."""
        return Owned(value)


type Cow[T] = Borrowed[T] | Owned[T]
"""Either mode. The mode never changes for the lifetime of a decode."""


def into_cow(value: WireValue | Cow[WireValue]) -> Cow[WireValue]:
    """Bare values are borrowed; explicit wrappers are kept as given."""
    match value:
        case Borrowed() | Owned():
            return value
        case _:
            return Borrowed(value)


# ═══════════════════════════════════════════════════════════════════════════════
# CowIter — Dual-Mode Iterator
# ═══════════════════════════════════════════════════════════════════════════════


class CowIter:
    """
    Forward-only iterator over a borrowed or owned list of wire values.

    Example:
        it = CowIter(Owned(reply.items))
        first = next(it)       # Owned(...)
        reply.items            # [], moved out
    """

    __slots__ = ("_borrowed", "_stack", "_index")

    def __init__(self, values: Cow[list[WireValue]]) -> None:
        match values:
            case Borrowed(items):
                self._borrowed: list[WireValue] | None = items
                self._stack: list[WireValue] = []
            case Owned(items):
                # Reversed so each step is a pop from the end.
                self._borrowed = None
                self._stack = items[::-1]
                items.clear()
            case _:
                raise TypeError(f"expected Borrowed or Owned, got {values!r}")
        self._index = 0

    @classmethod
    def of_one(cls, value: Cow[WireValue]) -> CowIter:
        """Iterator yielding exactly `value`, in its own mode."""
        return cls(value.rewrap([value.value]))

    @property
    def owned(self) -> bool:
        return self._borrowed is None

    def __iter__(self) -> CowIter:
        return self

    def __next__(self) -> Cow[WireValue]:
        if self._borrowed is None:
            if not self._stack:
                raise StopIteration
            return Owned(self._stack.pop())

        if self._index >= len(self._borrowed):
            raise StopIteration
        value = self._borrowed[self._index]
        self._index += 1
        return Borrowed(value)

    def __length_hint__(self) -> int:
        if self._borrowed is None:
            return len(self._stack)
        return len(self._borrowed) - self._index


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Borrowed",
    "Owned",
    "Cow",
    "into_cow",
    "CowIter",
)
