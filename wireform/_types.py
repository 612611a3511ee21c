"""
Wire value tree — the tagged union exchanged with the store's reply protocol.

    ByteString(b"apple")            bulk/simple string reply
    Integer(5)                      integer reply
    Array([ByteString(b"a"), ...])  multi-bulk reply (also pipelined batches)
    Null()                          nil reply
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wireform._policy import Policy

# ═══════════════════════════════════════════════════════════════════════════════
# Shared Behaviour
# ═══════════════════════════════════════════════════════════════════════════════

_PREVIEW_LIMIT = 32
_WIDE_BITS = 128


class _Wire:
    __slots__ = ()

    def decode(self, tp: Any, *, policy: Policy | None = None) -> Any:
        """
        Decode this value as `tp`.

        Example:
            pair = Array([Integer(5), ByteString(b"hello")]).decode(tuple[int, str])
        """
        from wireform.decode import from_wire_value

        return from_wire_value(tp, self, policy=policy)


# ═══════════════════════════════════════════════════════════════════════════════
# Variants
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ByteString(_Wire):
    """Raw byte payload: text, numbers-as-text, field names, variant names."""

    data: bytes

    def describe(self) -> str:
        if len(self.data) > _PREVIEW_LIMIT:
            return f"ByteString({self.data[:_PREVIEW_LIMIT]!r}... {len(self.data)} bytes)"
        return f"ByteString({self.data!r})"


@dataclass(frozen=True, slots=True)
class Integer(_Wire):
    """Native integer reply (signed 64-bit on the wire)."""

    value: int

    def describe(self) -> str:
        if self.value.bit_length() > _WIDE_BITS:
            return f"Integer({self.value.bit_length()}-bit value)"
        return f"Integer({self.value})"


@dataclass(frozen=True, slots=True)
class Array(_Wire):
    """
    Composite reply.

    Note: items is a plain list so an owned decode can move values out of it.
    """

    items: list[WireValue] = field(default_factory=list)

    def describe(self) -> str:
        return f"Array(len={len(self.items)})"


@dataclass(frozen=True, slots=True)
class Null(_Wire):
    """Absence marker."""

    def describe(self) -> str:
        return "Null"


NULL = Null()

type WireValue = ByteString | Integer | Array | Null
"""Any node of the wire value tree."""


def data(text: str | bytes) -> ByteString:
    """Shorthand for a ByteString built from text or bytes."""
    if isinstance(text, str):
        return ByteString(text.encode("utf-8"))
    return ByteString(text)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "ByteString",
    "Integer",
    "Array",
    "Null",
    "NULL",
    "WireValue",
    "data",
)
