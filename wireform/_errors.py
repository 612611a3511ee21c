"""
Error taxonomy.

Decode failures carry a kind, a message, and the path of field names and
element indexes from the root value to the failing node. Encode failures
carry a kind and a message only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from wireform._types import WireValue


class WireformError(Exception):
    """Base class for every codec failure."""


# ═══════════════════════════════════════════════════════════════════════════════
# Decode Errors
# ═══════════════════════════════════════════════════════════════════════════════


class DecodeErrorKind(Enum):
    """Kinds of decode errors."""

    END_OF_STREAM = auto()  # Cursor exhausted while a value was required
    WRONG_VALUE = auto()  # Wire variant does not match the requested kind
    ENCODING = auto()  # Payload is not valid UTF-8
    PARSE = auto()  # Text is not a number of the requested type
    MISSING_FIELD = auto()
    DUPLICATE_FIELD = auto()
    UNKNOWN_FIELD = auto()  # Only with OnUnknown.REJECT
    UNKNOWN_VARIANT = auto()
    UNSUPPORTED_OPERATION = auto()
    CUSTOM = auto()  # Raised by host constructors/validators


type PathSegment = str | int


@dataclass(eq=False, slots=True)
class DecodeError(WireformError):
    """
    Decode failure.

    Note: path is outermost-first, e.g. ("users", 0, "name").
    """

    kind: DecodeErrorKind
    message: str
    path: tuple[PathSegment, ...] = ()

    @property
    def location(self) -> str:
        parts = ["$"]
        for segment in self.path:
            parts.append(f"[{segment}]" if isinstance(segment, int) else f".{segment}")
        return "".join(parts)

    def within(self, segment: PathSegment) -> DecodeError:
        """Same error, one level further from the root."""
        return DecodeError(self.kind, self.message, (segment, *self.path))

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.message} (at {self.location})"


def wrong_value(expected: str, got: WireValue) -> DecodeError:
    return DecodeError(
        DecodeErrorKind.WRONG_VALUE,
        f"expected {expected}, got {got.describe()}",
    )


def end_of_stream() -> DecodeError:
    return DecodeError(DecodeErrorKind.END_OF_STREAM, "reached end of stream")


# ═══════════════════════════════════════════════════════════════════════════════
# Encode Errors
# ═══════════════════════════════════════════════════════════════════════════════


class EncodeErrorKind(Enum):
    """Kinds of encode errors."""

    CUSTOM = auto()
    UNSUPPORTED_OPERATION = auto()


@dataclass(eq=False, slots=True)
class EncodeError(WireformError):
    """Encode failure."""

    kind: EncodeErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "WireformError",
    "DecodeErrorKind",
    "DecodeError",
    "PathSegment",
    "wrong_value",
    "end_of_stream",
    "EncodeErrorKind",
    "EncodeError",
)
