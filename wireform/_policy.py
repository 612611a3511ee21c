"""
Codec policy — behavior configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

# ═══════════════════════════════════════════════════════════════════════════════
# Knobs
# ═══════════════════════════════════════════════════════════════════════════════


class Overflow(Enum):
    """
    What an Integer reply does when cast to a width-annotated int.

    WRAP: Two's complement truncation (U8 ← Integer(300) is 44).
    CHECK: Fail with WRONG_VALUE when the value does not fit.

    Note: numbers parsed from text are always range-checked.
    """

    WRAP = auto()
    CHECK = auto()


class OnDuplicate(Enum):
    """
    What struct decode does when a field name appears twice.

    Map decode is always last-wins.
    """

    REJECT = auto()
    LAST_WINS = auto()


class OnUnknown(Enum):
    """
    What struct decode does with a field name the host type does not declare.

    IGNORE is the default: stores routinely return fields a model skips.
    """

    IGNORE = auto()
    REJECT = auto()


# ═══════════════════════════════════════════════════════════════════════════════
# Policy — Full Configuration
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Policy:
    """
    Codec policy configuration.

    Example:
        policy = (
            Policy()
            .with_overflow(Overflow.CHECK)
            .with_on_duplicate(OnDuplicate.LAST_WINS)
            .with_omit_absent_fields()
        )

    Note: Immutable — each method returns a new Policy.
    """

    overflow: Overflow = Overflow.WRAP
    on_duplicate: OnDuplicate = OnDuplicate.REJECT
    on_unknown: OnUnknown = OnUnknown.IGNORE
    # Unwraps Array([Array([...])]) once before struct/map decode.
    unwrap_pipelined: bool = True
    # Encode only: drop struct fields holding None instead of writing Null.
    omit_absent_fields: bool = False

    def with_overflow(self, overflow: Overflow) -> Policy:
        return replace(self, overflow=overflow)

    def with_on_duplicate(self, strategy: OnDuplicate) -> Policy:
        return replace(self, on_duplicate=strategy)

    def with_on_unknown(self, strategy: OnUnknown) -> Policy:
        """
        Set unknown-field strategy.

        Example:
            .with_on_unknown(OnUnknown.REJECT)  # strict models
        """
        return replace(self, on_unknown=strategy)

    def with_unwrap_pipelined(self, enabled: bool = True) -> Policy:
        return replace(self, unwrap_pipelined=enabled)

    def with_omit_absent_fields(self, enabled: bool = True) -> Policy:
        """
        Drop None-valued struct fields on encode.

        Hash fields cannot hold nil, so writes usually want this on.
        """
        return replace(self, omit_absent_fields=enabled)


DEFAULT_POLICY = Policy()


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Overflow",
    "OnDuplicate",
    "OnUnknown",
    "Policy",
    "DEFAULT_POLICY",
)
