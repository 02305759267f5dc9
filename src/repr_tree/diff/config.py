"""DiffConfig and ChildMatching for structural Repr comparison.

DiffConfig is a frozen (immutable) dataclass holding the similarity
parameters.  ChildMatching selects how the children of two aggregate nodes
are paired: in order (sequence alignment), as a set (optimal assignment), or
by variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["ChildMatching", "DiffConfig"]


class ChildMatching(StrEnum):
    """How children are paired when scoring similarity.

    - ORDERED:   Positional alignment via DP sequence edit distance.
    - UNORDERED: Set-like matching via the Hungarian algorithm.
    - AUTO:      Record and Assoc children unordered, everything else ordered.

    Patches are always computed with ordered alignment, because child order
    is part of structural equality.
    """

    ORDERED = auto()
    UNORDERED = auto()
    AUTO = auto()


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for Repr similarity and diffing.

    Attributes:
        w_s: Structural weight in [0, 1] (variant and label agreement).
        w_c: Content weight in [0, 1] (leaf payload agreement).  Must satisfy
            w_s + w_c ≈ 1.0.
        lambda_unmatched: Penalty multiplier for unmatched children (≥ 0).
        child_matching: How children are paired when scoring.
        numeric_coercion: When True, IntLit and FloatLit compare by numeric
            value (``IntLit(1)`` vs ``FloatLit(1.0)`` -> distance 0.0).
            Default False.
    """

    w_s: float = 0.5
    w_c: float = 0.5
    lambda_unmatched: float = 0.1
    child_matching: ChildMatching = ChildMatching.AUTO
    numeric_coercion: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.w_s <= 1.0:
            msg = f"w_s must be in [0, 1], got {self.w_s}"
            raise ValueError(msg)
        if not 0.0 <= self.w_c <= 1.0:
            msg = f"w_c must be in [0, 1], got {self.w_c}"
            raise ValueError(msg)
        if abs(self.w_s + self.w_c - 1.0) >= 1e-9:
            msg = f"w_s + w_c must sum to 1.0, got {self.w_s + self.w_c}"
            raise ValueError(msg)
        if self.lambda_unmatched < 0.0:
            msg = f"lambda_unmatched must be >= 0.0, got {self.lambda_unmatched}"
            raise ValueError(msg)
        try:
            object.__setattr__(self, "child_matching", ChildMatching(self.child_matching))
        except ValueError:
            msg = f"unknown child_matching {self.child_matching!r}"
            raise ValueError(msg) from None
