"""DiffResult dataclass for structural comparison output.

This module provides the rich result type returned by compare() calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from repr_tree.diff.patch import Change, Edit, EditKind

__all__ = ["DiffResult"]


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Rich result of a compare() call.

    Attributes:
        similarity_score: Normalised similarity in [0.0, 1.0].  1.0 is identical.
        patch: Edit script turning the left tree into the right tree; apply it
            with ``apply_patch(left, result.patch)``.
        changes: The patch flattened into REPLACE/INSERT/DELETE changes with
            left and right child-index paths.
        computation_time_ms: Wall-clock duration of the comparison in milliseconds.
    """

    similarity_score: float
    patch: Edit
    changes: list[Change]
    computation_time_ms: float

    @property
    def is_identical(self) -> bool:
        """True when the two trees are structurally equal."""
        return self.patch.kind == EditKind.KEEP
