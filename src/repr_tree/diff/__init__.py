"""diff subpackage: structural similarity and edit scripts for Repr trees.

Everything here consumes trees only through ``children`` / ``with_children``
and structural equality, so it works for every variant without special cases.

Example::

    from repr_tree.diff import ReprDiffer, apply_patch

    patch = ReprDiffer().diff(old_tree, new_tree)
    assert apply_patch(old_tree, patch) == new_tree
"""

from __future__ import annotations

from repr_tree.diff.config import ChildMatching, DiffConfig
from repr_tree.diff.labels import LabelSimilarity
from repr_tree.diff.patch import (
    Change,
    Edit,
    EditKind,
    ReprDiffer,
    apply_patch,
    list_changes,
)
from repr_tree.diff.similarity import ReprSimilarity, SimilarityMemo

__all__ = [
    "Change",
    "ChildMatching",
    "DiffConfig",
    "Edit",
    "EditKind",
    "LabelSimilarity",
    "ReprDiffer",
    "ReprSimilarity",
    "SimilarityMemo",
    "apply_patch",
    "list_changes",
]
