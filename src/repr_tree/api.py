"""Public API functions for repr-tree comparison.

This module provides the user-facing functions: compare, diff,
similarity_score and is_equivalent.  Each call creates a fresh
ReprComparator to guarantee zero global state mutation between calls.
"""

from __future__ import annotations

from repr_tree.comparator import ReprComparator
from repr_tree.diff.config import DiffConfig
from repr_tree.diff.patch import Edit
from repr_tree.result import DiffResult
from repr_tree.tree.nodes import Repr

__all__ = ["compare", "diff", "is_equivalent", "similarity_score"]


def compare(
    left: Repr,
    right: Repr,
    config: DiffConfig | None = None,
) -> DiffResult:
    """Compare two Repr trees and return a rich DiffResult.

    Args:
        left:   The original tree.
        right:  The tree to compare against.
        config: Algorithm hyper-parameters. Defaults to ``DiffConfig()`` when None.

    Returns:
        A ``DiffResult`` with similarity_score, patch, changes and
        computation_time_ms populated.
    """
    comparator = ReprComparator(config=config)
    return comparator.compare(left, right)


def diff(
    left: Repr,
    right: Repr,
    config: DiffConfig | None = None,
) -> Edit:
    """Return the edit script turning ``left`` into ``right``.

    ``apply_patch(left, diff(left, right)) == right`` always holds.
    """
    return compare(left, right, config=config).patch


def is_equivalent(
    left: Repr,
    right: Repr,
    threshold: float = 0.85,
    config: DiffConfig | None = None,
) -> bool:
    """Return True if the two trees are at least ``threshold`` similar.

    Args:
        left:      First tree.
        right:     Second tree.
        threshold: Minimum similarity score to consider equivalent. Must be in
                   [0.0, 1.0]. Defaults to 0.85.
        config:    Algorithm hyper-parameters. Defaults to ``DiffConfig()`` when None.

    Returns:
        True if ``compare(left, right, config).similarity_score >= threshold``.
    """
    if not 0.0 <= threshold <= 1.0:
        msg = f"threshold must be in [0, 1], got {threshold}"
        raise ValueError(msg)
    result = compare(left, right, config=config)
    return result.similarity_score >= threshold


def similarity_score(
    left: Repr,
    right: Repr,
    config: DiffConfig | None = None,
) -> float:
    """Return the normalised similarity score for two trees.

    Returns:
        A float in [0.0, 1.0]. 1.0 means identical; 0.0 means completely dissimilar.
    """
    result = compare(left, right, config=config)
    return result.similarity_score
