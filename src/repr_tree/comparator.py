"""ReprComparator: orchestrator that wires ReprSimilarity + ReprDiffer.

This is the central wiring layer between the raw algorithms and the public
API.  It turns a pair of trees into a rich DiffResult holding the similarity
score, the edit script, the flattened change list and timing data.

Label similarities are cached via a per-comparator LabelSimilarity (LRU), so
repeated comparisons of trees sharing field names and tags reuse earlier work.
"""

from __future__ import annotations

import time

from repr_tree.diff.config import DiffConfig
from repr_tree.diff.labels import LabelSimilarity
from repr_tree.diff.patch import ReprDiffer, list_changes
from repr_tree.diff.similarity import ReprSimilarity, SimilarityMemo
from repr_tree.result import DiffResult
from repr_tree.tree.nodes import Repr

__all__ = ["ReprComparator"]


class ReprComparator:
    """Orchestrator for structural Repr comparison.

    Two separate ``ReprComparator`` instances never share cache state; each
    instance maintains its own ``LabelSimilarity``.

    Example::

        from repr_tree.comparator import ReprComparator
        from repr_tree.tree import build as r

        cmp = ReprComparator()
        result = cmp.compare(
            r.record({"x": r.int_(1), "y": r.int_(2)}),
            r.record({"x": r.int_(1), "y": r.int_(3)}),
        )
        print(result.similarity_score)   # 0.75
        print(result.changes[0].left_path)  # (1, 0)
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        max_cache_size: int = 512,
    ) -> None:
        """Initialise the comparator.

        Args:
            config:  Algorithm hyper-parameters.  Defaults to ``DiffConfig()``.
            max_cache_size: Maximum number of label pairs kept in the LRU cache.
        """
        self._config = config if config is not None else DiffConfig()
        self._labels = LabelSimilarity(max_size=max_cache_size)
        self._similarity = ReprSimilarity(labels=self._labels, config=self._config)
        self._differ = ReprDiffer(self._similarity)

    @property
    def config(self) -> DiffConfig:
        return self._config

    @property
    def labels(self) -> LabelSimilarity:
        """The label cache used by this comparator."""
        return self._labels

    def compare(self, left: Repr, right: Repr) -> DiffResult:
        """Compare two trees and return a DiffResult.

        Args:
            left:  The original tree.
            right: The tree to compare against.

        Returns:
            A ``DiffResult`` with similarity_score, patch, changes and
            computation_time_ms populated.
        """
        start = time.perf_counter()
        memo = SimilarityMemo(left, right)
        score = self._similarity.score(left, right, memo)
        patch = self._differ.diff(left, right, memo)
        changes = list_changes(patch)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        return DiffResult(
            similarity_score=score,
            patch=patch,
            changes=changes,
            computation_time_ms=elapsed_ms,
        )
