"""ReprSimilarity: structural tree similarity for Repr trees.

Traverses two trees simultaneously through the generic ``children`` contract
and scores them in [0, 1]:

- Equal trees:          1.0 (checked first, by structural equality).
- Different variants:   0.0.
- Leaves:               1 - cost_update (variant/label + payload).
- Aggregates and edges: the node's own update cost plus the cost of the best
                        child matching, normalised per level.

Per-level normalization is applied after each child matching
step so that deep nesting does not bias the overall score::

    sim = 1 - min(1, [d_matched + lambda * |n_left - n_right|]
                     / max(n_left, n_right, 1))
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from repr_tree.diff.config import ChildMatching, DiffConfig
from repr_tree.diff.costs import cost_update, same_kind
from repr_tree.diff.labels import LabelSimilarity
from repr_tree.diff.matcher import align_sequence, hungarian_match
from repr_tree.tree.nodes import Assoc, Record, Repr, structural_hashes

__all__ = ["ReprSimilarity", "SimilarityMemo", "normalize_similarity"]


def normalize_similarity(
    d_matched: float,
    n_left: int,
    n_right: int,
    lambda_: float,
) -> float:
    """Normalize a raw child-matching distance to a [0, 1] similarity score.

    The ``max(..., 1)`` guard keeps childless nodes from dividing by zero.
    """
    unmatched_penalty = lambda_ * abs(n_left - n_right)
    total_cost = d_matched + unmatched_penalty
    denominator = max(n_left, n_right, 1)
    return 1.0 - min(1.0, total_cost / denominator)


class SimilarityMemo:
    """Per-comparison state shared by every level of one similarity or diff run.

    Holds the structural hash of every subtree of the trees being compared,
    so equality between two subtrees is only checked in full when their
    hashes agree, and the similarity of every subtree pair already scored.
    Both are keyed by ``id``; the trees must stay alive while the memo is
    in use.
    """

    __slots__ = ("_hashes", "scores")

    def __init__(self, *roots: Repr) -> None:
        self._hashes: dict[int, int] = {}
        for root in roots:
            self._hashes.update(structural_hashes(root))
        self.scores: dict[tuple[int, int], float] = {}

    def equal(self, left: Repr, right: Repr) -> bool:
        if left is right:
            return True
        return self._hashes[id(left)] == self._hashes[id(right)] and left == right


class ReprSimilarity:
    """Structural similarity between two Repr trees.

    Example::

        from repr_tree.tree import build as r

        sim = ReprSimilarity()
        sim.compute(r.ctor("Point", [r.int_(1)]), r.ctor("Point", [r.int_(2)]))
        # 0.5: same constructor, different payload
    """

    def __init__(
        self,
        labels: LabelSimilarity | None = None,
        config: DiffConfig | None = None,
    ) -> None:
        self._labels = labels if labels is not None else LabelSimilarity()
        self._config = config if config is not None else DiffConfig()

    @property
    def config(self) -> DiffConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute(self, left: Repr, right: Repr) -> float:
        """Return the similarity of two trees in [0.0, 1.0]."""
        return self.score(left, right, SimilarityMemo(left, right))

    def distance(self, left: Repr, right: Repr) -> float:
        """Return ``1 - compute(left, right)``."""
        return 1.0 - self.compute(left, right)

    def cost_matrix(
        self,
        left: Sequence[Repr],
        right: Sequence[Repr],
        memo: SimilarityMemo | None = None,
    ) -> np.ndarray:
        """Pairwise distances ``1 - similarity`` of two child sequences.

        ``memo`` must cover every node of both sequences; a fresh one is
        built when it is None.
        """
        if memo is None:
            memo = SimilarityMemo(*left, *right)
        costs = np.zeros((len(left), len(right)), dtype=float)
        for i, a in enumerate(left):
            for j, b in enumerate(right):
                costs[i, j] = 1.0 - self.score(a, b, memo)
        return costs

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(self, left: Repr, right: Repr, memo: SimilarityMemo) -> float:
        """Similarity of ``left`` and ``right``, reusing and filling ``memo``.

        Subtree pairs are scored bottom-up from an explicit stack: a pair is
        first expanded into its child pairs and combined once they are all
        scored.
        """
        scores = memo.scores
        stack: list[tuple[Repr, Repr, bool]] = [(left, right, False)]
        while stack:
            a, b, expanded = stack.pop()
            key = (id(a), id(b))
            if key in scores:
                continue
            if expanded:
                scores[key] = self._combine(a, b, memo)
                continue
            if memo.equal(a, b):
                scores[key] = 1.0
            elif not same_kind(a, b, self._config):
                scores[key] = 0.0
            elif not a.children() and not b.children():
                scores[key] = 1.0 - cost_update(a, b, self._labels, self._config)
            else:
                stack.append((a, b, True))
                stack.extend(
                    (x, y, False) for x in a.children() for y in b.children()
                )
        return scores[(id(left), id(right))]

    def _combine(self, left: Repr, right: Repr, memo: SimilarityMemo) -> float:
        """Score a pair whose child pairs are all in ``memo``."""
        node_cost = cost_update(left, right, self._labels, self._config)
        kids_left = left.children()
        kids_right = right.children()
        costs = np.zeros((len(kids_left), len(kids_right)), dtype=float)
        for i, a in enumerate(kids_left):
            for j, b in enumerate(kids_right):
                costs[i, j] = 1.0 - memo.scores[(id(a), id(b))]
        if self._unordered(left):
            raw = hungarian_match(costs)
        else:
            raw, _ = align_sequence(costs)
        return normalize_similarity(
            node_cost + raw,
            len(kids_left),
            len(kids_right),
            self._config.lambda_unmatched,
        )

    def _unordered(self, node: Repr) -> bool:
        """Whether ``node``'s children are matched as a set."""
        if node.arity is not None:
            return False
        mode = self._config.child_matching
        if mode == ChildMatching.AUTO:
            return isinstance(node, (Record, Assoc))
        return mode == ChildMatching.UNORDERED
