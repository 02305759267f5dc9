"""Child matching strategies over a pairwise cost matrix.

- ``hungarian_match``: optimal unordered assignment via scipy's
  ``linear_sum_assignment``.
- ``align_sequence``:  ordered alignment via DP edit distance, with a
  backtrace so callers can turn the alignment into an edit script.

Both take a ``(m, n)`` matrix of substitution costs in [0, 1]; inserting or
deleting a child costs 1.0.
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import NamedTuple

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["AlignOp", "AlignStep", "align_sequence", "hungarian_match"]


class AlignOp(StrEnum):
    MATCH = auto()
    DELETE = auto()
    INSERT = auto()


class AlignStep(NamedTuple):
    """One step of an ordered alignment.

    ``left`` is None for INSERT, ``right`` is None for DELETE.
    """

    op: AlignOp
    left: int | None
    right: int | None


def hungarian_match(cost_matrix: np.ndarray) -> float:
    """Return the minimum total cost of an unordered child matching.

    Matched pairs contribute their matrix cost; every child left over on the
    larger side contributes a unit insert/delete cost.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.

    Returns:
        Raw matching distance (not normalized).
    """
    m, n = cost_matrix.shape
    if m == 0 or n == 0:
        return float(m + n)
    row_ind, col_ind = linear_sum_assignment(cost_matrix)
    matched_cost = float(cost_matrix[row_ind, col_ind].sum())
    return matched_cost + float(abs(m - n))


def align_sequence(cost_matrix: np.ndarray) -> tuple[float, list[AlignStep]]:
    """Ordered alignment of two child sequences via DP edit distance.

    ``dp[i, j]`` is the minimum cost of aligning the first ``i`` left
    children with the first ``j`` right children.  Ties in the backtrace
    prefer MATCH, then DELETE, then INSERT, so the result is deterministic.

    Args:
        cost_matrix: Substitution costs of shape ``(m, n)``.

    Returns:
        ``(total_cost, steps)`` with steps in left-to-right order.
    """
    m, n = cost_matrix.shape
    dp = np.zeros((m + 1, n + 1), dtype=float)
    dp[:, 0] = np.arange(m + 1)
    dp[0, :] = np.arange(n + 1)

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            dp[i, j] = min(
                dp[i - 1, j - 1] + cost_matrix[i - 1, j - 1],
                dp[i - 1, j] + 1.0,
                dp[i, j - 1] + 1.0,
            )

    steps: list[AlignStep] = []
    i, j = m, n
    while i > 0 or j > 0:
        if (
            i > 0
            and j > 0
            and np.isclose(dp[i, j], dp[i - 1, j - 1] + cost_matrix[i - 1, j - 1])
        ):
            steps.append(AlignStep(AlignOp.MATCH, i - 1, j - 1))
            i, j = i - 1, j - 1
        elif i > 0 and np.isclose(dp[i, j], dp[i - 1, j] + 1.0):
            steps.append(AlignStep(AlignOp.DELETE, i - 1, None))
            i -= 1
        else:
            steps.append(AlignStep(AlignOp.INSERT, None, j - 1))
            j -= 1

    steps.reverse()
    return float(dp[m, n]), steps
