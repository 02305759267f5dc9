"""Cost functions for Repr tree edit distance.

Update cost blends a structural and a content term:
    gamma_upd = w_s * gamma_struct + w_c * gamma_content

- cost_insert / cost_delete: unit cost (1.0) for inserting/deleting a subtree.
- cost_update: blended structural + content distance for substitution of the
  node itself (children are scored separately by the caller).
"""

from __future__ import annotations

from repr_tree.diff.config import DiffConfig
from repr_tree.diff.labels import LabelSimilarity
from repr_tree.tree.nodes import FloatLit, IntLit, Opaque, Repr
from repr_tree.tree.traversal import is_leaf, label

__all__ = ["cost_delete", "cost_insert", "cost_update", "same_kind"]

_NUMERIC = (IntLit, FloatLit)


def cost_insert(node: Repr) -> float:
    """Unit cost for inserting a node."""
    return 1.0


def cost_delete(node: Repr) -> float:
    """Unit cost for deleting a node."""
    return 1.0


def same_kind(node_a: Repr, node_b: Repr, config: DiffConfig) -> bool:
    """True if the two nodes are the same variant (IntLit ~ FloatLit under coercion)."""
    if node_a.kind == node_b.kind:
        return True
    return (
        config.numeric_coercion
        and isinstance(node_a, _NUMERIC)
        and isinstance(node_b, _NUMERIC)
    )


def _structural_similarity(
    node_a: Repr, node_b: Repr, labels: LabelSimilarity, config: DiffConfig
) -> float:
    """Variant agreement, refined by label similarity for labelled variants."""
    if not same_kind(node_a, node_b, config):
        return 0.0
    return labels.similarity(label(node_a), label(node_b))


def _content_distance(node_a: Repr, node_b: Repr, config: DiffConfig) -> float:
    """Payload distance of two leaves: 0.0 if equal, 1.0 otherwise.

    Non-leaf nodes carry no payload of their own and return 0.0.  An Opaque
    leaf's payload is its text (its label is scored structurally).
    """
    if not (is_leaf(node_a) and is_leaf(node_b)):
        return 0.0
    if isinstance(node_a, Opaque) and isinstance(node_b, Opaque):
        return 0.0 if node_a.text == node_b.text else 1.0
    if node_a == node_b:
        return 0.0
    if (
        config.numeric_coercion
        and isinstance(node_a, _NUMERIC)
        and isinstance(node_b, _NUMERIC)
    ):
        return 0.0 if float(node_a.value) == float(node_b.value) else 1.0
    return 1.0


def cost_update(
    node_a: Repr,
    node_b: Repr,
    labels: LabelSimilarity,
    config: DiffConfig,
) -> float:
    """Compute update cost between two nodes using w_s/w_c blending.

    Returns:
        Float in [0, 1]: ``config.w_s * gamma_struct + config.w_c * gamma_content``
    """
    gamma_struct = 1.0 - _structural_similarity(node_a, node_b, labels, config)
    gamma_content = _content_distance(node_a, node_b, config)
    return config.w_s * gamma_struct + config.w_c * gamma_content
