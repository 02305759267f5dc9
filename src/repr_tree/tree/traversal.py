"""Generic traversal over Repr trees.

Everything here is written against the two-method contract

- ``children(node)``              immediate children, in order
- ``with_children(node, kids)``   same variant and labels, new children

and never special-cases a variant beyond reading its label.  Paths are tuples
of child indices from the root, e.g. ``(0, 1)`` is the second child of the
first child.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

from repr_tree.errors import MalformedContextError
from repr_tree.tree.nodes import Arg, Assoc, AssocProp, Ctor, Opaque, Prop, Record, Repr

__all__ = [
    "Path",
    "children",
    "depth",
    "fold",
    "get_at",
    "is_leaf",
    "is_well_formed",
    "label",
    "replace_at",
    "size",
    "transform",
    "validate",
    "walk",
    "with_children",
]

Path = tuple[int, ...]

T = TypeVar("T")

# Context-bound variant -> the only parent variant it may appear under.
_REQUIRED_PARENT: dict[type[Repr], type[Repr]] = {
    Prop: Record,
    Arg: Ctor,
    AssocProp: Assoc,
}


def children(node: Repr) -> tuple[Repr, ...]:
    """Return the immediate children of ``node``.  Never fails."""
    return node.children()


def with_children(node: Repr, new_children: Iterable[Repr]) -> Repr:
    """Rebuild ``node`` with ``new_children``.

    Raises:
        ShapeMismatchError: If the children do not fit the variant.
    """
    return node.with_children(new_children)


def label(node: Repr) -> str | None:
    """Return the printable label of ``node``, or None if it has none.

    Prop -> field name, Arg -> argument label (None when positional),
    Ctor/Assoc -> tag, Opaque -> label.
    """
    if isinstance(node, Prop):
        return node.name
    if isinstance(node, Arg):
        return node.label
    if isinstance(node, (Ctor, Assoc)):
        return node.tag
    if isinstance(node, Opaque):
        return node.label
    return None


def is_leaf(node: Repr) -> bool:
    return node.arity == 0


def walk(node: Repr) -> Iterator[tuple[Path, Repr]]:
    """Yield ``(path, node)`` for every node of the tree in pre-order."""
    stack: list[tuple[Path, Repr]] = [((), node)]
    while stack:
        path, current = stack.pop()
        yield path, current
        kids = current.children()
        for index in range(len(kids) - 1, -1, -1):
            stack.append(((*path, index), kids[index]))


def fold(node: Repr, fn: Callable[[Repr, list[T]], T]) -> T:
    """Combine a tree bottom-up: ``fn(node, [folded child, ...])``.

    Children are folded before their parent and passed in order.  The walk
    uses an explicit stack, so tree depth is not bounded by the recursion
    limit.
    """
    results: list[T] = []
    stack: list[tuple[Repr, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        kids = current.children()
        if not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(kids))
            continue
        folded: list[T] = []
        if kids:
            folded = results[-len(kids) :]
            del results[-len(kids) :]
        results.append(fn(current, folded))
    return results[0]


def get_at(node: Repr, path: Path) -> Repr:
    """Return the node found by following ``path`` from ``node``.

    Raises:
        IndexError: If a step of the path does not name an existing child.
    """
    current = node
    for step, index in enumerate(path):
        kids = current.children()
        if not 0 <= index < len(kids):
            msg = f"path {path!r} step {step}: no child {index} in {type(current).__name__}"
            raise IndexError(msg)
        current = kids[index]
    return current


def replace_at(node: Repr, path: Path, new: Repr) -> Repr:
    """Return a copy of ``node`` with the subtree at ``path`` replaced by ``new``.

    Only the spine from the root to ``path`` is rebuilt; every other subtree
    is shared with the input.

    Raises:
        IndexError: If ``path`` does not exist.
        ShapeMismatchError: If ``new`` cannot stand at that position (e.g. a
            non-Prop under a Record).
    """
    spine: list[tuple[Repr, int]] = []
    current = node
    for step, index in enumerate(path):
        kids = current.children()
        if not 0 <= index < len(kids):
            msg = f"path {path!r} step {step}: no child {index} in {type(current).__name__}"
            raise IndexError(msg)
        spine.append((current, index))
        current = kids[index]

    rebuilt = new
    for parent, index in reversed(spine):
        kids = list(parent.children())
        kids[index] = rebuilt
        rebuilt = parent.with_children(kids)
    return rebuilt


def transform(node: Repr, fn: Callable[[Repr], Repr]) -> Repr:
    """Rewrite a tree bottom-up.

    Children are transformed first, the node is rebuilt through
    ``with_children`` and ``fn`` is applied to the result.  Subtrees that
    ``fn`` leaves untouched keep their identity.
    """
    return fold(node, lambda current, kids: fn(current.with_children(kids)))


def size(node: Repr) -> int:
    """Number of nodes in the tree, ``node`` included."""
    return fold(node, lambda _, kids: 1 + sum(kids))


def depth(node: Repr) -> int:
    """Height of the tree; a leaf has depth 1."""
    return fold(node, lambda _, kids: 1 + max(kids, default=0))


def validate(node: Repr) -> None:
    """Check that every Prop/Arg/AssocProp sits directly under its parent variant.

    Raises:
        MalformedContextError: Naming the path of the first offending node.
    """
    stack: list[tuple[Path, Repr, Repr | None]] = [((), node, None)]
    while stack:
        path, current, parent = stack.pop()
        required = _REQUIRED_PARENT.get(type(current))
        if required is not None and not isinstance(parent, required):
            where = "the root" if parent is None else f"a {type(parent).__name__}"
            msg = (
                f"{type(current).__name__} at path {path!r} must be a direct child "
                f"of a {required.__name__}, found at {where}"
            )
            raise MalformedContextError(msg)
        kids = current.children()
        for index in range(len(kids) - 1, -1, -1):
            stack.append(((*path, index), kids[index], current))


def is_well_formed(node: Repr) -> bool:
    """Return True when ``validate(node)`` would not raise."""
    try:
        validate(node)
    except MalformedContextError:
        return False
    return True
