"""The closed set of Repr node variants and the NodeKind StrEnum.

Every variant is a frozen, slotted dataclass, which supplies ``__init__``,
``__repr__`` and ``__match_args__``.  Structural equality and hashing live on
the ``Repr`` base and walk the trees with an explicit work stack, so two
independently built trees compare equal whenever they have the same shape
and payloads, however deep they are.

Labelled aggregates are modelled with dedicated child nodes rather than a
second "labelled collection" kind:

- Record    -> Prop(name, value)       one child per field
- Ctor      -> Arg(label, value)       optional, children may also be bare
- Assoc     -> AssocProp(key, value)   one child per entry

This keeps the traversal contract (``children`` / ``with_children``) uniform:
every edge of the tree is itself a ``Repr``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import ClassVar

from repr_tree.errors import MalformedContextError, ShapeMismatchError

__all__ = [
    "Arg",
    "Assoc",
    "AssocProp",
    "BoolLit",
    "Ctor",
    "FloatLit",
    "IntLit",
    "NodeKind",
    "Opaque",
    "Prop",
    "Record",
    "Repr",
    "StringLit",
    "Tuple",
    "structural_hashes",
]


class NodeKind(StrEnum):
    """Enumeration of the twelve Repr variants.

    StrEnum values are the lowercased member names, e.g.
    ``NodeKind.ASSOC_PROP == "assoc_prop"``.
    """

    INT = auto()
    FLOAT = auto()
    BOOL = auto()
    STRING = auto()
    OPAQUE = auto()
    TUPLE = auto()
    RECORD = auto()
    PROP = auto()
    CTOR = auto()
    ARG = auto()
    ASSOC = auto()
    ASSOC_PROP = auto()


class Repr:
    """Base class of every Repr node.

    The variant set is closed: subclassing outside this module raises
    ``TypeError``, and ``Repr`` itself cannot be instantiated.  Subclasses
    declare:

    - ``kind``:           their NodeKind.
    - ``arity``:          exact child count, or None for variable-length variants.
    - ``child_type``:     the class every child must be an instance of.
    - ``payload_fields``: the non-child fields (value, name, label, tag, text).
    """

    __slots__ = ()

    kind: ClassVar[NodeKind]
    arity: ClassVar[int | None] = 0
    child_type: ClassVar[type[Repr] | None] = None
    payload_fields: ClassVar[tuple[str, ...]] = ()

    def __new__(cls, *args: object, **kwargs: object) -> Repr:
        if cls is Repr:
            msg = "Repr is abstract; build one of its variants instead"
            raise TypeError(msg)
        return super().__new__(cls)

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            msg = f"Repr is closed; cannot define variant {cls.__qualname__!r} in {cls.__module__}"
            raise TypeError(msg)

    def payload(self) -> tuple[object, ...]:
        """Return the values of the non-child fields, in declaration order."""
        return tuple(getattr(self, name) for name in self.payload_fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Repr):
            return NotImplemented
        stack: list[tuple[Repr, Repr]] = [(self, other)]
        while stack:
            left, right = stack.pop()
            if left is right:
                continue
            if type(left) is not type(right) or left.payload() != right.payload():
                return False
            kids_left = left.children()
            kids_right = right.children()
            if len(kids_left) != len(kids_right):
                return False
            stack.extend(zip(kids_left, kids_right, strict=True))
        return True

    def __hash__(self) -> int:
        return structural_hashes(self)[id(self)]

    def children(self) -> tuple[Repr, ...]:
        """Return the immediate children of this node (empty for leaves)."""
        return ()

    def with_children(self, new_children: Iterable[Repr]) -> Repr:
        """Return a node of the same variant with its children replaced.

        Non-child fields (tag, name, label) are preserved.  When every new
        child is the very object already held, ``self`` is returned.

        Raises:
            ShapeMismatchError: If the count or kind of ``new_children`` does
                not match what this variant holds.
        """
        new = tuple(new_children)
        self._check_shape(new)
        old = self.children()
        if len(new) == len(old) and all(a is b for a, b in zip(new, old, strict=True)):
            return self
        return self._rebuild(new)

    def _check_shape(self, new: tuple[Repr, ...]) -> None:
        name = type(self).__name__
        if self.arity is not None and len(new) != self.arity:
            msg = f"{name} expects {self.arity} children, got {len(new)}"
            raise ShapeMismatchError(msg)
        expected = self.child_type or Repr
        for index, child in enumerate(new):
            if not isinstance(child, expected):
                msg = (
                    f"{name} child {index} must be {expected.__name__}, "
                    f"got {type(child).__name__}"
                )
                raise ShapeMismatchError(msg)

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        raise NotImplementedError(type(self))


def _require(owner: str, field_name: str, value: object) -> None:
    if not isinstance(value, Repr):
        msg = f"{owner}.{field_name} must be a Repr, got {type(value).__name__}"
        raise TypeError(msg)


def _coerce_items(
    owner: str, items: Iterable[Repr], expected: type[Repr] | None = None
) -> tuple[Repr, ...]:
    result = tuple(items)
    for index, item in enumerate(result):
        _require(owner, f"children[{index}]", item)
        if expected is not None and not isinstance(item, expected):
            msg = (
                f"{owner} may only hold {expected.__name__} children, "
                f"got {type(item).__name__} at position {index}"
            )
            raise MalformedContextError(msg)
    return result


def structural_hashes(node: Repr) -> dict[int, int]:
    """Hash every subtree of ``node`` bottom-up, keyed by ``id``.

    Equal subtrees get equal hashes.  The ids are only meaningful while
    ``node`` is alive.
    """
    hashes: dict[int, int] = {}
    stack: list[tuple[Repr, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            kids = tuple(hashes[id(child)] for child in current.children())
            hashes[id(current)] = hash((type(current), current.payload(), kids))
        elif id(current) not in hashes:
            stack.append((current, True))
            stack.extend((child, False) for child in current.children())
    return hashes


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, eq=False)
class IntLit(Repr):
    value: int

    kind: ClassVar[NodeKind] = NodeKind.INT
    payload_fields: ClassVar[tuple[str, ...]] = ("value",)


@dataclass(frozen=True, slots=True, eq=False)
class FloatLit(Repr):
    value: float

    kind: ClassVar[NodeKind] = NodeKind.FLOAT
    payload_fields: ClassVar[tuple[str, ...]] = ("value",)


@dataclass(frozen=True, slots=True, eq=False)
class BoolLit(Repr):
    value: bool

    kind: ClassVar[NodeKind] = NodeKind.BOOL
    payload_fields: ClassVar[tuple[str, ...]] = ("value",)


@dataclass(frozen=True, slots=True, eq=False)
class StringLit(Repr):
    value: str

    kind: ClassVar[NodeKind] = NodeKind.STRING
    payload_fields: ClassVar[tuple[str, ...]] = ("value",)


@dataclass(frozen=True, slots=True, eq=False)
class Opaque(Repr):
    """Fallback leaf for values with no structural decomposition.

    Attributes:
        label: Short name of what the value is, e.g. ``"function"``.
        text:  Free-form rendering of the value.
    """

    label: str
    text: str

    kind: ClassVar[NodeKind] = NodeKind.OPAQUE
    payload_fields: ClassVar[tuple[str, ...]] = ("label", "text")


# ---------------------------------------------------------------------------
# Context-bound edges
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, eq=False)
class Prop(Repr):
    """A named record field.  Only meaningful as a direct child of Record."""

    name: str
    value: Repr

    kind: ClassVar[NodeKind] = NodeKind.PROP
    payload_fields: ClassVar[tuple[str, ...]] = ("name",)
    arity: ClassVar[int | None] = 1

    def __post_init__(self) -> None:
        _require("Prop", "value", self.value)

    def children(self) -> tuple[Repr, ...]:
        return (self.value,)

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        return Prop(self.name, new[0])


@dataclass(frozen=True, slots=True, eq=False)
class Arg(Repr):
    """A constructor argument; ``label`` is None for positional arguments.

    Only meaningful as a direct child of Ctor.
    """

    label: str | None
    value: Repr

    kind: ClassVar[NodeKind] = NodeKind.ARG
    payload_fields: ClassVar[tuple[str, ...]] = ("label",)
    arity: ClassVar[int | None] = 1

    def __post_init__(self) -> None:
        _require("Arg", "value", self.value)

    def children(self) -> tuple[Repr, ...]:
        return (self.value,)

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        return Arg(self.label, new[0])


@dataclass(frozen=True, slots=True, eq=False)
class AssocProp(Repr):
    """A key/value entry.  Only meaningful as a direct child of Assoc."""

    key: Repr
    value: Repr

    kind: ClassVar[NodeKind] = NodeKind.ASSOC_PROP
    arity: ClassVar[int | None] = 2

    def __post_init__(self) -> None:
        _require("AssocProp", "key", self.key)
        _require("AssocProp", "value", self.value)

    def children(self) -> tuple[Repr, ...]:
        return (self.key, self.value)

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        return AssocProp(new[0], new[1])


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, eq=False)
class Tuple(Repr):
    """A positional group.  ``Tuple(())`` is the unit value."""

    items: tuple[Repr, ...]

    kind: ClassVar[NodeKind] = NodeKind.TUPLE
    arity: ClassVar[int | None] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _coerce_items("Tuple", self.items))

    def children(self) -> tuple[Repr, ...]:
        return self.items

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        return Tuple(new)


@dataclass(frozen=True, slots=True, eq=False)
class Record(Repr):
    """A record value; each field is a Prop child, in declaration order."""

    props: tuple[Prop, ...]

    kind: ClassVar[NodeKind] = NodeKind.RECORD
    arity: ClassVar[int | None] = None
    child_type: ClassVar[type[Repr] | None] = Prop

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", _coerce_items("Record", self.props, Prop))

    def children(self) -> tuple[Repr, ...]:
        return self.props

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        return Record(new)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True, eq=False)
class Ctor(Repr):
    """A tagged constructor application.

    ``args`` may mix bare values (positional) and Arg nodes; the mix is kept
    verbatim.
    """

    tag: str
    args: tuple[Repr, ...]

    kind: ClassVar[NodeKind] = NodeKind.CTOR
    payload_fields: ClassVar[tuple[str, ...]] = ("tag",)
    arity: ClassVar[int | None] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", _coerce_items("Ctor", self.args))

    def children(self) -> tuple[Repr, ...]:
        return self.args

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        return Ctor(self.tag, new)


@dataclass(frozen=True, slots=True, eq=False)
class Assoc(Repr):
    """A map-like value with explicit AssocProp entries."""

    tag: str
    props: tuple[AssocProp, ...]

    kind: ClassVar[NodeKind] = NodeKind.ASSOC
    payload_fields: ClassVar[tuple[str, ...]] = ("tag",)
    arity: ClassVar[int | None] = None
    child_type: ClassVar[type[Repr] | None] = AssocProp

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "props", _coerce_items("Assoc", self.props, AssocProp)
        )

    def children(self) -> tuple[Repr, ...]:
        return self.props

    def _rebuild(self, new: tuple[Repr, ...]) -> Repr:
        return Assoc(self.tag, new)  # type: ignore[arg-type]
