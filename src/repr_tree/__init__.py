"""repr-tree - a structural, immutable tree representation of debug values."""

from __future__ import annotations

from repr_tree.api import compare, diff, is_equivalent, similarity_score
from repr_tree.comparator import ReprComparator
from repr_tree.diff import ChildMatching, DiffConfig, apply_patch
from repr_tree.errors import (
    MalformedContextError,
    PatchError,
    ReprError,
    ShapeMismatchError,
)
from repr_tree.export import CtorEncoding, DuplicateKeyPolicy, JsonConfig, to_json
from repr_tree.result import DiffResult
from repr_tree.tree import (
    Arg,
    Assoc,
    AssocProp,
    BoolLit,
    Ctor,
    FloatLit,
    IntLit,
    NodeKind,
    Opaque,
    Prop,
    Record,
    Repr,
    StringLit,
    Tuple,
    arg,
    assoc,
    bool_,
    children,
    ctor,
    float_,
    int_,
    opaque,
    record,
    string,
    tuple_,
    unit,
    validate,
    with_children,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "Arg",
    "Assoc",
    "AssocProp",
    "BoolLit",
    "ChildMatching",
    "Ctor",
    "CtorEncoding",
    "DiffConfig",
    "DiffResult",
    "DuplicateKeyPolicy",
    "FloatLit",
    "IntLit",
    "JsonConfig",
    "MalformedContextError",
    "NodeKind",
    "Opaque",
    "PatchError",
    "Prop",
    "Record",
    "Repr",
    "ReprComparator",
    "ReprError",
    "ShapeMismatchError",
    "StringLit",
    "Tuple",
    "apply_patch",
    "arg",
    "assoc",
    "bool_",
    "children",
    "compare",
    "ctor",
    "diff",
    "float_",
    "int_",
    "is_equivalent",
    "opaque",
    "record",
    "similarity_score",
    "string",
    "to_json",
    "tuple_",
    "unit",
    "validate",
    "with_children",
]
