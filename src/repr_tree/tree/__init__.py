"""Tree subpackage: the Repr data model and its traversal contract.

Re-exports the public API for the tree module:
- Repr and its twelve variants, plus the NodeKind StrEnum
- the smart constructors (``int_``, ``string``, ``record``, ``ctor``, ...)
- ``children`` / ``with_children`` and the generic walkers built on them
"""

from repr_tree.tree.build import (
    arg,
    assoc,
    assoc_prop,
    bool_,
    ctor,
    float_,
    int_,
    opaque,
    prop,
    record,
    string,
    tuple_,
    unit,
)
from repr_tree.tree.nodes import (
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
    structural_hashes,
)
from repr_tree.tree.traversal import (
    Path,
    children,
    depth,
    fold,
    get_at,
    is_leaf,
    is_well_formed,
    label,
    replace_at,
    size,
    transform,
    validate,
    walk,
    with_children,
)

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
    "Path",
    "Prop",
    "Record",
    "Repr",
    "StringLit",
    "Tuple",
    "arg",
    "assoc",
    "assoc_prop",
    "bool_",
    "children",
    "ctor",
    "depth",
    "fold",
    "float_",
    "get_at",
    "int_",
    "is_leaf",
    "is_well_formed",
    "label",
    "opaque",
    "prop",
    "record",
    "replace_at",
    "size",
    "string",
    "structural_hashes",
    "transform",
    "tuple_",
    "unit",
    "validate",
    "walk",
    "with_children",
]
