"""export subpackage: one-way projection of Repr trees to JSON values.

Example::

    from repr_tree.export import JsonConfig, CtorEncoding, to_json

    to_json(tree, JsonConfig(ctor_encoding=CtorEncoding.COMPACT))
"""

from __future__ import annotations

from repr_tree.export.config import CtorEncoding, DuplicateKeyPolicy, JsonConfig
from repr_tree.export.encoder import JsonValue, ReprEncoder, to_json, to_json_string

__all__ = [
    "CtorEncoding",
    "DuplicateKeyPolicy",
    "JsonConfig",
    "JsonValue",
    "ReprEncoder",
    "to_json",
    "to_json_string",
]
