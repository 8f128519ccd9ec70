"""Tree-model decoding, construction, filtering, traversal, and row formatting.

Defines ``TreeNode`` and the pure functions the controller composes on every
host update and user event.
"""

from __future__ import annotations

from .build import build_forest, build_forest_from_rows
from .decode import (
    PATH_KEY_SEPARATOR,
    DecodedRow,
    canonical_identity_level,
    decode_row,
    decode_rows,
    escape_label,
    path_key,
    stringify_value,
)
from .filtering import filter_forest, normalize_query
from .navigation import collect_keys, data_signature, find_node, find_node_by_labels, iter_preorder
from .types import Forest, TreeNode

__all__ = [
    "TreeNode",
    "Forest",
    "DecodedRow",
    "PATH_KEY_SEPARATOR",
    "build_forest",
    "build_forest_from_rows",
    "canonical_identity_level",
    "escape_label",
    "decode_row",
    "decode_rows",
    "path_key",
    "stringify_value",
    "filter_forest",
    "normalize_query",
    "collect_keys",
    "data_signature",
    "find_node",
    "find_node_by_labels",
    "iter_preorder",
]
