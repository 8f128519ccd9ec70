"""Forest construction from decoded category rows."""

from __future__ import annotations

from collections.abc import Sequence

from ..host import CategoryColumn
from .decode import DecodedRow, decode_rows
from .tokens import TokenSet
from .types import Forest, TreeNode


class _Draft:
    __slots__ = ("key", "value", "level", "tokens", "children")

    def __init__(self, key: str, value: str, level: int) -> None:
        self.key = key
        self.value = value
        self.level = level
        self.tokens = TokenSet()
        self.children: list[_Draft] = []

    def freeze(self) -> TreeNode:
        return TreeNode(
            key=self.key,
            value=self.value,
            level=self.level,
            selection_ids=tuple(self.tokens.items),
            children=tuple(child.freeze() for child in self.children),
        )


def build_forest_from_rows(rows: Sequence[DecodedRow]) -> Forest:
    """Link decoded rows into a forest of unique path nodes.

    Each row's identity token is attached to every node on its path so a
    branch carries the union of its descendants' identities.
    """
    by_key: dict[str, _Draft] = {}
    roots: list[_Draft] = []

    for row in rows:
        parent: _Draft | None = None
        for level, (value, key) in enumerate(zip(row.values, row.keys)):
            draft = by_key.get(key)
            if draft is None:
                draft = _Draft(key, value, level)
                by_key[key] = draft
                if parent is None:
                    roots.append(draft)
                else:
                    parent.children.append(draft)
            if row.identity is not None:
                draft.tokens.add(row.identity)
            parent = draft

    return tuple(root.freeze() for root in roots)


def build_forest(columns: Sequence[CategoryColumn]) -> Forest:
    """Decode ``columns`` and build a fresh forest; empty input gives ``()``."""
    return build_forest_from_rows(decode_rows(columns))
