"""Search projection of a forest onto matching nodes and their ancestors."""

from __future__ import annotations

from dataclasses import replace

from .types import Forest, TreeNode


def normalize_query(query: str | None) -> str:
    return (query or "").strip().casefold()


def node_matches(node: TreeNode, folded_query: str) -> bool:
    return folded_query in node.value.casefold()


def filter_forest(forest: Forest, query: str | None) -> Forest:
    """Return ``forest`` pruned to case-insensitive substring matches.

    Retained nodes are shallow copies carrying only retained children; the
    input is never mutated. A blank query returns ``forest`` itself.
    """
    folded = normalize_query(query)
    if not folded:
        return forest

    def dfs(node: TreeNode) -> TreeNode | None:
        """Copy ``node`` when it or any descendant matches."""
        children = tuple(kept for kept in (dfs(child) for child in node.children) if kept is not None)
        if children or node_matches(node, folded):
            return replace(node, children=children)
        return None

    return tuple(kept for kept in (dfs(root) for root in forest) if kept is not None)
