"""Traversal helpers over immutable forests."""

from __future__ import annotations

import hashlib
from collections.abc import Iterator, Sequence

from .decode import level_segment
from .types import Forest, TreeNode


def iter_preorder(forest: Forest) -> Iterator[TreeNode]:
    """Yield nodes depth-first, parents before children, in source order."""
    stack: list[TreeNode] = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def collect_keys(forest: Forest) -> set[str]:
    return {node.key for node in iter_preorder(forest)}


def find_node(forest: Forest, key: str) -> TreeNode | None:
    for node in iter_preorder(forest):
        if node.key == key:
            return node
    return None


def find_node_by_labels(forest: Forest, labels: Sequence[str]) -> TreeNode | None:
    """Resolve a root-to-node chain of labels to the matching node."""
    siblings = forest
    found: TreeNode | None = None
    for label in labels:
        found = next((node for node in siblings if node.value == label), None)
        if found is None:
            return None
        siblings = found.children
    return found


def data_signature(forest: Forest) -> str:
    """Digest the ordered root ``(level, value)`` pairs of ``forest``."""
    digest = hashlib.sha1(usedforsecurity=False)
    for root in forest:
        digest.update(level_segment(root.level, root.value).encode("utf-8", "surrogatepass"))
        digest.update(b"\x00")
    return digest.hexdigest()
