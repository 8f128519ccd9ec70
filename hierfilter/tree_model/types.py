"""Tree node datatypes shared by build, filter, and render modules."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TreeNode:
    """One unique hierarchy path prefix.

    ``key`` is the only identity used for expansion/selection state;
    ``selection_ids`` holds host identity tokens in first-seen order.
    """

    key: str
    value: str
    level: int
    selection_ids: tuple[object, ...] = ()
    children: tuple["TreeNode", ...] = field(default_factory=tuple)

    @property
    def is_leaf(self) -> bool:
        return not self.children


Forest = tuple[TreeNode, ...]
