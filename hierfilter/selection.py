"""Selection state and the operations allowed to mutate it.

``SelectionState`` outlives tree rebuilds; node keys are the only thing it
stores, so every rebuild must prune keys that no longer exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .tree_model.navigation import collect_keys, iter_preorder
from .tree_model.tokens import TokenSet
from .tree_model.types import Forest, TreeNode


@dataclass
class SelectionState:
    selected_keys: set[str] = field(default_factory=set)
    expanded_keys: set[str] = field(default_factory=set)
    search_query: str = ""
    last_data_signature: str | None = None
    # Last node the user toggled; pruned like the key sets.
    current_key: str | None = None


def is_selectable(node: TreeNode, leaves_only: bool) -> bool:
    """Return whether ``node`` may enter the selection under the leaves-only policy."""
    if not node.selection_ids:
        return False
    return node.is_leaf or not leaves_only


def first_selectable(forest: Forest, leaves_only: bool) -> TreeNode | None:
    for node in iter_preorder(forest):
        if is_selectable(node, leaves_only):
            return node
    return None


def toggle_selection(
    state: SelectionState,
    node: TreeNode,
    *,
    single_select: bool,
    leaves_only: bool,
) -> bool:
    """Toggle ``node`` in the selection; return whether membership changed.

    Single mode never deselects the active node and replaces any other
    selection; multi mode flips only ``node``.
    """
    if not is_selectable(node, leaves_only):
        return False
    state.current_key = node.key
    if single_select:
        if node.key in state.selected_keys and len(state.selected_keys) == 1:
            return False
        state.selected_keys.clear()
        state.selected_keys.add(node.key)
        return True
    if node.key in state.selected_keys:
        state.selected_keys.discard(node.key)
    else:
        state.selected_keys.add(node.key)
    return True


def auto_pick(
    state: SelectionState,
    forest: Forest,
    *,
    single_select: bool,
    leaves_only: bool,
    allowed: bool,
) -> TreeNode | None:
    """Select the first selectable node when single mode has nothing selected."""
    if not (allowed and single_select) or state.selected_keys:
        return None
    node = first_selectable(forest, leaves_only)
    if node is not None:
        state.selected_keys.add(node.key)
    return node


def collect_selected_ids(forest: Forest, selected_keys: set[str]) -> tuple[object, ...]:
    """Union the identity tokens of selected nodes visible in ``forest``."""
    if not selected_keys:
        return ()
    collected = TokenSet()
    for node in iter_preorder(forest):
        if node.key in selected_keys:
            collected.update(node.selection_ids)
    return tuple(collected.items)


def clear_state(state: SelectionState) -> None:
    """Reset query, expansion, and selection for an explicit user clear."""
    state.search_query = ""
    state.expanded_keys.clear()
    state.selected_keys.clear()
    state.current_key = None


def prune_state(state: SelectionState, forest: Forest) -> tuple[int, int]:
    """Drop keys absent from ``forest``; return ``(expanded, selected)`` drop counts."""
    present = collect_keys(forest)
    stale_expanded = state.expanded_keys - present
    stale_selected = state.selected_keys - present
    state.expanded_keys -= stale_expanded
    state.selected_keys -= stale_selected
    if state.current_key is not None and state.current_key not in present:
        state.current_key = None
    return len(stale_expanded), len(stale_selected)
