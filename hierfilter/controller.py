"""Reconciliation between host updates, local UI state, and host selection.

Host updates rebuild and re-render but never push selection back. User
events (toggle, search, clear) run the same refresh and then replace the
host's selection with the locally collected identity set.
"""

from __future__ import annotations

import logging

from .host import DataView, SelectionManager
from .selection import (
    SelectionState,
    auto_pick,
    clear_state,
    collect_selected_ids,
    prune_state,
    toggle_selection,
)
from .settings import VisualSettings
from .tree_model import Forest, build_forest, collect_keys, data_signature, filter_forest, find_node
from .tree_model.rendering import render_header, render_tree
from .ui_theme import UITheme

logger = logging.getLogger(__name__)


class FilterTreeController:
    """Owns the forest, settings, and selection state for one visual instance."""

    def __init__(
        self,
        selection_manager: SelectionManager,
        *,
        settings: VisualSettings | None = None,
        state: SelectionState | None = None,
        theme: UITheme | None = None,
    ) -> None:
        self.selection_manager = selection_manager
        self.settings = settings if settings is not None else VisualSettings()
        self.state = state if state is not None else SelectionState()
        self.theme = theme
        self.all_nodes: Forest = ()
        self.filtered_nodes: Forest = ()
        self.outbound_ids: tuple[object, ...] = ()
        self.rendered_lines: list[str] = []

    @property
    def single_select(self) -> bool:
        return self.settings.behavior.single_select

    @property
    def leaves_only(self) -> bool:
        return self.settings.behavior.leaves_only

    # Host-originated ---------------------------------------------------

    def update(self, data_view: DataView | None) -> None:
        """Rebuild from a host payload without pushing selection back."""
        if data_view is None:
            logger.debug("update without data view ignored")
            return

        metadata = data_view.metadata
        if metadata is not None and metadata.objects is not None:
            self.settings = VisualSettings.parse(metadata.objects, self.settings)

        self.all_nodes = build_forest(data_view.categories)
        signature = data_signature(self.all_nodes)
        signature_changed = signature != self.state.last_data_signature
        self.state.last_data_signature = signature

        self.filtered_nodes = filter_forest(self.all_nodes, self.state.search_query)
        if signature_changed and self.state.search_query and not self.filtered_nodes:
            logger.debug(
                "data context changed; dropping query %r with no matches",
                self.state.search_query,
            )
            self.state.search_query = ""
            self.filtered_nodes = self.all_nodes
            self.state.expanded_keys.clear()

        self._prune_and_expand()
        self.render()
        auto_pick(
            self.state,
            self.filtered_nodes,
            single_select=self.single_select,
            leaves_only=self.leaves_only,
            allowed=False,
        )
        self.apply_selection(authoritative=False)

    # User-originated ---------------------------------------------------

    def set_search_query(self, query: str) -> None:
        self.state.search_query = query.strip()
        self.filtered_nodes = filter_forest(self.all_nodes, self.state.search_query)
        self._prune_and_expand()
        self._commit_user_event()

    def toggle_node(self, key: str) -> bool:
        """Toggle a visible node; returns ``False`` when nothing could be toggled."""
        node = find_node(self.filtered_nodes, key)
        if node is None:
            return False
        changed = toggle_selection(
            self.state,
            node,
            single_select=self.single_select,
            leaves_only=self.leaves_only,
        )
        if not changed and node.key not in self.state.selected_keys:
            if self.single_select and not self.state.selected_keys:
                # Single mode must not stay empty after a user event.
                self._commit_user_event()
            return False
        self._commit_user_event()
        return True

    def toggle_expanded(self, key: str) -> None:
        """Flip expansion of a visible node; view-only, never pushes."""
        if key not in collect_keys(self.filtered_nodes):
            return
        if key in self.state.expanded_keys:
            self.state.expanded_keys.discard(key)
        else:
            self.state.expanded_keys.add(key)
        self.render()

    def clear(self) -> None:
        """Reset search, expansion, and selection, then re-pick in single mode."""
        clear_state(self.state)
        self.filtered_nodes = self.all_nodes
        self._prune_and_expand()
        self._commit_user_event()

    # Pipeline ----------------------------------------------------------

    def _prune_and_expand(self) -> None:
        dropped_expanded, dropped_selected = prune_state(self.state, self.filtered_nodes)
        if dropped_expanded or dropped_selected:
            logger.debug(
                "pruned %d expanded and %d selected stale keys",
                dropped_expanded,
                dropped_selected,
            )
        if not any(root.key in self.state.expanded_keys for root in self.filtered_nodes):
            self.state.expanded_keys.update(root.key for root in self.filtered_nodes)

    def _commit_user_event(self) -> None:
        auto_pick(
            self.state,
            self.filtered_nodes,
            single_select=self.single_select,
            leaves_only=self.leaves_only,
            allowed=True,
        )
        self.render()
        self.apply_selection(authoritative=True)

    def apply_selection(self, authoritative: bool) -> tuple[object, ...]:
        """Collect outbound identities; push them only when ``authoritative``."""
        self.outbound_ids = collect_selected_ids(self.filtered_nodes, self.state.selected_keys)
        if authoritative:
            self._push(self.outbound_ids)
        return self.outbound_ids

    def _push(self, selection_ids: tuple[object, ...]) -> None:
        logger.debug("pushing %d selection ids to host", len(selection_ids))
        try:
            if selection_ids:
                self.selection_manager.select(list(selection_ids), multi_select=False)
            else:
                self.selection_manager.clear()
        except Exception:
            logger.debug("host selection push failed", exc_info=True)

    def render(self) -> list[str]:
        lines = render_header(self.settings, self.state.search_query, self.theme)
        lines.extend(render_tree(self.filtered_nodes, self.state, self.settings, self.theme))
        self.rendered_lines = lines
        return lines
