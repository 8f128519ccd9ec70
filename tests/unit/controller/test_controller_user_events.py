"""Tests for user-originated events: toggle, search, clear, and expansion.

User events replace the host selection with the locally collected set and
are the only events allowed to auto-pick in single-select mode.
"""

from __future__ import annotations

import unittest

from hierfilter.controller import FilterTreeController
from hierfilter.host import CategoryColumn, DataView, RecordingSelectionManager, SelectionId, SelectionPush
from hierfilter.selection import is_selectable
from hierfilter.settings import VisualSettings
from hierfilter.tree_model import iter_preorder, path_key
from hierfilter.ui_theme import PLAIN_THEME


def sample_view() -> DataView:
    return DataView(
        categories=[
            CategoryColumn("group", ["A", "A", "B"], identity=["A", "A", "B"]),
            CategoryColumn("item", ["x", "y", "z"], identity=["x", "y", "z"]),
        ]
    )


def loaded_controller(**behavior) -> tuple[FilterTreeController, RecordingSelectionManager]:
    manager = RecordingSelectionManager()
    settings = VisualSettings.parse({"behavior": behavior}) if behavior else None
    controller = FilterTreeController(manager, settings=settings, theme=PLAIN_THEME)
    controller.update(sample_view())
    return controller, manager


class _FailingSelectionManager:
    def __init__(self) -> None:
        self.calls = 0

    def select(self, selection_ids, multi_select=False):
        self.calls += 1
        raise RuntimeError("host rejected selection")

    def clear(self):
        self.calls += 1
        raise RuntimeError("host rejected clear")


class ToggleEventTests(unittest.TestCase):
    def test_multi_toggle_pushes_replacement_selection(self) -> None:
        controller, manager = loaded_controller()
        controller.toggle_node(path_key(["A", "x"]))
        controller.toggle_node(path_key(["B"]))

        self.assertEqual(
            manager.pushes,
            [
                SelectionPush((SelectionId("item", "x"),), False),
                SelectionPush((SelectionId("item", "x"), SelectionId("item", "z")), False),
            ],
        )
        self.assertEqual(manager.active, (SelectionId("item", "x"), SelectionId("item", "z")))

    def test_multi_toggle_twice_restores_state_and_clears_host(self) -> None:
        controller, manager = loaded_controller()
        controller.toggle_node(path_key(["A", "y"]))
        controller.toggle_node(path_key(["A", "y"]))

        self.assertEqual(controller.state.selected_keys, set())
        self.assertTrue(manager.pushes[-1].is_clear)
        self.assertEqual(manager.active, ())

    def test_branch_toggle_selects_all_descendant_identities(self) -> None:
        controller, manager = loaded_controller()
        controller.toggle_node(path_key(["A"]))
        self.assertEqual(manager.active, (SelectionId("item", "x"), SelectionId("item", "y")))

    def test_leaves_only_branch_toggle_is_a_silent_no_op(self) -> None:
        controller, manager = loaded_controller(leavesOnly=True)
        self.assertFalse(controller.toggle_node(path_key(["A"])))
        self.assertEqual(controller.state.selected_keys, set())
        self.assertEqual(manager.pushes, [])

    def test_single_select_rejected_toggle_still_auto_picks_when_empty(self) -> None:
        controller, manager = loaded_controller(singleSelect=True, leavesOnly=True)
        self.assertEqual(controller.state.selected_keys, set())

        self.assertFalse(controller.toggle_node(path_key(["A"])))
        self.assertEqual(controller.state.selected_keys, {path_key(["A", "x"])})
        self.assertEqual(manager.pushes, [SelectionPush((SelectionId("item", "x"),), False)])

        self.assertFalse(controller.toggle_node(path_key(["B"])))
        self.assertEqual(len(manager.pushes), 1)

    def test_toggle_of_unknown_or_hidden_key_is_ignored(self) -> None:
        controller, manager = loaded_controller()
        controller.set_search_query("y")
        pushes = len(manager.pushes)
        self.assertFalse(controller.toggle_node(path_key(["B", "z"])))
        self.assertFalse(controller.toggle_node("no-such-key"))
        self.assertEqual(len(manager.pushes), pushes)

    def test_single_select_switches_and_reclick_keeps_selection(self) -> None:
        controller, manager = loaded_controller(singleSelect=True)
        controller.toggle_node(path_key(["A", "x"]))
        controller.toggle_node(path_key(["A", "y"]))
        self.assertEqual(controller.state.selected_keys, {path_key(["A", "y"])})

        self.assertTrue(controller.toggle_node(path_key(["A", "y"])))
        self.assertEqual(controller.state.selected_keys, {path_key(["A", "y"])})
        self.assertEqual(manager.active, (SelectionId("item", "y"),))

    def test_single_select_invariant_after_user_events(self) -> None:
        controller, _manager = loaded_controller(singleSelect=True, leavesOnly=True)
        for key in [path_key(["A", "x"]), path_key(["B", "z"]), path_key(["A"]), path_key(["B", "z"])]:
            controller.toggle_node(key)
            self.assertEqual(len(controller.state.selected_keys), 1)
        controller.clear()
        self.assertEqual(len(controller.state.selected_keys), 1)

    def test_host_push_failure_is_not_raised(self) -> None:
        manager = _FailingSelectionManager()
        controller = FilterTreeController(manager, theme=PLAIN_THEME)
        controller.update(sample_view())

        with self.assertLogs("hierfilter.controller", level="DEBUG") as logs:
            self.assertTrue(controller.toggle_node(path_key(["A", "x"])))
        self.assertEqual(manager.calls, 1)
        self.assertEqual(controller.state.selected_keys, {path_key(["A", "x"])})
        self.assertTrue(any("push failed" in line for line in logs.output))


class SearchEventTests(unittest.TestCase):
    def test_search_filters_and_pushes_visible_selection(self) -> None:
        controller, manager = loaded_controller()
        controller.toggle_node(path_key(["A"]))
        controller.set_search_query("y")

        self.assertEqual([root.value for root in controller.filtered_nodes], ["A"])
        self.assertEqual(controller.rendered_lines[1], "search> y")
        self.assertEqual(manager.active, (SelectionId("item", "x"), SelectionId("item", "y")))

    def test_search_prunes_selection_hidden_by_query(self) -> None:
        controller, manager = loaded_controller()
        controller.toggle_node(path_key(["B", "z"]))
        controller.set_search_query("x")

        self.assertEqual(controller.state.selected_keys, set())
        self.assertTrue(manager.pushes[-1].is_clear)

    def test_single_select_search_auto_picks_first_visible_selectable(self) -> None:
        controller, manager = loaded_controller(singleSelect=True, leavesOnly=True)
        controller.set_search_query("z")

        self.assertEqual(controller.state.selected_keys, {path_key(["B", "z"])})
        self.assertEqual(manager.active, (SelectionId("item", "z"),))

    def test_search_query_is_trimmed(self) -> None:
        controller, _manager = loaded_controller()
        controller.set_search_query("  y ")
        self.assertEqual(controller.state.search_query, "y")


class ClearAndExpandEventTests(unittest.TestCase):
    def test_clear_resets_everything_and_clears_host_in_multi_mode(self) -> None:
        controller, manager = loaded_controller()
        controller.toggle_node(path_key(["A", "x"]))
        controller.set_search_query("x")
        controller.toggle_expanded(path_key(["A"]))

        controller.clear()

        self.assertEqual(controller.state.search_query, "")
        self.assertEqual(controller.state.selected_keys, set())
        self.assertEqual(controller.state.expanded_keys, {path_key(["A"]), path_key(["B"])})
        self.assertIs(controller.filtered_nodes, controller.all_nodes)
        self.assertTrue(manager.pushes[-1].is_clear)

    def test_clear_in_single_mode_re_picks_first_selectable(self) -> None:
        controller, manager = loaded_controller(singleSelect=True)
        controller.toggle_node(path_key(["B", "z"]))
        controller.clear()

        self.assertEqual(controller.state.selected_keys, {path_key(["A"])})
        self.assertEqual(manager.active, (SelectionId("item", "x"), SelectionId("item", "y")))

    def test_first_auto_pick_matches_first_selectable_in_preorder(self) -> None:
        controller, _manager = loaded_controller(singleSelect=True, leavesOnly=True)
        controller.clear()
        first = next(node for node in iter_preorder(controller.filtered_nodes) if is_selectable(node, True))
        self.assertEqual(controller.state.selected_keys, {first.key})

    def test_toggle_expanded_is_view_only(self) -> None:
        controller, manager = loaded_controller()
        controller.toggle_expanded(path_key(["A"]))

        self.assertEqual(controller.state.expanded_keys, {path_key(["B"])})
        self.assertEqual(controller.rendered_lines[2:], ["▸ [ ] A", "▾ [ ] B", "    [ ] z"])
        controller.toggle_expanded("missing")
        self.assertEqual(controller.state.expanded_keys, {path_key(["B"])})
        self.assertEqual(manager.pushes, [])


if __name__ == "__main__":
    unittest.main()
