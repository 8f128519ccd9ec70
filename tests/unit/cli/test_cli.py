"""CLI argument handling and rendering tests.

Verifies how ``hierfilter.cli.main`` loads CSV input, applies search and
selection flags, and prints the tree with the pushed selection.
"""

from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from hierfilter import cli


def write_csv(root: Path) -> Path:
    path = root / "data.csv"
    path.write_text("group,item\nA,x\nA,y\nB,z\n", encoding="utf-8")
    return path


class CliRenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        patcher = mock.patch("hierfilter.runtime.config.CONFIG_PATH", self.root / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def run_cli(self, *argv: str) -> str:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            cli.main(list(argv))
        return stdout.getvalue()

    def test_renders_full_tree_without_selection(self) -> None:
        output = self.run_cli(str(write_csv(self.root)), "--no-color")
        self.assertEqual(
            output.splitlines(),
            [
                "Filter",
                "search> Search...",
                "▾ [ ] A",
                "    [ ] x",
                "    [ ] y",
                "▾ [ ] B",
                "    [ ] z",
                "selection: (none)",
            ],
        )

    def test_query_and_select_flags_apply_as_user_events(self) -> None:
        output = self.run_cli(str(write_csv(self.root)), "--no-color", "--query", "y", "--select", "A")
        self.assertIn("search> y", output)
        self.assertFalse(any("B" in line for line in output.splitlines()[2:-1]))
        self.assertTrue(output.endswith("selection: item=x, item=y\n"))

    def test_single_select_leaves_only_auto_picks_on_query(self) -> None:
        output = self.run_cli(
            str(write_csv(self.root)), "--no-color", "--single-select", "--leaves-only", "--query", "z"
        )
        self.assertTrue(output.endswith("selection: item=z\n"))

    def test_identity_columns_flag_binds_selection_to_that_level(self) -> None:
        output = self.run_cli(
            str(write_csv(self.root)), "--no-color", "--identity-columns", "group", "--select", "A/x"
        )
        self.assertTrue(output.endswith("selection: group=A\n"))

    def test_missing_file_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(self.root / "missing.csv")])
        self.assertIn("File not found", str(ctx.exception))

    def test_unknown_column_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(write_csv(self.root)), "--columns", "nope"])
        self.assertIn("unknown column", str(ctx.exception))

    def test_save_theme_persists_preference(self) -> None:
        from hierfilter.runtime import config

        self.run_cli(str(write_csv(self.root)), "--theme", "ocean", "--save-theme")
        self.assertEqual(config.load_theme_name(), "ocean")

    def test_interactive_mode_reads_commands_from_stdin(self) -> None:
        stdin = io.StringIO("toggle B/z\nquit\n")
        with mock.patch("sys.stdin", stdin):
            output = self.run_cli(str(write_csv(self.root)), "--no-color", "--interactive")
        self.assertTrue(output.endswith("selection: item=z\n"))


if __name__ == "__main__":
    unittest.main()
