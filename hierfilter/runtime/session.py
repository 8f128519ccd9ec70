"""Line-oriented command session driving a ``FilterTreeController``.

Each command is one user event (``search``, ``toggle``, ``clear``,
``expand``) or a host event (``reload`` re-delivers the data view).
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TextIO

from ..controller import FilterTreeController
from ..host import DataView
from ..tree_model import TreeNode, find_node_by_labels

PATH_SEPARATOR = "/"

HELP_TEXT = """commands:
  search TEXT   filter the tree (no TEXT clears the query)
  toggle PATH   select/deselect the node at PATH (labels joined by '/')
  expand PATH   expand or collapse the node at PATH
  clear         reset search, expansion, and selection
  reload        re-deliver the data view as a host update
  show          print the tree and the pushed selection
  quit          leave the session
"""


def split_node_path(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(PATH_SEPARATOR)]


def format_selection(selection_ids: Iterable[object]) -> str:
    labels = [str(token) for token in selection_ids]
    return "selection: " + (", ".join(labels) if labels else "(none)")


@dataclass
class CommandSession:
    controller: FilterTreeController
    out: TextIO
    reload: Callable[[], DataView | None] | None = None

    def resolve(self, raw_path: str) -> TreeNode | None:
        node = find_node_by_labels(self.controller.filtered_nodes, split_node_path(raw_path))
        if node is None:
            self.out.write(f"no visible node at {raw_path!r}\n")
        return node

    def show(self) -> None:
        for line in self.controller.rendered_lines:
            self.out.write(line + "\n")
        self.out.write(format_selection(self.controller.outbound_ids) + "\n")

    def execute(self, line: str) -> bool:
        """Run one command line; return ``False`` when the session should end."""
        try:
            parts = shlex.split(line)
        except ValueError:
            parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), " ".join(parts[1:])

        if command in {"quit", "exit", "q"}:
            return False
        if command == "search":
            self.controller.set_search_query(args)
        elif command == "toggle":
            node = self.resolve(args)
            if node is None:
                return True
            if not self.controller.toggle_node(node.key):
                self.out.write(f"{args!r} is not selectable\n")
                return True
        elif command == "expand":
            node = self.resolve(args)
            if node is None:
                return True
            self.controller.toggle_expanded(node.key)
        elif command == "clear":
            self.controller.clear()
        elif command == "reload":
            if self.reload is None:
                self.out.write("nothing to reload\n")
                return True
            self.controller.update(self.reload())
        elif command == "show":
            pass
        else:
            self.out.write(HELP_TEXT)
            return True
        self.show()
        return True


def run_session(
    controller: FilterTreeController,
    lines: Iterable[str],
    out: TextIO,
    reload: Callable[[], DataView | None] | None = None,
) -> None:
    """Show the initial tree, then execute commands until input ends or ``quit``."""
    session = CommandSession(controller=controller, out=out, reload=reload)
    session.show()
    for line in lines:
        if not session.execute(line):
            break
