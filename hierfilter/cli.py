"""Command-line front door for hierfilter.

Loads a CSV table as a host data view, applies search/selection as user
events, and prints the rendered filter tree with the pushed selection.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .controller import FilterTreeController
from .host import RecordingSelectionManager
from .runtime import run_session
from .runtime.config import load_initial_settings, load_theme_name, save_theme_name
from .runtime.session import CommandSession
from .runtime.source import load_csv_view, parse_column_list
from .settings import VisualSettings
from .ui_theme import available_theme_names, resolve_theme


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a searchable hierarchical filter tree from a CSV table."
    )
    parser.add_argument("path", help="CSV file with a header row.")
    parser.add_argument(
        "--columns",
        default=None,
        help="Comma-separated hierarchy columns, root first (default: all columns).",
    )
    parser.add_argument(
        "--identity-columns",
        default=None,
        help="Comma-separated columns that supply selection identities (default: hierarchy columns).",
    )
    parser.add_argument("--query", default="", help="Search text applied before printing.")
    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="PATH",
        help="Toggle the node at PATH (labels joined by '/'). Repeatable.",
    )
    parser.add_argument("--single-select", action="store_true", help="Allow exactly one selected node.")
    parser.add_argument("--leaves-only", action="store_true", help="Only leaf nodes are selectable.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--save-theme", action="store_true", help="Persist --theme as the default theme.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--interactive", action="store_true", help="Read commands from stdin.")
    parser.add_argument("--verbose", action="store_true", help="Log reconciliation decisions to stderr.")
    return parser


def initial_settings(single_select: bool, leaves_only: bool) -> VisualSettings:
    """Persisted overrides plus command-line behavior flags."""
    settings = load_initial_settings()
    behavior: dict[str, object] = {}
    if single_select:
        behavior["singleSelect"] = True
    if leaves_only:
        behavior["leavesOnly"] = True
    if behavior:
        settings = VisualSettings.parse({"behavior": behavior}, settings)
    return settings


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one render or an interactive session."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"File not found: {path}")
    columns = parse_column_list(args.columns)
    identity_columns = parse_column_list(args.identity_columns)

    def load_view():
        try:
            return load_csv_view(path, columns, identity_columns)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Cannot load {path}: {exc}") from exc

    if args.theme is not None and args.save_theme:
        save_theme_name(args.theme)
    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)

    controller = FilterTreeController(
        RecordingSelectionManager(),
        settings=initial_settings(args.single_select, args.leaves_only),
        theme=theme,
    )
    controller.update(load_view())

    if args.interactive:
        run_session(controller, sys.stdin, sys.stdout, reload=load_view)
        return

    session = CommandSession(controller=controller, out=sys.stdout)
    if args.query:
        controller.set_search_query(args.query)
    for raw_path in args.select:
        node = session.resolve(raw_path)
        if node is not None:
            controller.toggle_node(node.key)
    session.show()


if __name__ == "__main__":
    main()
