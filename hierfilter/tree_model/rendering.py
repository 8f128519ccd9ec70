"""Text presentation of the filter tree: header rows and node rows."""

from __future__ import annotations

from ..selection import SelectionState, is_selectable
from ..settings import VisualSettings
from ..ui_theme import DEFAULT_THEME, UITheme
from .types import Forest, TreeNode

# Host sizes are pixels; terminal rows approximate them with fixed-width cells.
PX_PER_INDENT_CHAR = 7
PX_PER_LABEL_CHAR = 8


def indent_chars(indent_px: float) -> int:
    return max(0, int(indent_px) // PX_PER_INDENT_CHAR)


def label_chars(wrap_width_px: float) -> int:
    return max(1, int(wrap_width_px) // PX_PER_LABEL_CHAR)


def truncate_label(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    if width <= 1:
        return text[:width]
    return text[: width - 1] + "…"


def highlight_substring(text: str, query: str, theme: UITheme | None = None) -> str:
    """Highlight first case-insensitive substring match in ``text``."""
    query = query.strip()
    if not query:
        return text
    active_theme = theme or DEFAULT_THEME
    idx = text.casefold().find(query.casefold())
    if idx < 0:
        return text
    end = idx + len(query)
    return text[:idx] + active_theme.match_on + text[idx:end] + active_theme.match_off + text[end:]


def format_node_row(
    node: TreeNode,
    *,
    expanded: bool,
    selected: bool,
    selectable: bool,
    indent: int,
    width: int,
    search_query: str = "",
    theme: UITheme | None = None,
) -> str:
    """Render one node row; non-selectable nodes get no checkbox."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    pad = " " * (indent * node.level)
    if node.is_leaf:
        marker = "  "
    else:
        marker = f"{active_theme.tree_marker}{'▾ ' if expanded else '▸ '}{reset}"
    checkbox = ""
    if selectable:
        if selected:
            checkbox = f"{active_theme.checkbox_on}[x]{reset} "
        else:
            checkbox = f"{active_theme.checkbox_off}[ ]{reset} "
    label_color = active_theme.label if selectable else active_theme.label_inert
    label = highlight_substring(truncate_label(node.value, width), search_query, active_theme)
    return f"{pad}{marker}{checkbox}{label_color}{label}{reset}"


def render_header(settings: VisualSettings, search_query: str, theme: UITheme | None = None) -> list[str]:
    """Return the title and search prompt rows enabled by ``settings``."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    rows: list[str] = []
    if settings.title.show:
        rows.append(f"{active_theme.title}{settings.title.text}{reset}")
    if settings.search.show:
        prompt = f"{active_theme.search_prompt}search>{reset} "
        if search_query:
            rows.append(f"{prompt}{active_theme.search_query}{search_query}{reset}")
        else:
            rows.append(f"{prompt}{active_theme.search_placeholder}{settings.search.placeholder}{reset}")
    return rows


def render_tree(
    forest: Forest,
    state: SelectionState,
    settings: VisualSettings,
    theme: UITheme | None = None,
) -> list[str]:
    """Render visible node rows in pre-order.

    Collapsed nodes hide their children unless a search query is active, in
    which case every retained node is shown.
    """
    force_expanded = bool(state.search_query.strip())
    indent = indent_chars(settings.item_text.indent)
    width = label_chars(settings.item_text.wrap_width)
    leaves_only = settings.behavior.leaves_only
    rows: list[str] = []
    stack: list[TreeNode] = list(reversed(forest))
    while stack:
        node = stack.pop()
        expanded = force_expanded or node.key in state.expanded_keys
        rows.append(
            format_node_row(
                node,
                expanded=expanded,
                selected=node.key in state.selected_keys,
                selectable=is_selectable(node, leaves_only),
                indent=indent,
                width=width,
                search_query=state.search_query,
                theme=theme,
            )
        )
        if expanded:
            stack.extend(reversed(node.children))
    return rows
