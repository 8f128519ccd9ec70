"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the text presenter: title, search prompt,
expand markers, checkboxes, and node labels.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    title: str
    search_prompt: str
    search_query: str
    search_placeholder: str
    tree_marker: str
    checkbox_on: str
    checkbox_off: str
    label: str
    label_inert: str
    match_on: str
    match_off: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    search_prompt="\033[38;5;44m",
    search_query="\033[1;38;5;81m",
    search_placeholder="\033[2;38;5;250m",
    tree_marker="\033[38;5;44m",
    checkbox_on="\033[1;38;5;42m",
    checkbox_off="\033[38;5;250m",
    label="\033[38;5;252m",
    label_inert="\033[2;38;5;250m",
    match_on="\033[7;1m",
    match_off="\033[27;22m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    search_prompt="\033[38;5;39m",
    search_query="\033[1;38;5;45m",
    search_placeholder="\033[2;38;5;110m",
    tree_marker="\033[38;5;39m",
    checkbox_on="\033[1;38;5;84m",
    checkbox_off="\033[38;5;110m",
    label="\033[38;5;153m",
    label_inert="\033[2;38;5;110m",
    match_on="\033[7;1m",
    match_off="\033[27;22m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    title="",
    search_prompt="",
    search_query="",
    search_placeholder="",
    tree_marker="",
    checkbox_on="",
    checkbox_off="",
    label="",
    label_inert="",
    match_on="",
    match_off="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
