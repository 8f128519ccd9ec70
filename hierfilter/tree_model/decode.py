"""Row decoding: level labels, path keys, and the canonical identity column."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..host import CategoryColumn, SelectionIdBuilder, table_row_count

PATH_KEY_SEPARATOR = "\x1f"


def stringify_value(value: object) -> str:
    """Return a display label for a cell value; never raises."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception:
        return ""


def escape_label(value: str) -> str:
    """Escape backslashes and the separator so distinct labels never share a key."""
    return value.replace("\\", "\\\\").replace(PATH_KEY_SEPARATOR, "\\x1f")


def level_segment(level: int, value: str) -> str:
    return f"{level}:{escape_label(value)}"


def path_key(values: Sequence[str]) -> str:
    """Build the path key for a root-to-node chain of decoded labels."""
    return PATH_KEY_SEPARATOR.join(level_segment(level, value) for level, value in enumerate(values))


def canonical_identity_level(columns: Sequence[CategoryColumn]) -> int | None:
    """Return the deepest level whose column supplies any identity token."""
    for level in range(len(columns) - 1, -1, -1):
        if columns[level].supplies_identity:
            return level
    return None


@dataclass(frozen=True)
class DecodedRow:
    """Decoded labels and incremental path keys for one source row."""

    index: int
    values: tuple[str, ...]
    keys: tuple[str, ...]
    identity: object | None = None


def decode_row(
    columns: Sequence[CategoryColumn],
    row: int,
    identity_level: int | None,
) -> DecodedRow:
    values: list[str] = []
    keys: list[str] = []
    prefix = ""
    for level, column in enumerate(columns):
        label = stringify_value(column.value_at(row))
        segment = level_segment(level, label)
        prefix = segment if level == 0 else f"{prefix}{PATH_KEY_SEPARATOR}{segment}"
        values.append(label)
        keys.append(prefix)

    identity = None
    if identity_level is not None:
        identity = SelectionIdBuilder().with_category(columns[identity_level], row).create_selection_id()
    return DecodedRow(index=row, values=tuple(values), keys=tuple(keys), identity=identity)


def decode_rows(columns: Sequence[CategoryColumn]) -> list[DecodedRow]:
    """Decode every row of a rectangular (or ragged) category table."""
    row_count = table_row_count(columns)
    if row_count == 0:
        return []
    identity_level = canonical_identity_level(columns)
    return [decode_row(columns, row, identity_level) for row in range(row_count)]
