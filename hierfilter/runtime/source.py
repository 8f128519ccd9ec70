"""CSV loading into host-shaped ``DataView`` payloads."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from pathlib import Path

from ..host import CategoryColumn, DataView, Metadata


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_text(encoding="utf-8", errors="replace")


def parse_column_list(raw: str | None) -> list[str] | None:
    """Split a comma-separated column list; ``None`` or blank means unset."""
    if raw is None:
        return None
    names = [name.strip() for name in raw.split(",") if name.strip()]
    return names or None


def table_to_data_view(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    columns: Sequence[str] | None = None,
    identity_columns: Sequence[str] | None = None,
    metadata_objects: dict[str, dict[str, object]] | None = None,
) -> DataView:
    """Project a header/rows table onto hierarchy columns.

    Identity tokens are the cell values themselves, so rows sharing a value
    in an identity column share its identity. Blank cells carry no identity.
    """
    hierarchy = list(columns) if columns is not None else list(header)
    identity_names = set(identity_columns) if identity_columns is not None else set(hierarchy)
    missing = [name for name in hierarchy if name not in header]
    if missing:
        raise ValueError(f"unknown column(s): {', '.join(missing)}")

    categories: list[CategoryColumn] = []
    for name in hierarchy:
        idx = list(header).index(name)
        values = [row[idx] if idx < len(row) else None for row in rows]
        identity = None
        if name in identity_names:
            identity = [value if value not in (None, "") else None for value in values]
        categories.append(CategoryColumn(source=name, values=values, identity=identity))

    metadata = Metadata(objects=metadata_objects) if metadata_objects is not None else None
    return DataView(categories=categories, metadata=metadata)


def load_csv_view(
    path: Path,
    columns: Sequence[str] | None = None,
    identity_columns: Sequence[str] | None = None,
) -> DataView:
    """Read ``path`` as CSV with a header row and build a ``DataView``."""
    reader = csv.reader(io.StringIO(read_text(path)))
    table = [row for row in reader if row]
    if not table:
        return DataView()
    header, *rows = table
    return table_to_data_view(header, rows, columns, identity_columns)
