"""Host-facing payload types and selection collaborators.

The host delivers a ``DataView`` per update and receives selection requests
through a ``SelectionManager``. ``SelectionId`` tokens are opaque to the
engine; only value equality is relied upon.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class CategoryColumn:
    """One hierarchy level: display values plus optional per-row identities."""

    source: str
    values: Sequence[Any] = ()
    identity: Sequence[Any] | None = None

    def value_at(self, row: int) -> Any:
        if 0 <= row < len(self.values):
            return self.values[row]
        return None

    def identity_at(self, row: int) -> Any:
        if self.identity is None or not 0 <= row < len(self.identity):
            return None
        return self.identity[row]

    @property
    def supplies_identity(self) -> bool:
        if self.identity is None:
            return False
        return any(item is not None for item in self.identity)


@dataclass(frozen=True)
class Metadata:
    """Formatting metadata; ``objects`` maps group name to field overrides."""

    objects: dict[str, dict[str, Any]] | None = None


def table_row_count(columns: Sequence[CategoryColumn]) -> int:
    """Rows in a possibly ragged table: the longest column wins."""
    if not columns:
        return 0
    return max(len(column.values) for column in columns)


@dataclass(frozen=True)
class DataView:
    categories: Sequence[CategoryColumn] = ()
    metadata: Metadata | None = None

    @property
    def row_count(self) -> int:
        return table_row_count(self.categories)


@dataclass(frozen=True)
class SelectionId:
    """Value-equal identity token addressing one category/identity pair."""

    column: str
    key: Any

    def __str__(self) -> str:
        return f"{self.column}={self.key}"


class SelectionIdBuilder:
    """Builds ``SelectionId`` tokens for a ``(column, row)`` address."""

    def __init__(self) -> None:
        self._column: CategoryColumn | None = None
        self._row = -1

    def with_category(self, column: CategoryColumn, row: int) -> "SelectionIdBuilder":
        self._column = column
        self._row = row
        return self

    def create_selection_id(self) -> SelectionId | None:
        """Return the token for the bound address, or ``None`` when absent."""
        if self._column is None:
            return None
        raw = self._column.identity_at(self._row)
        if raw is None:
            return None
        return SelectionId(column=self._column.source, key=raw)


class SelectionManager(Protocol):
    """Host selection authority. Calls may return an awaitable; it is never awaited."""

    def select(self, selection_ids: Sequence[object], multi_select: bool = False) -> object: ...

    def clear(self) -> object: ...


@dataclass(frozen=True)
class SelectionPush:
    """One outbound request recorded by ``RecordingSelectionManager``."""

    selection_ids: tuple[object, ...]
    multi_select: bool = False

    @property
    def is_clear(self) -> bool:
        return not self.selection_ids


@dataclass
class RecordingSelectionManager:
    """In-memory host double that applies and records every request."""

    pushes: list[SelectionPush] = field(default_factory=list)
    active: tuple[object, ...] = ()

    def select(self, selection_ids: Sequence[object], multi_select: bool = False) -> None:
        incoming = tuple(selection_ids)
        self.pushes.append(SelectionPush(incoming, multi_select))
        if multi_select:
            merged = list(self.active)
            for token in incoming:
                if token not in merged:
                    merged.append(token)
            self.active = tuple(merged)
        else:
            self.active = incoming

    def clear(self) -> None:
        self.pushes.append(SelectionPush(()))
        self.active = ()


__all__ = [
    "CategoryColumn",
    "DataView",
    "Metadata",
    "RecordingSelectionManager",
    "SelectionId",
    "SelectionIdBuilder",
    "SelectionManager",
    "SelectionPush",
    "table_row_count",
]
