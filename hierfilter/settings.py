"""Formatting settings and the metadata merge used on host updates.

Host metadata arrives as ``{"group": {"fieldName": value}}`` with camelCase
field names. ``VisualSettings.parse`` merges only what is present over the
current values, so metadata-less updates never revert to defaults.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any


@dataclass
class TitleSettings:
    show: bool = True
    text: str = "Filter"
    font_size: float = 14


@dataclass
class ItemTextSettings:
    font_size: float = 16
    wrap_width: float = 1260
    # Pixels of indentation per tree level.
    indent: float = 14


@dataclass
class SearchSettings:
    show: bool = True
    placeholder: str = "Search..."


@dataclass
class BehaviorSettings:
    leaves_only: bool = False
    single_select: bool = False


def _host_name(attr: str) -> str:
    """Return the camelCase host field name for a snake_case attribute."""
    head, *rest = attr.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _coerce_number(value: Any, fallback: float) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return fallback
    return number if math.isfinite(number) else fallback


def _coerce_bool(value: Any, fallback: bool) -> bool:
    return value if isinstance(value, bool) else fallback


def _coerce_text(value: Any, fallback: str) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return fallback
    return str(value)


def _merge_group(group: Any, overrides: Mapping[str, Any]) -> None:
    """Apply present ``overrides`` onto ``group`` in place, coercing per field type."""
    for item in fields(group):
        host_key = _host_name(item.name)
        if host_key not in overrides:
            continue
        current = getattr(group, item.name)
        raw = overrides[host_key]
        if isinstance(current, bool):
            merged: Any = _coerce_bool(raw, current)
        elif isinstance(current, (int, float)):
            merged = _coerce_number(raw, current)
        else:
            merged = _coerce_text(raw, current)
        setattr(group, item.name, merged)


@dataclass
class VisualSettings:
    title: TitleSettings = field(default_factory=TitleSettings)
    item_text: ItemTextSettings = field(default_factory=ItemTextSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    behavior: BehaviorSettings = field(default_factory=BehaviorSettings)

    @classmethod
    def parse(
        cls,
        objects: Mapping[str, Any] | None,
        current: "VisualSettings | None" = None,
    ) -> "VisualSettings":
        """Return ``current`` (or defaults) with present metadata merged on top.

        The result is always a fresh copy. Unknown groups and fields are
        ignored; malformed values keep the prior value.
        """
        base = copy.deepcopy(current) if current is not None else cls()
        if not isinstance(objects, Mapping):
            return base
        for item in fields(base):
            overrides = objects.get(_host_name(item.name))
            if isinstance(overrides, Mapping):
                _merge_group(getattr(base, item.name), overrides)
        return base

    def enumerate_object_instances(self, object_name: str) -> list[dict[str, Any]]:
        """Describe one settings group in host form for a property pane."""
        for group_field in fields(self):
            if _host_name(group_field.name) != object_name:
                continue
            group = getattr(self, group_field.name)
            properties = {_host_name(item.name): getattr(group, item.name) for item in fields(group)}
            return [{"objectName": object_name, "selector": {}, "properties": properties}]
        return []


__all__ = [
    "BehaviorSettings",
    "ItemTextSettings",
    "SearchSettings",
    "TitleSettings",
    "VisualSettings",
]
