"""Data models for the metarenamer package."""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping

from metarenamer.utils.text_util import pascal_case


class ItemKind(Enum):
    """Kinds of library items a notification can carry."""
    SERIES = "Series"
    SEASON = "Season"
    EPISODE = "Episode"
    MOVIE = "Movie"
    OTHER = "Other"

    @classmethod
    def parse(cls, value) -> "ItemKind":
        """Map a host type name ("Series", "episode", ...) to a kind; unknown names become OTHER."""
        if isinstance(value, ItemKind):
            return value
        text = str(value or "").strip().lower()
        for kind in cls:
            if kind.value.lower() == text:
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class MediaItem:
    """Snapshot of a library item as delivered with a change notification."""
    id: str
    kind: ItemKind
    name: str = ""
    path: str | None = None
    provider_ids: Mapping[str, str] = field(default_factory=dict)
    production_year: int | None = None
    premiere_date: date | None = None
    index_number: int | None = None
    parent_index_number: int | None = None
    series_name: str | None = None
    series_path: str | None = None
    series_year: int | None = None
    series_premiere_date: date | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MediaItem":
        """
        Build a snapshot from a JSON object.

        Both snake_case keys and the host's PascalCase keys are accepted
        (``production_year`` or ``ProductionYear``). The kind is read from
        ``kind`` or ``Type``.

        Raises:
            ValueError: If the object has no id or a field has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"item must be an object, got {type(data).__name__}")

        item_id = _pick(data, "id")
        if item_id is None or str(item_id).strip() == "":
            raise ValueError("item has no id")

        provider_ids = _pick(data, "provider_ids") or {}
        if not isinstance(provider_ids, Mapping):
            raise ValueError("provider_ids must be an object")

        return cls(
            id=str(item_id),
            kind=ItemKind.parse(_pick(data, "kind") or _pick(data, "type")),
            name=str(_pick(data, "name") or ""),
            path=_pick(data, "path"),
            provider_ids={str(k): str(v) for k, v in provider_ids.items() if v is not None},
            production_year=_to_int(_pick(data, "production_year"), "production_year"),
            premiere_date=_to_date(_pick(data, "premiere_date"), "premiere_date"),
            index_number=_to_int(_pick(data, "index_number"), "index_number"),
            parent_index_number=_to_int(_pick(data, "parent_index_number"), "parent_index_number"),
            series_name=_pick(data, "series_name"),
            series_path=_pick(data, "series_path"),
            series_year=_to_int(_pick(data, "series_year"), "series_year"),
            series_premiere_date=_to_date(_pick(data, "series_premiere_date"), "series_premiere_date"),
        )


@dataclass(frozen=True)
class ItemChangedNotification:
    """An "item metadata changed" notification from the library host."""
    item: MediaItem
    library_name: str | None = None
    library_scan_active: bool = False

    @property
    def kind(self) -> ItemKind:
        return self.item.kind

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ItemChangedNotification":
        """Build a notification from ``{"item": {...}, "library_name": ..., "library_scan_active": ...}``."""
        if not isinstance(data, Mapping):
            raise ValueError(f"notification must be an object, got {type(data).__name__}")
        item = _pick(data, "item")
        if item is None:
            raise ValueError("notification has no item")
        return cls(
            item=MediaItem.from_dict(item),
            library_name=_pick(data, "library_name"),
            library_scan_active=bool(_pick(data, "library_scan_active") or False),
        )


@dataclass
class RenameResult:
    """Represents the outcome of handling one notification or one filesystem step."""
    status: str
    source: str | None = None
    target: str | None = None
    reason: str | None = None


def _pick(data: Mapping[str, Any], key: str):
    if key in data:
        return data[key]
    return data.get(pascal_case(key))


def _to_int(value, name: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _to_date(value, name: str) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # Only the calendar date matters; host timestamps carry 7-digit fractions.
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValueError(f"{name} must be an ISO date, got {value!r}") from None
