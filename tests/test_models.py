"""Tests for notification and item models."""
from datetime import date

import pytest

from metarenamer.models import ItemChangedNotification, ItemKind, MediaItem


class TestItemKind:
    """Test cases for ItemKind.parse."""

    def test_known_names(self):
        assert ItemKind.parse("Series") is ItemKind.SERIES
        assert ItemKind.parse("episode") is ItemKind.EPISODE
        assert ItemKind.parse(ItemKind.MOVIE) is ItemKind.MOVIE

    def test_unknown_names(self):
        assert ItemKind.parse("BoxSet") is ItemKind.OTHER
        assert ItemKind.parse(None) is ItemKind.OTHER


class TestMediaItem:
    """Test cases for MediaItem.from_dict."""

    def test_host_style_keys(self):
        item = MediaItem.from_dict({
            "Id": "abc",
            "Type": "Series",
            "Name": "The Flash",
            "Path": "/tv/the flash",
            "ProviderIds": {"Tvdb": "279121", "Zap2It": None},
            "PremiereDate": "2014-10-07T00:00:00.0000000Z",
        })
        assert item.id == "abc"
        assert item.kind is ItemKind.SERIES
        assert item.provider_ids == {"Tvdb": "279121"}
        assert item.premiere_date == date(2014, 10, 7)
        assert item.production_year is None

    def test_snake_case_keys(self):
        item = MediaItem.from_dict({
            "id": "e1", "kind": "Episode", "index_number": "5", "parent_index_number": 1,
            "series_name": "Show", "series_path": "/tv/Show",
        })
        assert item.index_number == 5
        assert item.parent_index_number == 1
        assert item.series_path == "/tv/Show"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"id": ""},
            {"id": "x", "provider_ids": ["Tvdb"]},
            {"id": "x", "index_number": True},
            {"id": "x", "production_year": "nineteen"},
            {"id": "x", "premiere_date": "yesterday"},
        ],
    )
    def test_invalid_items(self, data):
        with pytest.raises(ValueError):
            MediaItem.from_dict(data)


class TestItemChangedNotification:
    """Test cases for ItemChangedNotification.from_dict."""

    def test_context_fields(self):
        event = ItemChangedNotification.from_dict({
            "item": {"id": "m1", "type": "Movie"},
            "library_name": "Movies",
            "library_scan_active": True,
        })
        assert event.kind is ItemKind.MOVIE
        assert event.library_name == "Movies"
        assert event.library_scan_active

    def test_requires_item(self):
        with pytest.raises(ValueError):
            ItemChangedNotification.from_dict({"library_name": "TV"})
