"""Tests for episode number extraction from existing filenames."""
import pytest

from metarenamer.rename.parser import parse_episode_number, parse_season_episode, strip_extension


class TestParseEpisodeNumber:
    """Test cases for parse_episode_number."""

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("Show.S01E05.720p.mkv", 5),
            ("show s02e10.mkv", 10),
            ("Show.S01.E07.mkv", 7),
            ("Show.S01E05E06.mkv", 5),
            ("Show 1x05 - Title.mkv", 5),
            ("Show - E07 - Title.mkv", 7),
            ("Show.E05.mkv", 5),
            ("Show Episode 12.mkv", 12),
            ("Show - Ep 3.mkv", 3),
            ("Show - 05 - Title.mkv", 5),
            ("05 - Pilot.mkv", 5),
            ("Show_-_08_-_Title.mkv", 8),
        ],
    )
    def test_recognized_idioms(self, filename, expected):
        assert parse_episode_number(filename) == expected

    @pytest.mark.parametrize(
        "filename",
        [
            "Pilot.mkv",
            "Show 2014 1080p.mkv",
            "Show - 01 - 02.mkv",
            "The Expanse - Extended.mkv",
            "",
        ],
    )
    def test_ambiguous_or_missing_returns_none(self, filename):
        assert parse_episode_number(filename) is None

    def test_directory_part_is_ignored(self):
        assert parse_episode_number("/tv/S09 Archive/Show - E02.mkv") == 2


class TestParseSeasonEpisode:
    """Test cases for parse_season_episode."""

    def test_sxxeyy(self):
        assert parse_season_episode("Show.S03E04.mkv") == (3, 4)

    def test_cross_notation(self):
        assert parse_season_episode("Show 2x11.avi") == (2, 11)

    def test_no_token(self):
        assert parse_season_episode("Show - 05.mkv") == (None, None)


class TestStripExtension:
    """Test cases for strip_extension."""

    def test_strips_directory_and_extension(self):
        assert strip_extension("/media/tv/Show - S01E01.mkv") == "Show - S01E01"

    def test_keeps_inner_dots(self):
        assert strip_extension("Show.S01E01.720p.mkv") == "Show.S01E01.720p"
