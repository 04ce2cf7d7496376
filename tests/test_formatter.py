"""Tests for template rendering."""

from metarenamer.rename.formatter import render_name

SERIES_TEMPLATE = "{Name} ({Year}) [{Provider}-{Id}]"
EPISODE_TEMPLATE = "{Name} - S{Season:00}E{Episode:00} - {Title}"


class TestRenderName:
    """Test cases for render_name."""

    def test_full_series_folder(self):
        result = render_name(SERIES_TEMPLATE, name="The Flash", year=2014, provider="tvdb", provider_id="279121")
        assert result == "The Flash (2014) [tvdb-279121]"

    def test_missing_year_drops_group(self):
        result = render_name(SERIES_TEMPLATE, name="The Flash", provider="tvdb", provider_id="279121")
        assert result == "The Flash [tvdb-279121]"

    def test_missing_provider_drops_group(self):
        assert render_name(SERIES_TEMPLATE, name="The Flash", year=2014) == "The Flash (2014)"

    def test_provider_group_alone_renders_empty(self):
        assert render_name("[{Provider}-{Id}]") == ""

    def test_partial_group_keeps_present_value(self):
        assert render_name("{Name} [{Provider}-{Id}]", name="Show", provider="tvdb") == "Show [tvdb]"

    def test_season_padding(self):
        assert render_name("Season {Season:00}", season=1) == "Season 01"
        assert render_name("Season {Season:00}", season=12) == "Season 12"
        assert render_name("Season {Season:000}", season=7) == "Season 007"
        assert render_name("Season {Season}", season=7) == "Season 7"

    def test_season_name_optional(self):
        template = "Season {Season:00} - {SeasonName}"
        assert render_name(template, season=0, season_name="Specials") == "Season 00 - Specials"
        assert render_name(template, season=2) == "Season 02"

    def test_episode_with_and_without_title(self):
        assert render_name(EPISODE_TEMPLATE, name="Show", season=1, episode=5, title="Pilot") == "Show - S01E05 - Pilot"
        assert render_name(EPISODE_TEMPLATE, name="Show", season=1, episode=5) == "Show - S01E05"

    def test_leading_empty_placeholder_leaves_no_separator(self):
        assert render_name("{Year} - {Name}", name="Show") == "Show"

    def test_year_is_four_digits(self):
        assert render_name("{Name} ({Year})", name="Old", year=999) == "Old (0999)"

    def test_placeholders_are_case_insensitive(self):
        assert render_name("{name} ({YEAR})", name="Show", year=2001) == "Show (2001)"

    def test_unknown_placeholder_renders_empty(self):
        assert render_name("{Name} ({Studio})", name="Show") == "Show"

    def test_value_text_is_not_cleaned(self):
        # Brackets inside the value belong to the name, not the template
        assert render_name("{Name} ({Year})", name="Law & Order (US)") == "Law & Order (US)"

    def test_illegal_characters_removed(self):
        assert render_name("{Name}", name='AC/DC: Live? "Now" <1> | *') == "ACDC Live Now 1"

    def test_control_characters_removed(self):
        assert render_name("{Name} - {Title}", name="Show", title="Pi\x07lot\n") == "Show - Pilot"

    def test_trims_separators_and_whitespace(self):
        assert render_name("  - {Name} -  ", name="Show") == "Show"
        assert render_name("{Name}.", name="Show") == "Show"

    def test_rendering_is_pure(self):
        first = render_name(SERIES_TEMPLATE, name="The Flash", year=2014, provider="tvdb", provider_id="279121")
        second = render_name(SERIES_TEMPLATE, name="The Flash", year=2014, provider="tvdb", provider_id="279121")
        assert first == second

    def test_empty_or_missing_template(self):
        assert render_name("", name="Show") == ""
        assert render_name(None, name="Show") == ""

    def test_marker_characters_in_template_are_ignored(self):
        assert render_name("{Name} \ue001\x00x", name="Show") == "Show x"
        assert render_name("\ue005{Name} ({Year})", name="Show") == "Show"
