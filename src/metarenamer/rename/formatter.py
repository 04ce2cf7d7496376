"""
Template rendering for folder and file names.

Templates are plain strings with ``{Placeholder}`` tokens:

- ``{Name}`` / ``{SeriesName}``: item name (the series name for seasons and episodes)
- ``{Year}``: four-digit year
- ``{Provider}`` / ``{Id}``: provider label (lower-case) and provider id
- ``{Season}`` / ``{Episode}``: numbers, zero-padded with a width suffix (``{Season:00}``)
- ``{SeasonName}``: season display name
- ``{Title}`` / ``{EpisodeTitle}``: episode title

Placeholder names are case-insensitive; unknown placeholders render empty.

Missing values render as empty strings, and the decoration the template author
put around them goes too: a bracket or paren group whose placeholders are all
empty is dropped with its leading whitespace, and a separator directly in
front of an emptied placeholder is removed. Text coming from values is never
touched by that cleanup; rendering substitutes opaque markers first, cleans
the skeleton, then puts the values back.

Examples:
    render_name("{Name} ({Year}) [{Provider}-{Id}]", name="The Flash", year=2014,
                provider="tvdb", provider_id="279121")
        -> "The Flash (2014) [tvdb-279121]"
    render_name("{Name} ({Year}) [{Provider}-{Id}]", name="The Flash",
                provider="tvdb", provider_id="279121")
        -> "The Flash [tvdb-279121]"
"""
import re

from metarenamer.utils.file_util import sanitize_filename

PLACEHOLDER_REGEX = re.compile(r"\{(\w+)(?::(0+))?\}")

# Placeholder name (lower-case) -> render_name keyword
PLACEHOLDER_FIELDS = {
    "name": "name",
    "seriesname": "name",
    "year": "year",
    "provider": "provider",
    "id": "provider_id",
    "season": "season",
    "seasonname": "season_name",
    "episode": "episode",
    "title": "title",
    "episodetitle": "title",
}

_EMPTY = "\x00"
_VALUE_BASE = 0xE000
_VALUE_REGEX = re.compile(r"[\ue000-\uf8ff]")
# Template text that would be mistaken for a marker
_MARKER_CHARS_REGEX = re.compile(r"[\x00\ue000-\uf8ff]")

_GROUP_REGEX = re.compile(r"\s*(?:\(([^()\[\]]*)\)|\[([^()\[\]]*)\])")
_EMPTY_WITH_SEPARATOR_REGEX = re.compile(r"\s*(?:[-_.,;~]\s*)?\x00")
_OPEN_SEPARATOR_REGEX = re.compile(r"([(\[])\s*[-_.,;~]+\s*")
_SEPARATOR_CLOSE_REGEX = re.compile(r"\s*[-_.,;~]+\s*([)\]])")
_EMPTY_GROUP_REGEX = re.compile(r"\s*(?:\(\s*\)|\[\s*\])")

_TRIM_CHARS = " \t-_.,;~"


def _field_text(key: str, width: int, fields: dict) -> str:
    value = fields.get(key)
    if value is None:
        return ""
    if key == "year":
        return f"{int(value):04d}"
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value).zfill(width) if width else str(value)
    return str(value).strip()


def _drop_empty_group(match: re.Match) -> str:
    content = match.group(1) if match.group(1) is not None else match.group(2)
    if _EMPTY in content and not _VALUE_REGEX.search(content):
        return ""
    return match.group(0)


def render_name(
        template: str,
        name: str | None = None,
        year: int | None = None,
        provider: str | None = None,
        provider_id: str | None = None,
        season: int | None = None,
        season_name: str | None = None,
        episode: int | None = None,
        title: str | None = None,
) -> str:
    """
    Render ``template`` into a filesystem-safe name.

    The result depends only on the arguments. It is sanitized against
    ``/ \\ : * ? " < > |`` and control characters and trimmed of leading and
    trailing separators and whitespace. An empty string means nothing usable
    was rendered.
    """
    fields = {
        "name": name,
        "year": year,
        "provider": provider,
        "provider_id": provider_id,
        "season": season,
        "season_name": season_name,
        "episode": episode,
        "title": title,
    }
    values: list[str] = []

    def substitute(match: re.Match) -> str:
        key = PLACEHOLDER_FIELDS.get(match.group(1).lower())
        width = len(match.group(2) or "")
        text = _field_text(key, width, fields) if key else ""
        if not text:
            return _EMPTY
        values.append(text)
        return chr(_VALUE_BASE + len(values) - 1)

    skeleton = PLACEHOLDER_REGEX.sub(substitute, _MARKER_CHARS_REGEX.sub("", template or ""))
    skeleton = _GROUP_REGEX.sub(_drop_empty_group, skeleton)
    skeleton = _EMPTY_WITH_SEPARATOR_REGEX.sub("", skeleton)
    skeleton = _OPEN_SEPARATOR_REGEX.sub(r"\1", skeleton)
    skeleton = _SEPARATOR_CLOSE_REGEX.sub(r"\1", skeleton)
    skeleton = _EMPTY_GROUP_REGEX.sub("", skeleton)

    rendered = _VALUE_REGEX.sub(lambda m: values[ord(m.group(0)) - _VALUE_BASE], skeleton)
    return sanitize_filename(rendered).strip(_TRIM_CHARS)
