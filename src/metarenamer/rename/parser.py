"""
Best-effort episode number extraction from existing filenames.

The number found here is only ever used to cross-check the episode number
supplied with the item's metadata before an episode file is renamed; it is
never a source of metadata itself. Ambiguous names yield None rather than a
guess.
"""

import os

from metarenamer.utils.constants import (
    BARE_EPISODE_REGEX,
    CROSS_EPISODE_REGEX,
    SEASON_EPISODE_REGEX,
    SEPARATED_NUMBER_REGEX,
)
from metarenamer.utils.file_util import normalize_text


def strip_extension(filename: str) -> str:
    """Return the filename without directory and extension."""
    stem, _ = os.path.splitext(os.path.basename(filename))
    return stem


def parse_season_episode(filename: str) -> tuple[int | None, int | None]:
    """Extract season and episode numbers from an ``S01E05`` or ``1x05`` token."""
    stem = strip_extension(filename)
    for regex in (SEASON_EPISODE_REGEX, CROSS_EPISODE_REGEX):
        match = regex.search(stem)
        if match:
            return int(match.group(1)), int(match.group(2))
    return None, None


def parse_episode_number(filename: str) -> int | None:
    """
    Extract an episode number from a legacy filename.

    Recognized idioms, first confident match wins:
      "Show.S01E05.720p.mkv"      -> 5  (E group of an SxxEyy token)
      "Show 1x05 - Title.mkv"     -> 5
      "Show - E05 - Title.mkv"    -> 5  (bare E / Ep / Episode token)
      "Show - 05 - Title.mkv"     -> 5  (number set off by " - " separators)

    Returns None when nothing matches, or when separated numbers disagree
    ("Show - 01 - 02.mkv").
    """
    _, episode = parse_season_episode(filename)
    if episode is not None:
        return episode

    stem = strip_extension(filename)
    match = BARE_EPISODE_REGEX.search(stem)
    if match:
        return int(match.group(1))

    numbers = {int(m.group(1)) for m in SEPARATED_NUMBER_REGEX.finditer(normalize_text(stem))}
    if len(numbers) == 1:
        return numbers.pop()
    return None
