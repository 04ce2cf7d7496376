"""
Constants and default settings for metadata-driven renaming.

This module contains the constants shared by the rename coordinator and its
helpers: throttling intervals, status codes used when reporting outcomes,
default naming templates and provider preferences, and the characters that
are never allowed in a generated file or folder name. Environment variables
from a local ``.env`` file are loaded on import so configuration loading sees
them.
"""

import re

from dotenv import load_dotenv

load_dotenv()

# Minimum seconds between any two processed notifications
GLOBAL_MIN_INTERVAL_SECONDS = 2.0

# Default seconds between rename attempts for the same item
DEFAULT_COOLDOWN_SECONDS = 60

# Prefix for environment-based configuration (METARENAMER_DRY_RUN=0, ...)
ENV_PREFIX = "METARENAMER_"

# Default naming templates
DEFAULT_SERIES_FOLDER_FORMAT = "{Name} ({Year}) [{Provider}-{Id}]"
DEFAULT_SEASON_FOLDER_FORMAT = "Season {Season:00}"
DEFAULT_EPISODE_FILE_FORMAT = "{Name} - S{Season:00}E{Episode:00} - {Title}"
DEFAULT_MOVIE_FOLDER_FORMAT = "{Name} ({Year}) [{Provider}-{Id}]"

# Provider preference order
DEFAULT_SERIES_PROVIDERS = ("Tvdb", "Tmdb", "Imdb")
DEFAULT_MOVIE_PROVIDERS = ("Tmdb", "Imdb")

# Provider hash of an item without any provider ids
EMPTY_PROVIDER_HASH = "empty"

# Characters stripped from generated names (plus ASCII control characters)
INVALID_FILENAME_CHARS = '<>:"/\\|?*'
CONTROL_CHARS_REGEX = re.compile(r"[\x00-\x1f\x7f]")

# Outcome status codes
STATUS_RENAMED = "RENAMED"
STATUS_MOVED = "MOVED"
STATUS_CREATED = "CREATED"
STATUS_UNCHANGED = "UNCHANGED"
STATUS_SKIP = "SKIP"
STATUS_FAIL = "FAIL"
STATUS_DRY_RUN = "DRY-RUN"

# Regex patterns for episode number cross-checks (applied to extension-less names)
SEASON_EPISODE_REGEX = re.compile(r"(?<![A-Za-z0-9])S(\d{1,3})[ ._-]?E(\d{1,4})(?!\d)", re.IGNORECASE)
CROSS_EPISODE_REGEX = re.compile(r"(?<![A-Za-z0-9])(\d{1,2})x(\d{1,3})(?!\d)", re.IGNORECASE)
BARE_EPISODE_REGEX = re.compile(r"(?<![A-Za-z0-9])E(?:P|PISODE)?[ ._-]?(\d{1,4})(?![\dA-Za-z])", re.IGNORECASE)
SEPARATED_NUMBER_REGEX = re.compile(r"(?:^|\s-\s*)(\d{1,3})(?=\s*-\s|\s*$)")
