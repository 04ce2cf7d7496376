"""
Rename configuration snapshot and loaders.

A ``RenameConfig`` is an immutable snapshot of every tunable the coordinator
reads. Snapshots are handed to the coordinator with each notification, so a
configuration change takes effect on the next event without any reload hook.

Configuration sources, later ones winning:
- the dataclass defaults,
- ``METARENAMER_*`` environment variables (a ``.env`` file is loaded first),
- an optional JSON file whose keys use either snake_case or the host's
  PascalCase names (``DryRun``, ``PerItemCooldownSeconds``, ...).
"""
import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

from metarenamer.utils.constants import (
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_EPISODE_FILE_FORMAT,
    DEFAULT_MOVIE_FOLDER_FORMAT,
    DEFAULT_MOVIE_PROVIDERS,
    DEFAULT_SEASON_FOLDER_FORMAT,
    DEFAULT_SERIES_FOLDER_FORMAT,
    DEFAULT_SERIES_PROVIDERS,
    ENV_PREFIX,
)
from metarenamer.utils.text_util import pascal_case

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


@dataclass(frozen=True)
class RenameConfig:
    """Immutable snapshot of all rename tunables."""
    enabled: bool = True
    dry_run: bool = True
    rename_series_folders: bool = True
    rename_season_folders: bool = False
    rename_episode_files: bool = False
    rename_movie_folders: bool = False
    require_provider_id_match: bool = True
    only_rename_when_provider_ids_change: bool = True
    process_during_library_scans: bool = False
    per_item_cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS
    series_folder_format: str = DEFAULT_SERIES_FOLDER_FORMAT
    season_folder_format: str = DEFAULT_SEASON_FOLDER_FORMAT
    episode_file_format: str = DEFAULT_EPISODE_FILE_FORMAT
    movie_folder_format: str = DEFAULT_MOVIE_FOLDER_FORMAT
    preferred_series_providers: tuple[str, ...] = DEFAULT_SERIES_PROVIDERS
    preferred_movie_providers: tuple[str, ...] = DEFAULT_MOVIE_PROVIDERS
    allowed_library_names: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.per_item_cooldown_seconds < 0:
            raise ConfigError(
                f"per_item_cooldown_seconds must be >= 0, got {self.per_item_cooldown_seconds}"
            )
        # Lists from callers are frozen so the snapshot stays immutable
        object.__setattr__(self, "preferred_series_providers", tuple(self.preferred_series_providers))
        object.__setattr__(self, "preferred_movie_providers", tuple(self.preferred_movie_providers))
        object.__setattr__(self, "allowed_library_names", frozenset(self.allowed_library_names))

    def replace(self, **changes) -> "RenameConfig":
        """Return a copy of this snapshot with the given fields changed."""
        return replace(self, **changes)

    def library_allowed(self, library_name: str | None) -> bool:
        """An empty allow-list admits every library; otherwise names match case-insensitively."""
        if not self.allowed_library_names:
            return True
        if not library_name:
            return False
        wanted = library_name.strip().lower()
        return any(name.strip().lower() == wanted for name in self.allowed_library_names)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: "RenameConfig | None" = None) -> "RenameConfig":
        """
        Overlay ``data`` on ``base`` (or the defaults).

        Keys may be snake_case field names or their PascalCase equivalents.
        Unknown keys raise ``ConfigError`` so typos do not pass silently.
        """
        base = base or cls()
        by_key = {}
        for f in fields(cls):
            by_key[f.name] = f
            by_key[pascal_case(f.name)] = f

        changes = {}
        for key, raw in data.items():
            f = by_key.get(key)
            if f is None:
                raise ConfigError(f"unknown configuration key: {key}")
            changes[f.name] = _coerce(f.name, raw)
        return base.replace(**changes)


def load_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> RenameConfig:
    """
    Load a configuration snapshot from the environment and an optional JSON file.

    Parameters:
    - path (str | Path | None): JSON file with configuration keys.
    - environ (Mapping | None): Environment to read; defaults to ``os.environ``,
      which already holds any ``.env`` values loaded by ``constants``.

    Returns:
    - RenameConfig: The merged snapshot.

    Raises:
    - ConfigError: On unknown keys, bad values, or an unreadable file.
    """
    if environ is None:
        environ = os.environ

    env_values = {}
    for f in fields(RenameConfig):
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in environ:
            env_values[f.name] = environ[env_key]
    config = RenameConfig.from_mapping(env_values)

    if path is not None:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot read configuration file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"configuration file {path} must contain a JSON object")
        config = RenameConfig.from_mapping(data, base=config)

    return config


def _coerce(name: str, raw: Any) -> Any:
    """Convert a raw env/JSON value to the type of the named field."""
    if name == "per_item_cooldown_seconds":
        if isinstance(raw, bool):
            raise ConfigError(f"{name} must be an integer")
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ConfigError(f"{name} must be an integer, got {raw!r}") from None

    if name in ("preferred_series_providers", "preferred_movie_providers", "allowed_library_names"):
        if isinstance(raw, str):
            items = [part.strip() for part in raw.split(",")]
        elif isinstance(raw, (list, tuple, set, frozenset)):
            items = [str(part).strip() for part in raw]
        else:
            raise ConfigError(f"{name} must be a list or comma-separated string, got {raw!r}")
        items = [item for item in items if item]
        return frozenset(items) if name == "allowed_library_names" else tuple(items)

    if name.endswith("_format"):
        if not isinstance(raw, str):
            raise ConfigError(f"{name} must be a string, got {raw!r}")
        return raw

    # Remaining fields are booleans
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")
