"""
Rename coordination for library item change notifications.

This module decides, per notification, whether the folder or file behind a
library item should be renamed to match its metadata, and delegates the
filesystem work to a ``PathMutator``.

Processing order for ``RenameCoordinator.handle_item_changed``:
1. Skip unless the configuration is enabled and the event passes the library
   gates (scan activity, allowed library names).
2. Global debounce: at most one processed notification per
   ``GLOBAL_MIN_INTERVAL_SECONDS``; the slot is consumed whatever the outcome.
3. Per-kind gate (``rename_series_folders``, ``rename_episode_files``, ...);
   kinds without a handler are ignored.
4. Per-item cooldown; the attempt time is recorded as soon as the cooldown
   passes, so items whose preconditions keep failing are not re-examined on
   every notification.
5. Dispatch to the handler for the item kind.

Every outcome is returned as a ``RenameResult`` and logged; nothing raised
inside a handler escapes ``handle_item_changed``.
"""
import threading
import traceback
from datetime import datetime
from pathlib import Path
from typing import Callable

import metarenamer as metarenamer_module
from metarenamer.models import ItemChangedNotification, ItemKind, MediaItem, RenameResult
from metarenamer.rename import formatter, parser, providers
from metarenamer.utils import LogLevel, logger, time_util
from metarenamer.utils.config import RenameConfig
from metarenamer.utils.constants import (
    GLOBAL_MIN_INTERVAL_SECONDS,
    STATUS_DRY_RUN,
    STATUS_FAIL,
    STATUS_SKIP,
    STATUS_UNCHANGED,
)
from metarenamer.utils.file_util import PathMutator, same_directory

_RESULT_LEVELS = {
    STATUS_FAIL: LogLevel.ERROR,
    STATUS_SKIP: LogLevel.WARN,
    STATUS_UNCHANGED: LogLevel.DEBUG,
}


class CoordinatorState:
    """
    Throttling and change-detection memory of one coordinator.

    Holds the time of the last processed notification, the last attempt time
    per item id and the last seen provider hash per item id. Every
    check-and-update happens under one lock, so two threads handling the same
    item cannot both pass its cooldown.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.last_global_action_time: datetime | None = None
        self.last_attempt_time: dict[str, datetime] = {}
        self.last_provider_hash: dict[str, str] = {}

    def try_consume_global_slot(self, now: datetime, min_interval: float) -> bool:
        with self._lock:
            last = self.last_global_action_time
            if last is not None and time_util.seconds_between(last, now) < min_interval:
                return False
            self.last_global_action_time = now
            return True

    def try_begin_attempt(self, item_id: str, now: datetime, cooldown_seconds: float) -> bool:
        with self._lock:
            last = self.last_attempt_time.get(item_id)
            if last is not None and time_util.seconds_between(last, now) < cooldown_seconds:
                return False
            self.last_attempt_time[item_id] = now
            return True

    def swap_provider_hash(self, item_id: str, new_hash: str) -> str | None:
        """Store ``new_hash`` as seen for the item and return the previously stored hash."""
        with self._lock:
            old_hash = self.last_provider_hash.get(item_id)
            self.last_provider_hash[item_id] = new_hash
            return old_hash

    def clear(self) -> None:
        with self._lock:
            self.last_global_action_time = None
            self.last_attempt_time.clear()
            self.last_provider_hash.clear()


class RenameCoordinator:
    """Turns item change notifications into folder and file renames."""

    def __init__(
            self,
            mutator: PathMutator | None = None,
            clock: Callable[[], datetime] = time_util.utc_now,
            global_min_interval: float = GLOBAL_MIN_INTERVAL_SECONDS,
    ):
        self.mutator = mutator if mutator is not None else PathMutator()
        self.state = CoordinatorState()
        self._clock = clock
        self._global_min_interval = global_min_interval
        self._handlers = {
            ItemKind.SERIES: ("rename_series_folders", self._handle_series),
            ItemKind.SEASON: ("rename_season_folders", self._handle_season),
            ItemKind.EPISODE: ("rename_episode_files", self._handle_episode),
            ItemKind.MOVIE: ("rename_movie_folders", self._handle_movie),
        }

    def clear_state(self) -> None:
        """Forget debounce, cooldown and provider hash memory (coordinator teardown)."""
        self.state.clear()
        logger.log("rename.state.cleared", LogLevel.DEBUG)

    def handle_item_changed(self, event: ItemChangedNotification, config: RenameConfig) -> RenameResult:
        """
        Handle one notification. Never raises.

        Parameters:
        - event (ItemChangedNotification): The changed item and its library context.
        - config (RenameConfig): Configuration snapshot for this event.

        Returns:
        - RenameResult: The outcome; SKIP for every precondition that was not met,
          FAIL for I/O errors and unexpected exceptions.
        """
        try:
            return self._process(event, config)
        except Exception as e:
            item = getattr(event, "item", None)
            logger.log(
                "rename.error",
                LogLevel.ERROR,
                item_id=getattr(item, "id", None),
                error_type=type(e).__name__,
                error=str(e),
                traceback=traceback.format_exc() if metarenamer_module.DEBUG else None,
            )
            return RenameResult(STATUS_FAIL, getattr(item, "path", None), None, f"unexpected error: {e}")

    def _process(self, event, config) -> RenameResult:
        if not isinstance(event, ItemChangedNotification) or not isinstance(event.item, MediaItem):
            logger.log("rename.skip", LogLevel.WARN, reason="malformed notification", type=type(event).__name__)
            return RenameResult(STATUS_SKIP, reason="malformed notification")

        item = event.item
        logger.log("rename.event", LogLevel.DEBUG, item_id=item.id, kind=item.kind.value, name=item.name,
                   path=item.path)

        if not config.enabled:
            return self._skip(item, "disabled", LogLevel.DEBUG)
        if event.library_scan_active and not config.process_during_library_scans:
            return self._skip(item, "library scan in progress", LogLevel.DEBUG)
        if not config.library_allowed(event.library_name):
            return self._skip(item, f"library not allowed: {event.library_name}", LogLevel.DEBUG)

        now = self._clock()
        if not self.state.try_consume_global_slot(now, self._global_min_interval):
            return self._skip(item, "debounced", LogLevel.DEBUG)

        flag, handler = self._handlers.get(item.kind, (None, None))
        if handler is None:
            return self._skip(item, "unsupported item kind", LogLevel.TRACE)
        if not getattr(config, flag):
            return self._skip(item, f"{flag} disabled", LogLevel.DEBUG)

        if not self.state.try_begin_attempt(item.id, now, config.per_item_cooldown_seconds):
            return self._skip(item, "cooling down", LogLevel.DEBUG)

        return handler(item, config)

    # Handlers

    def _handle_series(self, item: MediaItem, config: RenameConfig) -> RenameResult:
        if not _is_dir(item.path):
            return self._skip(item, "series path missing or not a directory")
        return self._rename_provider_folder(
            item, Path(item.path), config, config.series_folder_format, config.preferred_series_providers
        )

    def _handle_movie(self, item: MediaItem, config: RenameConfig) -> RenameResult:
        # The folder holding the movie is renamed; the media file keeps its name.
        folder = _movie_folder(item.path)
        if folder is None:
            return self._skip(item, "movie path missing")
        return self._rename_provider_folder(
            item, folder, config, config.movie_folder_format, config.preferred_movie_providers
        )

    def _handle_season(self, item: MediaItem, config: RenameConfig) -> RenameResult:
        if not _is_dir(item.path):
            return self._skip(item, "season path missing or not a directory")
        if item.index_number is None:
            return self._skip(item, "missing season number")

        desired = formatter.render_name(
            config.season_folder_format,
            name=_clean(item.series_name),
            year=time_util.resolve_year(item.series_year, item.series_premiere_date),
            season=item.index_number,
            season_name=_clean(item.name),
        )
        if not desired:
            return self._skip(item, "rendered name is empty")

        logger.log("rename.desired", LogLevel.INFO, item_id=item.id, kind=item.kind.value, desired=desired,
                   path=item.path)
        return self._finish(item, self.mutator.rename_folder(item.path, desired, config.dry_run))

    def _handle_episode(self, item: MediaItem, config: RenameConfig) -> RenameResult:
        if not _is_file(item.path):
            return self._skip(item, "episode path missing or not a regular file")
        if item.index_number is None:
            return self._skip(item, "missing episode number")

        current = Path(item.path)
        parsed = parser.parse_episode_number(current.name)
        if parsed is None:
            logger.log("rename.crosscheck", LogLevel.WARN, item_id=item.id, file=current.name,
                       msg="no episode number in filename; trusting metadata")
        elif parsed != item.index_number:
            logger.log("rename.crosscheck", LogLevel.WARN, item_id=item.id, file=current.name,
                       filename_episode=parsed, metadata_episode=item.index_number)
            return self._skip(item, "episode number mismatch", LogLevel.WARN)

        flat = bool(item.series_path) and same_directory(current.parent, item.series_path)
        if flat:
            season_dir = Path(item.series_path) / formatter.render_name(
                config.season_folder_format, name=_clean(item.series_name), season=1
            )
            if season_dir == Path(item.series_path):
                return self._skip(item, "rendered season folder name is empty")

            created = self.mutator.create_directory(season_dir, config.dry_run)
            self._report_step(item, "create", created)
            if created.status in (STATUS_FAIL, STATUS_SKIP):
                return self._finish(item, created)

            moved = self.mutator.move_file(current, season_dir, config.dry_run)
            self._report_step(item, "move", moved)
            if moved.status == STATUS_FAIL:
                return self._finish(item, moved)
            current = season_dir / current.name

        season = item.parent_index_number
        if flat or season is None:
            season = 1

        desired = formatter.render_name(
            config.episode_file_format,
            name=_clean(item.series_name),
            year=time_util.resolve_year(item.series_year, item.series_premiere_date),
            season=season,
            episode=item.index_number,
            title=_clean(item.name),
        )
        if not desired:
            return self._skip(item, "rendered name is empty")

        logger.log("rename.desired", LogLevel.INFO, item_id=item.id, kind=item.kind.value,
                   desired=f"{desired}{current.suffix}", path=str(current))
        return self._finish(item, self.mutator.rename_file(current, desired, config.dry_run))

    # Shared steps

    def _rename_provider_folder(
            self, item: MediaItem, folder: Path, config: RenameConfig, template: str, preferences
    ) -> RenameResult:
        """Provider checks, change detection and rendering shared by series and movies."""
        year = time_util.resolve_year(item.production_year, item.premiere_date)
        provider_ids = item.provider_ids or {}

        if config.require_provider_id_match and not provider_ids:
            return self._skip(item, "no provider ids")

        if config.only_rename_when_provider_ids_change:
            new_hash = providers.provider_hash(provider_ids)
            # Stored before any later check so a blocked rename is not retried until the ids change.
            old_hash = self.state.swap_provider_hash(item.id, new_hash)
            logger.log("rename.provider.hash", LogLevel.DEBUG, item_id=item.id, old=old_hash, new=new_hash)
            if old_hash == new_hash:
                return self._skip(item, "provider ids unchanged", LogLevel.DEBUG)

        best = providers.select_best(provider_ids, preferences)
        if best is None and config.require_provider_id_match:
            return self._skip(item, "no preferred provider id")

        desired = formatter.render_name(
            template,
            name=_clean(item.name),
            year=year,
            provider=best.label if best else None,
            provider_id=best.id if best else None,
        )
        if not desired:
            return self._skip(item, "rendered name is empty")

        logger.log("rename.desired", LogLevel.INFO, item_id=item.id, kind=item.kind.value, desired=desired,
                   path=str(folder), provider=best.label if best else None)
        return self._finish(item, self.mutator.rename_folder(folder, desired, config.dry_run))

    def _skip(self, item: MediaItem, reason: str, level: LogLevel = LogLevel.INFO) -> RenameResult:
        logger.log("rename.skip", level, item_id=item.id, kind=item.kind.value, name=item.name, reason=reason)
        return RenameResult(STATUS_SKIP, item.path, None, reason)

    def _report_step(self, item: MediaItem, step: str, result: RenameResult) -> None:
        level = _RESULT_LEVELS.get(result.status, LogLevel.INFO)
        logger.log("rename.step", level, item_id=item.id, step=step, status=result.status,
                   source=result.source, target=result.target, reason=result.reason)

    def _finish(self, item: MediaItem, result: RenameResult) -> RenameResult:
        level = _RESULT_LEVELS.get(result.status, LogLevel.INFO)
        logger.log(
            "rename.result",
            level,
            item_id=item.id,
            kind=item.kind.value,
            status=result.status,
            dry_run=result.status == STATUS_DRY_RUN,
            source=result.source,
            target=result.target,
            reason=result.reason,
        )
        return result


def _clean(text: str | None) -> str | None:
    if text is None:
        return None
    return text.strip() or None


def _is_dir(path: str | None) -> bool:
    return bool(path) and Path(path).is_dir()


def _is_file(path: str | None) -> bool:
    return bool(path) and Path(path).is_file()


def _movie_folder(path: str | None) -> Path | None:
    if not path:
        return None
    p = Path(path)
    if p.is_dir():
        return p
    if p.is_file():
        return p.parent
    return None
