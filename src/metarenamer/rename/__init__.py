"""
Rename decisions for library item change notifications.

This package contains the coordinator that reacts to "item metadata changed"
notifications and the helpers it relies on.

Package organization:
- formatter: Template rendering that tolerates missing fields and produces
  filesystem-safe folder and file names.
- parser: Best-effort episode number extraction from existing filenames, used
  to cross-check metadata before an episode file is renamed.
- providers: Preferred provider selection and order-independent provider id
  hashing for change detection.
- core: The coordinator with its debounce/cooldown state and one handler per
  item kind (series, season, episode, movie).
- listener: Host-facing adapter that supplies a fresh configuration snapshot
  per notification and clears coordinator state on dispose.
- batch: Replays a sequence of notifications with progress reporting.

Public API (top-level exports)
- `render_name`: Render a naming template.
- `parse_episode_number`: Extract an episode number from a filename.
- `select_best`, `provider_hash`: Provider helpers.
- `RenameCoordinator`: Notification handling.
- `ItemChangedListener`: Lifecycle-aware adapter around a coordinator.
- `replay_events`: Batch replay.

Behavior notes:
- Outcomes are `RenameResult` values whose `status` is one of the STATUS_*
  codes in `metarenamer.utils.constants`; precondition failures are SKIP
  results, never exceptions.
- With `dry_run` set nothing on disk changes; results carry the names that
  would have been used.

Example:
    from metarenamer.models import ItemChangedNotification, ItemKind, MediaItem
    from metarenamer.rename import RenameCoordinator
    from metarenamer.utils.config import RenameConfig

    coordinator = RenameCoordinator()
    item = MediaItem(id="42", kind=ItemKind.SERIES, name="The Flash", path="/tv/flash",
                     production_year=2014, provider_ids={"Tvdb": "279121"})
    result = coordinator.handle_item_changed(ItemChangedNotification(item), RenameConfig())
"""
from .formatter import render_name
from .parser import parse_episode_number
from .providers import provider_hash, select_best
from .core import CoordinatorState, RenameCoordinator
from .listener import ItemChangedListener
from .batch import replay_events

__all__ = [
    # Formatting and parsing
    "render_name",
    "parse_episode_number",
    # Providers
    "select_best",
    "provider_hash",
    # Coordination
    "CoordinatorState",
    "RenameCoordinator",
    "ItemChangedListener",
    # Batch processing
    "replay_events",
]
