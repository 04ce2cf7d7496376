# python
"""Batch replay of change notifications.

This module feeds a sequence of notifications through a coordinator one at a
time, the way a host would deliver them, and tallies the outcome statuses. It
is non-interactive and is used by the CLI to replay recorded events or to
preview a configuration against them in dry-run mode.
"""
from collections import Counter
from typing import Iterable

from tqdm import tqdm

from metarenamer.models import ItemChangedNotification
from metarenamer.rename.core import RenameCoordinator
from metarenamer.utils import LogLevel, logger
from metarenamer.utils.config import RenameConfig
from metarenamer.utils.constants import STATUS_SKIP


def replay_events(
        coordinator: RenameCoordinator,
        events: Iterable[ItemChangedNotification | Exception],
        config: RenameConfig,
        progress: bool = True,
) -> Counter:
    """Replay ``events`` through ``coordinator`` and count outcome statuses.

    Entries of ``events`` that are exceptions stand for records that could not
    be parsed; they are logged and counted as skipped.

    Args:
        coordinator (RenameCoordinator): Coordinator that handles each event.
        events (Iterable): Notifications in delivery order.
        config (RenameConfig): Snapshot used for every event.
        progress (bool): Show a progress bar.

    Returns:
        Counter: Status code -> number of events with that outcome.
    """
    totals: Counter = Counter()
    for index, event in enumerate(tqdm(events, desc="Replaying events", disable=not progress), start=1):
        if isinstance(event, Exception):
            logger.log("batch.invalid", LogLevel.WARN, record=index, error=str(event))
            totals[STATUS_SKIP] += 1
            continue
        result = coordinator.handle_item_changed(event, config)
        totals[result.status] += 1

    logger.log("batch.summary", LogLevel.INFO, events=sum(totals.values()), **{k.lower(): v for k, v in totals.items()})
    return totals
