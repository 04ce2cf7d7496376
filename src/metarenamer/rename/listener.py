"""Host-facing adapter that feeds change notifications into a coordinator."""
import threading
from typing import Callable

from metarenamer.models import ItemChangedNotification, RenameResult
from metarenamer.rename.core import RenameCoordinator
from metarenamer.utils import LogLevel, logger
from metarenamer.utils.config import RenameConfig
from metarenamer.utils.constants import STATUS_FAIL, STATUS_SKIP


class ItemChangedListener:
    """
    Forwards notifications to a coordinator with a fresh configuration snapshot.

    The host subscribes ``on_item_changed`` to its item-updated event and calls
    ``dispose()`` when unloading. After dispose, notifications that are still
    in flight are ignored and the coordinator's memory is cleared.
    """

    def __init__(self, coordinator: RenameCoordinator, config_provider: Callable[[], RenameConfig]):
        self.coordinator = coordinator
        self._config_provider = config_provider
        self._dispose_lock = threading.Lock()
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def on_item_changed(self, event: ItemChangedNotification) -> RenameResult:
        if self._disposed:
            logger.log("listener.skip", LogLevel.DEBUG, reason="disposed")
            return RenameResult(STATUS_SKIP, reason="listener disposed")

        try:
            config = self._config_provider()
        except Exception as e:
            logger.log("listener.error", LogLevel.ERROR, stage="config", error_type=type(e).__name__, error=str(e))
            return RenameResult(STATUS_FAIL, reason=f"configuration unavailable: {e}")

        return self.coordinator.handle_item_changed(event, config)

    def dispose(self) -> None:
        with self._dispose_lock:
            if self._disposed:
                return
            self._disposed = True
        self.coordinator.clear_state()
        logger.log("listener.disposed", LogLevel.INFO)
