"""Periodic background synchronization of the active document's audio"""

import threading
from collections.abc import Callable
from enum import Enum

from ..config.settings import SyncSettings
from ..logging_config import get_logger
from ..utils.error_handler import handle_errors
from .cache_synchronizer import CacheSynchronizer
from .interfaces import WorkspaceInterface
from .word_matcher import WordMatcher

logger = get_logger(__name__)


class SchedulerState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    TERMINATED = "terminated"


class _RecurringTimer(threading.Thread):
    """Daemon thread calling `callback` every `interval` seconds until cancelled"""

    def __init__(self, interval: float, callback: Callable[["_RecurringTimer"], None]):
        super().__init__(name="word-audio-sync", daemon=True)
        self.interval = interval
        self._callback = callback
        self._stopped = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def cancel(self) -> None:
        self._stopped.set()

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            self._callback(self)


class SyncScheduler:
    """Idle/Active state machine around one recurring sync timer.

    Any change of interval or enablement tears the timer down and arms a
    fresh one. `shutdown` is final. Each firing re-reads the active
    document and the current settings.
    """

    def __init__(
        self,
        workspace: WorkspaceInterface,
        synchronizer: CacheSynchronizer,
        settings_provider: Callable[[], SyncSettings],
        notify: Callable[[str], None] | None = None,
        seconds_per_minute: float = 60.0,
    ):
        self.workspace = workspace
        self.synchronizer = synchronizer
        self._settings = settings_provider
        self._notify = notify
        self._seconds_per_minute = seconds_per_minute
        self._lock = threading.RLock()
        self._state = SchedulerState.IDLE
        self._handle: _RecurringTimer | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def interval_seconds(self) -> float | None:
        handle = self._handle
        return handle.interval if handle else None

    def _teardown(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._state is SchedulerState.ACTIVE:
            self._state = SchedulerState.IDLE

    def enable(self, interval_minutes: int) -> None:
        """Arm the recurring trigger, replacing any existing one"""
        with self._lock:
            if self._state is SchedulerState.TERMINATED:
                logger.warning("Scheduler has been shut down; ignoring enable")
                return
            self._teardown()
            interval = max(1, interval_minutes) * self._seconds_per_minute
            self._handle = _RecurringTimer(interval, self._fire)
            self._handle.start()
            self._state = SchedulerState.ACTIVE
            logger.info(f"Periodic sync enabled every {interval_minutes} minutes")

    def reconfigure(self, interval_minutes: int) -> None:
        """Restart the trigger with a new interval"""
        self.enable(interval_minutes)

    def disable(self) -> None:
        with self._lock:
            if self._state is SchedulerState.ACTIVE:
                logger.info("Periodic sync disabled")
            self._teardown()

    def shutdown(self) -> None:
        """Cancel the trigger for good; safe to call more than once.

        Waits for the timer thread to finish unless called from it.
        """
        with self._lock:
            handle = self._handle
            self._teardown()
            self._state = SchedulerState.TERMINATED
        if handle is not None and handle is not threading.current_thread():
            handle.join()

    def apply_settings(self, settings: SyncSettings) -> None:
        """Bring the timer in line with the given settings"""
        if settings.periodic_sync_enabled:
            self.reconfigure(settings.sync_interval_minutes)
        else:
            self.disable()

    def start(self) -> None:
        """Arm the timer at startup if periodic sync was left enabled"""
        self.apply_settings(self._settings())

    @handle_errors(default_return=0, operation_name="periodic_sync")
    def tick(self) -> int:
        """Run one sync pass over the active document"""
        document = self.workspace.active_document()
        if document is None:
            return 0

        matcher = WordMatcher(self._settings().word_pattern)
        words = matcher.collect_words(document.get_value())
        if not words:
            return 0
        return self.synchronizer.sync(words)

    def _fire(self, handle: _RecurringTimer) -> None:
        count = self.tick()
        if handle.cancelled:
            logger.debug("Discarding result of a sync run whose timer was cancelled")
            return
        if count > 0:
            message = f"Background sync finished: downloaded {count} audio files"
            logger.info(message)
            if self._notify:
                self._notify(message)
