"""Budgeted download of missing pronunciation audio into the local cache"""

import threading
import time
from collections.abc import Callable

from ..config.settings import SyncSettings
from ..exceptions import (
    ConfigurationError,
    HTTPStatusError,
    StorageError,
    TransportError,
)
from ..logging_config import get_logger
from ..models.result_models import SyncReport
from .audio_resolver import build_local_path, build_online_url
from .interfaces import StorageInterface, TransportInterface

logger = get_logger(__name__)


class CacheSynchronizer:
    """Makes sure each word has a cached audio file, within a per-run budget.

    Existing files are never re-downloaded and do not count against the
    budget. Failed downloads are counted and left for a later run. Only one
    run executes at a time; an overlapping call returns immediately with
    ``busy`` set.
    """

    def __init__(
        self,
        settings_provider: Callable[[], SyncSettings],
        storage: StorageInterface,
        transport: TransportInterface,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._settings = settings_provider
        self.storage = storage
        self.transport = transport
        self._sleep = sleep
        self._run_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._run_lock.locked()

    def _ensure_cache_dir(self, cache_dir: str) -> None:
        if not cache_dir:
            raise ConfigurationError("cache_dir", cache_dir, "Cache directory cannot be empty")
        try:
            if not self.storage.exists(cache_dir):
                self.storage.create_folder(cache_dir)
                logger.info(f"Created directory: {cache_dir}")
        except OSError as e:
            raise StorageError("create_folder", cache_dir, e) from e

    def _fetch(self, url: str) -> bytes:
        """Fetch one file; raises TransportError unless the status is 2xx"""
        response = self.transport.get(url)
        if not response.ok:
            raise HTTPStatusError(url, response.status)
        return response.content

    def _write(self, target: str, data: bytes) -> None:
        try:
            self.storage.write_binary(target, data)
        except OSError as e:
            raise StorageError("write_binary", target, e) from e

    def sync_with_report(self, words: list[str]) -> SyncReport:
        """Download missing audio for `words` and report what happened"""
        if not self._run_lock.acquire(blocking=False):
            logger.info("A sync run is already in progress, skipping this one")
            return SyncReport(busy=True)
        try:
            return self._run(words)
        finally:
            self._run_lock.release()

    def sync(self, words: list[str]) -> int:
        """Download missing audio and return the number of new files"""
        return self.sync_with_report(words).downloaded

    def _run(self, words: list[str]) -> SyncReport:
        cfg = self._settings()
        cache_dir = cfg.cache_dir.rstrip("/")
        logger.debug(f"Download target directory: {cache_dir}")
        self._ensure_cache_dir(cache_dir)

        report = SyncReport()
        for index, word in enumerate(words):
            if report.downloaded >= cfg.max_downloads_per_run:
                report.deferred = len(words) - index
                logger.info(
                    f"Reached max downloads limit ({cfg.max_downloads_per_run}), "
                    f"deferring {report.deferred} words"
                )
                break

            target = build_local_path(cache_dir, word, cfg.audio_extension)
            try:
                exists = self.storage.exists(target)
            except OSError as e:
                raise StorageError("exists", target, e) from e
            if exists:
                report.skipped += 1
                logger.debug(f"Skipping '{word}' - file exists")
                continue

            url = build_online_url(cfg.online_template, word)
            try:
                logger.debug(f"Downloading '{word}' from {url}")
                data = self._fetch(url)
            except TransportError as e:
                report.failed += 1
                report.failed_words.append(word)
                logger.debug(f"Failed to download '{word}': {e}")
                continue

            self._write(target, data)

            report.downloaded += 1
            logger.info(f"({report.downloaded}) Downloaded '{word}' to {target}")
            # Rate limiting
            self._sleep(cfg.download_delay)

        logger.info(f"Download summary - {report.summary()}")
        if report.failed_words:
            logger.warning(f"Failed words: {', '.join(report.failed_words)}")
        return report
