"""Resolution of words to playable audio sources"""

import re
from collections.abc import Callable
from urllib.parse import quote

from ..config.settings import SyncSettings
from ..exceptions import StorageError
from ..logging_config import get_logger
from .constants import AudioConstants
from .interfaces import StorageInterface

logger = get_logger(__name__)

_SLASHES_RE = re.compile(r"/+")


def build_online_url(template: str, word: str) -> str:
    """Substitute the percent-encoded word into the URL template"""
    encoded = quote(word, safe=AudioConstants.URL_SAFE_CHARS)
    return template.replace(AudioConstants.WORD_PLACEHOLDER, encoded, 1)


def build_local_path(cache_dir: str, word: str, extension: str) -> str:
    """Canonical cache path for a word; the word is used verbatim"""
    return _SLASHES_RE.sub("/", f"{cache_dir}/{word}.{extension}")


class AudioResolver:
    """Maps a word to a local cached file or to its online URL"""

    def __init__(
        self,
        settings_provider: Callable[[], SyncSettings],
        storage: StorageInterface,
    ):
        self._settings = settings_provider
        self.storage = storage

    def online_url(self, word: str) -> str:
        return build_online_url(self._settings().online_template, word)

    def local_path(self, word: str) -> str:
        cfg = self._settings()
        return build_local_path(cfg.cache_dir, word, cfg.audio_extension)

    def _local_resource(self, word: str) -> str | None:
        path = self.local_path(word)
        try:
            if not self.storage.exists(path):
                return None
            resource = self.storage.resource_path(path)
            if resource:
                logger.debug(f"Using local file (adapter) for '{word}': {resource}")
                return resource
            resource = self.storage.indexed_resource_path(path)
            if resource:
                logger.debug(f"Using local file (index) for '{word}': {resource}")
                return resource
            logger.warning(
                f"Local file exists but could not be resolved for '{word}' at {path}"
            )
        except (StorageError, OSError) as e:
            logger.warning(f"Error checking local file for '{word}': {e}")
        return None

    def resolve(self, word: str) -> str:
        """Return a playable source for the word; never raises.

        Storage is only consulted when local playback is preferred.
        """
        if self._settings().prefer_local:
            resource = self._local_resource(word)
            if resource:
                return resource

        url = self.online_url(word)
        logger.debug(f"Using online URL for '{word}': {url}")
        return url

    def resolve_many(self, words: list[str]) -> dict[str, str]:
        """Resolve several words, preserving their order"""
        return {word: self.resolve(word) for word in words}
