"""Command facade tying annotation, resolution and synchronization together"""

from collections.abc import Callable

from ..config.settings import SyncSettings
from ..exceptions import ConfigurationError, StorageError
from ..logging_config import get_logger
from ..models.result_models import AnnotationResult, FolderAnnotationResult, SyncReport
from ..utils.error_handler import ErrorCollector
from .audio_resolver import AudioResolver
from .block_inserter import BlockInserter
from .cache_synchronizer import CacheSynchronizer
from .interfaces import DocumentInterface, StorageInterface
from .word_matcher import WordMatcher

logger = get_logger(__name__)


class WordAudioService:
    """Entry point for the user-facing commands.

    A matcher is built from the current settings on every call, so a
    changed word pattern takes effect on the next command.
    """

    def __init__(
        self,
        settings_provider: Callable[[], SyncSettings],
        storage: StorageInterface,
        resolver: AudioResolver,
        synchronizer: CacheSynchronizer,
    ):
        self._settings = settings_provider
        self.storage = storage
        self.resolver = resolver
        self.synchronizer = synchronizer

    def matcher(self) -> WordMatcher:
        return WordMatcher(self._settings().word_pattern)

    def inserter(self) -> BlockInserter:
        return BlockInserter(self.matcher())

    def _download_inserted(self, result: AnnotationResult) -> AnnotationResult:
        if result.inserted_words:
            logger.info(f"Downloading audio for {len(result.inserted_words)} words...")
            result.downloaded = self.synchronizer.sync(result.inserted_words)
        return result

    # Annotation commands

    def annotate_current_line(
        self, document: DocumentInterface, line: int
    ) -> AnnotationResult:
        """Add a block for the word on `line` and fetch its audio"""
        result = self.inserter().annotate_line(document, line)
        return self._download_inserted(result)

    def annotate_document(self, document: DocumentInterface) -> AnnotationResult:
        """Add blocks for every word in the document and fetch their audio"""
        result = self.inserter().annotate_document(document)
        return self._download_inserted(result)

    def _target_files(self) -> list[str]:
        folder = self._settings().target_folder
        if not folder:
            raise ConfigurationError(
                "target_folder", folder, "Configure a target folder first"
            )
        files = self.storage.list_markdown_files(folder)
        logger.info(f"Found {len(files)} files in folder '{folder}'")
        if not files:
            logger.warning(f"Folder '{folder}' has no Markdown files, check the path")
        return files

    def annotate_folder(self) -> FolderAnnotationResult:
        """Add blocks to every note in the target folder.

        A file that cannot be read or written is recorded and skipped; the
        remaining files are still processed.
        """
        files = self._target_files()
        result = FolderAnnotationResult(files_total=len(files))
        collector = ErrorCollector()
        inserter = self.inserter()

        for path in files:
            try:
                content = self.storage.read(path)
                new_content, file_result = inserter.annotate_text(content)
                if file_result.modified:
                    self.storage.write(path, new_content)
                    result.files_modified += 1
                    logger.info(f"Inserted {file_result.inserted} blocks in {path}")
                result.merge(file_result)
            except StorageError as e:
                collector.add_error(e)

        collector.log_all(logger)
        result.errors = collector.messages()
        self._download_inserted(result)
        logger.info(
            f"Processed {result.files_modified}/{result.files_total} files: "
            f"{result.inserted} inserted, {result.skipped} skipped, "
            f"{result.downloaded} downloaded"
        )
        return result

    # Synchronization commands

    def sync_document(self, document: DocumentInterface) -> SyncReport:
        """Download missing audio for the words in a document"""
        words = self.matcher().collect_words(document.get_value())
        if not words:
            logger.info("No words found in the document")
            return SyncReport()
        logger.info(f"Starting download for {len(words)} words...")
        return self.synchronizer.sync_with_report(words)

    def collect_folder_words(self) -> list[str]:
        """Unique words across every note in the target folder"""
        matcher = self.matcher()
        collector = ErrorCollector()
        words: dict[str, None] = {}
        for path in self._target_files():
            try:
                for word in matcher.collect_words(self.storage.read(path)):
                    words.setdefault(word, None)
            except StorageError as e:
                collector.add_error(e)
        collector.log_all(logger)
        return list(words)

    def sync_folder(self) -> SyncReport:
        """Download missing audio for every word in the target folder"""
        words = self.collect_folder_words()
        logger.info(f"Found {len(words)} unique words, starting download...")
        if not words:
            return SyncReport()
        return self.synchronizer.sync_with_report(words)

    # Rendering

    def render_block(self, source: str) -> list[tuple[str, str]]:
        """Resolve the audio source of every word listed in a block body"""
        words = [w.strip() for w in source.strip().split("\n") if w.strip()]
        return [(word, self.resolver.resolve(word)) for word in words]
