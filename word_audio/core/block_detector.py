"""Detection of existing audio blocks near a word occurrence"""

from ..logging_config import get_logger
from ..models.word_models import BlockScan
from .constants import BlockConstants
from .interfaces import DocumentInterface
from .word_matcher import WordMatcher

logger = get_logger(__name__)


class BlockDetector:
    """Looks for an audio block for a word within a bounded window.

    The scan starts on the line after the word and covers at most
    SCAN_HORIZON - 1 lines. It stops early at a section divider or at the
    next word occurrence. A block beyond the window is treated as absent.
    While scanning it also records the last answer divider, which is where
    a new block should go.
    """

    def __init__(self, matcher: WordMatcher, horizon: int = BlockConstants.SCAN_HORIZON):
        self.matcher = matcher
        self.horizon = horizon

    def _block_names_word(
        self, document: DocumentInterface, open_line: int, word: str, end: int
    ) -> bool:
        last = min(open_line + 1 + BlockConstants.BODY_LOOKAHEAD, end)
        for j in range(open_line + 1, last):
            content = (document.get_line(j) or "").strip()
            if content == word:
                return True
            if content == BlockConstants.CLOSE_MARKER:
                return False
        return False

    def scan(self, document: DocumentInterface, word: str, line: int) -> BlockScan:
        """Scan the lines after `line` for a block naming `word`"""
        total = document.line_count()
        end = min(line + self.horizon, total)
        divider_line: int | None = None

        for i in range(line + 1, end):
            text = document.get_line(i) or ""
            trimmed = text.strip()

            if trimmed == BlockConstants.OPEN_MARKER and self._block_names_word(
                document, i, word, total
            ):
                logger.debug(f"Found existing block for '{word}' at line {i}")
                return BlockScan(present=True, divider_line=divider_line)

            # A block placed after this divider must stay inside the window
            if trimmed == BlockConstants.ANSWER_DIVIDER and i + 1 < line + self.horizon:
                divider_line = i

            if trimmed == BlockConstants.SECTION_DIVIDER or self.matcher.is_word_line(text):
                break

        return BlockScan(present=False, divider_line=divider_line)

    def has_block(self, document: DocumentInterface, word: str, line: int) -> bool:
        """Check if a block for `word` exists within the scan window"""
        return self.scan(document, word, line).present
