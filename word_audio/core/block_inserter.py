"""Insertion of audio blocks next to word occurrences"""

import re

from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from ..models.result_models import AnnotationResult
from ..models.word_models import InsertOutcome, Position
from .block_detector import BlockDetector
from .constants import BlockConstants, build_block
from .interfaces import DocumentInterface
from .word_matcher import WordMatcher

logger = get_logger(__name__)


class BlockInserter:
    """Adds an audio block after a word when none exists yet"""

    def __init__(self, matcher: WordMatcher, detector: BlockDetector | None = None):
        self.matcher = matcher
        self.detector = detector or BlockDetector(matcher)

    @staticmethod
    def block_for(word: str) -> str:
        """Render the block for a word, enforcing its fixed line count"""
        block = build_block(word)
        if block.count("\n") + 1 != BlockConstants.BLOCK_LINE_COUNT:
            raise ConfigurationError(
                "word_pattern",
                word,
                f"Audio block must span exactly {BlockConstants.BLOCK_LINE_COUNT} lines",
            )
        return block

    def insert_for_word(
        self, document: DocumentInterface, word: str, line: int
    ) -> InsertOutcome:
        """Insert a block for the word on `line` unless one is already nearby.

        The block goes after the answer divider when one follows the word,
        otherwise directly after the word line. A blank target line is
        replaced by the block; any other line is pushed down.
        """
        scan = self.detector.scan(document, word, line)
        if scan.present:
            return InsertOutcome(inserted=False)

        block = self.block_for(word)
        target = scan.divider_line + 1 if scan.has_divider else line + 1
        total = document.line_count()

        if target >= total:
            last = total - 1
            last_text = document.get_line(last) or ""
            document.replace_range("\n" + block, Position(last, len(last_text)))
            target = total
        else:
            target_text = document.get_line(target) or ""
            if target_text.strip() == "":
                document.replace_range(
                    block, Position(target, 0), Position(target, len(target_text))
                )
            else:
                document.replace_range(block + "\n", Position(target, 0))

        logger.debug(f"Inserted block for '{word}' at line {target}")
        return InsertOutcome(inserted=True, line=target)

    def annotate_line(self, document: DocumentInterface, line: int) -> AnnotationResult:
        """Annotate the word on a single line, if that line holds one"""
        result = AnnotationResult()
        match = self.matcher.match_line(document.get_line(line) or "", line)
        if not match:
            logger.info(f"No word found on line {line + 1}")
            return result

        outcome = self.insert_for_word(document, match.word, line)
        if outcome.inserted:
            result.inserted += 1
            result.inserted_words.append(match.word)
        else:
            result.skipped += 1
        return result

    def annotate_document(self, document: DocumentInterface) -> AnnotationResult:
        """Annotate the first occurrence of every word in the buffer.

        The line count is re-read on every step because insertions grow the
        buffer. After an insertion the cursor jumps past the new block.
        """
        result = AnnotationResult()
        processed: set[str] = set()
        cursor = 0

        while cursor < document.line_count():
            match = self.matcher.match_line(document.get_line(cursor) or "", cursor)
            if match and match.word not in processed:
                processed.add(match.word)
                outcome = self.insert_for_word(document, match.word, cursor)
                if outcome.inserted and outcome.line is not None:
                    result.inserted += 1
                    result.inserted_words.append(match.word)
                    cursor = outcome.line + BlockConstants.BLOCK_LINE_COUNT
                    continue
                result.skipped += 1
            cursor += 1

        logger.info(
            f"Processed {len(processed)} unique words: "
            f"{result.inserted} inserted, {result.skipped} skipped"
        )
        return result

    def annotate_text(self, content: str) -> tuple[str, AnnotationResult]:
        """Annotate immutable file content by pattern replacement.

        Only the "word line, answer divider" layout is rewritten; words laid
        out any other way are left alone. The original string is returned
        untouched when nothing was replaced.
        """
        result = AnnotationResult()
        occurrences: dict[str, str] = {}
        for match in self.matcher.iter_matches(content):
            occurrences.setdefault(match.word, match.raw)

        new_content = content
        divider = re.escape(BlockConstants.ANSWER_DIVIDER)
        for word, raw in occurrences.items():
            existing = re.compile(
                rf"{re.escape(BlockConstants.OPEN_MARKER)}\s*\n\s*{re.escape(word)}"
                rf"\s*\n\s*{re.escape(BlockConstants.CLOSE_MARKER)}"
            )
            if existing.search(new_content):
                logger.debug(f"Skipping '{word}': block already present")
                result.skipped += 1
                continue

            block = self.block_for(word)
            layout = re.compile(
                rf"^({re.escape(raw)}[^\n]*)\n\s*{divider}\s*\n", re.MULTILINE
            )
            new_content, count = layout.subn(
                lambda m: f"{m.group(1)}\n{BlockConstants.ANSWER_DIVIDER}\n{block}\n",
                new_content,
                count=1,
            )
            if count:
                result.inserted += 1
                result.inserted_words.append(word)
            else:
                logger.debug(f"No answer divider layout found for '{word}'")

        if not result.inserted:
            return content, result
        return new_content, result
