"""Word marker detection driven by a configurable pattern"""

import re
from collections.abc import Iterator

from ..config.settings import validate_word_pattern
from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from ..models.word_models import WordMatch

logger = get_logger(__name__)


class WordMatcher:
    """Applies the configured word pattern to lines and whole documents.

    The pattern must have exactly one capturing group; its text (stripped)
    is the word. Matching is case-sensitive and performs no other
    normalization.
    """

    def __init__(self, pattern: str):
        try:
            self._regex = validate_word_pattern(pattern)
        except ValueError as e:
            raise ConfigurationError("word_pattern", pattern, str(e)) from e
        self.pattern = pattern

    def _to_match(self, m: re.Match[str], line: int) -> WordMatch | None:
        captured = m.group(1)
        word = captured.strip() if captured else ""
        if not word:
            return None
        return WordMatch(word=word, line=line, offset=m.start(), raw=m.group(0))

    def match_line(self, text: str, line: int = 0) -> WordMatch | None:
        """Match a single line, anchored at its start"""
        m = self._regex.match(text)
        return self._to_match(m, line) if m else None

    def is_word_line(self, text: str) -> bool:
        """Check if a line starts a word occurrence"""
        return self.match_line(text) is not None

    def iter_matches(self, text: str) -> Iterator[WordMatch]:
        """Yield every non-overlapping match in document order.

        Line numbers are computed incrementally so a large buffer is never
        split up front.
        """
        line = 0
        last = 0
        for m in self._regex.finditer(text):
            line += text.count("\n", last, m.start())
            last = m.start()
            match = self._to_match(m, line)
            if match:
                yield match

    def collect_words(self, text: str) -> list[str]:
        """Return the unique words of a document, in first-seen order"""
        words: dict[str, None] = {}
        for match in self.iter_matches(text):
            words.setdefault(match.word, None)
        logger.debug(f"Collected {len(words)} unique words")
        return list(words)
