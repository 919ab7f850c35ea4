"""Shared constants across the application"""


class MatchConstants:
    """Constants for word marker detection"""

    # First capture group is the word itself, e.g. "[[wisdom]] /ˈwɪzdəm/"
    DEFAULT_WORD_PATTERN = r"^\[\[([A-Za-z-']+)\]\]"


class BlockConstants:
    """Constants for the inline audio block markup"""

    LANGUAGE_TAG = "word-audio"
    FENCE = "```"
    OPEN_MARKER = FENCE + LANGUAGE_TAG
    CLOSE_MARKER = FENCE
    BLOCK_TEMPLATE = "{open}\n{word}\n{close}"
    BLOCK_LINE_COUNT = 3

    # Lines searched after a word occurrence, including the word line itself
    SCAN_HORIZON = 20
    # Lines inspected after an open marker when looking for the word
    BODY_LOOKAHEAD = 4

    # Flashcard layout: the answer follows a "?" line, sections end at "---"
    ANSWER_DIVIDER = "?"
    SECTION_DIVIDER = "---"


class AudioConstants:
    """Constants for audio resolution and downloading"""

    WORD_PLACEHOLDER = "{{word}}"
    DEFAULT_ONLINE_TEMPLATE = "https://dict.youdao.com/dictvoice?audio={{word}}&type=2"
    DEFAULT_CACHE_DIR = ".plugins-data/auto-word-audio"
    AUDIO_EXTENSION = "mp3"

    # Characters encodeURIComponent leaves untouched besides alphanumerics
    URL_SAFE_CHARS = "-_.!~*'()"

    DOWNLOAD_DELAY_SECONDS = 0.2

    AUDIO_USER_AGENT = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) " "AppleWebKit/537.36"
    )


class SyncConstants:
    """Constants for periodic synchronization"""

    DEFAULT_INTERVAL_MINUTES = 30
    INTERVAL_RANGE = (5, 180)

    DEFAULT_MAX_DOWNLOADS_PER_RUN = 30
    MAX_DOWNLOADS_RANGE = (5, 200)

    MARKDOWN_SUFFIX = ".md"


def build_block(word: str) -> str:
    """Render the inline audio block for a word"""
    return BlockConstants.BLOCK_TEMPLATE.format(
        open=BlockConstants.OPEN_MARKER, word=word, close=BlockConstants.CLOSE_MARKER
    )
