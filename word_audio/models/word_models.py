"""Word occurrence and document position models"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A line/column coordinate inside a document"""

    line: int
    ch: int = 0


@dataclass(frozen=True)
class WordMatch:
    """A word marker found in text"""

    word: str
    line: int
    offset: int
    raw: str


@dataclass(frozen=True)
class BlockScan:
    """Outcome of scanning the lines that follow a word occurrence"""

    present: bool
    divider_line: int | None = None

    @property
    def has_divider(self) -> bool:
        """Check if an answer divider was seen before the scan stopped"""
        return self.divider_line is not None


@dataclass(frozen=True)
class InsertOutcome:
    """Result of trying to attach an audio block to one word"""

    inserted: bool
    line: int | None = None
