"""In-memory text buffer implementing the document interface"""

from ..models.word_models import Position
from .interfaces import DocumentInterface


class TextDocument(DocumentInterface):
    """Line-addressed string buffer with editor-style range replacement"""

    def __init__(self, text: str = ""):
        self._lines = text.split("\n")

    def get_line(self, line: int) -> str | None:
        if 0 <= line < len(self._lines):
            return self._lines[line]
        return None

    def line_count(self) -> int:
        return len(self._lines)

    def get_value(self) -> str:
        return "\n".join(self._lines)

    def _offset(self, pos: Position) -> int:
        """Convert a position to a string offset, clamping like an editor"""
        line = min(max(pos.line, 0), len(self._lines) - 1)
        ch = min(max(pos.ch, 0), len(self._lines[line]))
        return sum(len(text) + 1 for text in self._lines[:line]) + ch

    def replace_range(
        self, text: str, start: Position, end: Position | None = None
    ) -> None:
        value = self.get_value()
        begin = self._offset(start)
        finish = self._offset(end) if end is not None else begin
        if finish < begin:
            begin, finish = finish, begin
        self._lines = (value[:begin] + text + value[finish:]).split("\n")
