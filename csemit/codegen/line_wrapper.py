"""
Soft line wrapping for emitted code.

Text after a soft wrap point is buffered until the wrapper knows whether the
line still fits in the column limit. If it does, the wrap point becomes a
single space (or nothing, for a zero-width point); otherwise it becomes a
newline followed by indentation.
"""

from enum import Enum
from typing import TextIO

from ..utils.constants import DEFAULT_COLUMN_LIMIT, DEFAULT_INDENT
from ..utils.exceptions import StructuralError


class FlushType(Enum):
    WRAP = "wrap"
    SPACE = "space"
    EMPTY = "empty"


class LineWrapper:
    """Writes text to a sink, turning pending wrap points into spaces or newlines."""

    def __init__(self, out: TextIO, indent: str = DEFAULT_INDENT, column_limit: int = DEFAULT_COLUMN_LIMIT):
        self.out = out
        self.indent = indent
        self.column_limit = column_limit
        self.last_char = ""
        self.closed = False

        self._buffer = []
        self._buffered = 0
        self._column = 0
        self._indent_level = -1
        self._next_flush = None

    def _write(self, s: str) -> None:
        if s:
            self.out.write(s)
            self.last_char = s[-1]

    def append(self, s: str) -> None:
        """Emit ``s``, wrapping any pending wrap point first if needed."""
        if self.closed:
            raise StructuralError("closed")
        if self._next_flush is not None:
            next_newline = s.find("\n")

            # s fits on the current line: buffer it and decide later
            if next_newline == -1 and self._column + len(s) <= self.column_limit:
                self._buffer.append(s)
                self._buffered += len(s)
                self._column += len(s)
                return

            wrap = next_newline == -1 or self._column + next_newline > self.column_limit
            self._flush(FlushType.WRAP if wrap else self._next_flush)

        self._write(s)
        last_newline = s.rfind("\n")
        if last_newline != -1:
            self._column = len(s) - last_newline - 1
        else:
            self._column += len(s)

    def wrapping_space(self, indent_level: int) -> None:
        """Mark a point that becomes a space, or a newline when the line overflows."""
        if self.closed:
            raise StructuralError("closed")
        if self._next_flush is not None:
            self._flush(self._next_flush)
        # The deferred space still occupies a column
        self._column += 1
        self._next_flush = FlushType.SPACE
        self._indent_level = indent_level

    def zero_width_space(self, indent_level: int) -> None:
        """Mark a point that becomes nothing, or a newline when the line overflows."""
        if self.closed:
            raise StructuralError("closed")
        if self._column == 0:
            return
        if self._next_flush is not None:
            self._flush(self._next_flush)
        self._next_flush = FlushType.EMPTY
        self._indent_level = indent_level

    def close(self) -> None:
        """Flush any pending wrap point and refuse further output."""
        if self._next_flush is not None:
            self._flush(self._next_flush)
        self.closed = True

    def _flush(self, flush_type: FlushType) -> None:
        if flush_type is FlushType.WRAP:
            self._write("\n")
            self._write(self.indent * self._indent_level)
            self._column = self._indent_level * len(self.indent) + self._buffered
        elif flush_type is FlushType.SPACE:
            self._write(" ")
        self._write("".join(self._buffer))
        self._buffer = []
        self._buffered = 0
        self._indent_level = -1
        self._next_flush = None
