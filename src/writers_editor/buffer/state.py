"""Cursor position and motion semantics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .buffer import TextBuffer

Position = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class Cursor:
    """(row, col) plus the sticky column used by vertical motion.

    The cursor only reads buffer geometry. Motions that would leave the
    document are no-ops; ``clamp_to_buffer`` repairs the position after the
    buffer changed underneath it.
    """

    row: int = 0
    col: int = 0
    preferred_col: int = 0

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    def _set_col(self, col: int) -> None:
        self.col = col
        self.preferred_col = col

    def move_left(self) -> None:
        if self.col > 0:
            self._set_col(self.col - 1)

    def move_right(self, buffer: "TextBuffer") -> None:
        if self.col < buffer.line_length(self.row):
            self._set_col(self.col + 1)

    def move_up(self, buffer: "TextBuffer") -> None:
        if self.row > 0:
            self.row -= 1
            self.col = min(self.preferred_col, buffer.line_length(self.row))

    def move_down(self, buffer: "TextBuffer") -> None:
        if self.row < buffer.line_count - 1:
            self.row += 1
            self.col = min(self.preferred_col, buffer.line_length(self.row))

    def move_to_start_of_line(self) -> None:
        self._set_col(0)

    def move_to_end_of_line(self, buffer: "TextBuffer") -> None:
        self._set_col(buffer.line_length(self.row))

    def move_to_start_of_document(self) -> None:
        self.row = 0
        self._set_col(0)

    def move_to_end_of_document(self, buffer: "TextBuffer") -> None:
        self.row = buffer.line_count - 1
        self._set_col(buffer.line_length(self.row))

    def move_to(self, row: int, col: int, buffer: "TextBuffer") -> None:
        self.row = max(0, min(row, buffer.line_count - 1))
        self._set_col(max(0, min(col, buffer.line_length(self.row))))

    def word_right(self, buffer: "TextBuffer") -> None:
        line = buffer.get_line(self.row)
        if self.col >= len(line):
            if self.row < buffer.line_count - 1:
                self.row += 1
                self._set_col(0)
            return

        pos = self.col
        while pos < len(line) and not line[pos].isspace():
            pos += 1
        while pos < len(line) and line[pos].isspace():
            pos += 1
        self._set_col(pos)

    def word_left(self, buffer: "TextBuffer") -> None:
        line = buffer.get_line(self.row)
        col = min(self.col, len(line))
        if col == 0:
            if self.row > 0:
                self.row -= 1
                self._set_col(buffer.line_length(self.row))
            else:
                self._set_col(0)
            return

        pos = col
        while pos > 0 and line[pos - 1].isspace():
            pos -= 1
        while pos > 0 and not line[pos - 1].isspace():
            pos -= 1
        self._set_col(pos)

    def clamp_to_buffer(self, buffer: "TextBuffer") -> None:
        self.row = max(0, min(self.row, buffer.line_count - 1))
        self._set_col(max(0, min(self.col, buffer.line_length(self.row))))
