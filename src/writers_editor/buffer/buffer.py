"""Text buffer façade combining the document with its undo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, List, Optional, Sequence

from writers_editor.runtime import telemetry

from .document import Document, split_lines
from .state import Position
from .undo import DEFAULT_UNDO_LIMIT, UndoEntry, UndoHistory


class TextBuffer:
    """Ordered lines plus a bounded linear history.

    Every editing operation tolerates out-of-range rows and columns: they are
    clamped, padded or turned into no-ops, never raised.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        history: Optional[UndoHistory] = None,
        undo_limit: int = DEFAULT_UNDO_LIMIT,
    ) -> None:
        self.name = name
        self.document = document or Document()
        self.history = history or UndoHistory(limit=undo_limit)

    @classmethod
    def from_text(
        cls, text: str, *, name: str = "default", undo_limit: int = DEFAULT_UNDO_LIMIT
    ) -> "TextBuffer":
        return cls(name=name, document=Document.from_text(text), undo_limit=undo_limit)

    # -- geometry ---------------------------------------------------------

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def get_line(self, row: int) -> str:
        return self.document.get_line(row)

    def line_length(self, row: int) -> int:
        return self.document.line_length(row)

    def is_empty(self) -> bool:
        return self.line_count == 1 and not self.document.get_line(0)

    def to_text(self) -> str:
        return self.document.text()

    def load(self, content: str) -> None:
        """Replace the whole document; history does not survive a load."""

        self.document.restore(split_lines(content))
        self.history.clear()

    # -- edits ------------------------------------------------------------

    def insert_char(self, row: int, col: int, ch: str) -> None:
        row = max(0, row)
        with Transaction(self, "insert_char", (row, col)):
            doc = self.document
            while doc.line_count <= row:
                doc.append_line("")
            line = doc.get_line(row)
            col = max(0, min(col, len(line)))
            doc.set_line(row, line[:col] + ch + line[col:])

    def delete_char(self, row: int, col: int) -> None:
        line = self.document.get_line(row)
        if col < 0 or col >= len(line):
            return
        with Transaction(self, "delete_char", (row, col)):
            self.document.set_line(row, line[:col] + line[col + 1 :])

    def insert_newline(self, row: int, col: int) -> None:
        row = max(0, row)
        with Transaction(self, "insert_newline", (row, col)):
            doc = self.document
            if not doc.has_line(row):
                doc.append_line("")
                return
            line = doc.get_line(row)
            col = max(0, min(col, len(line)))
            doc.set_line(row, line[:col])
            doc.insert_line(row + 1, line[col:])

    def delete_line(self, row: int) -> None:
        if not self.document.has_line(row):
            return
        with Transaction(self, "delete_line", (row, 0)):
            self.document.pop_line(row)

    def join_lines(self, row: int) -> None:
        if row < 0 or row >= self.line_count - 1:
            return
        with Transaction(self, "join_lines", (row, 0)):
            doc = self.document
            following = doc.pop_line(row + 1)
            doc.set_line(row, doc.get_line(row) + following)

    def replace(self, search: str, replacement: str) -> int:
        """Replace ``search`` everywhere; return how many *lines* changed."""

        if not search:
            return 0
        original = self.lines
        updated = [line.replace(search, replacement) for line in original]
        changed = sum(1 for old, new in zip(original, updated) if old != new)
        if changed:
            with Transaction(self, "replace", (0, 0)):
                self.document.restore(updated)
        return changed

    # -- history ----------------------------------------------------------

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        entry = self.history.undo(self._current_entry("redo"))
        if entry is None:
            return False
        self.document.restore(entry.lines)
        telemetry.record_event(
            "buffer.undo", level="debug", data={"label": entry.label}
        )
        return True

    def redo(self) -> bool:
        entry = self.history.redo(self._current_entry("undo"))
        if entry is None:
            return False
        self.document.restore(entry.lines)
        telemetry.record_event(
            "buffer.redo", level="debug", data={"label": entry.label}
        )
        return True

    def _current_entry(self, label: str, cursor: Position = (0, 0)) -> UndoEntry:
        return UndoEntry(label=label, lines=tuple(self.lines), cursor=cursor)

    # -- queries ----------------------------------------------------------

    def find(self, term: str) -> List[Position]:
        """Every ``(row, col)`` where ``term`` starts.

        Each search resumes one character after the previous match start.
        """

        if not term:
            return []
        results: List[Position] = []
        for row, line in enumerate(self.lines):
            start = 0
            while True:
                pos = line.find(term, start)
                if pos < 0:
                    break
                results.append((row, pos))
                start = pos + 1
        return results

    def word_count(self) -> int:
        return sum(len(line.split()) for line in self.lines)

    def char_count(self) -> int:
        return sum(len(line) for line in self.lines)


class Transaction(AbstractContextManager["Transaction"]):
    """Snapshot the buffer into history, then span the mutation."""

    def __init__(self, buffer: TextBuffer, label: str, cursor: Position) -> None:
        self.buffer = buffer
        self.label = label
        self.cursor = cursor
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self.buffer.history.record(
            self.buffer._current_entry(self.label, self.cursor)
        )
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "cursor": self.cursor},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
