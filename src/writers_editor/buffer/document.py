"""Line storage backing every text buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


def split_lines(text: str) -> List[str]:
    """Split ``text`` into lines the way a text file is read.

    Lines end at ``\\n`` or ``\\r\\n``. A final line terminator does not start
    another line, so ``"hello\\n"`` is one line. Empty text is one empty line.
    """

    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    ended = len(lines) if text.endswith("\n") else len(lines) - 1
    return [
        line[:-1] if index < ended and line.endswith("\r") else line
        for index, line in enumerate(lines)
    ]


@dataclass(slots=True)
class Document:
    """Mutable list-of-lines model; never holds zero lines."""

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(_lines=split_lines(text))

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def restore(self, lines: Iterable[str]) -> None:
        """Replace every line at once (history restore, load)."""

        self._lines = list(lines) or [""]
        self.version += 1

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def has_line(self, row: int) -> bool:
        return 0 <= row < len(self._lines)

    def get_line(self, row: int) -> str:
        if not self.has_line(row):
            return ""
        return self._lines[row]

    def line_length(self, row: int) -> int:
        return len(self.get_line(row))

    def set_line(self, row: int, text: str) -> None:
        self._lines[row] = text
        self.version += 1

    def insert_line(self, row: int, text: str) -> None:
        self._lines.insert(row, text)
        self.version += 1

    def append_line(self, text: str = "") -> None:
        self._lines.append(text)
        self.version += 1

    def pop_line(self, row: int) -> str:
        removed = self._lines.pop(row)
        if not self._lines:
            self._lines.append("")
        self.version += 1
        return removed

    def text(self) -> str:
        return "\n".join(self._lines)
