"""Bounded, strictly linear undo/redo history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from .state import Position

DEFAULT_UNDO_LIMIT = 100


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Full document snapshot taken before an edit."""

    label: str
    lines: Tuple[str, ...]
    cursor: Position = (0, 0)


class UndoHistory:
    """Two stacks: a bounded undo stack and a redo stack.

    Recording a new entry evicts the oldest one when the undo stack is full and
    always empties the redo stack.
    """

    def __init__(self, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._undo: Deque[UndoEntry] = deque(maxlen=limit)
        self._redo: List[UndoEntry] = []

    def record(self, entry: UndoEntry) -> None:
        self._undo.append(entry)
        self._redo.clear()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def undo(self, current: UndoEntry) -> Optional[UndoEntry]:
        """Pop the newest undo entry, parking ``current`` on the redo stack."""

        if not self._undo:
            return None
        entry = self._undo.pop()
        self._redo.append(current)
        return entry

    def redo(self, current: UndoEntry) -> Optional[UndoEntry]:
        if not self._redo:
            return None
        entry = self._redo.pop()
        self._undo.append(current)
        return entry

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
