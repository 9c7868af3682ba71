"""Text buffer, cursor and undo/redo data structures."""

from .buffer import TextBuffer, Transaction
from .document import Document, split_lines
from .state import Cursor, Position
from .undo import DEFAULT_UNDO_LIMIT, UndoEntry, UndoHistory

__all__ = [
    "Cursor",
    "DEFAULT_UNDO_LIMIT",
    "Document",
    "Position",
    "TextBuffer",
    "Transaction",
    "UndoEntry",
    "UndoHistory",
    "split_lines",
]
