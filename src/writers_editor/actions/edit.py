"""Actions that mutate the document.

Each one delegates to ``TextBuffer``, marks the session dirty when the
document version moved, clamps the cursor and emits ``buffer.changed``.
"""

from __future__ import annotations

from writers_editor.context import EditorContext, ModeResult
from writers_editor.keymaps.resolver import ResolutionMatch


def _finish(context: EditorContext, version_before: int, label: str) -> ModeResult:
    changed = context.buffer.version != version_before
    if changed:
        context.state.dirty = True
    context.cursor.clamp_to_buffer(context.buffer)
    if changed:
        context.bus.emit("buffer.changed", label)
    return ModeResult(consumed=True, status="edit" if changed else "ok", message=label)


def _insert(context: EditorContext, text: str, label: str) -> ModeResult:
    before = context.buffer.version
    cursor = context.cursor
    context.buffer.insert_char(cursor.row, cursor.col, text)
    cursor.col += len(text)
    cursor.preferred_col = cursor.col
    return _finish(context, before, label)


def insert_text(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    text = match.stroke.text or ""
    if text in ("\r", "\n"):
        return insert_newline(context, match)
    if not text:
        return ModeResult(consumed=False, status="miss")
    return _insert(context, text, "insert_text")


def insert_tab(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _insert(context, " " * context.settings.tab_width, "insert_tab")


def insert_newline(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    before = context.buffer.version
    cursor = context.cursor
    context.buffer.insert_newline(cursor.row, cursor.col)
    cursor.row += 1
    cursor.col = 0
    cursor.preferred_col = 0
    return _finish(context, before, "insert_newline")


def backspace(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    """Delete left of the cursor, joining into the previous line at column 0."""

    del match
    buffer = context.buffer
    cursor = context.cursor
    before = buffer.version
    if cursor.col > 0:
        buffer.delete_char(cursor.row, cursor.col - 1)
        cursor.col -= 1
        cursor.preferred_col = cursor.col
    elif cursor.row > 0:
        join_col = buffer.line_length(cursor.row - 1)
        buffer.join_lines(cursor.row - 1)
        cursor.row -= 1
        cursor.col = join_col
        cursor.preferred_col = join_col
    return _finish(context, before, "backspace")


def delete_forward(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    """Delete under the cursor; at the end of a line pull the next line up."""

    del match
    buffer = context.buffer
    cursor = context.cursor
    before = buffer.version
    if cursor.col < buffer.line_length(cursor.row):
        buffer.delete_char(cursor.row, cursor.col)
    else:
        buffer.join_lines(cursor.row)
    return _finish(context, before, "delete_forward")


def delete_line(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    before = context.buffer.version
    context.buffer.delete_line(context.cursor.row)
    return _finish(context, before, "delete_line")


__all__ = [
    "backspace",
    "delete_forward",
    "delete_line",
    "insert_newline",
    "insert_tab",
    "insert_text",
]
