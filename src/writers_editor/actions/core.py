"""Mode-switching actions."""

from __future__ import annotations

from writers_editor.config import EditorMode
from writers_editor.context import EditorContext, ModeResult
from writers_editor.keymaps.resolver import ResolutionMatch

from .edit import insert_newline


def enter_insert_mode(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT.value, message="enter_insert"
    )


def append_after_cursor(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    context.cursor.move_right(context.buffer)
    return enter_insert_mode(context, match)


def open_line_below(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    context.cursor.move_to_end_of_line(context.buffer)
    insert_newline(context, match)
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT.value, message="open_line"
    )


def exit_to_navigation(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.NAVIGATION.value, message="exit_insert"
    )


__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "open_line_below",
    "exit_to_navigation",
]
