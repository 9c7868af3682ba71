"""Cursor motions. None of these touch the document."""

from __future__ import annotations

from writers_editor.context import EditorContext, ModeResult
from writers_editor.keymaps.resolver import ResolutionMatch


def _moved() -> ModeResult:
    return ModeResult(consumed=True, status="motion")


def move_left(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_left()
    return _moved()


def move_right(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_right(context.buffer)
    return _moved()


def move_up(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_up(context.buffer)
    return _moved()


def move_down(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_down(context.buffer)
    return _moved()


def line_start(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_to_start_of_line()
    return _moved()


def line_end(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_to_end_of_line(context.buffer)
    return _moved()


def document_start(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_to_start_of_document()
    return _moved()


def document_end(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.move_to_end_of_document(context.buffer)
    return _moved()


def word_left(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.word_left(context.buffer)
    return _moved()


def word_right(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.cursor.word_right(context.buffer)
    return _moved()


def _page_size(context: EditorContext) -> int:
    return context.viewport.page_size(
        distraction_free=context.state.distraction_free
    )


def page_up(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    for _ in range(_page_size(context)):
        context.cursor.move_up(context.buffer)
    return _moved()


def page_down(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    for _ in range(_page_size(context)):
        context.cursor.move_down(context.buffer)
    return _moved()
