"""Global actions: save, quit, history and presentation toggles."""

from __future__ import annotations

from writers_editor.context import EditorContext, ModeResult
from writers_editor.keymaps.resolver import ResolutionMatch
from writers_editor.runtime import telemetry

UNSAVED_WARNING = (
    "File has unsaved changes. Press Ctrl+Q again to quit without saving, "
    "or Ctrl+S to save first"
)


def _status(context: EditorContext, message: str, *, status: str = "ok") -> ModeResult:
    context.state.status_message = message
    return ModeResult(consumed=True, status=status, message=message)


def save_document(
    context: EditorContext, match: ResolutionMatch | None = None
) -> ModeResult:
    """Write the buffer to the bound path.

    A failed write leaves the document dirty and reports through the status
    message; the session keeps running.
    """

    del match
    state = context.state
    if not state.path:
        return _status(context, "No file path set", status="no_path")

    try:
        with telemetry.span(
            "session::save", component="session", metadata={"path": state.path}
        ):
            context.store.write(state.path, context.buffer.to_text())
    except OSError as exc:
        telemetry.record_event(
            "session.save_failed",
            level="error",
            data={"path": state.path, "error": str(exc)},
        )
        return _status(context, f"Save failed: {exc}", status="save_error")

    state.dirty = False
    state.saved = True
    context.bus.emit("session.saved", state.path)
    return _status(context, f"Saved: {state.path}", status="saved")


def quit_editor(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    if state.dirty and not context.flags.get("chord", False):
        return _status(context, UNSAVED_WARNING, status="unsaved")

    state.should_quit = True
    context.bus.emit("session.quit", state.dirty)
    return ModeResult(consumed=True, status="quit")


def undo(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.buffer.undo():
        return _status(context, "Nothing to undo")
    context.state.dirty = True
    context.cursor.clamp_to_buffer(context.buffer)
    context.bus.emit("buffer.changed", "undo")
    return _status(context, "Undo", status="edit")


def redo(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.buffer.redo():
        return _status(context, "Nothing to redo")
    context.state.dirty = True
    context.cursor.clamp_to_buffer(context.buffer)
    context.bus.emit("buffer.changed", "redo")
    return _status(context, "Redo", status="edit")


def _on_off(value: bool) -> str:
    return "ON" if value else "OFF"


def toggle_typewriter(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    state.typewriter = not state.typewriter
    return _status(context, f"Typewriter mode: {_on_off(state.typewriter)}")


def toggle_distraction_free(
    context: EditorContext, match: ResolutionMatch
) -> ModeResult:
    del match
    state = context.state
    state.distraction_free = not state.distraction_free
    return _status(
        context, f"Distraction-free mode: {_on_off(state.distraction_free)}"
    )


def start_search(context: EditorContext, match: ResolutionMatch) -> ModeResult:
    # Search entry only announces itself; there is no prompt yet.
    del match
    context.state.search_term = ""
    return _status(context, "Search: ")


__all__ = [
    "UNSAVED_WARNING",
    "redo",
    "save_document",
    "quit_editor",
    "start_search",
    "toggle_distraction_free",
    "toggle_typewriter",
    "undo",
]
