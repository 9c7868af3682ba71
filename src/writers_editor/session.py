"""Editor session: owns the document, cursor, modes and presentation state.

``EditorSession`` is host-agnostic. A terminal host feeds it ``KeyInput``
events, resize notifications and idle ticks, and paints the ``Frame``
returned by ``render``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from writers_editor.actions.session import save_document
from writers_editor.buffer import Cursor, TextBuffer
from writers_editor.config import MODE_CONFIGS, EditorMode, EditorSettings
from writers_editor.context import (
    EditorContext,
    KeyInput,
    ModeBus,
    ModeResult,
    SessionState,
)
from writers_editor.modes import InsertMode, ModeManager, NavigationMode
from writers_editor.runtime import telemetry
from writers_editor.screen import Frame, Viewport, compose_frame
from writers_editor.storage import FileStore, TextStore


class TerminalRequiredError(RuntimeError):
    """Raised when the editor is launched without an interactive terminal."""


@dataclass(frozen=True, slots=True)
class SessionOutcome:
    """What the caller learns once the session ends."""

    path: Optional[str]
    dirty: bool
    saved: bool
    message: str = ""


class EditorSession:
    def __init__(
        self,
        *,
        path: Optional[str] = None,
        text: str = "",
        settings: Optional[EditorSettings] = None,
        store: Optional[TextStore] = None,
        status_message: str = "Ready",
    ) -> None:
        self.settings = settings or EditorSettings()
        buffer = TextBuffer(name=path or "scratch", undo_limit=self.settings.undo_limit)
        buffer.load(text)
        self.context = EditorContext(
            buffer=buffer,
            cursor=Cursor(),
            viewport=Viewport(chrome_rows=self.settings.chrome_rows),
            state=SessionState(
                path=path,
                status_message=status_message,
                typewriter=self.settings.typewriter,
                distraction_free=self.settings.distraction_free,
                line_numbers=self.settings.line_numbers,
            ),
            settings=self.settings,
            store=store or FileStore(),
            bus=ModeBus(),
        )
        self.modes = ModeManager(self.context)
        self.modes.register_mode(NavigationMode)
        self.modes.register_mode(InsertMode)
        self._autosaved_at: Optional[float] = None

    @classmethod
    def open(
        cls,
        path: Optional[str] = None,
        *,
        settings: Optional[EditorSettings] = None,
        store: Optional[TextStore] = None,
    ) -> "EditorSession":
        """Start a session on ``path``.

        A missing file gives an empty document bound to the path. Read and
        decode errors propagate.
        """

        store = store or FileStore()
        if path is None:
            return cls(settings=settings, store=store)

        with telemetry.span(
            "session::open", component="session", metadata={"path": path}
        ) as handle:
            if store.exists(path):
                text = store.read(path)
                message = f"Opened: {path}"
                handle.add_metadata("status", "opened")
            else:
                text = ""
                message = f"New file: {path}"
                handle.add_metadata("status", "new")
        return cls(
            path=path, text=text, settings=settings, store=store, status_message=message
        )

    # -- state ------------------------------------------------------------

    @property
    def buffer(self) -> TextBuffer:
        return self.context.buffer

    @property
    def cursor(self) -> Cursor:
        return self.context.cursor

    @property
    def state(self) -> SessionState:
        return self.context.state

    @property
    def bus(self) -> ModeBus:
        return self.context.bus

    @property
    def mode(self) -> str:
        active = self.modes.active_mode
        return active.name if active else EditorMode.NAVIGATION.value

    @property
    def mode_label(self) -> str:
        return MODE_CONFIGS[EditorMode(self.mode)].label

    @property
    def dirty(self) -> bool:
        return self.state.dirty

    @property
    def should_quit(self) -> bool:
        return self.state.should_quit

    @property
    def text(self) -> str:
        return self.buffer.to_text()

    # -- events -----------------------------------------------------------

    def handle_key(self, key: KeyInput, *, now: Optional[float] = None) -> ModeResult:
        return self.modes.handle_key(key, now=now)

    def handle_resize(self, width: int, height: int) -> None:
        self.context.viewport.resize(width, height)

    def tick(self, *, now: Optional[float] = None) -> bool:
        """Idle hook run between events; returns whether the session is over.

        With ``autosave_interval_ms`` set, a dirty document bound to a path is
        saved once that long has passed since the previous autosave check.
        """

        self._autosave(time.monotonic() if now is None else now)
        return self.state.should_quit

    def _autosave(self, now: float) -> None:
        interval_ms = self.settings.autosave_interval_ms
        if interval_ms <= 0 or self.state.should_quit:
            return
        if self._autosaved_at is None:
            self._autosaved_at = now
            return
        if (now - self._autosaved_at) * 1000.0 < interval_ms:
            return

        self._autosaved_at = now
        state = self.state
        if not (state.dirty and state.path):
            return
        result = save_document(self.context)
        telemetry.record_event(
            "session.autosave", data={"path": state.path, "status": result.status}
        )

    def save(self) -> ModeResult:
        return save_document(self.context)

    def render(self) -> Frame:
        state = self.state
        return compose_frame(
            buffer=self.buffer,
            cursor=self.cursor,
            viewport=self.context.viewport,
            mode_label=self.mode_label,
            path=state.path,
            dirty=state.dirty,
            message=state.status_message,
            typewriter=state.typewriter,
            distraction_free=state.distraction_free,
            line_numbers=state.line_numbers,
            gutter_width=self.settings.gutter_width,
            word_count=self.settings.word_count,
        )

    def outcome(self) -> SessionOutcome:
        state = self.state
        return SessionOutcome(
            path=state.path,
            dirty=state.dirty,
            saved=state.saved,
            message=state.status_message,
        )


__all__ = ["EditorSession", "SessionOutcome", "TerminalRequiredError"]
