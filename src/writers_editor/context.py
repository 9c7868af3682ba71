"""Key events, action results and the context shared by modes and actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from writers_editor.buffer import Cursor, TextBuffer
from writers_editor.config import EditorSettings
from writers_editor.keymaps.models import KeyStroke
from writers_editor.screen import Viewport
from writers_editor.storage import FileStore, TextStore


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def stroke(self) -> KeyStroke:
        return KeyStroke(self.key, self.modifiers, self.text)


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key`` and from action handlers."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass
class SessionState:
    path: Optional[str] = None
    dirty: bool = False
    saved: bool = False
    status_message: str = "Ready"
    search_term: str = ""
    typewriter: bool = False
    distraction_free: bool = False
    line_numbers: bool = True
    should_quit: bool = False


class ModeBus:
    """Minimal event bus letting actions notify whoever hosts the session."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class EditorContext:
    """All mutable session state, owned by one session and one event loop.

    ``flags`` holds the boolean conditions keymap ``when`` clauses read, such
    as ``chord`` for the second half of a two-key chord.
    """

    buffer: TextBuffer = field(default_factory=TextBuffer)
    cursor: Cursor = field(default_factory=Cursor)
    viewport: Viewport = field(default_factory=Viewport)
    state: SessionState = field(default_factory=SessionState)
    settings: EditorSettings = field(default_factory=EditorSettings)
    store: TextStore = field(default_factory=FileStore)
    bus: ModeBus = field(default_factory=ModeBus)
    flags: Dict[str, bool] = field(default_factory=dict)


__all__ = ["EditorContext", "KeyInput", "ModeBus", "ModeResult", "SessionState"]
