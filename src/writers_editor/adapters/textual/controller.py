"""Textual-free bridge between an ``EditorSession`` and UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from writers_editor.context import KeyInput, ModeResult
from writers_editor.screen import Frame
from writers_editor.session import EditorSession

FORWARDED_EVENTS = ("buffer.changed", "session.saved", "session.quit")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    render_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds key, resize and tick events into the session and repaints."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
        now: Optional[float] = None,
    ) -> ModeResult:
        """Translate a normalized Textual key into a ``KeyInput`` and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.session.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers), now=now
        )
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        self.refresh()
        return result

    def resize(self, width: int, height: int) -> None:
        self.session.handle_resize(width, height)
        self._log_state("resize ->", width=width, height=height)
        self.refresh()

    def tick(self, *, now: Optional[float] = None) -> bool:
        """Run the idle hook; ``True`` means the host should exit."""

        state = self.session.state
        before = (state.dirty, state.status_message)
        done = self.session.tick(now=now)
        if (state.dirty, state.status_message) != before:
            self.refresh()
        return done

    def refresh(self) -> None:
        frame = self.session.render()
        self.hooks.render_frame(frame)
        self.hooks.update_status(self.session.state.status_message)

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "mode": session.mode,
            "cursor": session.cursor.position,
            "dirty": session.dirty,
            "buffer_version": session.buffer.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
