"""Mode manager coordinating the navigation and insert layers."""

from __future__ import annotations

from typing import Dict, Optional, Type

from writers_editor.context import EditorContext, KeyInput, ModeResult
from writers_editor.keymaps.defaults import load_default_keymaps
from writers_editor.keymaps.registry import KeymapRegistry
from writers_editor.keymaps.resolver import KeymapResolver
from writers_editor.runtime import telemetry

from .base_mode import Mode
from .chord import ChordTracker

CHORD_FLAG = "chord"


class ModeManager:
    """Owns the active mode, handles transitions and dispatches key events.

    Before each dispatch the chord tracker sets ``context.flags["chord"]`` so
    bindings and actions can tell the second press of a pair from the first.
    """

    def __init__(
        self,
        context: EditorContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("writers_editor.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="writers_editor.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="writers_editor.keymaps"
        )
        self.chords = ChordTracker(context.settings.chord_timeout_ms)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(self.context, self.keymap_resolver)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name})

    def handle_key(self, key: KeyInput, *, now: Optional[float] = None) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")

        chord = self.chords.observe(key.stroke.token, now)
        self.context.flags[CHORD_FLAG] = chord
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name, "chord": chord},
        ):
            result = mode.handle_key(key)

        if chord and result.consumed:
            # a completed pair must not also start the next one
            self.chords.reset()
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["CHORD_FLAG", "ModeManager"]
