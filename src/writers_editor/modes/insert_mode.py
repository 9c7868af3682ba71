"""Insert mode: bound editing keys plus free text entry."""

from __future__ import annotations

from typing import Optional

from writers_editor.config import MODE_CONFIGS, EditorMode
from writers_editor.context import KeyInput, ModeResult
from writers_editor.keymaps.models import Binding
from writers_editor.keymaps.resolver import ResolutionMatch

from .base_mode import Mode

INSERT_TEXT_ACTION = "edit.insert_text"


class InsertMode(Mode):
    name = EditorMode.INSERT.value

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        config = MODE_CONFIGS[EditorMode.INSERT]
        self.context.state.status_message = config.entry_message

    def fallback(self, key: KeyInput) -> ModeResult:
        """Unbound keys that carry printable text are typed into the buffer."""

        stroke = key.stroke
        registry = self.resolver.registry
        if not stroke.printable or not registry.has_action(INSERT_TEXT_ACTION):
            return super().fallback(key)

        match = ResolutionMatch(
            binding=Binding(
                id="insert.text",
                mode=self.name,
                stroke=stroke,
                action_id=INSERT_TEXT_ACTION,
            ),
            action=registry.get_action(INSERT_TEXT_ACTION),
            stroke=stroke,
        )
        return self.execute(match)
