"""Navigation mode: motions, line deletion and entry into insert mode."""

from __future__ import annotations

from typing import Optional

from writers_editor.config import MODE_CONFIGS, EditorMode

from .base_mode import Mode


class NavigationMode(Mode):
    name = EditorMode.NAVIGATION.value

    def on_enter(self, previous: Optional[str]) -> None:
        # keep the open/new-file message when the session starts here
        if previous is None:
            return
        config = MODE_CONFIGS[EditorMode.NAVIGATION]
        self.context.state.status_message = config.entry_message
