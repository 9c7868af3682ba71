"""Editor modes, per-mode presentation and tunable settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

ENV_PREFIX = "WRITERS_EDITOR_"


class EditorMode(str, Enum):
    """The two input modes of the editor."""

    NAVIGATION = "navigation"
    INSERT = "insert"


@dataclass(frozen=True)
class ModeConfig:
    """Label shown in the status bar and message set when entering a mode."""

    label: str
    entry_message: str


MODE_CONFIGS = {
    EditorMode.NAVIGATION: ModeConfig("NORMAL", "Ready"),
    EditorMode.INSERT: ModeConfig("INSERT", "-- INSERT --"),
}


@dataclass(frozen=True, slots=True)
class EditorSettings:
    tab_width: int = 4
    chord_timeout_ms: int = 500
    undo_limit: int = 100
    poll_interval_ms: int = 100
    chrome_rows: int = 3
    gutter_width: int = 5
    autosave_interval_ms: int = 0
    word_count: bool = True
    line_numbers: bool = True
    typewriter: bool = False
    distraction_free: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        """Build settings from ``WRITERS_EDITOR_*`` variables, ignoring junk values."""

        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            tab_width=_env_int(env, "TAB_WIDTH", defaults.tab_width),
            chord_timeout_ms=_env_int(
                env, "CHORD_TIMEOUT_MS", defaults.chord_timeout_ms
            ),
            undo_limit=_env_int(env, "UNDO_LIMIT", defaults.undo_limit),
            poll_interval_ms=_env_int(
                env, "POLL_INTERVAL_MS", defaults.poll_interval_ms
            ),
            autosave_interval_ms=_env_int(
                env, "AUTOSAVE_INTERVAL_MS", defaults.autosave_interval_ms
            ),
            word_count=_env_flag(env, "WORD_COUNT", defaults.word_count),
            line_numbers=_env_flag(env, "LINE_NUMBERS", defaults.line_numbers),
            typewriter=_env_flag(env, "TYPEWRITER", defaults.typewriter),
            distraction_free=_env_flag(
                env, "DISTRACTION_FREE", defaults.distraction_free
            ),
        )

    def override(self, **changes: object) -> "EditorSettings":
        """Return a copy with every non-``None`` change applied."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _env_int(env: Mapping[str, str], name: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _env_flag(env: Mapping[str, str], name: str, fallback: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return fallback
    return raw.lower() in {"1", "true", "yes", "on"}


__all__ = ["EditorMode", "ModeConfig", "MODE_CONFIGS", "EditorSettings"]
