"""Two-press chord detection (``dd``, double Ctrl+Q)."""

from __future__ import annotations

import time
from typing import Optional

DEFAULT_CHORD_WINDOW_MS = 500


class ChordTracker:
    """Remembers the previous key token and when it arrived.

    ``observe`` reports whether the new token completes a chord: the same
    token (key and modifiers) seen strictly within ``window_ms`` of the last
    one. Every observation replaces the memory, chord or not.
    """

    def __init__(self, window_ms: int = DEFAULT_CHORD_WINDOW_MS) -> None:
        self.window_ms = window_ms
        self._last_token: Optional[str] = None
        self._last_time = 0.0

    def observe(self, token: str, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.monotonic()
        is_chord = (
            self._last_token == token
            and (now - self._last_time) * 1000.0 < self.window_ms
        )
        self._last_token = token
        self._last_time = now
        return is_chord

    def reset(self) -> None:
        self._last_token = None
        self._last_time = 0.0


__all__ = ["ChordTracker", "DEFAULT_CHORD_WINDOW_MS"]
