"""Terminal geometry and the scroll policy for the text area."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
CHROME_ROWS = 3  # help line, status bar, message line


@dataclass(slots=True)
class Viewport:
    """Terminal size plus the topmost visible document row.

    ``scroll_offset`` is recomputed every frame by ``follow``; nothing about
    it is persisted.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    chrome_rows: int = CHROME_ROWS
    scroll_offset: int = 0

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)

    def text_height(self, *, distraction_free: bool = False) -> int:
        if distraction_free:
            return self.height
        return max(0, self.height - self.chrome_rows)

    def page_size(self, *, distraction_free: bool = False) -> int:
        return max(1, self.text_height(distraction_free=distraction_free) - 1)

    def follow(
        self,
        cursor_row: int,
        *,
        typewriter: bool = False,
        distraction_free: bool = False,
    ) -> int:
        height = self.text_height(distraction_free=distraction_free)
        if typewriter:
            self.scroll_offset = max(0, cursor_row - height // 2)
        elif cursor_row < self.scroll_offset:
            self.scroll_offset = cursor_row
        elif height and cursor_row >= self.scroll_offset + height:
            self.scroll_offset = cursor_row - height + 1
        return self.scroll_offset


__all__ = ["Viewport", "CHROME_ROWS"]
