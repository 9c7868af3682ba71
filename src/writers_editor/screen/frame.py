"""Compose one full screen of output from the session state."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from writers_editor.buffer import Cursor, TextBuffer

from .viewport import Viewport

HELP_TEXT = (
    "^S save  ^Q quit  ^Z undo  ^Y redo  ^T typewriter  F3 focus  "
    "i/a/o insert  Esc normal  dd delete line"
)
FILLER = "~"
NO_NAME = "[No Name]"
WORDS_PER_MINUTE = 200


@dataclass(frozen=True, slots=True)
class FrameRow:
    text: str
    gutter: str = ""
    filler: bool = False

    @property
    def plain(self) -> str:
        return self.gutter + self.text


@dataclass(slots=True)
class Frame:
    """Everything a terminal host needs to paint one frame.

    ``help``, ``status`` and ``message`` are ``None`` in distraction-free mode.
    ``cursor`` is the on-screen ``(x, y)`` of the document cursor.
    """

    width: int
    height: int
    rows: List[FrameRow] = field(default_factory=list)
    help: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None
    cursor: Tuple[int, int] = (0, 0)
    scroll_offset: int = 0

    def lines(self) -> List[str]:
        output = [row.plain for row in self.rows]
        for chrome in (self.help, self.status, self.message):
            if chrome is not None:
                output.append(chrome)
        return output


def display_name(path: Optional[str]) -> str:
    if not path:
        return NO_NAME
    return os.path.basename(path) or path


def reading_time(words: int, words_per_minute: int = WORDS_PER_MINUTE) -> str:
    minutes = math.ceil(words / words_per_minute)
    if minutes < 1:
        return "Less than 1 minute"
    if minutes == 1:
        return "1 minute"
    if minutes < 60:
        return f"{minutes} minutes"

    hours, remainder = divmod(minutes, 60)
    if remainder:
        return f"{hours}h {remainder}m"
    return "1 hour" if hours == 1 else f"{hours} hours"


def status_line(
    mode_label: str,
    path: Optional[str],
    dirty: bool,
    cursor: Cursor,
    width: int,
    *,
    words: Optional[int] = None,
) -> str:
    """Status bar text; ``words`` adds the word count and reading time."""

    marker = " [+]" if dirty else ""
    counts = ""
    if words is not None:
        counts = f"Words: {words} | Reading: {reading_time(words)} | "
    text = (
        f" {mode_label} | {display_name(path)}{marker} | {counts}"
        f"{cursor.row + 1}:{cursor.col + 1} "
    )
    return text.ljust(width)[:width] if width else text


def compose_frame(
    *,
    buffer: TextBuffer,
    cursor: Cursor,
    viewport: Viewport,
    mode_label: str,
    path: Optional[str] = None,
    dirty: bool = False,
    message: str = "",
    typewriter: bool = False,
    distraction_free: bool = False,
    line_numbers: bool = True,
    gutter_width: int = 5,
    word_count: bool = False,
) -> Frame:
    height = viewport.text_height(distraction_free=distraction_free)
    scroll = viewport.follow(
        cursor.row, typewriter=typewriter, distraction_free=distraction_free
    )
    gutter = 0
    if line_numbers and not distraction_free:
        # one separator column after the widest line number
        gutter = max(gutter_width, len(str(buffer.line_count)) + 1)
    text_width = max(0, viewport.width - gutter)

    rows: List[FrameRow] = []
    for screen_row in range(height):
        doc_row = scroll + screen_row
        if doc_row < buffer.line_count:
            rows.append(
                FrameRow(
                    text=buffer.get_line(doc_row)[:text_width],
                    gutter=f"{doc_row + 1:{gutter - 1}} " if gutter else "",
                )
            )
        else:
            rows.append(FrameRow(text="" if distraction_free else FILLER, filler=True))

    x = cursor.col + gutter
    y = max(0, cursor.row - scroll)
    if viewport.width:
        x = min(x, viewport.width - 1)
    if height:
        y = min(y, height - 1)

    frame = Frame(
        width=viewport.width,
        height=viewport.height,
        rows=rows,
        cursor=(x, y),
        scroll_offset=scroll,
    )
    if not distraction_free:
        frame.help = HELP_TEXT[: viewport.width]
        frame.status = status_line(
            mode_label,
            path,
            dirty,
            cursor,
            viewport.width,
            words=buffer.word_count() if word_count else None,
        )
        frame.message = message[: viewport.width]
    return frame


__all__ = [
    "Frame",
    "FrameRow",
    "HELP_TEXT",
    "compose_frame",
    "reading_time",
    "status_line",
]
