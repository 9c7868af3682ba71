"""Viewport geometry and frame composition."""

from .frame import (
    HELP_TEXT,
    Frame,
    FrameRow,
    compose_frame,
    reading_time,
    status_line,
)
from .viewport import CHROME_ROWS, Viewport

__all__ = [
    "CHROME_ROWS",
    "Frame",
    "FrameRow",
    "HELP_TEXT",
    "Viewport",
    "compose_frame",
    "reading_time",
    "status_line",
]
