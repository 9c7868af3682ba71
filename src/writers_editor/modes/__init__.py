"""Input modes, chord detection and the mode manager."""

from .base_mode import Mode
from .chord import ChordTracker
from .insert_mode import InsertMode
from .mode_manager import CHORD_FLAG, ModeManager
from .navigation_mode import NavigationMode

__all__ = [
    "CHORD_FLAG",
    "ChordTracker",
    "InsertMode",
    "Mode",
    "ModeManager",
    "NavigationMode",
]
