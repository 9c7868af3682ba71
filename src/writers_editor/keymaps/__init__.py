"""Declarative keymap registry and resolver.

Default bindings live in ``writers_editor.keymaps.defaults``; they are not
imported here because they pull in the action modules.
"""

from .models import GLOBAL_MODE, ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "GLOBAL_MODE",
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
