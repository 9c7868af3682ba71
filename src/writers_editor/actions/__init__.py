"""Action handlers invoked through keymap bindings.

Every handler takes ``(context, match)`` and returns a ``ModeResult``.
"""

from . import core, edit, motion, session

__all__ = ["core", "edit", "motion", "session"]
