"""Modal terminal text editor for prose writing.

The host-agnostic core is ``EditorSession``; the Textual host lives in
``writers_editor.adapters.textual``.
"""

from .config import EditorMode, EditorSettings
from .context import KeyInput, ModeResult
from .session import EditorSession, SessionOutcome, TerminalRequiredError

__version__ = "0.1.0"

__all__ = [
    "EditorMode",
    "EditorSession",
    "EditorSettings",
    "KeyInput",
    "ModeResult",
    "SessionOutcome",
    "TerminalRequiredError",
    "__version__",
]
