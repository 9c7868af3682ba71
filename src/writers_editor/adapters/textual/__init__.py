"""Textual host for the editor.

``controller`` has no Textual imports; ``app`` holds the ``App`` subclass,
``launch`` and the ``writers-edit`` entry point.
"""

from .controller import TextualEditorAdapter, TextualUIHooks

__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
