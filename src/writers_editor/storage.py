"""File-content provider used to open and save documents."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class TextStore(Protocol):
    """How the session reads and writes whole documents."""

    def exists(self, path: str) -> bool:
        ...

    def read(self, path: str) -> str:
        """Return the UTF-8 text stored at ``path``."""
        ...

    def write(self, path: str, text: str) -> None:
        """Overwrite ``path`` with ``text``."""
        ...


class FileStore:
    """``TextStore`` backed by the local filesystem.

    Text is written verbatim: no newline translation, no trailing newline.
    """

    encoding = "utf-8"

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read(self, path: str) -> str:
        with open(path, "r", encoding=self.encoding, newline="") as handle:
            return handle.read()

    def write(self, path: str, text: str) -> None:
        with open(path, "w", encoding=self.encoding, newline="") as handle:
            handle.write(text)


__all__ = ["TextStore", "FileStore"]
