from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystemProtocol(Protocol):
    def exists(self, path: Path) -> bool:
        ...

    def read_text(self, path: Path) -> str:
        ...

    def write_text(self, path: Path, text: str) -> None:
        """Write `text` to `path`, creating parent directories as needed."""
        ...

    def replace_text(self, path: Path, text: str) -> None:
        """Rewrite the whole file at `path` without leaving a partial write behind."""
        ...
