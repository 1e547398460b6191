from __future__ import annotations
"""Source location model used in diagnostics.

Carries the source file path and 1-based line number of a tag line or a
directive line so errors can point at the offending text.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SourceLocation:
    """Represents the origin of a tag line or directive line.

    Attributes:
        path: Path to the source file if known.
        line: 1-based line number in the source.
    """
    path: Optional[Path] = None
    line: Optional[int] = None

    def format(self) -> str:
        """Return a human-readable source label."""
        parts: list[str] = []
        if self.path:
            parts.append(str(self.path))
        if self.line is not None:
            parts.append(f"line {self.line}")
        return ":".join(parts) if parts else "<source>"

    def with_line(self, line: int) -> "SourceLocation":
        """Return a copy with the given line updated."""
        return SourceLocation(path=self.path, line=line)
