from __future__ import annotations

"""Error taxonomy.

Parse-time and option-time errors abort the invocation before any side
effect. `UnresolvedReference`, `WriteFailure` and `RunFailure` are local to
one script and are recorded in the execution report instead.
"""

from typing import Optional

from aliesce.parsing.source import SourceLocation


class AliesceError(Exception):
    """Base class for every error the CLI reports as a plain message."""


class SourceError(AliesceError):
    """Raised when the source file (or a pushed file) cannot be read or created."""


class DirectiveError(AliesceError):
    """Raised when an in-file directive line cannot be decoded."""


class MalformedTag(AliesceError, ValueError):
    """Raised when a tag line cannot be lexed."""

    def __init__(self, reason: str, *, line: str = "", src: Optional[SourceLocation] = None) -> None:
        self.reason = reason
        self.line = line
        self.src = src or SourceLocation()
        super().__init__(f"malformed tag line at {self.src.format()}: {reason} ({line!r})")


class UnresolvedReference(AliesceError, LookupError):
    """Raised when a command placeholder names a script with no output path."""

    def __init__(self, number: int, target: int, reason: str = "no such script") -> None:
        self.number = number
        self.target = target
        super().__init__(f"script no. {number} references script no. {target}: {reason}")


class InvalidSubset(AliesceError, ValueError):
    """Raised for malformed or out-of-range subset expressions."""


class UnknownScriptNumber(AliesceError, LookupError):
    """Raised when an edit targets a script number that does not exist."""


class WriteFailure(AliesceError):
    """Raised when a script body cannot be saved."""


class RunFailure(AliesceError):
    """Raised when a script command cannot be started or exits non-zero."""

    def __init__(self, message: str, *, returncode: Optional[int] = None) -> None:
        self.returncode = returncode
        super().__init__(message)
