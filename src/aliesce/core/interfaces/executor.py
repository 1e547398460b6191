from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from aliesce.core.models import RunResult


@runtime_checkable
class ExecutorProtocol(Protocol):
    """Runs one resolved script command.

    `args` is the complete argument list (the output path is already placed
    in it); `path` is the saved script file, passed for diagnostics.
    """

    def run(self, program: str, args: Sequence[str], path: Path) -> RunResult:
        ...
