from __future__ import annotations
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from aliesce.core.errors import RunFailure
from aliesce.core.interfaces.executor import ExecutorProtocol
from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.core.models import RunResult
from aliesce.logging.helpers import get_logger


class SubprocessExecutor(ExecutorProtocol):
    """Run a command as a child process and stream its output.

    Stdout and stderr of the child are merged and echoed line by line to
    `stream` as they arrive; the collected text is returned in the result.
    Bytes that do not decode are replaced, so binary output never stops
    the pipeline. No timeout is applied.
    """

    def __init__(self, *, stream: Optional[TextIO] = None, logger: Optional[LoggerLikeProtocol] = None) -> None:
        self._stream = stream
        self._log = logger or get_logger("io.exec")

    def run(self, program: str, args: Sequence[str], path: Path) -> RunResult:
        cmd = [program, *args]
        self._log.debug("running %r for %s", cmd, path)
        out = self._stream or sys.stdout
        collected: List[str] = []
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            raise RunFailure(f"could not start {program!r}: {exc}") from exc

        with proc:
            try:
                for line in proc.stdout or ():
                    collected.append(line)
                    out.write(line)
                    out.flush()
            except (OSError, UnicodeError) as exc:
                proc.kill()
                returncode = proc.wait()
                raise RunFailure(
                    f"output of {program!r} could not be streamed: {exc}", returncode=returncode
                ) from exc
            returncode = proc.wait()
        return RunResult(returncode=returncode, output="".join(collected))
