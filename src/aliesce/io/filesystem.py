from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import Optional

from aliesce.core.interfaces.fs import FileSystemProtocol
from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.logging.helpers import get_logger, trace_io


class LocalFileSystem(FileSystemProtocol):
    def __init__(self, *, logger: Optional[LoggerLikeProtocol] = None, encoding: str = "utf-8") -> None:
        self._log = logger or get_logger("io.fs")
        self._encoding = encoding

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def read_text(self, path: Path) -> str:
        trace_io(self._log, "read", path=str(path))
        with Path(path).open("r", encoding=self._encoding, newline="") as fp:
            return fp.read()

    def write_text(self, path: Path, text: str) -> None:
        pth = Path(path)
        pth.parent.mkdir(parents=True, exist_ok=True)
        trace_io(self._log, "write", path=str(pth), size=len(text))
        with pth.open("w", encoding=self._encoding, newline="") as fp:
            fp.write(text)

    def replace_text(self, path: Path, text: str) -> None:
        """Write to a sibling temporary file, then swap it in with os.replace."""
        pth = Path(path)
        fd, tmp = tempfile.mkstemp(prefix=f".{pth.name}.", suffix=".tmp", dir=str(pth.parent))
        trace_io(self._log, "replace", path=str(pth), tmp=tmp, size=len(text))
        try:
            with os.fdopen(fd, "w", encoding=self._encoding, newline="") as fp:
                fp.write(text)
            if pth.exists():
                os.chmod(tmp, pth.stat().st_mode & 0o7777)
            os.replace(tmp, pth)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
