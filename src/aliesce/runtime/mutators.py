from __future__ import annotations
"""Source mutators: init, push and edit.

Every change reads the whole source, computes the new text and rewrites
the whole file in one replace, so an interrupted run leaves either the old
or the new source. Script numbers of existing entries never change.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from aliesce.core.errors import SourceError, UnknownScriptNumber
from aliesce.core.interfaces.fs import FileSystemProtocol
from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.core.models import Settings
from aliesce.logging.helpers import get_logger
from aliesce.notes import init_template
from aliesce.parsing.builder import ScriptModelBuilder
from aliesce.parsing.tag_lexer import TagLineLexer


class SourceMutator:
    def __init__(
        self,
        *,
        settings: Settings,
        fs: FileSystemProtocol,
        logger: Optional[LoggerLikeProtocol] = None,
    ) -> None:
        self._settings = settings
        self._fs = fs
        self._log = logger or get_logger("mutators")
        self._lexer = TagLineLexer(settings)
        self._builder = ScriptModelBuilder(self._lexer, logger=self._log)

    @property
    def source(self) -> Path:
        return Path(self._settings.path_src)

    def _read_source(self) -> str:
        try:
            return self._fs.read_text(self.source)
        except OSError as exc:
            raise SourceError(f"Not parsing source file '{self.source}' (read error: '{exc}')") from exc

    def init(self) -> Path:
        """Create a template source file; refuse to overwrite an existing one."""
        src = self.source
        if self._fs.exists(src):
            raise SourceError(f"Not creating template source file at '{src}' (path exists)")
        try:
            self._fs.write_text(src, init_template(self._settings))
        except OSError as exc:
            raise SourceError(f"Not creating template source file at '{src}' (write error: '{exc}')") from exc
        self._log.info("Created template source file at '%s'", src)
        return src

    def _entry(self, line: str, path: str) -> Tuple[str, str]:
        """Validate `line` (head added if missing) and read the content at `path`."""
        tag_line = self._lexer.ensure_head(line)
        self._lexer.lex(tag_line)
        try:
            content = self._fs.read_text(Path(path))
        except OSError as exc:
            raise SourceError(f"Not parsing script file '{path}' (read error: '{exc}')") from exc
        return tag_line, content

    def _append(self, entries: Sequence[Tuple[str, str]], paths: Sequence[str]) -> None:
        text = self._read_source()
        added = "".join(f"\n{tag_line}\n\n{content}" for tag_line, content in entries)
        self._fs.replace_text(self.source, text + added)
        for (tag_line, _), path in zip(entries, paths):
            self._log.info(
                "Appended tag line '%s' and content of script file '%s' to source file '%s'",
                tag_line, path, self.source,
            )

    def push(self, line: str, path: str) -> str:
        """Append a tag line (head added if missing) and the content at `path`."""
        entry = self._entry(line, path)
        self._append([entry], [path])
        return entry[0]

    def push_piped(self, paths: Iterable[str]) -> List[str]:
        """Append each path's content as a script that is neither saved nor run.

        Every path is read before the source is touched; one unreadable path
        leaves the source as it was.
        """
        sig = self._settings.sig_stop
        listed = list(paths)
        entries = [self._entry(f"{sig} {sig}", p) for p in listed]
        self._append(entries, listed)
        return [tag_line for tag_line, _ in entries]

    def edit(self, number: int, line: str) -> str:
        """Replace the tag line of script `number`, leaving every other byte as is."""
        tag_line = self._lexer.ensure_head(line)
        self._lexer.lex(tag_line)

        sections = self._builder.segment(self._read_source())
        section = sections.section(number)
        if section is None:
            raise UnknownScriptNumber(
                f"no script no. {number} in '{self.source}' ({len(sections.sections)} script(s))"
            )

        lines = list(sections.lines)
        old = lines[section.index]
        ending = old[len(old.rstrip("\r\n")):]
        lines[section.index] = tag_line + ending
        self._fs.replace_text(self.source, "".join(lines))
        self._log.info("Updated tag line for script no. %d to '%s'", number, tag_line)
        return tag_line
