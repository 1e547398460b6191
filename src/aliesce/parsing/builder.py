from __future__ import annotations

"""Script model builder.

Two passes over the source text:

    1. `segment` splits the text into the preface (directive lines before
       the first tag line) and raw sections (tag line + verbatim body).
       Mutators use this pass alone, so a malformed tag elsewhere in the
       file never blocks an edit.
    2. `build` lexes every tag line and returns a `ScriptRegistry`.
       Placeholders stay unresolved; resolution needs the full registry.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.core.models import Script
from aliesce.logging.helpers import get_logger
from aliesce.parsing.source import SourceLocation
from aliesce.parsing.tag_lexer import TagLineLexer


@dataclass(frozen=True)
class RawSection:
    number: int
    index: int      # 0-based index of the tag line in `SourceSections.lines`
    line: str
    body: str

    @property
    def line_no(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class SourceSections:
    lines: Tuple[str, ...]      # whole source, line endings kept
    preface: Tuple[str, ...]    # lines before the first tag line, shebang removed
    sections: Tuple[RawSection, ...]

    def section(self, number: int) -> Optional[RawSection]:
        if 1 <= number <= len(self.sections):
            return self.sections[number - 1]
        return None


class ScriptRegistry:
    """Ordered arena of scripts indexed by their 1-based number."""

    def __init__(self, scripts: Iterable[Script] = ()) -> None:
        self._scripts: Tuple[Script, ...] = tuple(scripts)
        for pos, script in enumerate(self._scripts, start=1):
            if script.number != pos:
                raise ValueError(f"script numbers must be dense: expected {pos}, got {script.number}")

    def __len__(self) -> int:
        return len(self._scripts)

    def __iter__(self) -> Iterator[Script]:
        return iter(self._scripts)

    def __contains__(self, number: object) -> bool:
        return isinstance(number, int) and 1 <= number <= len(self._scripts)

    def get(self, number: int) -> Optional[Script]:
        return self._scripts[number - 1] if number in self else None

    def select(self, numbers: Optional[Iterable[int]] = None) -> List[Script]:
        """Return scripts in file order, restricted to `numbers` when given."""
        if numbers is None:
            return list(self._scripts)
        wanted = set(numbers)
        return [s for s in self._scripts if s.number in wanted]


class ScriptModelBuilder:
    def __init__(self, lexer: TagLineLexer, *, logger: Optional[LoggerLikeProtocol] = None) -> None:
        self._lexer = lexer
        self._log = logger or get_logger("builder")

    def segment(self, text: str) -> SourceSections:
        lines = tuple(text.splitlines(keepends=True))
        preface: List[str] = []
        sections: List[RawSection] = []
        current: Optional[Tuple[int, str]] = None
        body: List[str] = []

        def _close() -> None:
            if current is not None:
                idx, line = current
                sections.append(RawSection(number=len(sections) + 1, index=idx, line=line, body="".join(body)))

        for idx, raw in enumerate(lines):
            if self._lexer.is_tag_line(raw):
                _close()
                current = (idx, raw.rstrip("\r\n"))
                body = []
            elif current is not None:
                body.append(raw)
            elif idx == 0 and raw.startswith("#!"):
                continue
            else:
                preface.append(raw.rstrip("\r\n"))
        _close()
        return SourceSections(lines=lines, preface=tuple(preface), sections=tuple(sections))

    def build(self, sections: SourceSections, *, path: Optional[Path] = None) -> ScriptRegistry:
        src = SourceLocation(path=path)
        scripts = [
            Script(
                number=sec.number,
                tag=self._lexer.lex(sec.line, src.with_line(sec.line_no)),
                body=sec.body,
                line_no=sec.line_no,
            )
            for sec in sections.sections
        ]
        self._log.debug("built registry of %d script(s)", len(scripts))
        return ScriptRegistry(scripts)

    def build_text(self, text: str, *, path: Optional[Path] = None) -> ScriptRegistry:
        return self.build(self.segment(text), path=path)
