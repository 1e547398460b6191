from __future__ import annotations

"""
TagLineLexer – splits one tag line into its fields.

Grammar (whitespace-separated fields):

    TAG_HEAD [ label TAG_TAIL ] [ SIGNAL ] path_or_ext [ SIGNAL ] [ program { arg } ]

    * The label is everything between the head and the first tail marker.
      Without a tail marker no label is assigned.
    * A signal in the first field slot skips the save stage (and therefore
      the run stage); in that case the path field may be omitted, which is
      the form written for piped scripts ('### ! !').
    * A signal right after the path field skips the run stage only.
    * Command fields are kept verbatim; command-extension placeholders
      ('><' or '>N<') are split out as `PathRef` parts for later resolution.
"""

import re
from typing import List, Optional, Sequence

from aliesce.core.errors import MalformedTag
from aliesce.core.models import ArgPart, Command, CommandArg, PathRef, Settings, TagLine
from aliesce.parsing.source import SourceLocation


class TagLineLexer:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or Settings()
        s = self._settings
        self._plc_re = re.compile(re.escape(s.plc_head) + r"(\d*)" + re.escape(s.plc_tail))

    @property
    def settings(self) -> Settings:
        return self._settings

    def is_tag_line(self, line: str) -> bool:
        return line.startswith(self._settings.tag_head)

    def ensure_head(self, line: str) -> str:
        """Return `line` unchanged if it carries the tag head, else prefix it."""
        if self.is_tag_line(line):
            return line.rstrip("\r\n")
        return f"{self._settings.tag_head} {line.strip()}"

    def lex(self, line: str, src: Optional[SourceLocation] = None) -> TagLine:
        s = self._settings
        text = line.rstrip("\r\n")
        if not self.is_tag_line(text):
            raise MalformedTag(f"line does not begin with {s.tag_head!r}", line=text, src=src)

        rest = text[len(s.tag_head):]
        label: Optional[str] = None
        idx = rest.find(s.tag_tail)
        if idx != -1:
            label = rest[:idx].strip()
            rest = rest[idx + len(s.tag_tail):]

        content = rest.strip()
        fields = content.split()
        if not fields:
            raise MalformedTag("no tag data", line=text, src=src)

        i = 0
        skip_save = skip_run = False
        output_spec: Optional[str] = None
        if fields[i] == s.sig_stop:
            skip_save = True
            i += 1
        if i < len(fields) and fields[i] != s.sig_stop:
            output_spec = fields[i]
            i += 1
        if i < len(fields) and fields[i] == s.sig_stop:
            skip_run = True
            i += 1
        if output_spec is None and not skip_save:
            raise MalformedTag("missing output extension or path", line=text, src=src)

        command = self._lex_command(fields[i:]) if i < len(fields) else None
        return TagLine(
            raw=text,
            content=content,
            label=label,
            skip_save=skip_save,
            skip_run=skip_run,
            output_spec=output_spec,
            command=command,
        )

    def _lex_command(self, fields: Sequence[str]) -> Command:
        return Command(fields=tuple(self._lex_arg(f) for f in fields))

    def _lex_arg(self, field: str) -> CommandArg:
        parts: List[ArgPart] = []
        pos = 0
        for m in self._plc_re.finditer(field):
            if m.start() > pos:
                parts.append(field[pos:m.start()])
            digits = m.group(1)
            parts.append(PathRef(raw=m.group(0), target=int(digits) if digits else None))
            pos = m.end()
        if pos < len(field):
            parts.append(field[pos:])
        return CommandArg(raw=field, parts=tuple(parts))

    def serialize(self, tag: TagLine) -> str:
        """Rebuild a canonical tag line (single spaces) from lexed fields."""
        s = self._settings
        out: List[str] = [s.tag_head]
        if tag.label is not None:
            if tag.label:
                out.append(tag.label)
            out.append(s.tag_tail)
        if tag.skip_save:
            out.append(s.sig_stop)
        if tag.output_spec is not None:
            out.append(tag.output_spec)
        if tag.skip_run:
            out.append(s.sig_stop)
        if tag.command is not None:
            out.append(tag.command.text())
        return " ".join(out)
