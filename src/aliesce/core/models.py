from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

from aliesce.constants import DEFAULTS


@dataclass(frozen=True)
class Settings:
    """Effective configuration for one invocation (merged CLI + in-file options)."""
    path_src: str = DEFAULTS["path_src"]
    path_dir: str = DEFAULTS["path_dir"]
    list_only: bool = False
    only: Optional[str] = None
    tag_head: str = DEFAULTS["tag_head"]
    tag_tail: str = DEFAULTS["tag_tail"]
    sig_stop: str = DEFAULTS["sig_stop"]
    plc_path_dir: str = DEFAULTS["plc_path_dir"]
    plc_path_all: str = DEFAULTS["plc_path_all"]
    cmd_prog: str = DEFAULTS["cmd_prog"]
    cmd_flag: str = DEFAULTS["cmd_flag"]

    @property
    def plc_head(self) -> str:
        return self.plc_path_all.split("{}", 1)[0]

    @property
    def plc_tail(self) -> str:
        return self.plc_path_all.split("{}", 1)[1]

    @property
    def plc_bare(self) -> str:
        """Command-extension placeholder without a script number (e.g. '><')."""
        return self.plc_head + self.plc_tail

    @property
    def source_stem(self) -> str:
        return Path(self.path_src).stem


@dataclass(frozen=True)
class PathRef:
    """Unresolved command-extension placeholder; `target` None means the current script."""
    raw: str
    target: Optional[int] = None


ArgPart = Union[str, PathRef]


@dataclass(frozen=True)
class CommandArg:
    """One whitespace-separated command field, split into literal text and placeholders."""
    raw: str
    parts: Tuple[ArgPart, ...] = ()

    @property
    def refs(self) -> Tuple[PathRef, ...]:
        return tuple(p for p in self.parts if isinstance(p, PathRef))


@dataclass(frozen=True)
class Command:
    fields: Tuple[CommandArg, ...]

    @property
    def program(self) -> str:
        return self.fields[0].raw

    @property
    def args(self) -> Tuple[CommandArg, ...]:
        return self.fields[1:]

    @property
    def has_placeholder(self) -> bool:
        return any(f.refs for f in self.fields)

    def text(self) -> str:
        return " ".join(f.raw for f in self.fields)


@dataclass(frozen=True)
class TagLine:
    """Lexed tag line.

    `content` is the tag text after the head and after any label/tail, with
    surrounding whitespace removed. `skip_run` keeps its literal value; use
    `Script.runs` for the effective decision.
    """
    raw: str
    content: str
    label: Optional[str] = None
    skip_save: bool = False
    skip_run: bool = False
    output_spec: Optional[str] = None
    command: Optional[Command] = None


@dataclass(frozen=True)
class Script:
    number: int
    tag: TagLine
    body: str = ""
    line_no: Optional[int] = None

    @property
    def label(self) -> Optional[str]:
        return self.tag.label

    @property
    def output_spec(self) -> Optional[str]:
        return self.tag.output_spec

    @property
    def saves(self) -> bool:
        return not self.tag.skip_save and self.tag.output_spec is not None

    @property
    def runs(self) -> bool:
        return self.saves and not self.tag.skip_run and self.tag.command is not None


@dataclass(frozen=True)
class OutputPath:
    dir: str
    stem: str
    ext: str

    def get(self) -> str:
        return f"{self.dir}/{self.stem}.{self.ext}"

    @property
    def path(self) -> Path:
        return Path(self.get())


@dataclass(frozen=True)
class ResolvedScript:
    """A script with its output path and final (program, args) pair."""
    script: Script
    output: Optional[OutputPath] = None
    program: Optional[str] = None
    args: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RunResult:
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
