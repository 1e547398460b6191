from __future__ import annotations
"""
Placeholder and output path resolution.

Runs after the whole registry is built, so '>N<' may name a script that
appears later in the file. Resolution reads the lexed templates only and
never rewrites a script, so resolving twice yields the same result.
"""

import shlex
from typing import List, Optional

from aliesce.core.errors import UnresolvedReference
from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.core.models import CommandArg, OutputPath, PathRef, ResolvedScript, Script, Settings
from aliesce.logging.helpers import get_logger
from aliesce.parsing.builder import ScriptRegistry


class OutputPathResolver:
    """Turn a path/extension field into an `OutputPath`.

    Forms accepted for the field:
        ext                      → <dest>/<source stem>.ext
        stem.ext                 → <dest>/stem.ext
        dir/[stem.]ext           → dir/...
        >/sub/[stem.]ext         → <dest>/sub/...
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def resolve(self, spec: str) -> OutputPath:
        s = self._settings
        parts = spec.split("/")
        if parts[0] == s.plc_path_dir:
            parts[0] = s.path_dir
        filename = parts.pop()
        name_parts = filename.split(".")
        out_dir = "/".join(parts) if parts else s.path_dir
        if len(name_parts) > 1:
            stem, ext = ".".join(name_parts[:-1]), name_parts[-1]
        else:
            stem, ext = s.source_stem, name_parts[0]
        return OutputPath(dir=out_dir, stem=stem, ext=ext)


class PlaceholderResolver:
    def __init__(
        self,
        registry: ScriptRegistry,
        settings: Settings,
        *,
        logger: Optional[LoggerLikeProtocol] = None,
    ) -> None:
        self._registry = registry
        self._settings = settings
        self._paths = OutputPathResolver(settings)
        self._log = logger or get_logger("resolver")

    def output_path(self, script: Script) -> Optional[OutputPath]:
        if script.output_spec is None:
            return None
        return self._paths.resolve(script.output_spec)

    def _target_path(self, script: Script, ref: PathRef) -> str:
        number = script.number if ref.target is None else ref.target
        target = self._registry.get(number)
        if target is None:
            raise UnresolvedReference(script.number, number)
        out = self.output_path(target)
        if out is None:
            raise UnresolvedReference(script.number, number, "script has no output path")
        return out.get()

    def _substitute(self, script: Script, arg: CommandArg) -> str:
        return "".join(
            shlex.quote(self._target_path(script, part)) if isinstance(part, PathRef) else part
            for part in arg.parts
        )

    def resolve(self, script: Script) -> ResolvedScript:
        """Return output path and final command for `script`.

        Without a placeholder the output path is appended to the command
        arguments. With one, the substituted command is handed to the
        configured shell ('bash -c' by default) as a single string, with
        each substituted path shell-quoted.
        """
        output = self.output_path(script)
        cmd = script.tag.command
        if not script.runs or cmd is None or output is None:
            return ResolvedScript(script=script, output=output)

        if not cmd.has_placeholder:
            args: List[str] = [a.raw for a in cmd.args]
            args.append(output.get())
            return ResolvedScript(script=script, output=output, program=cmd.program, args=tuple(args))

        s = self._settings
        text = " ".join(self._substitute(script, f) for f in cmd.fields)
        self._log.debug("script no. %d command resolved to %r", script.number, text)
        return ResolvedScript(script=script, output=output, program=s.cmd_prog, args=(s.cmd_flag, text))
