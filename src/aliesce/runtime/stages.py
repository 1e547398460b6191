from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from aliesce.core.errors import RunFailure, UnresolvedReference, WriteFailure
from aliesce.core.interfaces.executor import ExecutorProtocol
from aliesce.core.interfaces.fs import FileSystemProtocol
from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.core.models import OutputPath, ResolvedScript, Script, Settings
from aliesce.core.report import ExecutionReport, ScriptOutcome, ScriptState, StageTimer
from aliesce.logging.helpers import get_logger
from aliesce.parsing.builder import ScriptRegistry
from aliesce.runtime.resolver import PlaceholderResolver


def list_lines(scripts: Iterable[Script]) -> List[str]:
    """Return one listing line per script: number, optional label, tag content."""
    out: List[str] = []
    for script in scripts:
        label = f"{script.label}:" if script.label else ""
        out.append(f"{script.number}:{label} {script.tag.content}")
    return out


class StageExecutor:
    """Drive selected scripts through their save and run stages in file order.

    Per script:
        pending → (saving → saved | skipped_save) → (running → ran | skipped_run) → done

    A failure in one script (unresolved reference, write or run failure) is
    recorded in the report and processing moves on to the next script.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        fs: FileSystemProtocol,
        executor: ExecutorProtocol,
        logger: Optional[LoggerLikeProtocol] = None,
        report: Optional[ExecutionReport] = None,
    ) -> None:
        self._settings = settings
        self._fs = fs
        self._executor = executor
        self._log = logger or get_logger("stages")
        self._report = report or ExecutionReport()

    @property
    def report(self) -> ExecutionReport:
        return self._report

    def run(self, registry: ScriptRegistry, numbers: Optional[Iterable[int]] = None) -> ExecutionReport:
        resolver = PlaceholderResolver(registry, self._settings, logger=self._log)
        selected = registry.select(numbers)

        resolved: Dict[int, ResolvedScript] = {}
        outcomes: Dict[int, ScriptOutcome] = {}
        with StageTimer(self._report, "resolve"):
            for script in selected:
                outcome = self._report.add(ScriptOutcome(number=script.number, label=script.label))
                outcomes[script.number] = outcome
                try:
                    resolved[script.number] = resolver.resolve(script)
                except UnresolvedReference as exc:
                    self._log.error("%s", exc)
                    outcome.fail(str(exc))

        for script in selected:
            outcome = outcomes[script.number]
            if not outcome.failed:
                self._process(resolved[script.number], outcome)
            outcome.advance(ScriptState.DONE)

        self._report.finish()
        return self._report

    def _process(self, rs: ResolvedScript, outcome: ScriptOutcome) -> None:
        script = rs.script
        output = rs.output
        sig = self._settings.sig_stop
        if not script.saves or output is None:
            self._log.info("Bypassing script no. %d (%s applied)", script.number, sig)
            outcome.advance(ScriptState.SKIPPED_SAVE)
            return

        if not self._save(script, output, outcome):
            return

        if rs.program is None:
            reason = f"{sig} applied" if script.tag.skip_run else "no command"
            self._log.info("Not running script no. %d (%s)", script.number, reason)
            outcome.advance(ScriptState.SKIPPED_RUN)
            return

        self._run(script, rs.program, list(rs.args), output, outcome)

    def _save(self, script: Script, output: OutputPath, outcome: ScriptOutcome) -> bool:
        path = output.path
        outcome.path = output.get()
        outcome.advance(ScriptState.SAVING)
        with StageTimer(self._report, "save"):
            try:
                self._fs.write_text(path, script.body)
            except OSError as exc:
                err = WriteFailure(f"could not write script no. {script.number} to '{path}': {exc}")
                self._log.error("%s", err)
                outcome.fail(str(err))
                return False
        self._log.debug("saved script no. %d to %s", script.number, path)
        outcome.advance(ScriptState.SAVED)
        return True

    def _run(
        self, script: Script, program: str, args: List[str], output: OutputPath, outcome: ScriptOutcome
    ) -> None:
        number = script.number
        outcome.advance(ScriptState.RUNNING)
        with StageTimer(self._report, "run"):
            try:
                result = self._executor.run(program, args, output.path)
            except RunFailure as exc:
                self._log.error("script no. %d: %s", number, exc)
                outcome.fail(str(exc), returncode=exc.returncode)
                return
        if not result.ok:
            err = RunFailure(f"'{program}' exited with status {result.returncode}", returncode=result.returncode)
            self._log.error("script no. %d: %s", number, err)
            outcome.fail(str(err), returncode=result.returncode)
            return
        outcome.returncode = result.returncode
        outcome.advance(ScriptState.RAN)
