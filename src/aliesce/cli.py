from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from pathlib import Path
from typing import Dict, List, NoReturn, Optional, Sequence, TextIO

from aliesce.core.errors import AliesceError, SourceError, UnknownScriptNumber
from aliesce.core.interfaces.executor import ExecutorProtocol
from aliesce.core.interfaces.fs import FileSystemProtocol
from aliesce.core.interfaces.logging import LoggerFactoryProtocol, LoggerLikeProtocol
from aliesce.core.report import ExecutionReport
from aliesce.io.executor import SubprocessExecutor
from aliesce.io.filesystem import LocalFileSystem
from aliesce.logging.factory import DefaultLoggerFactory
from aliesce.logging.helpers import get_logger
from aliesce.parsing.builder import ScriptModelBuilder
from aliesce.parsing.directives import DirectiveParser
from aliesce.parsing.parser import _build_parser
from aliesce.parsing.subset import SubsetSelector
from aliesce.parsing.tag_lexer import TagLineLexer
from aliesce.runtime.mutators import SourceMutator
from aliesce.runtime.options import OptionMerger
from aliesce.runtime.stages import StageExecutor, list_lines


logger = get_logger('aliesce')

# Piped paths arrive at once; an open pipe that never delivers is not waited on.
_STDIN_WAIT_S = 0.1


def _configure_logging(enable_json: bool, verbose: bool = False) -> LoggerFactoryProtocol:
    """Configure process-wide logging, either JSON or plain text."""
    level = logging.DEBUG if verbose else logging.INFO
    return DefaultLoggerFactory(json_logs=enable_json, level=level)


def _read_piped_paths(
    stdin: Optional[TextIO], *, timeout: float = _STDIN_WAIT_S, log: Optional[LoggerLikeProtocol] = None
) -> List[str]:
    """Return whitespace-separated paths piped on stdin (none for a TTY).

    The read happens on a daemon thread; when it has not finished within
    `timeout` seconds (stdin left open by a parent process) no paths are
    taken and the thread is abandoned.
    """
    if stdin is None or stdin.isatty():
        return []
    box: Dict[str, object] = {}

    def _reader() -> None:
        try:
            box['text'] = stdin.read()
        except (OSError, ValueError) as exc:
            box['error'] = exc

    thread = threading.Thread(target=_reader, name='aliesce-stdin', daemon=True)
    thread.start()
    thread.join(timeout)
    if thread.is_alive():
        (log or logger).debug('stdin still open after %.2fs, not reading piped paths', timeout)
        return []
    if 'error' in box:
        raise SourceError(f"Not reading piped paths (read error: '{box['error']}')")
    return str(box.get('text', '')).split()


def _parse_script_number(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise UnknownScriptNumber(f"invalid script number {raw!r}") from None


class Aliesce:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(
        argv: Sequence[str],
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        executor: Optional[ExecutorProtocol] = None,
        fs: Optional[FileSystemProtocol] = None,
        logger_factory: Optional[LoggerFactoryProtocol] = None,
    ) -> int:
        """Run the tool with an argv-like sequence and return the exit status.

        `stdin` is only consulted for piped paths when given; `main` passes
        `sys.stdin`. Every component logs through `logger_factory`, which
        defaults to the configured 'aliesce' logger tree. Usage errors,
        '--help' and '--version' exit through argparse (SystemExit).
        """
        ns = _build_parser().parse_args(list(argv))
        json_logs = bool(ns.json_logs) or os.getenv('ALIESCE_JSON_LOGS') == '1'
        factory = logger_factory or _configure_logging(json_logs, bool(ns.verbose))
        log = factory.get_logger('aliesce')

        try:
            return Aliesce._dispatch(
                ns,
                stdin=stdin,
                stdout=stdout or sys.stdout,
                executor=executor,
                fs=fs or LocalFileSystem(logger=factory.get_logger('io.fs')),
                factory=factory,
                json_logs=json_logs,
            )
        except AliesceError as exc:
            log.error('%s', exc)
            return 1

    @staticmethod
    def _dispatch(
        ns: argparse.Namespace,
        *,
        stdin: Optional[TextIO],
        stdout: TextIO,
        executor: Optional[ExecutorProtocol],
        fs: FileSystemProtocol,
        factory: LoggerFactoryProtocol,
        json_logs: bool,
    ) -> int:
        merger = OptionMerger(logger=factory.get_logger('options'))
        base = merger.merge(ns)
        mutator_log = factory.get_logger('mutators')

        # Mutators run to completion and exit before any pipeline work.
        paths = _read_piped_paths(stdin, log=factory.get_logger('aliesce'))
        if paths:
            SourceMutator(settings=base, fs=fs, logger=mutator_log).push_piped(paths)
            return 0
        if ns.init:
            SourceMutator(settings=base, fs=fs, logger=mutator_log).init()
            return 0
        if ns.push:
            line, path = ns.push
            SourceMutator(settings=base, fs=fs, logger=mutator_log).push(line, path)
            return 0

        src = Path(base.path_src)
        try:
            text = fs.read_text(src)
        except OSError as exc:
            raise SourceError(f"Not parsing source file '{src}' (read error: '{exc}')") from exc

        builder_log = factory.get_logger('builder')
        sections = ScriptModelBuilder(TagLineLexer(base), logger=builder_log).segment(text)
        infile = DirectiveParser(logger=factory.get_logger('directives')).parse_lines(sections.preface, path=src)
        settings = merger.merge(ns, infile)

        if ns.edit:
            raw_n, line = ns.edit
            SourceMutator(settings=settings, fs=fs, logger=mutator_log).edit(_parse_script_number(raw_n), line)
            return 0

        numbers = SubsetSelector.parse(settings.only)
        registry = ScriptModelBuilder(TagLineLexer(settings), logger=builder_log).build(sections, path=src)
        SubsetSelector.validate(numbers, len(registry))

        if settings.list_only:
            for entry in list_lines(registry.select(numbers)):
                print(entry, file=stdout)
            return 0

        stages = StageExecutor(
            settings=settings,
            fs=fs,
            executor=executor or SubprocessExecutor(stream=stdout, logger=factory.get_logger('io.exec')),
            logger=factory.get_logger('stages'),
        )
        report = stages.run(registry, numbers)
        Aliesce._log_summary(report, factory.get_logger('aliesce'), attach_report=json_logs)
        return 1 if report.failed else 0

    @staticmethod
    def _log_summary(report: ExecutionReport, log: LoggerLikeProtocol, *, attach_report: bool = False) -> None:
        """Log the summary; with JSON logs the first record carries the full report as `ctx`."""
        lines = report.summary_lines()
        emit = log.error if report.failed else log.info
        for i, line in enumerate(lines):
            if i == 0 and attach_report:
                emit('%s', line, extra={'context': report.to_dict()})
            else:
                emit('%s', line)


def main() -> NoReturn:
    """Entry point for the `aliesce` console script."""
    try:
        raise SystemExit(Aliesce.run(sys.argv[1:], stdin=sys.stdin))
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
