from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, List, Optional

from aliesce.core.errors import DirectiveError
from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.logging.helpers import get_logger
from aliesce.parsing.parser import _build_directive_parser
from aliesce.parsing.source import SourceLocation
from aliesce.parsing.tokenizer import DirectiveTokenizer


class DirectiveParser:
    """Decode option lines from the preface of a source file.

    The preface is every line before the first tag line. Each line is
    tokenized on its own; recognised flags are collected into one namespace
    whose unset options stay None.
    """

    def __init__(self, *, logger: Optional[LoggerLikeProtocol] = None) -> None:
        self._log = logger or get_logger("directives")

    def tokenize(self, lines: Iterable[str], *, path: Optional[Path] = None) -> List[str]:
        src = SourceLocation(path=path)
        tokens: List[str] = []
        for lno, raw in enumerate(lines, start=1):
            toks, err = DirectiveTokenizer.safe_tokenize_line(raw, src.with_line(lno))
            if err:
                self._log.debug(err)
            tokens.extend(toks)
        return tokens

    def parse_lines(self, lines: Iterable[str], *, path: Optional[Path] = None) -> argparse.Namespace:
        tokens = self.tokenize(lines, path=path)
        parser = _build_directive_parser()
        try:
            ns, extras = parser.parse_known_args(tokens)
        except argparse.ArgumentError as exc:
            where = SourceLocation(path=path).format()
            raise DirectiveError(f"invalid option in source preface ({where}): {exc}") from exc
        if extras:
            self._log.debug("ignoring %d non-option word(s) in source preface", len(extras))
        return ns
