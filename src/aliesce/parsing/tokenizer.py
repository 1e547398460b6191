from __future__ import annotations

"""
DirectiveTokenizer – tokenizer for the directive lines of a source preface.

    * Inline '#' comment stripping while respecting quoted strings.
    * Line tokenization with shlex.
    * Prose lines with unbalanced quotes fall back to whitespace splitting,
      so free-form notes in the preface never abort a run.
"""

import shlex
from typing import List, Optional, Tuple

from aliesce.parsing.source import SourceLocation


class DirectiveTokenizer:
    @staticmethod
    def strip_inline_comments(line: str) -> str:
        in_quote: Optional[str] = None
        for i, ch in enumerate(line):
            if ch in {"'", '"'}:
                if in_quote is None:
                    in_quote = ch
                elif in_quote == ch:
                    in_quote = None
            elif ch == "#" and in_quote is None:
                return line[:i]
        return line

    @staticmethod
    def tokenize_line(raw: str) -> List[str]:
        stripped = DirectiveTokenizer.strip_inline_comments(raw).strip()
        if not stripped:
            return []
        return shlex.split(stripped)

    @staticmethod
    def safe_tokenize_line(raw: str, src: SourceLocation) -> Tuple[List[str], Optional[str]]:
        """Tokenize `raw`; on a shlex error return a plain split plus a diagnostic."""
        try:
            return (DirectiveTokenizer.tokenize_line(raw), None)
        except ValueError as exc:
            msg = f"tokenization fallback at {src.format()}: {exc}"
            return (DirectiveTokenizer.strip_inline_comments(raw).split(), msg)
