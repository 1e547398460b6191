from __future__ import annotations

__version__ = '0.1.0'

from aliesce.constants import DEFAULTS
from aliesce.cli import Aliesce, main
from aliesce.core.errors import (
    AliesceError,
    DirectiveError,
    InvalidSubset,
    MalformedTag,
    RunFailure,
    SourceError,
    UnknownScriptNumber,
    UnresolvedReference,
    WriteFailure,
)
from aliesce.core.models import Script, Settings, TagLine
from aliesce.core.report import ExecutionReport
from aliesce.parsing.builder import ScriptModelBuilder, ScriptRegistry
from aliesce.parsing.subset import SubsetSelector
from aliesce.parsing.tag_lexer import TagLineLexer
from aliesce.runtime.options import OptionMerger
from aliesce.runtime.resolver import PlaceholderResolver
from aliesce.runtime.stages import StageExecutor


def parse_source(text: str, settings: Settings | None = None) -> ScriptRegistry:
    """Parse source text into a registry using default (or given) settings."""
    lexer = TagLineLexer(settings or Settings())
    return ScriptModelBuilder(lexer).build_text(text)


__all__ = [
    'Aliesce',
    'main',
    'DEFAULTS',
    'Settings',
    'Script',
    'TagLine',
    'ExecutionReport',
    'TagLineLexer',
    'ScriptModelBuilder',
    'ScriptRegistry',
    'SubsetSelector',
    'OptionMerger',
    'PlaceholderResolver',
    'StageExecutor',
    'parse_source',
    'AliesceError',
    'DirectiveError',
    'InvalidSubset',
    'MalformedTag',
    'RunFailure',
    'SourceError',
    'UnknownScriptNumber',
    'UnresolvedReference',
    'WriteFailure',
]
