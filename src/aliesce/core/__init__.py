from __future__ import annotations

"""Public surface for aliesce.core: data model, errors, report and protocols.

    from aliesce.core import Script, Settings, ExecutorProtocol, ...
"""

from aliesce.core.errors import AliesceError
from aliesce.core.interfaces import ExecutorProtocol, FileSystemProtocol
from aliesce.core.models import (
    Command,
    CommandArg,
    OutputPath,
    PathRef,
    ResolvedScript,
    RunResult,
    Script,
    Settings,
    TagLine,
)
from aliesce.core.report import ExecutionReport, ScriptOutcome, ScriptState

__all__ = [
    "AliesceError",
    "ExecutorProtocol",
    "FileSystemProtocol",
    "Command",
    "CommandArg",
    "OutputPath",
    "PathRef",
    "ResolvedScript",
    "RunResult",
    "Script",
    "Settings",
    "TagLine",
    "ExecutionReport",
    "ScriptOutcome",
    "ScriptState",
]
