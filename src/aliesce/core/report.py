from __future__ import annotations

"""
Execution report for one pipeline run.

Holds one `ScriptOutcome` per selected script, in file order, plus stage
timings. The CLI logs `summary_lines()` at the end of a run and derives
the exit status from `failed`.
"""

import json
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ScriptState(str, Enum):
    PENDING = "pending"
    SAVING = "saving"
    SAVED = "saved"
    SKIPPED_SAVE = "skipped_save"
    RUNNING = "running"
    RAN = "ran"
    SKIPPED_RUN = "skipped_run"
    FAILED = "failed"
    DONE = "done"


@dataclass
class ScriptOutcome:
    number: int
    label: Optional[str] = None
    path: Optional[str] = None
    states: List[ScriptState] = field(default_factory=lambda: [ScriptState.PENDING])
    returncode: Optional[int] = None
    error: Optional[str] = None

    @property
    def state(self) -> ScriptState:
        return self.states[-1]

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def saved(self) -> bool:
        return ScriptState.SAVED in self.states

    @property
    def ran(self) -> bool:
        return ScriptState.RAN in self.states

    def advance(self, state: ScriptState) -> None:
        self.states.append(state)

    def fail(self, message: str, *, returncode: Optional[int] = None) -> None:
        self.error = message
        self.returncode = returncode
        self.states.append(ScriptState.FAILED)


@dataclass
class ExecutionReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    outcomes: List[ScriptOutcome] = field(default_factory=list)

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {"resolve": 0.0, "save": 0.0, "run": 0.0}
    )

    def add(self, outcome: ScriptOutcome) -> ScriptOutcome:
        self.outcomes.append(outcome)
        return outcome

    def outcome(self, number: int) -> Optional[ScriptOutcome]:
        for o in self.outcomes:
            if o.number == number:
                return o
        return None

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds

    @property
    def failures(self) -> List[ScriptOutcome]:
        return [o for o in self.outcomes if o.failed]

    @property
    def failed(self) -> bool:
        return any(o.failed for o in self.outcomes)

    def finish(self) -> None:
        self.finished_at = time.perf_counter()
        self.duration_s = self.finished_at - self.started_at

    def summary_lines(self) -> List[str]:
        saved = sum(1 for o in self.outcomes if o.saved)
        ran = sum(1 for o in self.outcomes if o.ran)
        lines = [
            f"{len(self.outcomes)} script(s) processed: {saved} saved, {ran} run, "
            f"{len(self.failures)} failed"
        ]
        for o in self.failures:
            lines.append(f"script no. {o.number} failed: {o.error}")
        return lines

    def to_dict(self) -> Dict[str, object]:
        return {
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "duration_s": self.duration_s,
            "time_by_stage": dict(self.time_by_stage),
            "outcomes": [
                {**asdict(o), "states": [s.value for s in o.states]} for o in self.outcomes
            ],
        }

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class StageTimer:
    def __init__(self, report: ExecutionReport, stage: str):
        self._report = report
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._report.add_time(self._stage, time.perf_counter() - self._t0)
        return False
