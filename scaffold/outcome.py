"""
outcome.py

Responsibility: A small result type for best-effort steps.

Steps that must never abort the run (manifest patch, git init, dependency
install) report what happened through a `StepOutcome` instead of raising, so
callers and tests can tell "done", "nothing to do" and "failed" apart.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class StepStatus(enum.Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepOutcome:
    step: str
    status: StepStatus
    detail: str = ""

    @classmethod
    def succeeded(cls, step: str, detail: str = "") -> StepOutcome:
        return cls(step=step, status=StepStatus.SUCCEEDED, detail=detail)

    @classmethod
    def skipped(cls, step: str, detail: str = "") -> StepOutcome:
        return cls(step=step, status=StepStatus.SKIPPED, detail=detail)

    @classmethod
    def failed(cls, step: str, detail: str = "") -> StepOutcome:
        return cls(step=step, status=StepStatus.FAILED, detail=detail)

    @property
    def ok(self) -> bool:
        return self.status is not StepStatus.FAILED
