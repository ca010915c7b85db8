"""
process.py

Responsibility: Run external executables (git, npm, pnpm, yarn) for the scaffold.

The child's standard streams are inherited from this process, so progress
output and prompts from git or the package manager show up live in the
user's terminal. Nothing is captured or buffered and no timeout is applied.

Each invocation returns a tagged `ProcessResult`; callers decide whether a
failure is fatal by calling `raise_for_status()` or by inspecting `status`.
"""

from __future__ import annotations

import enum
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

logger = logging.getLogger(__name__)


class ProcessError(RuntimeError):
    pass


class ProcessExitError(ProcessError):
    def __init__(self, command: str, exit_code: int) -> None:
        super().__init__(f"{command} exited with code {exit_code}")
        self.command = command
        self.exit_code = exit_code


class SpawnError(ProcessError):
    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Could not start {command}: {reason}")
        self.command = command
        self.reason = reason


class ProcessStatus(enum.Enum):
    SUCCEEDED = "succeeded"
    EXITED = "exited"
    SPAWN_FAILED = "spawn_failed"


@dataclass(frozen=True)
class ProcessResult:
    command: str
    status: ProcessStatus
    exit_code: int | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ProcessStatus.SUCCEEDED

    def raise_for_status(self) -> None:
        if self.status is ProcessStatus.EXITED:
            raise ProcessExitError(self.command, self.exit_code if self.exit_code is not None else -1)
        if self.status is ProcessStatus.SPAWN_FAILED:
            raise SpawnError(self.command, self.error)


# (executable, args, cwd) -> ProcessResult
Runner = Callable[[str, Sequence[str], Path], ProcessResult]


def run_process(executable: str, args: Sequence[str], cwd: str | Path) -> ProcessResult:
    """
    Run `executable args...` in `cwd` with the terminal attached.

    The executable is looked up on PATH first so that `.cmd` shims on Windows
    (npm, pnpm, yarn) can be started without going through a shell.
    """
    command = " ".join([executable, *args])
    resolved = shutil.which(executable) or executable
    logger.debug("Running %s (cwd=%s)", command, cwd)
    try:
        completed = subprocess.run([resolved, *args], cwd=str(cwd), check=False)
    except OSError as e:
        return ProcessResult(command=command, status=ProcessStatus.SPAWN_FAILED, error=str(e))

    if completed.returncode != 0:
        return ProcessResult(command=command, status=ProcessStatus.EXITED, exit_code=completed.returncode)
    return ProcessResult(command=command, status=ProcessStatus.SUCCEEDED, exit_code=0)
