"""
post_steps.py

Responsibility: Optional steps that run after the template is in place.

- `init_git`: `git init`, `git add .`, `git commit -m <message>`
- `install_dependencies`: the package manager's install command

Both report a `StepOutcome` instead of raising; a failure is a warning and
the scaffold still completes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from scaffold.outcome import StepOutcome
from scaffold.process import ProcessError, Runner, run_process

logger = logging.getLogger(__name__)

# yarn installs when invoked without a subcommand.
INSTALL_COMMANDS: dict[str, list[str]] = {
    "npm": ["install"],
    "pnpm": ["install"],
    "yarn": [],
}


def init_git(target_dir: Path, *, message: str, runner: Runner = run_process) -> StepOutcome:
    try:
        for args in (["init"], ["add", "."], ["commit", "-m", message]):
            runner("git", args, target_dir).raise_for_status()
    except ProcessError as e:
        logger.warning("Could not initialize Git (%s).", e)
        return StepOutcome.failed("git", str(e))
    return StepOutcome.succeeded("git", message)


def install_dependencies(target_dir: Path, *, package_manager: str, runner: Runner = run_process) -> StepOutcome:
    args = INSTALL_COMMANDS[package_manager]
    try:
        runner(package_manager, args, target_dir).raise_for_status()
    except ProcessError as e:
        logger.warning("Dependency installation failed (%s). Install them manually.", e)
        return StepOutcome.failed("install", str(e))
    return StepOutcome.succeeded("install", " ".join([package_manager, *args]))
