"""
cli.py

Responsibility: CLI entrypoint for `scaffold`.

High-level flow (single command):
1) Parse arguments -> `Options` (may exit for help/usage errors)
2) Prepare the destination directory
3) Fetch the template into a temporary directory
4) Copy the template contents, then always remove the temporary directory
5) Remove leftovers that must never ship (`.git`, `cli`, `node_modules`, `.next`)
6) Set the manifest name
7) (Optional) git init + initial commit
8) (Optional) install dependencies
9) Print the summary

Steps 2 and 3 are fatal on failure. Everything after the template has been
fetched degrades to warnings. A destination created before a fatal error is
left in place; rerunning with --force replaces it.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from scaffold.copier import CopyEntryError, CopyPolicy, CopyResult, copy_template_contents
from scaffold.fetcher import CloneError, fetch_template
from scaffold.github_client import GitHubClient
from scaffold.manifest import patch_manifest_name
from scaffold.options import Options, parse_args
from scaffold.outcome import StepOutcome
from scaffold.post_steps import init_git, install_dependencies
from scaffold.process import Runner, run_process
from scaffold.summary import render_summary
from scaffold.target import TargetExistsError, prepare_target_dir, remove_path

logger = logging.getLogger(__name__)

LEFTOVER_NAMES = (".git", "cli", "node_modules", ".next")

FATAL_ERRORS = (TargetExistsError, CloneError, CopyEntryError, OSError)


@dataclass(frozen=True)
class ScaffoldReport:
    target_dir: Path
    copy: CopyResult
    manifest: StepOutcome
    git: StepOutcome
    install: StepOutcome


def remove_leftovers(target_dir: Path) -> list[str]:
    removed: list[str] = []
    for name in LEFTOVER_NAMES:
        path = target_dir / name
        if path.exists() or path.is_symlink():
            logger.info("Cleaning up: %s", name)
            remove_path(path)
            removed.append(name)
    return removed


def run_scaffold(
    options: Options,
    *,
    runner: Runner = run_process,
    cwd: str | Path | None = None,
    copy_policy: CopyPolicy = CopyPolicy.BEST_EFFORT,
    github_client: GitHubClient | None = None,
    temp_dir: str | Path | None = None,
) -> ScaffoldReport:
    """
    Run the whole scaffold for already-parsed `options`.

    Raises `TargetExistsError` or `CloneError` for fatal failures (and
    `CopyEntryError` when `copy_policy` is STRICT).
    """
    target_dir = prepare_target_dir(options.project_name, force=options.force, cwd=cwd)

    fetched = fetch_template(
        options.repo,
        options.branch,
        strategy=options.fetch,
        runner=runner,
        github_client=github_client,
        temp_dir=temp_dir,
    )
    with fetched:
        copy_result = copy_template_contents(fetched.template_root, target_dir, policy=copy_policy)

    remove_leftovers(target_dir)

    manifest = patch_manifest_name(target_dir, options.project_name)

    if options.git:
        git = init_git(target_dir, message=options.commit_message, runner=runner)
    else:
        git = StepOutcome.skipped("git", "--no-git")

    if options.install:
        install = install_dependencies(target_dir, package_manager=options.package_manager, runner=runner)
    else:
        install = StepOutcome.skipped("install", "--no-install")

    return ScaffoldReport(
        target_dir=target_dir,
        copy=copy_result,
        manifest=manifest,
        git=git,
        install=install,
    )


_handler: logging.Handler | None = None


def _configure_logging(level: int) -> None:
    global _handler
    pkg_logger = logging.getLogger("scaffold")
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        pkg_logger.addHandler(_handler)
    pkg_logger.setLevel(level)


def main(argv: Sequence[str] | None = None) -> int:
    _configure_logging(logging.INFO)
    options = parse_args(argv)
    _configure_logging(options.log_level)

    try:
        report = run_scaffold(options, runner=run_process)
    except FATAL_ERRORS as e:
        logger.error("❌ Error: %s", e)
        return 1

    print(
        render_summary(
            project_name=options.project_name,
            package_manager=options.package_manager,
            install=report.install,
            post_steps=[report.git, report.install],
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
