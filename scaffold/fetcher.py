"""
fetcher.py

Responsibility: Fetch a template repository into a fresh temporary directory.

Two strategies:
- `git`: shallow, single-branch `git clone --depth 1 --branch <b> <url> <tmp>`
- `archive`: download the branch tarball from GitHub and extract it

Some hosts (and every GitHub tarball) nest the content under one folder. If
the temporary directory holds exactly one entry and it is a directory, that
folder is used as the template root.

The caller owns the returned `FetchedTemplate` and must call `cleanup()` (or
use it as a context manager) once the content has been copied.
"""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path

from scaffold.github_client import GitHubClient, GitHubError, parse_github_repo
from scaffold.process import ProcessStatus, Runner, run_process

logger = logging.getLogger(__name__)

TEMP_PREFIX = "tmpl-"
_ARCHIVE_NAME = "template.tar.gz"


class CloneError(RuntimeError):
    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(frozen=True)
class FetchedTemplate:
    temp_root: Path
    template_root: Path

    def cleanup(self) -> None:
        shutil.rmtree(self.temp_root, ignore_errors=True)

    def __enter__(self) -> FetchedTemplate:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()


def resolve_template_root(temp_root: Path) -> Path:
    entries = list(temp_root.iterdir())
    logger.debug("Cloned repository contents: %s", sorted(e.name for e in entries))
    if len(entries) == 1 and entries[0].is_dir() and not entries[0].is_symlink():
        logger.info("Using repository directory: %s", entries[0])
        return entries[0]
    logger.info("Using clone root: %s", temp_root)
    return temp_root


def _clone(repo: str, branch: str, dest: Path, runner: Runner) -> None:
    result = runner("git", ["clone", "--depth", "1", "--branch", branch, repo, str(dest)], Path(os.getcwd()))
    if result.status is ProcessStatus.EXITED:
        raise CloneError(
            f"Could not clone {repo} (branch: {branch}): git exited with code {result.exit_code}",
            exit_code=result.exit_code,
        )
    if result.status is ProcessStatus.SPAWN_FAILED:
        raise CloneError(f"Could not clone {repo}: git could not be started ({result.error})")


def _download_and_extract(repo: str, branch: str, dest: Path, client: GitHubClient) -> None:
    archive = dest / _ARCHIVE_NAME
    try:
        owner, name = parse_github_repo(repo)
        client.download_tarball(owner, name, branch, archive)
        with tarfile.open(archive, mode="r:gz") as tar:
            tar.extractall(dest, filter="data")
    except GitHubError as e:
        raise CloneError(f"Could not download {repo} (branch: {branch}): {e}", exit_code=e.status_code) from e
    except (tarfile.TarError, OSError) as e:
        raise CloneError(f"Could not extract the archive of {repo} (branch: {branch}): {e}") from e
    finally:
        archive.unlink(missing_ok=True)


def fetch_template(
    repo: str,
    branch: str,
    *,
    strategy: str = "git",
    runner: Runner = run_process,
    github_client: GitHubClient | None = None,
    temp_dir: str | Path | None = None,
) -> FetchedTemplate:
    """
    Fetch `repo` at `branch` into a new temporary directory under `temp_dir`
    (the system temp root by default).

    Raises `CloneError` on failure; the temporary directory is removed first.
    """
    temp_root = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX, dir=temp_dir))
    logger.info("Cloning template from %s (branch: %s)...", repo, branch)
    try:
        if strategy == "git":
            _clone(repo, branch, temp_root, runner)
        elif strategy == "archive":
            client = github_client or GitHubClient(os.environ.get("GITHUB_TOKEN"))
            _download_and_extract(repo, branch, temp_root, client)
        else:
            raise CloneError(f"Unknown fetch strategy: {strategy}")
        template_root = resolve_template_root(temp_root)
    except BaseException:
        shutil.rmtree(temp_root, ignore_errors=True)
        raise
    return FetchedTemplate(temp_root=temp_root, template_root=template_root)
