"""
target.py

Responsibility: Prepare the destination directory for a new project.

This is the only place allowed to delete an existing destination, and only
when the caller passes `force=True`.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class TargetExistsError(RuntimeError):
    def __init__(self, project_name: str, path: Path) -> None:
        super().__init__(f'The directory "{project_name}" already exists. Use another name or --force.')
        self.path = path


def remove_path(path: Path) -> None:
    """
    Remove a file, symlink or directory tree; an entry that is already gone is fine.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        pass


def prepare_target_dir(project_name: str, *, force: bool, cwd: str | Path | None = None) -> Path:
    """
    Resolve `project_name` against `cwd` and create it as an empty directory.

    Raises `TargetExistsError` if something already exists there and `force`
    is False; nothing is touched in that case.
    """
    base = Path(cwd) if cwd is not None else Path(os.getcwd())
    # abspath, not resolve(): a symlink at the destination is replaced, not followed.
    target_dir = Path(os.path.abspath(base / project_name))

    if target_dir.exists() or target_dir.is_symlink():
        if not force:
            raise TargetExistsError(project_name, target_dir)
        logger.info("Removing existing %s", target_dir)
        remove_path(target_dir)

    target_dir.mkdir(parents=True, exist_ok=True)
    return target_dir
