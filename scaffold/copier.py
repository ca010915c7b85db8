"""
copier.py

Responsibility: Copy the direct entries of a template root into the destination.

Rules:
- Entries are processed in sorted name order so output and logs are stable.
- Names in `EXCLUDED_NAMES`, and any name ending in `.log`, are never copied.
- Directories are copied recursively; existing files at the destination are overwritten.
- Symlinks are copied as symlinks.

Failure handling is a policy of the caller:
- `CopyPolicy.BEST_EFFORT`: a failing entry is recorded and logged, the rest still copy.
- `CopyPolicy.STRICT`: the first failing entry raises `CopyEntryError`.
  Entries copied before the failure are left in place.
"""

from __future__ import annotations

import enum
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

EXCLUDED_NAMES = frozenset(
    {
        "node_modules",
        ".git",
        ".next",
        "cli",
        "dist",
        "package-lock.json",
        ".DS_Store",
        "Thumbs.db",
    }
)
EXCLUDED_SUFFIXES = (".log",)


class CopyEntryError(RuntimeError):
    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(f"Error copying {name}: {cause}")
        self.name = name
        self.cause = cause


class CopyPolicy(enum.Enum):
    BEST_EFFORT = "best_effort"
    STRICT = "strict"


@dataclass
class CopyResult:
    copied: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    failed: list[CopyEntryError] = field(default_factory=list)


def is_excluded(name: str) -> bool:
    return name in EXCLUDED_NAMES or name.endswith(EXCLUDED_SUFFIXES)


def _copy_entry(src: Path, dst: Path) -> None:
    if src.is_dir() and not src.is_symlink():
        shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)
    else:
        shutil.copy2(src, dst, follow_symlinks=False)


def copy_template_contents(
    template_root: str | Path,
    target_dir: str | Path,
    *,
    policy: CopyPolicy = CopyPolicy.BEST_EFFORT,
) -> CopyResult:
    """
    Copy every non-excluded direct entry of `template_root` into `target_dir`.
    """
    src_root = Path(template_root)
    dst_root = Path(target_dir)
    result = CopyResult()

    for entry in sorted(src_root.iterdir(), key=lambda p: p.name):
        name = entry.name
        if is_excluded(name):
            logger.info("Excluding: %s", name)
            result.excluded.append(name)
            continue

        try:
            _copy_entry(entry, dst_root / name)
        except (OSError, shutil.Error) as e:
            error = CopyEntryError(name, e)
            if policy is CopyPolicy.STRICT:
                raise error from e
            logger.warning("%s", error)
            result.failed.append(error)
            continue

        logger.info("Copied: %s", name)
        result.copied.append(name)

    return result
