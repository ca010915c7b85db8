"""
manifest.py

Responsibility: Set the `name` field of the project manifest (`package.json`).

This step never raises. Its `StepOutcome` tells whether the manifest was
patched, absent, or unusable. Failures are only logged at debug level.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from scaffold.outcome import StepOutcome

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"
STEP = "manifest"


def patch_manifest_name(target_dir: str | Path, project_name: str, *, filename: str = MANIFEST_NAME) -> StepOutcome:
    """
    Rewrite `<target_dir>/<filename>` with `name` set to `project_name`.

    All other keys keep their order and values. Output uses 2-space
    indentation and ends with a newline.
    """
    path = Path(target_dir) / filename
    if not path.is_file():
        return StepOutcome.skipped(STEP, f"{filename} not found")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{filename} is not a JSON object")
        data["name"] = project_name
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except (OSError, ValueError) as e:
        logger.debug("Could not update %s: %s", path, e)
        return StepOutcome.failed(STEP, str(e))

    return StepOutcome.succeeded(STEP, f"name set to {project_name}")
