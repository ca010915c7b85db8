from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from scaffold.process import ProcessResult, ProcessStatus

TEMPLATE_FILES: dict[str, str] = {
    "package.json": '{\n  "name": "template-next-15",\n  "version": "0.1.0",\n  "private": true,\n  "scripts": {\n    "dev": "next dev"\n  }\n}\n',
    "README.md": "# template\n",
    "src/app/page.tsx": "export default function Page() { return null }\n",
    "node_modules/react/index.js": "module.exports = {}\n",
    ".git/HEAD": "ref: refs/heads/main\n",
    ".next/cache.json": "{}\n",
    "cli/src/index.ts": "// cli\n",
    "dist/index.js": "// dist\n",
    "package-lock.json": "{}\n",
    "npm-debug.log": "log\n",
    ".DS_Store": "",
}


class FakeRunner:
    """
    Stands in for `run_process`.

    `git clone` writes `files` into the clone destination. `failures` maps
    "<executable> <first arg>" (or just "<executable>") to an exit code, or
    to None for a spawn failure.
    """

    def __init__(self, files: dict[str, str] | None = None, failures: dict[str, int | None] | None = None) -> None:
        self.files = TEMPLATE_FILES if files is None else files
        self.failures = failures or {}
        self.calls: list[tuple[str, list[str], Path]] = []

    def __call__(self, executable: str, args: Sequence[str], cwd: Path) -> ProcessResult:
        args = list(args)
        self.calls.append((executable, args, Path(cwd)))
        command = " ".join([executable, *args])

        for key in (" ".join([executable, *args[:1]]), executable):
            if key in self.failures:
                code = self.failures[key]
                if code is None:
                    return ProcessResult(command=command, status=ProcessStatus.SPAWN_FAILED, error="not found")
                return ProcessResult(command=command, status=ProcessStatus.EXITED, exit_code=code)

        if executable == "git" and args[:1] == ["clone"]:
            dest = Path(args[-1])
            for rel, content in self.files.items():
                path = dest / rel
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")

        return ProcessResult(command=command, status=ProcessStatus.SUCCEEDED, exit_code=0)

    def commands(self) -> list[str]:
        return [" ".join([exe, *args]) for exe, args, _cwd in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Private temp root so tests can check that fetched clones are cleaned up."""
    root = tmp_path / "tmp"
    root.mkdir()
    return root
