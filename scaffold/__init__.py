"""
scaffold package

This package implements `scaffold`, a CLI that creates a new project from a
remote template repository.

Key responsibilities are split across modules:
- `options.py`: parse the raw argument list into an immutable `Options`
- `config.py`: optional YAML file providing defaults for options
- `process.py`: run external executables with the terminal attached
- `target.py`: create (or force-recreate) the destination directory
- `fetcher.py`: fetch the template into a temporary directory (git or archive)
- `github_client.py`: isolated GitHub archive download
- `copier.py`: copy template entries into the destination, minus the denylist
- `manifest.py`: rewrite the `name` field of `package.json`
- `post_steps.py`: optional git init/commit and dependency install
- `summary.py`: render the success banner
- `cli.py`: CLI entrypoint and orchestration (parse -> prepare -> fetch -> copy -> patch -> git -> install)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
