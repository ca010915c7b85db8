"""
options.py

Responsibility: Turn the raw argument list into a validated, immutable `Options`.

Rules:
- `-h/--help` anywhere wins: usage is printed and the process exits with 0.
- The first positional token is the project name; it must be non-empty and not ".".
- Flags are order-insensitive; for repeated flags the last usable value wins.
- An unrecognized `--pm` value is ignored and the previous/default value is kept.
- Unknown flags and extra positionals are ignored.
- Value flags (`--pm`, `--repo`, `--branch`, `--fetch`, `--config`) only count in `--flag=value` form.

Values not given on the command line come from the YAML config (see `config.py`).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Mapping, Sequence

from scaffold.config import (
    DEFAULT_BRANCH,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_REPO,
    FETCH_STRATEGIES,
    PACKAGE_MANAGERS,
    ConfigError,
    load_config,
)

logger = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help")
SWITCH_FLAGS = ("--no-install", "--no-git", "--force", "--verbose", "--quiet")
# Only recognized in their `--flag=value` form.
VALUE_FLAGS = ("--pm", "--repo", "--branch", "--fetch", "--config")


def _is_recognized(token: str) -> bool:
    if not token.startswith("-"):
        return True
    if token in SWITCH_FLAGS:
        return True
    flag, eq, _value = token.partition("=")
    return bool(eq) and flag in VALUE_FLAGS


class UsageError(ValueError):
    pass


@dataclass(frozen=True)
class Options:
    """Everything one scaffold run needs; created once and threaded through every step."""

    project_name: str
    force: bool = False
    install: bool = True
    git: bool = True
    package_manager: str = "npm"
    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH
    fetch: str = "git"
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    log_level: int = logging.INFO

    def __post_init__(self) -> None:
        _validate_project_name(self.project_name)


def _validate_project_name(project_name: str | None) -> None:
    if not project_name or project_name == ".":
        raise UsageError("You must specify the project name ('.' is not accepted).")


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="scaffold",
        usage="scaffold <project-name> [options]",
        description="Create a new project from a remote template repository.",
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("project_name", nargs="?", default=None, help="Directory name for the new project")
    p.add_argument("-h", "--help", action="store_true", help="Show this message and exit")
    p.add_argument("--no-install", dest="install", action="store_const", const=False, default=None, help="Do not install dependencies")
    p.add_argument("--no-git", dest="git", action="store_const", const=False, default=None, help="Do not initialize a git repository")
    p.add_argument(
        "--pm",
        dest="package_manager",
        action="append",
        default=[],
        metavar="{npm,pnpm,yarn}",
        help="Package manager used for the install step (default: npm)",
    )
    p.add_argument("--force", action="store_true", default=False, help="Overwrite the directory if it already exists")
    p.add_argument("--repo", default=None, metavar="URL", help=f"Template repository URL (default: {DEFAULT_REPO})")
    p.add_argument("--branch", default=None, metavar="NAME", help="Branch to use (default: main)")
    p.add_argument(
        "--fetch",
        action="append",
        default=[],
        metavar="{git,archive}",
        help="Fetch the template with a shallow git clone or as a GitHub archive (default: git)",
    )
    p.add_argument("--config", default=None, metavar="PATH", help="YAML file with default options (or set SCAFFOLD_CONFIG)")
    p.add_argument("--verbose", dest="log_level", action="store_const", const=logging.DEBUG, default=None, help="Show debug output")
    p.add_argument("--quiet", dest="log_level", action="store_const", const=logging.WARNING, help="Only show warnings and errors")
    return p


def format_usage() -> str:
    return _build_parser().format_help()


def _last_choice(values: Sequence[str], choices: tuple[str, ...], default: str, *, flag: str) -> str:
    chosen = default
    for value in values:
        if value in choices:
            chosen = value
        else:
            logger.debug("Ignoring unrecognized %s value: %r", flag, value)
    return chosen


def build_options(argv: Sequence[str], *, environ: Mapping[str, str] | None = None) -> Options:
    """
    Parse `argv` into `Options` without exiting.

    A value flag without `=value` (`--branch dev`) or a switch given a value
    (`--force=yes`) is ignored like any other unknown token. Raises `UsageError` for a missing/invalid project name and
    `ConfigError` if the config file cannot be loaded.
    """
    tokens = [token for token in argv if _is_recognized(token)]
    ignored = [token for token in argv if not _is_recognized(token)]
    args, unknown = _build_parser().parse_known_args(tokens)
    if ignored or unknown:
        logger.debug("Ignoring unrecognized arguments: %s", " ".join(ignored + unknown))

    project_name = args.project_name
    _validate_project_name(project_name)

    config = load_config(args.config, environ=environ)

    return Options(
        project_name=project_name,
        force=bool(args.force),
        install=config.install if args.install is None else args.install,
        git=config.git if args.git is None else args.git,
        package_manager=_last_choice(args.package_manager, PACKAGE_MANAGERS, config.package_manager, flag="--pm"),
        repo=args.repo or config.repo,
        branch=args.branch or config.branch,
        fetch=_last_choice(args.fetch, FETCH_STRATEGIES, config.fetch, flag="--fetch"),
        commit_message=config.commit_message,
        log_level=logging.INFO if args.log_level is None else args.log_level,
    )


def parse_args(argv: Sequence[str] | None = None, *, environ: Mapping[str, str] | None = None) -> Options:
    """
    CLI-facing wrapper around `build_options`.

    Prints usage and exits with 0 for `-h/--help`; prints the error and usage
    to stderr and exits with 1 for usage or config errors. No filesystem
    mutation happens before these exits.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)
    if any(token in HELP_FLAGS for token in tokens):
        print(format_usage())
        raise SystemExit(0)

    try:
        return build_options(tokens, environ=environ)
    except (UsageError, ConfigError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        print(format_usage(), file=sys.stderr)
        raise SystemExit(1) from e
