"""
config.py

Responsibility: Load the optional YAML configuration file into typed defaults.

The file supplies defaults only; flags given on the command line always win.
It is located through `--config=<path>` or the `SCAFFOLD_CONFIG` environment
variable. Example:

    repo: https://github.com/acme/web-template.git
    branch: stable
    package_manager: pnpm
    install: false
    git: true
    fetch: archive
    commit_message: Initial scaffold

Unknown keys are ignored so a shared file can carry settings for other tools.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

CONFIG_ENV_VAR = "SCAFFOLD_CONFIG"

DEFAULT_REPO = "https://github.com/rudylauu/template-next-15.git"
DEFAULT_BRANCH = "main"
DEFAULT_COMMIT_MESSAGE = "Initialize from template-next-15"

PACKAGE_MANAGERS = ("npm", "pnpm", "yarn")
FETCH_STRATEGIES = ("git", "archive")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ScaffoldConfig:
    """Defaults applied underneath command-line flags."""

    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH
    package_manager: str = "npm"
    install: bool = True
    git: bool = True
    fetch: str = "git"
    commit_message: str = DEFAULT_COMMIT_MESSAGE


def _as_bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"`{key}` must be true or false, got {value!r}.")
    return value


def _as_str(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    text = str(value).strip()
    if not text:
        raise ConfigError(f"`{key}` must not be empty when provided.")
    return text


def _as_choice(data: Mapping[str, Any], key: str, default: str, choices: tuple[str, ...]) -> str:
    value = _as_str(data, key, default)
    if value not in choices:
        raise ConfigError(f"`{key}` must be one of {', '.join(choices)}, got {value!r}.")
    return value


def config_from_mapping(data: Mapping[str, Any]) -> ScaffoldConfig:
    """Validate a parsed mapping and build a `ScaffoldConfig`."""
    return ScaffoldConfig(
        repo=_as_str(data, "repo", DEFAULT_REPO),
        branch=_as_str(data, "branch", DEFAULT_BRANCH),
        package_manager=_as_choice(data, "package_manager", "npm", PACKAGE_MANAGERS),
        install=_as_bool(data, "install", True),
        git=_as_bool(data, "git", True),
        fetch=_as_choice(data, "fetch", "git", FETCH_STRATEGIES),
        commit_message=_as_str(data, "commit_message", DEFAULT_COMMIT_MESSAGE),
    )


def load_config(config_path: str | Path | None = None, *, environ: Mapping[str, str] | None = None) -> ScaffoldConfig:
    """
    Load the configuration file, or return built-in defaults when none is named.

    `config_path` takes precedence over the `SCAFFOLD_CONFIG` environment variable.
    """
    env = os.environ if environ is None else environ
    raw_path = config_path or env.get(CONFIG_ENV_VAR) or None
    if raw_path is None:
        return ScaffoldConfig()

    path = Path(raw_path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Config file does not exist: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file: {path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")
    return config_from_mapping(data)
