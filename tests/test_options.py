from __future__ import annotations

import logging
from pathlib import Path

import pytest

from scaffold.config import DEFAULT_REPO, ConfigError
from scaffold.options import Options, UsageError, build_options, parse_args

NO_ENV: dict[str, str] = {}


def test_defaults() -> None:
    opts = build_options(["myapp"], environ=NO_ENV)
    assert opts == Options(project_name="myapp")
    assert opts.package_manager == "npm"
    assert opts.repo == DEFAULT_REPO
    assert opts.branch == "main"
    assert opts.install and opts.git and not opts.force


def test_all_flags() -> None:
    opts = build_options(
        ["myapp", "--no-install", "--no-git", "--pm=pnpm", "--force", "--repo=https://example.com/x.git", "--branch=dev"],
        environ=NO_ENV,
    )
    assert opts.install is False
    assert opts.git is False
    assert opts.package_manager == "pnpm"
    assert opts.force is True
    assert opts.repo == "https://example.com/x.git"
    assert opts.branch == "dev"


def test_flags_are_order_insensitive() -> None:
    opts = build_options(["--no-git", "--pm=yarn", "myapp"], environ=NO_ENV)
    assert opts.project_name == "myapp"
    assert opts.git is False
    assert opts.package_manager == "yarn"


def test_last_repeated_value_wins() -> None:
    opts = build_options(["myapp", "--branch=a", "--branch=b", "--pm=yarn", "--pm=pnpm"], environ=NO_ENV)
    assert opts.branch == "b"
    assert opts.package_manager == "pnpm"


def test_unrecognized_package_manager_is_ignored() -> None:
    assert build_options(["myapp", "--pm=bun"], environ=NO_ENV).package_manager == "npm"
    assert build_options(["myapp", "--pm=yarn", "--pm=bun"], environ=NO_ENV).package_manager == "yarn"


def test_unknown_flags_and_extra_positionals_are_ignored() -> None:
    opts = build_options(["myapp", "--typescript", "--color=red", "extra"], environ=NO_ENV)
    assert opts == Options(project_name="myapp")


def test_abbreviations_are_not_expanded() -> None:
    assert build_options(["myapp", "--for"], environ=NO_ENV).force is False


@pytest.mark.parametrize("argv", [[], ["."], [""], ["--force"]])
def test_missing_or_invalid_project_name(argv: list[str]) -> None:
    with pytest.raises(UsageError):
        build_options(argv, environ=NO_ENV)


def test_verbose_and_quiet_set_log_level() -> None:
    assert build_options(["myapp", "--verbose"], environ=NO_ENV).log_level == logging.DEBUG
    assert build_options(["myapp", "--quiet"], environ=NO_ENV).log_level == logging.WARNING


def test_fetch_strategy() -> None:
    assert build_options(["myapp", "--fetch=archive"], environ=NO_ENV).fetch == "archive"
    assert build_options(["myapp", "--fetch=ftp"], environ=NO_ENV).fetch == "git"


def test_config_supplies_defaults_and_flags_win(tmp_path: Path) -> None:
    cfg = tmp_path / "scaffold.yaml"
    cfg.write_text("branch: stable\npackage_manager: yarn\ninstall: false\n", encoding="utf-8")

    opts = build_options(["myapp", f"--config={cfg}"], environ=NO_ENV)
    assert opts.branch == "stable"
    assert opts.package_manager == "yarn"
    assert opts.install is False

    opts = build_options(["myapp", f"--config={cfg}", "--branch=dev", "--pm=npm"], environ=NO_ENV)
    assert opts.branch == "dev"
    assert opts.package_manager == "npm"


def test_config_from_environment(tmp_path: Path) -> None:
    cfg = tmp_path / "scaffold.yaml"
    cfg.write_text("git: false\n", encoding="utf-8")
    assert build_options(["myapp"], environ={"SCAFFOLD_CONFIG": str(cfg)}).git is False


def test_missing_config_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        build_options(["myapp", f"--config={tmp_path / 'nope.yaml'}"], environ=NO_ENV)


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_exits_zero_before_validation(flag: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        parse_args([".", flag, "--pm"], environ=NO_ENV)
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "scaffold <project-name> [options]" in out
    assert "--no-install" in out


def test_parse_args_exits_one_on_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        parse_args(["."], environ=NO_ENV)
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "ERROR:" in err
    assert "project name" in err


@pytest.mark.parametrize("flag", ["--repo", "--branch", "--pm", "--fetch", "--config"])
def test_value_flag_without_equals_is_ignored(flag: str) -> None:
    assert parse_args(["myapp", flag], environ=NO_ENV) == Options(project_name="myapp")


def test_space_separated_value_is_not_a_selection() -> None:
    opts = parse_args(["myapp", "--pm", "pnpm", "--branch", "dev"], environ=NO_ENV)
    assert opts.package_manager == "npm"
    assert opts.branch == "main"
    assert opts.project_name == "myapp"


def test_switch_with_value_is_ignored() -> None:
    opts = build_options(["myapp", "--force=yes", "--no-git=1"], environ=NO_ENV)
    assert opts.force is False
    assert opts.git is True


@pytest.mark.parametrize("name", ["", "."])
def test_options_rejects_invalid_project_name(name: str) -> None:
    with pytest.raises(UsageError):
        Options(project_name=name)
