"""Tests for the typer command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from testrecorder.cli import app

DATA = Path(__file__).parent / "data"


@pytest.fixture
def runner():
    return CliRunner()


def test_replay_failing_run_exits_one(runner):
    result = runner.invoke(app, ["replay", str(DATA / "run.yaml"), "--no-ansi"])
    assert result.exit_code == 1
    assert "Test run with 3 tests failed" in result.stdout
    assert "\x1b" not in result.stdout


def test_replay_passing_run_exits_zero(runner):
    result = runner.invoke(app, ["replay", str(DATA / "passing.yaml"), "--no-ansi"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[-1] == "✔ Test run with 1 test passed after 0.500 seconds."


def test_replay_with_config_and_tag_color(runner):
    result = runner.invoke(
        app,
        [
            "replay",
            str(DATA / "run.yaml"),
            "--config",
            str(DATA / "recorder.yaml"),
            "--tag-color",
            ".critical=blue",
        ],
    )
    assert result.exit_code == 1
    # "add()" is tagged red and .critical; the command line binds .critical to blue.
    assert "\x1b[94m●\x1b[91m●\x1b[0m" in result.stdout


def test_replay_missing_file_exits_two(runner, tmp_path):
    result = runner.invoke(app, ["replay", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 2


def test_replay_malformed_yaml_exits_two(runner, tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("events: [unclosed\n")
    result = runner.invoke(app, ["replay", str(path)])
    assert result.exit_code == 2


def test_replay_malformed_config_exits_two(runner, tmp_path):
    path = tmp_path / "recorder.yaml"
    path.write_text("ansi: [true\n")
    result = runner.invoke(app, ["replay", str(DATA / "passing.yaml"), "--config", str(path)])
    assert result.exit_code == 2


def test_bad_tag_color_flag(runner):
    result = runner.invoke(app, ["replay", str(DATA / "passing.yaml"), "--tag-color", "nocolor"])
    assert result.exit_code == 2


def test_warn(runner):
    result = runner.invoke(app, ["warn", "Parallelization disabled"])
    assert result.exit_code == 0
    assert result.stdout == "\u26a0\ufe0e Parallelization disabled\n"
