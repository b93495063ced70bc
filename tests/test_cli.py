"""Tests for the compass-harness CLI."""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from compass_harness.cli import main
from compass_harness.core.errors import EXIT_DOCTOR_FAILURE, EXIT_OK
from compass_harness.runner.app import electron_executable


@pytest.fixture()
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "compass-harness" in result.output.lower()


def test_doctor_help(runner):
    result = runner.invoke(main, ["doctor", "--help"])
    assert result.exit_code == 0
    assert "doctor" in result.output.lower()


def test_doctor_passes_with_built_app(runner, tmp_path):
    exe = electron_executable(tmp_path, "linux")
    exe.parent.mkdir(parents=True)
    exe.write_text("")
    config = tmp_path / "harness.yaml"
    config.write_text("echo_steps: false\n", encoding="utf-8")

    with patch.object(sys, "platform", "linux"):
        result = runner.invoke(
            main, ["doctor", "--dist-dir", str(tmp_path), "--config", str(config)]
        )
    assert result.exit_code == EXIT_OK
    assert "All checks passed" in result.output


def test_doctor_fails_without_build(runner, tmp_path):
    with patch.object(sys, "platform", "linux"):
        result = runner.invoke(main, ["doctor", "--dist-dir", str(tmp_path)])
    assert result.exit_code == EXIT_DOCTOR_FAILURE
    assert "↳" in result.output


def test_doctor_fails_with_missing_config(runner, tmp_path):
    result = runner.invoke(
        main, ["doctor", "--config", str(tmp_path / "nonexistent.yaml")]
    )
    assert result.exit_code == EXIT_DOCTOR_FAILURE


def test_commands_lists_catalogue(runner):
    result = runner.invoke(main, ["commands"])
    assert result.exit_code == 0
    assert "goto_schema_window" in result.output
    assert "sample_collection" in result.output
    assert "Click the Connect button" in result.output
