"""Tests for harness configuration."""

import json

import pytest

from compass_harness.config import HarnessConfig, TimeoutConfig, load_config
from compass_harness.core.errors import ConfigError


def test_defaults():
    config = HarnessConfig()
    assert config.timeouts.interval_ms == 1000
    assert config.timeouts.window_ms == 20000
    assert config.timeouts.status_bar_ms == 15000
    assert config.timeouts.sample_ms == 10000
    assert config.launch.use_prebuilt is False


def test_load_yaml(tmp_path):
    path = tmp_path / "compass-harness.yaml"
    path.write_text(
        "timeouts:\n"
        "  window_ms: 30000\n"
        "launch:\n"
        "  dist_dir: /builds/dist\n",
        encoding="utf-8",
    )
    config = load_config(path, env={})
    assert config.timeouts.window_ms == 30000
    assert config.timeouts.interval_ms == 1000
    assert config.launch.dist_dir == "/builds/dist"


def test_load_json(tmp_path):
    path = tmp_path / "harness.json"
    path.write_text(json.dumps({"echo_steps": True}), encoding="utf-8")
    assert load_config(path, env={}).echo_steps is True


def test_env_overrides(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("launch:\n  dist_dir: /a\n", encoding="utf-8")
    config = load_config(path, env={
        "TEST_WITH_PREBUILT": "1",
        "COMPASS_HARNESS_DIST_DIR": "/b",
        "COMPASS_HARNESS_ELECTRON": "/opt/electron",
    })
    assert config.launch.use_prebuilt is True
    assert config.launch.dist_dir == "/b"
    assert config.launch.electron_path == "/opt/electron"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_invalid_values(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("timeouts:\n  interval_ms: 0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_unparseable_file(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("timeouts: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_timeouts_must_be_positive():
    with pytest.raises(ValueError):
        TimeoutConfig(window_ms=-1)
