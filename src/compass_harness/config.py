"""Harness configuration: timeouts, launch options, artifact locations."""

from __future__ import annotations

import os
import pathlib
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from compass_harness.constants import (
    CONFIG_FILE,
    DEFAULT_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    ENV_DIST_DIR,
    ENV_ELECTRON,
    ENV_USE_PREBUILT,
    SAMPLE_TIMEOUT_MS,
    SESSION_DIR,
    STATUS_BAR_TIMEOUT_MS,
    WINDOW_LOADED_TIMEOUT_MS,
    WINDOW_TIMEOUT_MS,
)
from compass_harness.core.errors import ConfigError


class TimeoutConfig(BaseModel):
    default_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0)
    interval_ms: int = Field(DEFAULT_INTERVAL_MS, gt=0)
    window_ms: int = Field(WINDOW_TIMEOUT_MS, gt=0)
    window_loaded_ms: int = Field(WINDOW_LOADED_TIMEOUT_MS, gt=0)
    status_bar_ms: int = Field(STATUS_BAR_TIMEOUT_MS, gt=0)
    sample_ms: int = Field(SAMPLE_TIMEOUT_MS, gt=0)


class LaunchConfig(BaseModel):
    dist_dir: Optional[str] = None
    use_prebuilt: bool = False
    electron_path: Optional[str] = None
    extra_args: list[str] = Field(default_factory=list)


class HarnessConfig(BaseModel):
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    launch: LaunchConfig = Field(default_factory=LaunchConfig)
    session_dir: str = SESSION_DIR
    echo_steps: bool = False

    def with_env(self, env: Mapping[str, str] | None = None) -> HarnessConfig:
        """Return a copy with environment overrides applied."""
        env = os.environ if env is None else env
        launch = self.launch.model_copy()
        if env.get(ENV_USE_PREBUILT):
            launch.use_prebuilt = True
        if env.get(ENV_DIST_DIR):
            launch.dist_dir = env[ENV_DIST_DIR]
        if env.get(ENV_ELECTRON):
            launch.electron_path = env[ENV_ELECTRON]
        return self.model_copy(update={"launch": launch})


def load_config(
    path: str | pathlib.Path | None = None,
    env: Mapping[str, str] | None = None,
) -> HarnessConfig:
    """Load config from a YAML or JSON file, then apply environment overrides.

    A missing default config file yields the defaults; a missing explicit
    path is an error.
    """
    explicit = path is not None
    p = pathlib.Path(path or CONFIG_FILE)
    raw: Any = {}
    if p.exists():
        try:
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse config '{p}': {exc}") from exc
    elif explicit:
        raise ConfigError(f"Config file not found: '{p}'")
    if not isinstance(raw, dict):
        raise ConfigError(f"Config '{p}' must contain a mapping at the top level")
    try:
        config = HarnessConfig(**raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config '{p}': {exc}") from exc
    return config.with_env(env)
