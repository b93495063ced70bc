"""Doctor command: validates the environment before running UI tests."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional

import psutil

from compass_harness.config import HarnessConfig, load_config
from compass_harness.constants import COMPASS_PROCESS_NAMES
from compass_harness.core.errors import ApplicationError, ConfigError, ExecutableNotFoundError
from compass_harness.runner.app import launch_spec

MIN_PYTHON = (3, 10)


@dataclass
class CheckResult:
    name: str
    passed: bool
    message: str
    hint: Optional[str] = None


@dataclass
class DoctorReport:
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    def add(self, result: CheckResult) -> None:
        self.checks.append(result)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def check_python_version() -> CheckResult:
    """Verify that the running Python meets the minimum version requirement."""
    current = sys.version_info[:2]
    ok = current >= MIN_PYTHON
    ver_str = f"{current[0]}.{current[1]}"
    min_str = f"{MIN_PYTHON[0]}.{MIN_PYTHON[1]}"
    if ok:
        return CheckResult(
            name="Python version",
            passed=True,
            message=f"Python {ver_str} ✓ (>= {min_str} required)",
        )
    return CheckResult(
        name="Python version",
        passed=False,
        message=f"Python {ver_str} is too old (need >= {min_str})",
        hint=f"Install Python {min_str}+ from https://python.org/downloads/",
    )


def check_config(config_path: Optional[str]) -> tuple[CheckResult, HarnessConfig]:
    """Load the harness config; fall back to defaults on failure."""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        return (
            CheckResult(
                name="Config",
                passed=False,
                message=str(exc).splitlines()[0],
                hint="Fix the YAML/JSON file or omit --config to use defaults.",
            ),
            HarnessConfig().with_env(),
        )
    source = config_path or "defaults"
    return CheckResult(name="Config", passed=True, message=f"Loaded {source} ✓"), config


def check_executable(dist_dir: Optional[str], config: HarnessConfig) -> CheckResult:
    """Check that the application can be launched from *dist_dir*."""
    dist_dir = dist_dir or config.launch.dist_dir
    if not dist_dir:
        return CheckResult(
            name="Executable",
            passed=False,
            message="No dist directory given",
            hint="Pass --dist-dir or set COMPASS_HARNESS_DIST_DIR.",
        )
    try:
        spec = launch_spec(dist_dir, config)
    except ExecutableNotFoundError as exc:
        return CheckResult(
            name="Executable",
            passed=False,
            message=f"Release executable not found: {exc.path}",
            hint="Build the application before testing, or set TEST_WITH_PREBUILT=1.",
        )
    except ApplicationError as exc:
        return CheckResult(name="Executable", passed=False, message=str(exc))
    return CheckResult(name="Executable", passed=True, message=f"{spec.path} ✓")


def check_running_instances() -> CheckResult:
    """Warn about Compass processes already running (never fails)."""
    found = []
    for proc in psutil.process_iter(["pid", "name"]):
        name = proc.info.get("name") or ""
        if name in COMPASS_PROCESS_NAMES:
            found.append(f"{name} (pid {proc.info['pid']})")
    if not found:
        return CheckResult(name="Running instances", passed=True, message="None ✓")
    return CheckResult(
        name="Running instances",
        passed=True,
        message=f"{len(found)} already running: {', '.join(found)}",
        hint="Close other instances if tests interfere with them.",
    )


def run_doctor(
    dist_dir: Optional[str] = None,
    config_path: Optional[str] = None,
) -> DoctorReport:
    report = DoctorReport()
    report.add(check_python_version())
    config_result, config = check_config(config_path)
    report.add(config_result)
    report.add(check_executable(dist_dir, config))
    report.add(check_running_instances())
    return report
