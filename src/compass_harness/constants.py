"""Global constants."""

import pathlib


def _find_project_root() -> pathlib.Path:
    """Find the project root (directory containing compass-harness.yaml or .git).

    Walks up from cwd, falls back to cwd.
    """
    markers = ("compass-harness.yaml", ".git")
    cwd = pathlib.Path.cwd()
    for d in [cwd, *cwd.parents]:
        if any((d / m).exists() for m in markers):
            return d
    return cwd


PROJECT_ROOT = _find_project_root()

DEFAULT_TIMEOUT_MS = 10000
DEFAULT_INTERVAL_MS = 1000
WINDOW_TIMEOUT_MS = 20000
WINDOW_LOADED_TIMEOUT_MS = 20000
STATUS_BAR_TIMEOUT_MS = 15000
SAMPLE_TIMEOUT_MS = 10000

DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 27017

SESSION_DIR = str(PROJECT_ROOT / "artifacts" / "sessions")
CONFIG_FILE = str(PROJECT_ROOT / "compass-harness.yaml")

# Packaged executable, relative to the dist directory
ELECTRON_EXECUTABLE_BY_PLATFORM = {
    "linux": pathlib.PurePath("mongodb-compass-linux-x64", "mongodb-compass"),
    "win32": pathlib.PurePath("MongoDBCompass-win32-x64", "MongoDBCompass.exe"),
    "darwin": pathlib.PurePath(
        "MongoDB Compass-darwin-x64", "MongoDB Compass.app", "Contents", "MacOS", "Electron"
    ),
}

# Process names used by the doctor to spot a stray running instance
COMPASS_PROCESS_NAMES = ("mongodb-compass", "MongoDBCompass.exe", "MongoDB Compass", "Electron")

ENV_USE_PREBUILT = "TEST_WITH_PREBUILT"
ENV_DIST_DIR = "COMPASS_HARNESS_DIST_DIR"
ENV_ELECTRON = "COMPASS_HARNESS_ELECTRON"
