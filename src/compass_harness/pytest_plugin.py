"""pytest integration: start the application before a test, stop it after.

Enable with ``pytest_plugins = ["compass_harness.pytest_plugin"]`` and run
pytest with ``--compass-dist-dir`` and ``--compass-factory module:callable``,
where the callable builds an ``Application`` from a ``LaunchSpec``. The
plugin needs pytest-asyncio, installed by the ``test`` extra.
"""

from __future__ import annotations

import importlib

import pytest
import pytest_asyncio

from compass_harness.config import load_config
from compass_harness.core.errors import ConfigError
from compass_harness.runner.app import start_application, stop_application


def pytest_addoption(parser):
    group = parser.getgroup("compass-harness")
    group.addoption("--compass-dist-dir", default=None, help="Packaged application directory")
    group.addoption(
        "--compass-factory",
        default=None,
        help="Application factory as module:callable",
    )
    group.addoption("--compass-config", default=None, help="Harness config file")


def load_factory(path: str):
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ConfigError(f"Application factory must look like 'module:callable', got {path!r}")
    return getattr(importlib.import_module(module_name), attr)


@pytest.fixture
def compass_config(request):
    return load_config(request.config.getoption("--compass-config"))


@pytest_asyncio.fixture
async def compass(request, compass_config):
    factory_path = request.config.getoption("--compass-factory")
    dist_dir = request.config.getoption("--compass-dist-dir") or compass_config.launch.dist_dir
    if not factory_path or not dist_dir:
        pytest.skip("--compass-factory and --compass-dist-dir are required for UI tests")
    harness = await start_application(dist_dir, load_factory(factory_path), compass_config)
    try:
        yield harness
    finally:
        await stop_application(harness)
