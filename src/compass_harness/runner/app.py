"""Application lifecycle: the entry and exit points for test setup/teardown."""

from __future__ import annotations

import logging
import os
import pathlib
import sys
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from compass_harness.config import HarnessConfig
from compass_harness.constants import ELECTRON_EXECUTABLE_BY_PLATFORM
from compass_harness.core.chain import Chain
from compass_harness.core.client import Application, ApplicationFactory, LaunchSpec, handle_list
from compass_harness.core.errors import ApplicationError, ExecutableNotFoundError
from compass_harness.core.registry import CommandRegistry
from compass_harness.core.session import Session
from compass_harness.runner.logging import StepLogger
from compass_harness.scenarios import add_commands

logger = logging.getLogger(__name__)


@dataclass
class Harness:
    """A started application together with its command chain."""

    app: Application
    chain: Chain
    registry: CommandRegistry
    session: Session
    step_logger: Optional[StepLogger] = field(default=None, repr=False)

    @property
    def client(self):
        return self.app.client

    async def run(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return await self.chain.run(name, *args, **kwargs)


def electron_executable(dist_dir: Union[str, pathlib.Path], platform: str | None = None) -> pathlib.Path:
    """Path of the packaged executable inside *dist_dir* for *platform*."""
    platform = platform or sys.platform
    try:
        relative = ELECTRON_EXECUTABLE_BY_PLATFORM[platform]
    except KeyError:
        raise ApplicationError(f"Unsupported platform for packaged executable: {platform!r}") from None
    return pathlib.Path(dist_dir) / relative


def launch_spec(
    dist_dir: Union[str, pathlib.Path],
    config: HarnessConfig,
    platform: str | None = None,
) -> LaunchSpec:
    """Work out how to launch the app from *dist_dir*.

    With ``use_prebuilt`` the configured electron binary runs the app
    directory (the parent of *dist_dir*); otherwise the release executable
    must already have been built.
    """
    launch = config.launch
    env = dict(os.environ)
    if launch.use_prebuilt:
        if not launch.electron_path:
            raise ApplicationError(
                "use_prebuilt is set but no electron path is configured"
                " (set COMPASS_HARNESS_ELECTRON or launch.electron_path)"
            )
        app_dir = str(pathlib.Path(dist_dir).parent)
        logger.debug("Starting application with prebuilt electron %s", launch.electron_path)
        return LaunchSpec(
            path=launch.electron_path,
            args=[app_dir, *launch.extra_args],
            env=env,
            cwd=app_dir,
        )

    executable = electron_executable(dist_dir, platform)
    logger.debug("Starting application with release executable %s", executable)
    if not executable.exists():
        raise ExecutableNotFoundError(str(executable))
    return LaunchSpec(path=str(executable), args=list(launch.extra_args), env=env)


def create_application(
    dist_dir: Union[str, pathlib.Path],
    factory: ApplicationFactory,
    config: HarnessConfig | None = None,
    platform: str | None = None,
) -> Application:
    config = config or HarnessConfig()
    return factory(launch_spec(dist_dir, config, platform))


async def start_application(
    dist_dir: Union[str, pathlib.Path],
    factory: ApplicationFactory,
    config: HarnessConfig | None = None,
    session: Session | None = None,
    platform: str | None = None,
) -> Harness:
    """Start the app, register the scenario commands and wait for its first window.

    Any failure after the app has started stops it again before re-raising.
    """
    config = config or HarnessConfig()
    app = create_application(dist_dir, factory, config, platform)
    await app.start()

    step_logger: StepLogger | None = None
    try:
        if getattr(app, "client", None) is None:
            raise ApplicationError("Application started without a remote client")

        session = session or Session(root_dir=config.session_dir)
        session.start()
        step_logger = StepLogger(session, echo=config.echo_steps)
        step_logger.open()

        registry = add_commands(CommandRegistry())
        chain = Chain(app.client, registry, config, step_logger)

        async def _window_loaded() -> bool:
            return len(handle_list(await chain.window_handles())) > 0

        await chain.wait_until(
            _window_loaded,
            timeout_ms=config.timeouts.window_loaded_ms,
            message="Application window did not load",
        )
    except Exception:
        if step_logger is not None:
            step_logger.close()
        await stop_application(app)
        raise
    return Harness(app, chain, registry, session, step_logger)


async def stop_application(target: Union[Harness, Application, None]) -> bool:
    """Stop the application if it is running. Returns True when stopped here."""
    if target is None:
        return False
    app = target.app if isinstance(target, Harness) else target
    if isinstance(target, Harness) and target.step_logger is not None:
        target.step_logger.close()
    if app is not None and app.is_running():
        logger.debug("Stopping application")
        await app.stop()
        return True
    return False
