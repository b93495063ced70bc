"""Chain context: the explicit value every command receives.

A chain binds one remote client to a command registry. Primitives are
forwarded to the client; named commands are looked up in the registry and
called with the chain as their first argument.
"""

from __future__ import annotations

import inspect
import logging
import time
from typing import Any, Awaitable, Callable

from compass_harness.config import HarnessConfig
from compass_harness.core.client import PRIMITIVE_COMMANDS, RemoteClient, response_value
from compass_harness.core.errors import CommandArityError, UnknownCommandError
from compass_harness.core.registry import CommandRegistry
from compass_harness.runner.logging import StepLogger
from compass_harness.sync.waits import PredicateFn, wait_until

logger = logging.getLogger(__name__)

BoundCall = Callable[[], Awaitable[Any]]


class Chain:
    """Sequential command context for one application window set."""

    def __init__(
        self,
        client: RemoteClient,
        registry: CommandRegistry,
        config: HarnessConfig | None = None,
        step_logger: StepLogger | None = None,
    ):
        self.client = client
        self.registry = registry
        self.config = config or HarnessConfig()
        self.step_logger = step_logger

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    async def click(self, selector: str) -> Any:
        return response_value(await self.client.click(selector))

    async def set_value(self, selector: str, value: Any) -> Any:
        return response_value(await self.client.set_value(selector, value))

    async def select_by_value(self, selector: str, value: Any) -> Any:
        return response_value(await self.client.select_by_value(selector, value))

    async def get_text(self, selector: str) -> Any:
        return response_value(await self.client.get_text(selector))

    async def wait_for_visible(
        self, selector: str, timeout_ms: int | None = None, reverse: bool = False
    ) -> Any:
        return response_value(
            await self.client.wait_for_visible(selector, timeout_ms, reverse)
        )

    async def wait_for_exist(self, selector: str, timeout_ms: int | None = None) -> Any:
        return response_value(await self.client.wait_for_exist(selector, timeout_ms))

    async def window_handle(self) -> Any:
        return response_value(await self.client.window_handle())

    async def window_handles(self) -> Any:
        return response_value(await self.client.window_handles())

    async def window_by_index(self, index: int) -> Any:
        return response_value(await self.client.window_by_index(index))

    async def wait_until(
        self,
        predicate: PredicateFn,
        timeout_ms: int | None = None,
        interval_ms: int | None = None,
        message: str = "Condition not met",
    ) -> Any:
        timeouts = self.config.timeouts
        if timeout_ms is None:
            timeout_ms = timeouts.default_ms
        if interval_ms is None:
            interval_ms = timeouts.interval_ms
        return await wait_until(
            predicate,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            message=message,
        )

    # ------------------------------------------------------------------
    # Named commands
    # ------------------------------------------------------------------

    def resolve(self, name: str, *args: Any, **kwargs: Any) -> BoundCall:
        """Bind a command or primitive to its arguments without running it.

        Registered commands take precedence over primitives of the same name.
        """
        if name in self.registry:
            spec = self.registry.get(name)
            spec.check_args(args, kwargs)

            async def _run_command() -> Any:
                return await self._invoke(name, spec.body, args, kwargs)

            return _run_command

        if name in PRIMITIVE_COMMANDS:
            method = getattr(self, name)
            try:
                inspect.signature(method).bind(*args, **kwargs)
            except TypeError as exc:
                raise CommandArityError(name, str(exc)) from None

            async def _run_primitive() -> Any:
                return await method(*args, **kwargs)

            return _run_primitive

        raise UnknownCommandError(name)

    async def run(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Resolve and await a named command."""
        return await self.resolve(name, *args, **kwargs)()

    async def _invoke(self, name, body, args, kwargs) -> Any:
        step = None
        if self.step_logger is not None:
            step = self.step_logger.session.next_step()
        logger.debug("run %s%r", name, args)
        started = time.monotonic()
        try:
            result = await body(self, *args, **kwargs)
        except Exception as exc:
            if step is not None:
                self.step_logger.log_step(
                    step, name, _loggable(args, kwargs), error=str(exc) or type(exc).__name__,
                    duration_ms=(time.monotonic() - started) * 1000.0,
                )
            raise
        if step is not None:
            self.step_logger.log_step(
                step, name, _loggable(args, kwargs),
                duration_ms=(time.monotonic() - started) * 1000.0,
            )
        return result


def _loggable(args: tuple[Any, ...], kwargs: dict[str, Any]) -> list[Any]:
    values: list[Any] = list(args)
    if kwargs:
        values.append(kwargs)
    return values
