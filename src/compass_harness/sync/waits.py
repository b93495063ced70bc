"""Polling wait engine: the single synchronization primitive."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, TypeVar, Union

from compass_harness.constants import DEFAULT_INTERVAL_MS, DEFAULT_TIMEOUT_MS
from compass_harness.core.errors import WaitTimeoutError

T = TypeVar("T")

PredicateFn = Callable[[], Union[T, Awaitable[T]]]

logger = logging.getLogger(__name__)


class _PredicateFailed(Exception):
    """Carries a predicate exception past the wait's own timeout handling."""

    def __init__(self, error: Exception):
        super().__init__(error)
        self.error = error


async def _evaluate(predicate: PredicateFn) -> Any:
    result = predicate()
    if inspect.isawaitable(result):
        result = await result
    return result


async def wait_until(
    predicate: PredicateFn,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    message: str = "Condition not met",
) -> Any:
    """Poll predicate until truthy or timeout.

    The predicate runs immediately and then every ``interval_ms``. The wait
    owns its own timer; when it fires, any poll in flight is cancelled and
    ``WaitTimeoutError`` is raised. Only results observed strictly before
    the deadline count. Predicate exceptions propagate unchanged, including
    a ``TimeoutError`` raised by the predicate itself.

    ``WaitTimeoutError.last_result`` is the last falsy result seen, or
    ``False`` when the timer fired before the first evaluation finished.
    """
    if timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be positive, got {timeout_ms}")
    if interval_ms <= 0:
        raise ValueError(f"interval_ms must be positive, got {interval_ms}")

    loop = asyncio.get_running_loop()
    started = loop.time()
    state: dict[str, Any] = {"last": False, "polls": 0}

    async def _poll() -> Any:
        while True:
            try:
                result = await _evaluate(predicate)
            except Exception as exc:
                raise _PredicateFailed(exc)
            state["polls"] += 1
            if result:
                return result
            state["last"] = result
            await asyncio.sleep(interval_ms / 1000.0)

    failure: Exception | None = None
    try:
        result = await asyncio.wait_for(_poll(), timeout=timeout_ms / 1000.0)
    except _PredicateFailed as failed:
        failure = failed.error
    except asyncio.TimeoutError:
        elapsed_ms = (loop.time() - started) * 1000.0
        logger.debug("%s after %d polls (%.0fms)", message, state["polls"], elapsed_ms)
        raise WaitTimeoutError(message, timeout_ms, elapsed_ms, state["last"]) from None
    if failure is not None:
        raise failure
    return result
