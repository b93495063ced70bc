"""Window tracker: wait for a new top-level window to appear at a slot."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from compass_harness.core.client import RemoteHandle, handle_list

if TYPE_CHECKING:
    from compass_harness.core.chain import Chain

logger = logging.getLogger(__name__)


async def wait_for_window(
    chain: Chain,
    index: int,
    timeout_ms: int | None = None,
    interval_ms: int | None = None,
) -> RemoteHandle:
    """Wait until the window at *index* differs from the focused one, then switch to it.

    Handles are ordered by creation. A slot that does not exist yet counts as
    "not yet", never as a different window.
    """
    if index < 0:
        raise ValueError(f"window index must be >= 0, got {index}")
    timeouts = chain.config.timeouts
    if timeout_ms is None:
        timeout_ms = timeouts.window_ms
    if interval_ms is None:
        interval_ms = timeouts.interval_ms

    current = await chain.window_handle()
    found: dict[str, Any] = {}

    async def _new_window_at_index() -> bool:
        handles = handle_list(await chain.window_handles())
        if index >= len(handles):
            return False
        found["handle"] = handles[index]
        return handles[index] != current

    await chain.wait_until(
        _new_window_at_index,
        timeout_ms=timeout_ms,
        interval_ms=interval_ms,
        message=f"No new window at index {index}",
    )
    logger.debug("window %d changed from %r to %r", index, current, found["handle"])
    await chain.window_by_index(index)
    return found["handle"]
