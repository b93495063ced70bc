"""Help dialog commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from compass_harness.sync.sequence import run_sequence, step

if TYPE_CHECKING:
    from compass_harness.core.chain import Chain

HELP_ENTRY_TITLE = "div.content h1.help-entry-title"
HELP_FILTER_INPUT = "input[placeholder=filter]"


async def wait_for_help_dialog(
    chain: Chain, ms: Optional[int] = None, interval: Optional[int] = None
) -> Any:
    """Wait for the help dialog to open."""
    results = await run_sequence(chain, [
        step("wait_for_window", 1, ms, interval),
        step("wait_for_visible", HELP_ENTRY_TITLE),
    ])
    return results[0]


async def filter_help_topics(chain: Chain, topic: str) -> None:
    """Filter the help topics."""
    await run_sequence(chain, [
        step("wait_for_visible", HELP_FILTER_INPUT),
        step("set_value", HELP_FILTER_INPUT, topic),
    ])


COMMANDS = {
    "wait_for_help_dialog": wait_for_help_dialog,
    "filter_help_topics": filter_help_topics,
}
