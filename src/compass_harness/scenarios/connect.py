"""Connect window: form filling, onboarding and the jump to the schema window."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from compass_harness.forms import (
    AUTHENTICATION_SELECT,
    FIELD_SELECTOR,
    SSL_SELECT,
    STATIC_FIELDS,
    ConnectionModel,
    authentication_fields,
    form_values,
    is_enabled,
    ssl_fields,
    with_defaults,
)
from compass_harness.sync.sequence import field_steps, run_sequence, step
from compass_harness.sync.windows import wait_for_window

if TYPE_CHECKING:
    from compass_harness.core.chain import Chain

CONNECT_BUTTON = "button[name=connect]"
TOUR_CLOSE_BUTTON = "button.tour-close-button"
START_BUTTON = "button[data-hook=start-button]"
OPTIN_CONTAINER = "div[data-hook=optin-container]"

Model = Union[ConnectionModel, Mapping[str, Any], None]


async def fill_out_form(chain: Chain, model: Model) -> None:
    """Fills out the connect form with the fields present in *model*."""
    values = form_values(model)
    steps = field_steps(values, STATIC_FIELDS, FIELD_SELECTOR)

    auth = values.get("authentication")
    if is_enabled(auth):
        steps.append(step("select_by_value", AUTHENTICATION_SELECT, auth))
        steps += field_steps(values, authentication_fields(auth), FIELD_SELECTOR)

    ssl = values.get("ssl")
    if is_enabled(ssl):
        steps.append(step("select_by_value", SSL_SELECT, ssl))
        steps += field_steps(values, ssl_fields(ssl), FIELD_SELECTOR)

    await run_sequence(chain, steps)


async def click_connect(chain: Chain) -> None:
    """Click the Connect button in the connect window."""
    await chain.click(CONNECT_BUTTON)


async def wait_for_window_command(
    chain: Chain, index: int, ms: Optional[int] = None, interval: Optional[int] = None
) -> Any:
    """Wait for a new window by the index in the order it was created."""
    return await wait_for_window(chain, index, ms, interval)


async def wait_for_schema_window(
    chain: Chain, ms: Optional[int] = None, interval: Optional[int] = None
) -> Any:
    """Wait for the connect window to close and a schema window to open."""
    return await chain.run("wait_for_window", 0, ms, interval)


async def start_using_compass(chain: Chain) -> None:
    """Dismiss the feature tour and the opt-in dialog, then wait for it to fade out."""
    await run_sequence(chain, [
        step("wait_for_visible", TOUR_CLOSE_BUTTON),
        step("click", TOUR_CLOSE_BUTTON),
        step("wait_for_visible", START_BUTTON),
        step("click", START_BUTTON),
        step("wait_for_visible", START_BUTTON, None, True),
    ])

    async def _optin_closed() -> bool:
        text = await chain.get_text(OPTIN_CONTAINER)
        return text == ""

    await chain.wait_until(_optin_closed, message="Opt-in dialog still showing text")


async def goto_schema_window(
    chain: Chain, connection: Model = None, ms: Optional[int] = None
) -> Any:
    """Connect to *connection* (default localhost:27017) and switch to the schema window."""
    values = with_defaults(connection)
    results = await run_sequence(chain, [
        step("wait_for_visible", AUTHENTICATION_SELECT),
        step("fill_out_form", values),
        step("click_connect"),
        step("wait_for_schema_window", ms),
    ])
    return results[-1]


COMMANDS = {
    "fill_out_form": fill_out_form,
    "click_connect": click_connect,
    "wait_for_window": wait_for_window_command,
    "wait_for_schema_window": wait_for_schema_window,
    "start_using_compass": start_using_compass,
    "goto_schema_window": goto_schema_window,
}
