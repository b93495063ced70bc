"""Schema window commands: collection selection and sampling.

Every command that acts on the schema view first waits for the status bar
(the busy indicator) to clear.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from compass_harness.sync.sequence import run_sequence, step

if TYPE_CHECKING:
    from compass_harness.core.chain import Chain

STATUS_BAR = "div#statusbar"
STATUS_BAR_ANY = "#statusbar"
SCHEMA_FIELD_LIST = "div.schema-field-list"
VIEW_SAMPLE_BUTTON = "#view_sample"
SAMPLE_DOCUMENTS = "div#sample_documents"
REFINE_INPUT = "input#refine_input"
APPLY_BUTTON = "button#apply_button"
RESET_BUTTON = "button#reset_button"

INTERNAL_SUFFIX = " (internal collection)"


def collection_title(name: str, internal: bool = False) -> str:
    return name + INTERNAL_SUFFIX if internal else name


def sidebar_link(title: str) -> str:
    return f'a span[title="{title}"]'


def sidebar_item(title: str) -> str:
    return f'.sidebar .list-group-item span[title="{title}"]'


async def wait_for_status_bar(chain: Chain) -> None:
    """Waits for the status bar to finish its progress and unlock the page."""
    await chain.wait_for_visible(STATUS_BAR, chain.config.timeouts.status_bar_ms, True)


async def select_collection(chain: Chain, name: str) -> None:
    """Selects a collection from the schema window sidebar to analyse."""
    link = sidebar_link(name)
    await run_sequence(chain, [
        step("wait_for_status_bar"),
        step("wait_for_visible", link),
        step("click", link),
        step("wait_for_visible", SCHEMA_FIELD_LIST),
    ])


async def view_sample_documents(chain: Chain) -> None:
    """Opens the sample documents in the right panel."""
    await run_sequence(chain, [
        step("wait_for_status_bar"),
        step("click", VIEW_SAMPLE_BUTTON),
        step("wait_for_visible", SAMPLE_DOCUMENTS),
    ])


async def refine_sample(chain: Chain, query: str) -> None:
    """Refines the sample with *query* and clicks apply."""
    await run_sequence(chain, [
        step("wait_for_status_bar"),
        step("set_value", REFINE_INPUT, query),
        step("click", APPLY_BUTTON),
    ])


async def reset_sample(chain: Chain) -> None:
    """Resets the sample by clicking on the reset button."""
    await run_sequence(chain, [
        step("wait_for_status_bar"),
        step("click", RESET_BUTTON),
    ])


async def sample_collection(
    chain: Chain, collection_name: str, internal: bool = False, ms: Optional[int] = None
) -> None:
    """Click a collection in the sidebar and wait for one full sampling cycle.

    ``collection_name`` is the full namespace, e.g. ``mongodb.fanclub``; set
    ``internal`` for special collections such as ``local.startup_log``. The
    status bar must be seen appearing and then disappearing.
    """
    if ms is None:
        ms = chain.config.timeouts.sample_ms
    item = sidebar_item(collection_title(collection_name, internal))
    await run_sequence(chain, [
        step("wait_for_exist", item, ms),
        step("click", item),
        step("wait_for_visible", STATUS_BAR_ANY, ms),
        step("wait_for_visible", STATUS_BAR_ANY, ms, True),
    ])


COMMANDS = {
    "wait_for_status_bar": wait_for_status_bar,
    "select_collection": select_collection,
    "view_sample_documents": view_sample_documents,
    "refine_sample": refine_sample,
    "reset_sample": reset_sample,
    "sample_collection": sample_collection,
}
