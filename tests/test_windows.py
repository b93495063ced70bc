"""Tests for the window tracker."""

import pytest

from compass_harness.core.errors import WaitTimeoutError
from compass_harness.sync.windows import wait_for_window

from conftest import FakeClient


@pytest.mark.asyncio
async def test_waits_for_replacement_window_at_index(make_chain):
    client = FakeClient(windows=[["connect"], ["connect"], ["schema"]])
    chain = make_chain(client)

    handle = await wait_for_window(chain, 0)

    assert handle == "schema"
    assert len(client.calls_to("window_handles")) == 3
    assert client.calls_to("window_by_index") == [("window_by_index", 0)]
    assert client.current == "schema"


@pytest.mark.asyncio
async def test_missing_slot_is_not_a_new_window(make_chain):
    # index 1 does not exist for the first polls; it must not resolve early
    client = FakeClient(windows=[["connect"], ["connect"], ["connect"], ["connect", "help"]])
    chain = make_chain(client)

    handle = await wait_for_window(chain, 1)

    assert handle == "help"
    assert len(client.calls_to("window_handles")) == 4


@pytest.mark.asyncio
async def test_times_out_when_window_never_appears(make_chain):
    client = FakeClient(windows=[["connect"]])
    chain = make_chain(client)

    with pytest.raises(WaitTimeoutError) as excinfo:
        await wait_for_window(chain, 1, timeout_ms=50, interval_ms=5)
    assert excinfo.value.last_result is False
    assert client.calls_to("window_by_index") == []


@pytest.mark.asyncio
async def test_captures_focused_handle_before_polling(make_chain):
    client = FakeClient(windows=[["schema"], ["schema", "help"]], current="schema")
    chain = make_chain(client)

    assert await wait_for_window(chain, 1) == "help"
    assert client.names()[0] == "window_handle"


@pytest.mark.asyncio
async def test_unwraps_value_responses(make_chain):
    client = FakeClient(windows=[["connect"], ["schema"]], wrap=True)
    chain = make_chain(client)
    assert await wait_for_window(chain, 0) == "schema"


@pytest.mark.asyncio
async def test_negative_index_rejected(chain):
    with pytest.raises(ValueError):
        await wait_for_window(chain, -1)


@pytest.mark.asyncio
async def test_explicit_zero_timeout_is_rejected(chain):
    with pytest.raises(ValueError, match="timeout_ms"):
        await wait_for_window(chain, 0, timeout_ms=0)
