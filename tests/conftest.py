"""In-memory fakes for the remote client and the application."""

from __future__ import annotations

from typing import Any

import pytest

from compass_harness.config import HarnessConfig, TimeoutConfig
from compass_harness.core.chain import Chain
from compass_harness.core.registry import CommandRegistry
from compass_harness.scenarios import add_commands
from compass_harness.sync.waits import wait_until


class FakeClient:
    """Scripted remote client that records every primitive call.

    ``windows`` is a list of handle lists; each ``window_handles`` call
    consumes one until the last, which then repeats. ``visibility`` and
    ``texts`` work the same way per selector. Unscripted selectors are
    always in whatever state a wait asks for.
    """

    def __init__(
        self,
        windows: list[list[Any]] | None = None,
        current: Any = "connect",
        visibility: dict[str, list[bool]] | None = None,
        texts: dict[str, list[str]] | None = None,
        errors: dict[tuple[str, str], Exception] | None = None,
        wrap: bool = False,
    ):
        self.windows = windows or [["connect"]]
        self.current = current
        self.visibility = visibility or {}
        self.texts = texts or {}
        self.errors = errors or {}
        self.wrap = wrap
        self.calls: list[tuple] = []
        self.observed: dict[str, list[bool]] = {}
        self.last_handles: list[Any] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if args and (name, args[0]) in self.errors:
            raise self.errors[(name, args[0])]

    def _respond(self, value: Any) -> Any:
        return {"value": value} if self.wrap else value

    @staticmethod
    def _next(script: list[Any]) -> Any:
        return script.pop(0) if len(script) > 1 else script[0]

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def calls_to(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    async def click(self, selector):
        self._record("click", selector)

    async def set_value(self, selector, value):
        self._record("set_value", selector, value)

    async def select_by_value(self, selector, value):
        self._record("select_by_value", selector, value)

    async def get_text(self, selector):
        self._record("get_text", selector)
        script = self.texts.get(selector)
        return self._respond(self._next(script) if script else "")

    async def wait_for_visible(self, selector, timeout_ms=None, reverse=False):
        self._record("wait_for_visible", selector, timeout_ms, reverse)
        script = self.visibility.get(selector)
        if script is None:
            return self._respond(True)

        def _in_state():
            visible = self._next(script)
            self.observed.setdefault(selector, []).append(visible)
            return visible != reverse

        await wait_until(_in_state, timeout_ms=timeout_ms or 1000, interval_ms=1)
        return self._respond(True)

    async def wait_for_exist(self, selector, timeout_ms=None):
        self._record("wait_for_exist", selector, timeout_ms)
        return self._respond(True)

    async def window_handle(self):
        self._record("window_handle")
        return self._respond(self.current)

    async def window_handles(self):
        self._record("window_handles")
        self.last_handles = list(self._next(self.windows))
        return self._respond(list(self.last_handles))

    async def window_by_index(self, index):
        self._record("window_by_index", index)
        self.current = self.last_handles[index]
        return self._respond(None)


class FakeApplication:
    def __init__(self, spec, client=None):
        self.spec = spec
        self.client = client if client is not None else FakeClient()
        self.running = False
        self.start_calls = 0
        self.stop_calls = 0

    async def start(self):
        self.start_calls += 1
        self.running = True

    async def stop(self):
        self.stop_calls += 1
        self.running = False

    def is_running(self):
        return self.running


def fast_config(**overrides) -> HarnessConfig:
    timeouts = dict(
        default_ms=500,
        interval_ms=1,
        window_ms=500,
        window_loaded_ms=500,
        status_bar_ms=500,
        sample_ms=500,
    )
    timeouts.update(overrides)
    return HarnessConfig(timeouts=TimeoutConfig(**timeouts))


@pytest.fixture()
def client():
    return FakeClient()


@pytest.fixture()
def registry():
    return add_commands(CommandRegistry())


@pytest.fixture()
def make_chain(registry):
    def _make(client, config=None, step_logger=None):
        return Chain(client, registry, config or fast_config(), step_logger)
    return _make


@pytest.fixture()
def chain(client, make_chain):
    return make_chain(client)
