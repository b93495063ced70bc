"""Interfaces of the remote automation client and the application under test.

Concrete implementations live outside this package: any driver that speaks
the automation protocol to the Compass renderer can be adapted to
``RemoteClient``.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field

RemoteHandle = Hashable

# Primitive operations a chain forwards to its client
PRIMITIVE_COMMANDS = frozenset({
    "click",
    "set_value",
    "select_by_value",
    "get_text",
    "wait_for_visible",
    "wait_for_exist",
    "window_handle",
    "window_handles",
    "window_by_index",
})


@runtime_checkable
class RemoteClient(Protocol):
    async def click(self, selector: str) -> Any: ...

    async def set_value(self, selector: str, value: Any) -> Any: ...

    async def select_by_value(self, selector: str, value: Any) -> Any: ...

    async def get_text(self, selector: str) -> Any: ...

    async def wait_for_visible(
        self, selector: str, timeout_ms: int | None = None, reverse: bool = False
    ) -> Any: ...

    async def wait_for_exist(self, selector: str, timeout_ms: int | None = None) -> Any: ...

    async def window_handle(self) -> Any: ...

    async def window_handles(self) -> Any: ...

    async def window_by_index(self, index: int) -> Any: ...


@runtime_checkable
class Application(Protocol):
    client: RemoteClient

    async def start(self) -> Any: ...

    async def stop(self) -> Any: ...

    def is_running(self) -> bool: ...


class LaunchSpec(BaseModel):
    """How to launch the application: handed to an ``ApplicationFactory``."""
    path: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    cwd: str | None = None


ApplicationFactory = Callable[[LaunchSpec], Application]


def response_value(response: Any) -> Any:
    """Unwrap WebDriver-style ``{"value": ...}`` responses."""
    if isinstance(response, dict) and "value" in response:
        return response["value"]
    return response


def handle_list(response: Any) -> Sequence[RemoteHandle]:
    value = response_value(response)
    return list(value) if value is not None else []
