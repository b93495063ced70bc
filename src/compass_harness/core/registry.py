"""Named command registry.

Maps a command name to an async body ``body(chain, *args)``. Bodies receive
the chain explicitly and compose other commands through it.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from compass_harness.core.client import PRIMITIVE_COMMANDS
from compass_harness.core.errors import CommandArityError, UnknownCommandError

CommandBody = Callable[..., Awaitable[Any]]

logger = logging.getLogger(__name__)


@dataclass
class CommandSpec:
    name: str
    body: CommandBody
    doc: str = ""
    signature: inspect.Signature = field(init=False, repr=False)

    def __post_init__(self):
        self.signature = inspect.signature(self.body)
        if not self.doc:
            self.doc = inspect.getdoc(self.body) or ""

    @property
    def arity(self) -> tuple[int, Optional[int]]:
        """(min, max) positional arguments after the chain; max None = unbounded."""
        params = list(self.signature.parameters.values())[1:]
        positional = [
            p for p in params
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        ]
        required = sum(1 for p in positional if p.default is p.empty)
        if any(p.kind == p.VAR_POSITIONAL for p in params):
            return required, None
        return required, len(positional)

    def check_args(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        try:
            self.signature.bind(None, *args, **kwargs)
        except TypeError as exc:
            raise CommandArityError(self.name, str(exc)) from None

    def summary(self) -> str:
        return self.doc.splitlines()[0] if self.doc else ""


class CommandRegistry:
    """Registry of named commands. Re-registering a name replaces it."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(self, name: str, body: CommandBody, doc: str = "") -> CommandSpec:
        if not inspect.iscoroutinefunction(body):
            raise TypeError(f"Command '{name}' must be an async function")
        if name in PRIMITIVE_COMMANDS:
            logger.warning("Command '%s' shadows the client primitive of the same name", name)
        spec = CommandSpec(name=name, body=body, doc=doc)
        self._commands[name] = spec
        return spec

    def command(self, name: str | None = None) -> Callable[[CommandBody], CommandBody]:
        """Decorator form of ``register``; defaults to the function name."""
        def decorator(body: CommandBody) -> CommandBody:
            self.register(name or body.__name__, body)
            return body
        return decorator

    def get(self, name: str) -> CommandSpec:
        spec = self._commands.get(name)
        if spec is None:
            raise UnknownCommandError(name)
        return spec

    def names(self) -> list[str]:
        return sorted(self._commands)

    def describe(self) -> dict[str, str]:
        return {name: self._commands[name].summary() for name in self.names()}

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)


def register_command(registry: CommandRegistry, name: str, body: CommandBody) -> CommandSpec:
    return registry.register(name, body)
