"""Catalogue of named Compass commands."""

from __future__ import annotations

from compass_harness.core.registry import CommandRegistry
from compass_harness.scenarios import connect, help_dialog, schema


def add_commands(registry: CommandRegistry) -> CommandRegistry:
    """Register every scenario command on *registry*.

    Safe to call more than once: each call replaces the same definitions.
    """
    for module in (connect, help_dialog, schema):
        for name, body in module.COMMANDS.items():
            registry.register(name, body)
    return registry
