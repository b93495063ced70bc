"""Polling waits and composable named commands for Compass end-to-end tests."""

__version__ = "0.1.0"

from compass_harness.core.chain import Chain  # noqa: E402
from compass_harness.core.registry import CommandRegistry, CommandSpec, register_command  # noqa: E402
from compass_harness.runner.app import Harness, start_application, stop_application  # noqa: E402
from compass_harness.scenarios import add_commands  # noqa: E402
from compass_harness.sync.sequence import SequenceStep, run_sequence, step  # noqa: E402
from compass_harness.sync.waits import wait_until  # noqa: E402
from compass_harness.sync.windows import wait_for_window  # noqa: E402

__all__ = [
    "Chain",
    "CommandRegistry",
    "CommandSpec",
    "Harness",
    "SequenceStep",
    "add_commands",
    "register_command",
    "run_sequence",
    "start_application",
    "step",
    "stop_application",
    "wait_for_window",
    "wait_until",
]
