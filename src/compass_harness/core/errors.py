"""Exception hierarchy and exit codes."""

from __future__ import annotations

from typing import Any

# Exit codes
EXIT_OK = 0
EXIT_GENERAL_ERROR = 1
EXIT_EXECUTABLE_NOT_FOUND = 2
EXIT_UNKNOWN_COMMAND = 3
EXIT_FORM_ERROR = 4
EXIT_APPLICATION_ERROR = 5
EXIT_TIMEOUT = 6
EXIT_CONFIG_ERROR = 7
EXIT_DOCTOR_FAILURE = 10

_EXIT_DESCRIPTIONS = {
    EXIT_OK: "Success",
    EXIT_GENERAL_ERROR: "General error",
    EXIT_EXECUTABLE_NOT_FOUND: "Application executable not found",
    EXIT_UNKNOWN_COMMAND: "Unknown command or wrong number of arguments",
    EXIT_FORM_ERROR: "Invalid connection form input",
    EXIT_APPLICATION_ERROR: "Application failed to start or stop",
    EXIT_TIMEOUT: "Timed out waiting for the UI to reach the expected state",
    EXIT_CONFIG_ERROR: "Invalid configuration file",
    EXIT_DOCTOR_FAILURE: "Environment check failed (run `compass-harness doctor` for details)",
}


def exit_description(code: int) -> str:
    """Return a human-readable description for *code*."""
    return _EXIT_DESCRIPTIONS.get(code, f"Unknown error (code {code})")


class HarnessError(Exception):
    """Base exception; carries an exit code and an actionable message."""

    def __init__(self, message: str, exit_code: int = EXIT_GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class WaitTimeoutError(HarnessError):
    """A polled condition never became true within its budget."""

    def __init__(
        self,
        description: str,
        timeout_ms: int,
        elapsed_ms: float,
        last_result: Any = None,
    ):
        hint = (
            "  Hint: Increase the timeout, or confirm the application is running"
            " and the expected window is open."
        )
        msg = (
            f"{description} (timeout={timeout_ms}ms, elapsed={elapsed_ms:.0f}ms,"
            f" last result={last_result!r})\n{hint}"
        )
        super().__init__(msg, EXIT_TIMEOUT)
        self.description = description
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms
        self.last_result = last_result


class ExecutableNotFoundError(HarnessError):
    """The packaged application executable does not exist."""

    def __init__(self, path: str):
        hint = (
            "  Hint: Build the application before testing"
            " (e.g. `npm run prepublish`), or set TEST_WITH_PREBUILT=1."
        )
        super().__init__(
            f"Release executable not found: '{path}'.\n{hint}",
            EXIT_EXECUTABLE_NOT_FOUND,
        )
        self.path = path


class UnknownCommandError(HarnessError):
    """No registered command or client primitive has this name."""

    def __init__(self, name: str):
        hint = "  Hint: Call add_commands() on the registry before running scenarios."
        super().__init__(f"Unknown command: '{name}'.\n{hint}", EXIT_UNKNOWN_COMMAND)
        self.name = name


class CommandArityError(HarnessError):
    """A command was invoked with arguments its body cannot accept."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Bad arguments for command '{name}': {reason}", EXIT_UNKNOWN_COMMAND)
        self.name = name


class FormError(HarnessError):
    """Connection model cannot be mapped onto the connect form."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_FORM_ERROR)


class ApplicationError(HarnessError):
    """Application lifecycle error."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_APPLICATION_ERROR)


class ConfigError(HarnessError):
    """Configuration file could not be read or validated."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_CONFIG_ERROR)
