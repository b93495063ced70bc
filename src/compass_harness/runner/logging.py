"""Structured per-command logging for sessions."""

from __future__ import annotations

import json
import sys
import time
from typing import Any

from compass_harness.core.session import Session


class StepLogger:
    """Append-only JSON-lines log of command invocations for a session."""

    def __init__(self, session: Session, echo: bool = False):
        self.session = session
        self.echo = echo
        self._log_path = session.log_path()
        self._fh = None

    def open(self) -> None:
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self._log_path, "a", encoding="utf-8")

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None

    def log_step(
        self,
        step: int,
        action: str,
        args: list[Any] | dict[str, Any],
        error: str | None = None,
        duration_ms: float | None = None,
    ) -> None:
        entry = {
            "session": self.session.session_id,
            "step": step,
            "timestamp": time.time(),
            "action": action,
            "args": args,
            "error": error,
            "duration_ms": None if duration_ms is None else round(duration_ms, 1),
        }
        line = json.dumps(entry, ensure_ascii=False, default=str)
        if self._fh:
            self._fh.write(line + "\n")
            self._fh.flush()
        if self.echo:
            print(line, file=sys.stderr)

    def read_last_n(self, n: int = 20) -> list[dict[str, Any]]:
        if not self._log_path.exists():
            return []
        lines = self._log_path.read_text(encoding="utf-8").strip().splitlines()
        return [json.loads(l) for l in lines[-n:]]
