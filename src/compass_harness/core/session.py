"""Test-run session: one started application = one session."""

from __future__ import annotations

import pathlib
import time
import uuid
from dataclasses import dataclass, field

from compass_harness.constants import SESSION_DIR


@dataclass
class Session:
    """Identifies one application run and owns its artifact directory."""

    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    started_at: float = field(default_factory=time.time)
    root_dir: str = SESSION_DIR
    base_dir: pathlib.Path = field(init=False)
    step_count: int = 0

    def __post_init__(self):
        self.base_dir = pathlib.Path(self.root_dir) / self.session_id

    def start(self) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def next_step(self) -> int:
        self.step_count += 1
        return self.step_count

    def log_path(self) -> pathlib.Path:
        return self.base_dir / "runner.log"
