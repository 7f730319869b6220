# command_recorder.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from results import CommandResult


@dataclass
class CommandRecorder:
    filepath: Path
    clock: Callable[[], float]

    def __post_init__(self) -> None:
        self.filepath = Path(self.filepath)
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

        # Header is written once per file
        if not self.filepath.exists():
            with self.filepath.open("w", encoding="utf-8") as f:
                f.write("timestamp,command,accepted,reason\n")

    def record(self, *, command: str, result: CommandResult) -> None:
        ts = self.clock()
        reason = result.reason.replace(",", ";")
        line = f"{ts:.6f},{command.strip()},{result.accepted},{reason}\n"

        with self.filepath.open("a", encoding="utf-8") as f:
            f.write(line)
