"""
Title: Fatal Fault Recorder Utility
Date Created: 2026-02-03
Last Modified: 2026-02-04
Version: 1.1

Purpose:
Provides a simple, append-only fault log for the emergency protection system.
Each fatal fault detection and the crash-response branch selected are
timestamped using an injected clock and appended as one CSV line, for later
inspection of a simulated run.

Scope and Limitations:
- Write-only diagnostic output; the log is never read back into vehicle state.
- No de-duplication, severity classification, or rollover handling.
- Assumes reliable filesystem access.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- pathlib (standard library)
- typing (standard library)
"""

# fault_recorder.py

from dataclasses import dataclass
from pathlib import Path
from typing import Callable


@dataclass(frozen=True)
class FaultRecord:
    timestamp_s: float
    fault_code: str
    detail: str = ""

    def to_line(self) -> str:
        return f"{self.timestamp_s:.6f},{self.fault_code},{self.detail}\n"


class FaultRecorder:
    def __init__(self, filepath: str | Path, clock: Callable[[], float]):
        self._path = Path(filepath)
        self._clock = clock
        self._records: list[FaultRecord] = []

        # Ensures directory exists for persistence target.
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def records(self) -> list[FaultRecord]:
        return list(self._records)

    def record(self, fault_code: str, detail: str = "") -> FaultRecord:
        # Commas would break the line format.
        rec = FaultRecord(
            timestamp_s=float(self._clock()),
            fault_code=str(fault_code),
            detail=str(detail).replace(",", ";"),
        )

        with self._path.open("a", encoding="utf-8") as f:
            f.write(rec.to_line())

        self._records.append(rec)
        return rec
