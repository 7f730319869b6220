"""
Title: Application Context Container for the Flying Car Simulation
Date Created: 2026-02-05
Last Modified: 2026-02-05
Version: 1.0

Purpose:
Aggregates the flying car controller, its sensor snapshot, the injected
clock and the optional recorders into a single explicit container used by
the CLI and the demo entry point.

Scope and Limitations:
- Pure dependency container; contains no control or safety logic.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses, pathlib, time, typing (standard library)
- flying_car_controller.py, fault_recorder.py, command_recorder.py
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from command_recorder import CommandRecorder
from fault_recorder import FaultRecorder
from flying_car_controller import FlyingCarController
from procedures import ProcedureLibrary
from sims.sensor_snapshot import SensorSnapshot


@dataclass
class AppContext:
    controller: FlyingCarController
    sensors: SensorSnapshot
    clock: Callable[[], float]
    fault_recorder: FaultRecorder | None = None
    command_recorder: CommandRecorder | None = None


def build_context(
    model: str = "Flying Car",
    log_dir: str | Path | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    procedures: ProcedureLibrary | None = None,
) -> AppContext:
    # Recorders are wired only when a log directory is given.
    fault_recorder = None
    command_recorder = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        fault_recorder = FaultRecorder(filepath=log_dir / "fault_log.txt", clock=clock)
        command_recorder = CommandRecorder(filepath=log_dir / "command_log.csv", clock=clock)

    sensors = SensorSnapshot()
    controller = FlyingCarController(
        model=model,
        procedures=procedures,
        sensors=sensors,
        sleep=sleep,
        fault_recorder=fault_recorder,
    )
    return AppContext(
        controller=controller,
        sensors=sensors,
        clock=clock,
        fault_recorder=fault_recorder,
        command_recorder=command_recorder,
    )
