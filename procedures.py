"""
Title: Timed Procedure Model (SOP Steps and Procedure Library)
Date Created: 2026-02-02
Last Modified: 2026-02-05
Version: 1.2

Purpose:
Defines immutable data models for the timed standard operating procedures
(SOPs) executed by the flying car: the air and ground transformations and the
takeoff and landing narrations. A procedure is an explicit ordered list of
named steps, each with a simulated duration. Procedures are executed
synchronously through an injected sleep function; there is no pause, resume
or cancel.

Scope and Limitations:
- Durations are nominal simulated values; no variation or sensor feedback.
- A test harness can substitute zero-duration steps with without_delays()
  without changing procedure logic.
- Interrupting a sleep (e.g. KeyboardInterrupt) is not handled here and
  propagates to the caller.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- typing (standard library)
"""

from dataclasses import dataclass, field, replace
from typing import Callable


@dataclass(frozen=True)
class ProcedureStep:
    name: str
    duration_ms: int
    # Elapsed-time window the step belongs to, e.g. "0-2 s". Informational only.
    stage: str = ""

    def duration_s(self) -> float:
        return self.duration_ms / 1000.0


@dataclass(frozen=True)
class Procedure:
    name: str
    steps: tuple[ProcedureStep, ...]

    def total_duration_ms(self) -> int:
        # Pure calculation, no side effects.
        return sum(step.duration_ms for step in self.steps)

    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]

    def without_delays(self) -> "Procedure":
        return replace(
            self,
            steps=tuple(replace(step, duration_ms=0) for step in self.steps),
        )

    def run(self, sleep: Callable[[float], None], log: Callable[[str], None]) -> bool:
        # Runs every step to completion, strictly in order.
        for step in self.steps:
            run_step(step, sleep, log)
        return True


def run_step(
    step: ProcedureStep,
    sleep: Callable[[float], None],
    log: Callable[[str], None],
) -> None:
    log(step.name)
    sleep(step.duration_s())


AIR_TRANSFORM_SOP = Procedure(
    name="Air transformation",
    steps=(
        ProcedureStep("SOP 1. Lock wheels", 50),
        ProcedureStep("SOP 2. Deploy main wings and double-lock", 100),
    ),
)

GROUND_TRANSFORM_SOP = Procedure(
    name="Ground transformation",
    steps=(
        ProcedureStep("SOP 1. Retract main wings and lock", 100),
        ProcedureStep("SOP 2. Fold tail fins", 50),
    ),
)

TAKEOFF_PROCEDURE = Procedure(
    name="Vertical takeoff",
    steps=(
        ProcedureStep("Rotors spooling up", 50),
        ProcedureStep("Vertical climb to cruise altitude", 100),
    ),
)

LANDING_PROCEDURE = Procedure(
    name="Automatic landing",
    steps=(
        ProcedureStep("Descending... altitude 20 m", 50),
        ProcedureStep("Descending... altitude 10 m", 50),
        ProcedureStep("Touchdown (weight-on-wheels)", 50),
        ProcedureStep("Rotors spooled down", 50),
    ),
)


@dataclass(frozen=True)
class ProcedureLibrary:
    # Immutable set of SOPs the controller executes.
    air_transform: Procedure = field(default=AIR_TRANSFORM_SOP)
    ground_transform: Procedure = field(default=GROUND_TRANSFORM_SOP)
    takeoff: Procedure = field(default=TAKEOFF_PROCEDURE)
    landing: Procedure = field(default=LANDING_PROCEDURE)

    def without_delays(self) -> "ProcedureLibrary":
        return ProcedureLibrary(
            air_transform=self.air_transform.without_delays(),
            ground_transform=self.ground_transform.without_delays(),
            takeoff=self.takeoff.without_delays(),
            landing=self.landing.without_delays(),
        )
