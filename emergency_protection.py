"""
Title: Emergency Protection System (EPS)
Date Created: 2026-02-03
Last Modified: 2026-02-06
Version: 1.3

Purpose:
Implements the airborne fatal-fault detector and the timed, one-shot crash
response sequence of the flying car.

- check_for_fatal_errors() evaluates propulsion, battery floor, structure and
  flight control in that order and reports the first violated domain. It
  never detects faults on the ground and has no side effects beyond
  reporting; the controller forces the CRASHING mode.
- activate_pre_crash_sequence() runs a fixed ordered list of phases separated
  by simulated delays. It runs to completion once started, cannot be paused,
  resumed or cancelled, and can only run once per EPS instance. The
  parachute / impact-mitigation branch is selected once, from the altitude at
  that phase. The power-cut phase forces the vehicle offline through a
  privileged callback distinct from the normal power-off command.

Scope and Limitations:
- Sensor values are read from the snapshot passed in; never written.
- Phase timing is simulated through the injected sleep function.
- Interrupting a phase delay propagates to the caller and is not handled.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- logging, time (standard library)
- battery_model.py
- procedures.py
- fault_recorder.py (optional)
"""

import logging
import time
from typing import Callable

from battery_model import Battery
from procedures import ProcedureStep, run_step
from sims.sensor_snapshot import SensorSnapshot

logger = logging.getLogger(__name__)

CRITICAL_BATTERY_SOC = 7.0
PARACHUTE_MIN_ALTITUDE_M = 80

BRANCH_PARACHUTE = "PARACHUTE"
BRANCH_IMPACT_MITIGATION = "IMPACT_MITIGATION"

STAGE_PRE_CRASH = "0-2 s: pre-crash mode"
STAGE_DECELERATION = "3-5 s: deceleration and preparation"
STAGE_FINAL_ACTIONS = "5-10 s: final safety actions"
STAGE_IMPACT_PROTECTION = "1-2 s before impact: impact protection"
STAGE_RESCUE = "0-5 s after impact: automatic rescue"

PRE_BRANCH_STEPS = (
    ProcedureStep("[EPS] Attitude stabilization protection engaged", 100, STAGE_PRE_CRASH),
    ProcedureStep("[EPS] Searching for best emergency landing site...", 100, STAGE_PRE_CRASH),
    ProcedureStep("[EPS] Broadcasting distress beacon...", 100, STAGE_PRE_CRASH),
    ProcedureStep("[EPS] Controlled descent mode engaged", 200, STAGE_DECELERATION),
)

PARACHUTE_STEP = ProcedureStep(
    "[EPS] Altitude sufficient: deploying whole-vehicle parachute", 300, STAGE_FINAL_ACTIONS
)
IMPACT_MITIGATION_STEP = ProcedureStep(
    "[EPS] Altitude too low: ground impact mitigation mode", 300, STAGE_FINAL_ACTIONS
)

POWER_CUT_STEP = ProcedureStep(
    "[EPS] Automatic power-off (high-voltage system cut)", 100, STAGE_IMPACT_PROTECTION
)

POST_CUT_STEPS = (
    ProcedureStep("[EPS] Cabin protection (seat belts tightened)", 100, STAGE_IMPACT_PROTECTION),
    ProcedureStep("[EPS] Doors automatically unlocked", 100, STAGE_RESCUE),
    ProcedureStep("[EPS] Rescue beacon activated (GPS position sent)", 100, STAGE_RESCUE),
)


class EmergencyProtectionSystem:
    def __init__(
        self,
        battery: Battery,
        altitude_provider: Callable[[], int],
        power_cut: Callable[[], None],
        sleep: Callable[[float], None] = time.sleep,
        fault_recorder=None,
    ):
        self._battery = battery
        self.altitude_provider = altitude_provider
        self._power_cut = power_cut
        self._sleep = sleep
        self._fault_recorder = fault_recorder

        self._detected_fault: str | None = None
        self._sequence_started = False
        self._selected_branch: str | None = None
        self._executed_steps: list[str] = []
        self._current_stage: str | None = None

    # -------------------------
    # Properties / small helpers
    # -------------------------

    @property
    def detected_fault(self) -> str | None:
        return self._detected_fault

    @property
    def sequence_started(self) -> bool:
        return self._sequence_started

    @property
    def selected_branch(self) -> str | None:
        return self._selected_branch

    @property
    def executed_steps(self) -> list[str]:
        return list(self._executed_steps)

    @property
    def fault_recorder(self):
        return self._fault_recorder

    @fault_recorder.setter
    def fault_recorder(self, recorder) -> None:
        self._fault_recorder = recorder

    def log(self, msg: str) -> None:
        logger.warning(msg)

    # -------------------------
    # Fault detection
    # -------------------------

    def check_for_fatal_errors(self, sensors: SensorSnapshot) -> bool:
        if self.altitude_provider() <= 0:
            # No fault detection on the ground
            return False

        if not sensors.propulsion_ok:
            return self._trigger("PROPULSION", "fatal propulsion failure")
        if self._battery.charge < CRITICAL_BATTERY_SOC:
            return self._trigger(
                "BATTERY",
                f"power crisis (charge {self._battery.charge:.1f}% < {CRITICAL_BATTERY_SOC:.0f}%)",
            )
        if not sensors.structural_ok:
            return self._trigger("STRUCTURE", "structural damage")
        if not sensors.flight_control_ok:
            return self._trigger("FLIGHT_CONTROL", "flight control failure")
        return False

    def _trigger(self, fault_code: str, description: str) -> bool:
        self._detected_fault = fault_code
        self.log("--- [!!! WARNING !!!] ---")
        self.log(f"Fatal fault detected: {description}")
        self.log("--- Entering PRE-CRASH mode ---")
        self._record(fault_code, description)
        return True

    def _record(self, fault_code: str, detail: str = "") -> None:
        if self._fault_recorder is None:
            return
        self._fault_recorder.record(fault_code, detail)

    # -------------------------
    # Crash response sequence
    # -------------------------

    def activate_pre_crash_sequence(self) -> bool:
        if self._sequence_started:
            self.log("Pre-crash sequence already executed; activation ignored")
            return False
        self._sequence_started = True

        for step in PRE_BRANCH_STEPS:
            self._run_phase(step)

        # Branch is selected once, from the altitude at this instant.
        if self.altitude_provider() >= PARACHUTE_MIN_ALTITUDE_M:
            self._selected_branch = BRANCH_PARACHUTE
            self._run_phase(PARACHUTE_STEP)
        else:
            self._selected_branch = BRANCH_IMPACT_MITIGATION
            self._run_phase(IMPACT_MITIGATION_STEP)
        self._record("CRASH_BRANCH", self._selected_branch)

        self.log("[EPS] (cabin voice) Impact protection activating...")
        self._run_phase(POWER_CUT_STEP)
        self._power_cut()

        for step in POST_CUT_STEPS:
            self._run_phase(step)

        return True

    def _run_phase(self, step: ProcedureStep) -> None:
        if step.stage != self._current_stage:
            self._current_stage = step.stage
            self.log(f"--- ({step.stage}) ---")

        run_step(step, self._sleep, self.log)
        self._executed_steps.append(step.name)
