"""
Title: Flight Checklist Gate (Preflight / Pre-Landing / Post-Landing)
Date Created: 2026-02-02
Last Modified: 2026-02-05
Version: 1.2

Purpose:
Stateless safety gate evaluated by the flying car controller before every
mode-changing transition. Each run is a short-circuit conjunction of ordered
check groups: the first failing group aborts the run and its reason becomes
the overall reason. Power and energy checks are delegated to the EMS.

Check order:
- Preflight: environment, structure, power, sensors, weight and balance, cabin.
- Pre-landing: ground environment, power, sensors, structure.
- Post-landing: ground speed, propulsion stopped, obstacle clearance.

Scope and Limitations:
- Reads the sensor snapshot, ground speed and mode passed to each run;
  never writes them.
- Pre-landing ground environment, sensor and structure groups always pass
  (no landing-zone sensing is modeled).

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- logging (standard library)
- energy_management.py
- sims/sensor_snapshot.py
"""

import logging
from typing import Callable

from energy_management import EnergyManagementSystem
from results import CheckResult
from sims.sensor_snapshot import SensorSnapshot
from vehicle_modes import OperatingMode

logger = logging.getLogger(__name__)

MIN_GNSS_SATELLITES = 8
POST_LANDING_MAX_GROUND_SPEED_KMH = 10

# Rotors are spooled down in these modes.
PROPULSION_STOPPED_MODES = (
    OperatingMode.GROUND,
    OperatingMode.FLIGHT_READY,
    OperatingMode.LANDED,
)


class FlightChecklist:
    def __init__(self, ems: EnergyManagementSystem):
        self._ems = ems

    def log(self, msg: str) -> None:
        logger.info(msg)

    # -------------------------
    # Checklist runs
    # -------------------------

    def run_preflight(self, sensors: SensorSnapshot, speed_kmh: int) -> CheckResult:
        self.log("--- Pre-takeoff safety checklist ---")
        return self._run_groups(
            [
                ("Environment", lambda: self._check_environment(sensors, speed_kmh)),
                ("Structure", lambda: self._check_structure(sensors)),
                ("Power", lambda: self._check_power(sensors)),
                ("Sensors", lambda: self._check_sensors(sensors)),
                ("Weight and balance", lambda: self._check_weight_and_balance(sensors)),
                ("Cabin", lambda: self._check_cabin(sensors)),
            ]
        )

    def run_pre_landing(self, sensors: SensorSnapshot) -> CheckResult:
        self.log("--- Pre-landing safety checklist ---")
        return self._run_groups(
            [
                ("Ground environment", lambda: self._pass("landing zone clear")),
                ("Power", self._ems.landing_reserve_check),
                ("Sensors", lambda: self._pass("flight control and sensors nominal")),
                ("Structure", lambda: self._pass("body and mechanisms nominal")),
            ]
        )

    def run_post_landing(
        self,
        sensors: SensorSnapshot,
        speed_kmh: int,
        mode: OperatingMode,
    ) -> CheckResult:
        self.log("--- Post-landing transition checklist ---")
        if speed_kmh > POST_LANDING_MAX_GROUND_SPEED_KMH:
            return self._fail(
                f"Ground speed: {speed_kmh} km/h exceeds {POST_LANDING_MAX_GROUND_SPEED_KMH} km/h"
            )
        if mode not in PROPULSION_STOPPED_MODES:
            return self._fail(f"Propulsion: rotors not fully stopped (mode={mode.name})")
        if sensors.obstacle_near:
            return self._fail("Obstacle: obstacle nearby, wing retraction prohibited")
        return self._pass("clear to switch to ground mode")

    def _run_groups(self, groups: list[tuple[str, Callable[[], CheckResult]]]) -> CheckResult:
        # Short-circuit: later groups are not evaluated once one fails.
        for name, check in groups:
            result = check()
            if not result:
                return CheckResult.fail(f"{name}: {result.reason}")
        return CheckResult.ok("all checks passed")

    # -------------------------
    # Preflight groups
    # -------------------------

    def _check_environment(self, sensors: SensorSnapshot, speed_kmh: int) -> CheckResult:
        self.log("A. Vehicle stationary and environment...")
        if speed_kmh != 0:
            return self._fail("vehicle speed is not 0")
        if not sensors.parking_brake_on:
            return self._fail("parking brake not engaged")
        return self._pass("environment check passed")

    def _check_structure(self, sensors: SensorSnapshot) -> CheckResult:
        self.log("B. Airframe and structure...")
        if not sensors.wing_lock_ok:
            return self._fail("wing lock sensor abnormal")
        if not sensors.propeller_clear:
            return self._fail("foreign object on propeller")
        if not sensors.structural_ok:
            return self._fail("structural sensor abnormal")
        return self._pass("structure check passed")

    def _check_power(self, sensors: SensorSnapshot) -> CheckResult:
        self.log("C. Power and propulsion...")
        if not sensors.bms_ok:
            return self._fail("BMS alarm")
        if not sensors.propulsion_ok:
            return self._fail("propulsion self-test failed")
        return self._ems.preflight_energy_check()

    def _check_sensors(self, sensors: SensorSnapshot) -> CheckResult:
        self.log("D. Sensors and flight control...")
        if not sensors.imu_healthy:
            return self._fail("IMU (attitude) abnormal")
        if sensors.gnss_satellites < MIN_GNSS_SATELLITES:
            return self._fail(
                f"GNSS signal weak ({sensors.gnss_satellites} < {MIN_GNSS_SATELLITES} satellites)"
            )
        if not sensors.flight_control_ok:
            return self._fail("flight controller error")
        return self._pass("sensors and flight control passed")

    def _check_weight_and_balance(self, sensors: SensorSnapshot) -> CheckResult:
        self.log("E. Weight and balance...")
        if sensors.weight_kg > sensors.max_takeoff_weight_kg:
            return self._fail(
                f"weight {sensors.weight_kg:.1f} kg exceeds maximum takeoff weight "
                f"{sensors.max_takeoff_weight_kg:.1f} kg"
            )
        return self._pass("weight and balance passed")

    def _check_cabin(self, sensors: SensorSnapshot) -> CheckResult:
        self.log("F. Cabin confirmation...")
        if not sensors.passenger_belted:
            return self._fail("passenger seat belt not fastened")
        return self._pass("cabin confirmation passed")

    def _pass(self, message: str) -> CheckResult:
        self.log(f"   [PASS] {message}")
        return CheckResult.ok(message)

    def _fail(self, message: str) -> CheckResult:
        self.log(f"   [FAIL] {message}")
        return CheckResult.fail(message)
