"""
Title: Energy Management System (EMS)
Date Created: 2026-02-02
Last Modified: 2026-02-04
Version: 1.1

Purpose:
Sole authority for energy thresholds and consumption magnitudes. Provides the
preflight energy check and landing reserve check delegated to by the flight
checklist, the per-step cruise consumption, the low-reserve test used to force
an automatic landing, and regenerative braking recovery.

Scope and Limitations:
- Thresholds are fixed design parameters and are not configurable.
- Range estimate is a linear model over a fixed planned range.
- Checks are read-only with respect to the battery; only regenerative
  braking writes to it.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- logging (standard library)
- battery_model.py
- results.py
"""

import logging

from battery_model import Battery
from results import CheckResult

logger = logging.getLogger(__name__)

TAKEOFF_MIN_SOC = 60.0
LANDING_RESERVE_SOC = 25.0
MAX_RANGE_KM = 300.0
PLANNED_RANGE_KM = 150.0

NORMAL_CRUISE_CONSUMPTION = 12.0
ECO_CRUISE_CONSUMPTION = 8.0
REGEN_BRAKING_GAIN = 2.5


def estimate_consumption(range_km: float) -> float:
    # Reserve is always held back; the rest scales linearly with range.
    return (range_km / MAX_RANGE_KM) * (100.0 - LANDING_RESERVE_SOC) + LANDING_RESERVE_SOC


class EnergyManagementSystem:
    def __init__(self, battery: Battery, planned_range_km: float = PLANNED_RANGE_KM):
        self._battery = battery
        self._planned_range_km = float(planned_range_km)
        self._eco_mode = False

    @property
    def eco_mode(self) -> bool:
        return self._eco_mode

    @property
    def planned_range_km(self) -> float:
        return self._planned_range_km

    def log(self, msg: str) -> None:
        logger.info(msg)

    def preflight_energy_check(self) -> CheckResult:
        soc = self._battery.charge

        if soc < TAKEOFF_MIN_SOC:
            return self._fail(
                f"TAKEOFF_MIN_SOC: charge below {TAKEOFF_MIN_SOC:.1f}% (current {soc:.1f}%)"
            )

        estimated = estimate_consumption(self._planned_range_km)
        if estimated > soc:
            return self._fail(
                f"estimated range consumption {estimated:.1f}% exceeds charge {soc:.1f}%"
            )

        return self._pass(
            f"charge sufficient (SOC {soc:.1f}%), estimated range consumption {estimated:.1f}%"
        )

    def landing_reserve_check(self) -> CheckResult:
        soc = self._battery.charge
        if soc < LANDING_RESERVE_SOC:
            return self._fail(
                f"LANDING_RESERVE_SOC: charge below {LANDING_RESERVE_SOC:.1f}% (current {soc:.1f}%)"
            )
        return self._pass(f"charge above landing reserve ({soc:.1f}% remaining)")

    def cruise_consumption(self) -> float:
        return ECO_CRUISE_CONSUMPTION if self._eco_mode else NORMAL_CRUISE_CONSUMPTION

    def is_below_landing_reserve(self) -> bool:
        return self._battery.charge < LANDING_RESERVE_SOC

    def activate_regenerative_braking(self) -> float:
        return self._battery.regain(REGEN_BRAKING_GAIN)

    def toggle_eco_mode(self) -> bool:
        self._eco_mode = not self._eco_mode
        self.log(f"[EMS] Eco cruise {'ON' if self._eco_mode else 'OFF'}")
        return self._eco_mode

    def _pass(self, message: str) -> CheckResult:
        self.log(f"   [PASS] {message}")
        return CheckResult.ok(message)

    def _fail(self, message: str) -> CheckResult:
        self.log(f"   [FAIL] {message}")
        return CheckResult.fail(message)
