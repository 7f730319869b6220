"""
Title: Flying Car Sensor Snapshot Simulation Model
Date Created: 2026-02-02
Last Modified: 2026-02-04
Version: 1.1

Purpose:
Defines the mutable set of named scalar and boolean sensor readings consumed
by the flight checklist and the emergency protection system. Readings are
fixed simulated values; the fault-injection hook is the only writer apart
from direct edits made by tests or the CLI.

Scope and Limitations:
- Models logical sensor outputs only, not sensor dynamics or noise.
- Checklist and EPS read the snapshot; they never write it.
- Battery faults are applied to the battery model by the controller, not here.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- vehicle_modes.py
"""

from dataclasses import dataclass

from vehicle_modes import FaultKind


@dataclass
class SensorSnapshot:
    # Ground environment
    parking_brake_on: bool = True
    ground_tilt_deg: float = 3.0
    in_vertiport: bool = True
    obstacle_near: bool = False
    visibility_km: int = 3
    wind_speed_mps: int = 5

    # Airframe / structure
    wing_lock_ok: bool = True
    propeller_clear: bool = True
    cabin_door_closed: bool = True
    structural_ok: bool = True

    # Power / propulsion
    bms_ok: bool = True
    propulsion_ok: bool = True

    # Weight and balance
    weight_kg: float = 350.0
    max_takeoff_weight_kg: float = 400.0

    # Cabin
    passenger_belted: bool = True

    # Flight control and navigation sensors
    flight_control_ok: bool = True
    imu_healthy: bool = True
    gnss_satellites: int = 9
    barometer_ok: bool = True

    def inject_fault(self, kind: FaultKind) -> bool:
        # Returns False when the fault kind is not a sensor fault.
        if kind is FaultKind.PROPULSION:
            self.propulsion_ok = False
        elif kind is FaultKind.STRUCTURE:
            self.structural_ok = False
        elif kind is FaultKind.CONTROL:
            self.flight_control_ok = False
        else:
            return False
        return True
