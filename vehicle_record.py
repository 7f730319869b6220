"""
Title: Vehicle Record (Battery / Speed / Altitude / Power)
Date Created: 2026-02-03
Last Modified: 2026-02-03
Version: 1.0

Purpose:
A plain composed record of the state every vehicle variant carries: model
name, battery, ground/air speed, altitude and power state. Vehicle variants
own one record each instead of sharing a base class.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- battery_model.py
- vehicle_modes.py
"""

from dataclasses import dataclass, field

from battery_model import Battery
from vehicle_modes import PowerState


@dataclass
class VehicleRecord:
    model: str
    battery: Battery = field(default_factory=Battery)
    speed_kmh: int = 0
    altitude_m: int = 0
    power: PowerState = PowerState.OFF

    @property
    def online(self) -> bool:
        return self.power is PowerState.ON

    @property
    def battery_charge(self) -> float:
        return self.battery.charge
