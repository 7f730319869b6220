"""
Title: Reference Vehicles (Plain Ground Car / Fixed-Wing Aircraft)
Date Created: 2026-02-04
Last Modified: 2026-02-04
Version: 1.0

Purpose:
Single-mode baseline vehicles used for comparison with the flying car. Each
implements one capability protocol directly and carries its own
VehicleRecord. Commands are stateless handlers with no checklist, EMS or EPS
gating; only the power state and available energy are checked.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- battery_model.py, results.py, vehicle_record.py
"""

import logging

from battery_model import Battery
from results import CommandResult
from vehicle_modes import PowerState
from vehicle_record import VehicleRecord

logger = logging.getLogger(__name__)


def _power_on(record: VehicleRecord) -> CommandResult:
    if record.online:
        return CommandResult.refused("already online")
    record.power = PowerState.ON
    logger.info("%s system online. Battery: %.1f%%", record.model, record.battery_charge)
    return CommandResult.done("system online")


def _power_off(record: VehicleRecord) -> CommandResult:
    if not record.online:
        return CommandResult.refused("already offline")
    record.power = PowerState.OFF
    record.speed_kmh = 0
    logger.info("%s system shut down.", record.model)
    return CommandResult.done("system shut down")


class RegularCar:
    DRIVE_CONSUMPTION = 3.0
    LUDICROUS_DRIVE_CONSUMPTION = 8.0
    DRIVE_SPEED_KMH = 120
    LUDICROUS_DRIVE_SPEED_KMH = 210
    REGEN_GAIN = 2.0

    def __init__(self, model: str):
        self.record = VehicleRecord(model=model, battery=Battery())
        self.ludicrous_mode = False
        self.driving = False

    def power_on(self) -> CommandResult:
        return _power_on(self.record)

    def power_off(self) -> CommandResult:
        self.driving = False
        return _power_off(self.record)

    def toggle_ludicrous_mode(self) -> CommandResult:
        self.ludicrous_mode = not self.ludicrous_mode
        return CommandResult.done(f"ludicrous mode {'ON' if self.ludicrous_mode else 'OFF'}")

    def drive(self) -> CommandResult:
        if not self.record.online:
            return CommandResult.refused("system offline")

        consumption = self.LUDICROUS_DRIVE_CONSUMPTION if self.ludicrous_mode else self.DRIVE_CONSUMPTION
        consumed = self.record.battery.consume(consumption)
        if not consumed:
            return CommandResult.refused(consumed.reason)

        self.driving = True
        self.record.speed_kmh = (
            self.LUDICROUS_DRIVE_SPEED_KMH if self.ludicrous_mode else self.DRIVE_SPEED_KMH
        )
        logger.info("%s driving on the highway at %d km/h.", self.record.model, self.record.speed_kmh)
        return CommandResult.done("driving")

    def stop_driving(self) -> CommandResult:
        if not self.driving:
            return CommandResult.refused("not driving")

        self.driving = False
        self.record.speed_kmh = 0
        self.record.battery.regain(self.REGEN_GAIN)
        return CommandResult.done("stopped")


class Airplane:
    TAKEOFF_CONSUMPTION = 30.0
    CRUISE_CONSUMPTION = 15.0
    TAKEOFF_SPEED_KMH = 300
    CRUISE_SPEED_KMH = 800

    def __init__(self, model: str):
        self.record = VehicleRecord(model=model, battery=Battery())
        self.flying = False

    def power_on(self) -> CommandResult:
        return _power_on(self.record)

    def power_off(self) -> CommandResult:
        return _power_off(self.record)

    def take_off(self) -> CommandResult:
        if not self.record.online:
            return CommandResult.refused("system offline")

        consumed = self.record.battery.consume(self.TAKEOFF_CONSUMPTION)
        if not consumed:
            return CommandResult.refused(consumed.reason)

        self.flying = True
        self.record.speed_kmh = self.TAKEOFF_SPEED_KMH
        logger.info("%s taking off from the runway...", self.record.model)
        return CommandResult.done("airborne")

    def fly(self) -> CommandResult:
        if not self.flying:
            return CommandResult.refused("not airborne")

        consumed = self.record.battery.consume(self.CRUISE_CONSUMPTION)
        if not consumed:
            logger.info("%s cruise failed, requesting emergency landing.", self.record.model)
            self.land()
            return CommandResult.refused(f"{consumed.reason}; emergency landing executed")

        self.record.speed_kmh = self.CRUISE_SPEED_KMH
        return CommandResult.done("cruising")

    def land(self) -> CommandResult:
        if not self.flying:
            return CommandResult.refused("not airborne")

        self.flying = False
        self.record.speed_kmh = 0
        logger.info("%s landed on the runway.", self.record.model)
        return CommandResult.done("landed")
