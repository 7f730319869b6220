"""
Title: Flying Car Operating Mode State Machine (Controller)
Date Created: 2026-02-02
Last Modified: 2026-02-07
Version: 1.4

Purpose:
Implements the deterministic operating-mode state machine of a transforming
ground/flight vehicle. Every mode-changing command is gated, in order, by the
crash lock, the power state, the required current mode and exactly one
checklist run or pre-check. On pass the timed procedure runs to completion,
energy is consumed or recovered through the battery/EMS, and the new mode is
committed. A refused command mutates nothing.

During cruise the emergency protection system (EPS) is polled first. A fatal
fault preempts normal flow, forces CRASHING and runs the one-shot crash
sequence; afterwards every command is a no-op except the power-off
acknowledgment.

Mode transitions:
- GROUND --request_flight_mode--> FLIGHT_READY (preflight checklist)
- FLIGHT_READY/LANDED --request_takeoff--> AIRBORNE (20% takeoff energy)
- AIRBORNE --request_fly--> AIRBORNE, LANDED (auto-landing) or CRASHING
- AIRBORNE --request_landing--> LANDED (pre-landing checklist)
- LANDED/FLIGHT_READY --request_ground_mode--> GROUND (post-landing checklist)

Scope and Limitations:
- Commands are processed synchronously, one at a time, to completion.
- Procedure delays use the injected sleep function; there is no cancellation
  and no timeout.
- Sensor values are simulated and injectable; no real sensor input.
- Intended for simulation, design exploration, and requirements validation only.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.
"""

import logging
import time

from battery_model import Battery
from emergency_protection import EmergencyProtectionSystem
from energy_management import EnergyManagementSystem, LANDING_RESERVE_SOC
from flight_checklist import FlightChecklist
from procedures import Procedure, ProcedureLibrary
from results import CommandResult
from sims.sensor_snapshot import SensorSnapshot
from vehicle_modes import FaultKind, OperatingMode, PowerState
from vehicle_record import VehicleRecord

logger = logging.getLogger(__name__)

TAKEOFF_ENERGY_COST = 20.0
TAKEOFF_ALTITUDE_M = 150
CLIMB_SPEED_KMH = 50
CRUISE_SPEED_KMH = 200

DRIVE_SPEED_KMH = 120
LUDICROUS_DRIVE_SPEED_KMH = 210
DRIVE_CONSUMPTION = 1.0
LUDICROUS_DRIVE_CONSUMPTION = 3.0

BATTERY_FAULT_SOC = 5.0

LOCKED_REASON = "locked by emergency system"


class FlyingCarController:
    def __init__(
        self,
        model: str = "Flying Car",
        procedures: ProcedureLibrary | None = None,
        sensors: SensorSnapshot | None = None,
        sleep=time.sleep,
        fault_recorder=None,
    ):
        self._record = VehicleRecord(model=model, battery=Battery())
        self._sensors = sensors if sensors is not None else SensorSnapshot()
        self._procedures = procedures if procedures is not None else ProcedureLibrary()
        self._sleep = sleep

        self._mode = OperatingMode.GROUND
        self._ludicrous_mode = False

        # Auxiliary systems share the vehicle lifetime
        self._ems = EnergyManagementSystem(self._record.battery)
        self._checklist = FlightChecklist(self._ems)
        self._eps = EmergencyProtectionSystem(
            battery=self._record.battery,
            altitude_provider=lambda: self._record.altitude_m,
            power_cut=self._emergency_power_cut,
            sleep=sleep,
            fault_recorder=fault_recorder,
        )

    # -------------------------
    # Properties / small helpers
    # -------------------------

    @property
    def mode(self) -> OperatingMode:
        return self._mode

    @property
    def model(self) -> str:
        return self._record.model

    @property
    def power_state(self) -> PowerState:
        return self._record.power

    @property
    def online(self) -> bool:
        return self._record.online

    @property
    def battery_charge(self) -> float:
        return self._record.battery_charge

    @property
    def speed_kmh(self) -> int:
        return self._record.speed_kmh

    @property
    def altitude_m(self) -> int:
        return self._record.altitude_m

    @property
    def ludicrous_mode(self) -> bool:
        return self._ludicrous_mode

    @property
    def eco_mode(self) -> bool:
        return self._ems.eco_mode

    @property
    def sensors(self) -> SensorSnapshot:
        return self._sensors

    @property
    def ems(self) -> EnergyManagementSystem:
        return self._ems

    @property
    def checklist(self) -> FlightChecklist:
        return self._checklist

    @property
    def eps(self) -> EmergencyProtectionSystem:
        return self._eps

    def log(self, msg: str) -> None:
        logger.info(msg)

    def enter_mode(self, new_mode: OperatingMode) -> None:
        self._mode = new_mode

    def _refuse(self, reason: str) -> CommandResult:
        self.log(f"[SYSTEM] Command refused: {reason}")
        return CommandResult.refused(reason)

    def _gate(self, command: str, *required_modes: OperatingMode) -> CommandResult | None:
        # Returns a refusal, or None when the command may proceed.
        if self._mode == OperatingMode.CRASHING:
            self.log(f"[LOCKED] {command}: vehicle is CRASHING, command ignored")
            return CommandResult.refused(LOCKED_REASON)

        if not self.online:
            return self._refuse(f"{command}: system offline")

        if required_modes and self._mode not in required_modes:
            allowed = "/".join(m.name for m in required_modes)
            return self._refuse(f"{command}: mode {self._mode.name} (requires {allowed})")

        return None

    def _run_procedure(self, procedure: Procedure) -> bool:
        self.log(f"[SYSTEM] {procedure.name}...")
        return procedure.run(self._sleep, self.log)

    # -------------------------
    # Power
    # -------------------------

    def power_on(self) -> CommandResult:
        if self._mode == OperatingMode.CRASHING:
            self.log("[LOCKED] power on: vehicle is CRASHING, command ignored")
            return CommandResult.refused(LOCKED_REASON)

        if self.online:
            return self._refuse("power on: already online")

        self._record.power = PowerState.ON
        self.log(f"{self.model} system online. Battery: {self.battery_charge:.1f}%")
        return CommandResult.done("system online")

    def power_off(self) -> CommandResult:
        if self._record.power is PowerState.EMERGENCY_CUT or self._mode == OperatingMode.CRASHING:
            self.log(f"{self.model} power already cut by emergency system (EPS)")
            return CommandResult.refused("already cut by emergency system")

        if not self.online:
            return self._refuse("power off: already offline")

        self._record.power = PowerState.OFF
        self._record.speed_kmh = 0
        self.log(f"{self.model} system shut down.")
        return CommandResult.done("system shut down")

    def _emergency_power_cut(self) -> None:
        # Privileged path used only by the EPS crash sequence.
        self._record.power = PowerState.EMERGENCY_CUT

    def charge(self) -> CommandResult:
        if self._mode == OperatingMode.CRASHING:
            self.log("[LOCKED] charge: vehicle is CRASHING, command ignored")
            return CommandResult.refused(LOCKED_REASON)

        self.log(f"{self.model} connected to supercharger...")
        self._record.battery.charge_full()
        self.log("Charging complete. Battery: 100%")
        return CommandResult.done("charged to 100%")

    # -------------------------
    # Flight commands
    # -------------------------

    def request_flight_mode(self) -> CommandResult:
        refusal = self._gate("flight mode", OperatingMode.GROUND)
        if refusal is not None:
            return refusal

        check = self._checklist.run_preflight(self._sensors, self.speed_kmh)
        if not check:
            return self._refuse(f"preflight checklist failed: {check.reason}")

        self.enter_mode(OperatingMode.TRANSFORMING_TO_AIR)
        if not self._run_procedure(self._procedures.air_transform):
            self.enter_mode(OperatingMode.GROUND)
            return self._refuse("air transformation incomplete")

        self.enter_mode(OperatingMode.FLIGHT_READY)
        self.log("[SYSTEM] Flight mode ready for takeoff.")
        return CommandResult.done("flight ready")

    def request_takeoff(self) -> CommandResult:
        refusal = self._gate("takeoff", OperatingMode.FLIGHT_READY, OperatingMode.LANDED)
        if refusal is not None:
            return refusal

        self.log("[SYSTEM] Final pre-takeoff check...")
        consumed = self._record.battery.consume(TAKEOFF_ENERGY_COST)
        if not consumed:
            return self._refuse(f"takeoff pre-check failed: {consumed.reason}")

        self._run_procedure(self._procedures.takeoff)
        self._record.altitude_m = TAKEOFF_ALTITUDE_M
        self._record.speed_kmh = CLIMB_SPEED_KMH
        self.enter_mode(OperatingMode.AIRBORNE)
        self.log(
            f"[SYSTEM] Airborne at {self.altitude_m} m. Battery remaining: {self.battery_charge:.1f}%"
        )
        return CommandResult.done("airborne")

    def request_fly(self) -> CommandResult:
        refusal = self._gate("cruise", OperatingMode.AIRBORNE)
        if refusal is not None:
            return refusal

        # EPS takes priority over every normal command
        if self._eps.check_for_fatal_errors(self._sensors):
            self.enter_mode(OperatingMode.CRASHING)
            self._eps.activate_pre_crash_sequence()
            return CommandResult.refused(
                f"fatal fault ({self._eps.detected_fault}): {LOCKED_REASON}"
            )

        consumption = self._ems.cruise_consumption()
        label = "Eco" if self._ems.eco_mode else "Standard"
        self.log(f"[SYSTEM] {label} cruise... (expected consumption {consumption}%)")

        consumed = self._record.battery.consume(consumption)
        if consumed:
            self._record.speed_kmh = CRUISE_SPEED_KMH
            self.log(f"[SYSTEM] Cruising at {self.altitude_m} m, {self.speed_kmh} km/h.")
        else:
            self.log("[SYSTEM] Cruise failed: insufficient energy.")

        if not consumed or self._ems.is_below_landing_reserve():
            self.log(
                f"[EMS WARNING] Charge below {LANDING_RESERVE_SOC}%. Automatic landing triggered!"
            )
            self._land(automatic=True)

        if not consumed:
            return CommandResult.refused(f"cruise failed: {consumed.reason}; automatic landing executed")
        if self._mode == OperatingMode.LANDED:
            return CommandResult.done("cruised; automatic landing executed")
        return CommandResult.done("cruising")

    def request_landing(self) -> CommandResult:
        refusal = self._gate("landing", OperatingMode.AIRBORNE)
        if refusal is not None:
            return refusal
        return self._land(automatic=False)

    def _land(self, automatic: bool) -> CommandResult:
        check = self._checklist.run_pre_landing(self._sensors)
        if not check:
            if not automatic:
                return self._refuse(f"pre-landing checklist failed: {check.reason}")
            # Automatic landing is reported but never aborted by the checklist.
            self.log(f"[SYSTEM] Pre-landing checklist failed ({check.reason}); forcing landing.")

        self.log("[SYSTEM] Starting automatic landing procedure...")
        self._run_procedure(self._procedures.landing)
        self._record.altitude_m = 0
        self._record.speed_kmh = 0
        self.enter_mode(OperatingMode.LANDED)
        self.log("[SYSTEM] Landed (weight-on-wheels). Ground mode available.")
        return CommandResult.done("landed")

    def request_ground_mode(self) -> CommandResult:
        refusal = self._gate("ground mode", OperatingMode.LANDED, OperatingMode.FLIGHT_READY)
        if refusal is not None:
            return refusal

        check = self._checklist.run_post_landing(self._sensors, self.speed_kmh, self._mode)
        if not check:
            return self._refuse(f"post-landing checklist failed: {check.reason}")

        previous_mode = self._mode
        self.enter_mode(OperatingMode.TRANSFORMING_TO_GROUND)
        if not self._run_procedure(self._procedures.ground_transform):
            self.enter_mode(previous_mode)
            return self._refuse("ground transformation incomplete")

        self.enter_mode(OperatingMode.GROUND)
        self.log("[SYSTEM] Ground mode active, ready to drive.")
        return CommandResult.done("ground mode")

    # -------------------------
    # Ground commands
    # -------------------------

    def drive(self) -> CommandResult:
        refusal = self._gate("drive", OperatingMode.GROUND)
        if refusal is not None:
            return refusal

        consumption = LUDICROUS_DRIVE_CONSUMPTION if self._ludicrous_mode else DRIVE_CONSUMPTION
        consumed = self._record.battery.consume(consumption)
        if not consumed:
            return self._refuse(f"drive: {consumed.reason}")

        self._record.speed_kmh = LUDICROUS_DRIVE_SPEED_KMH if self._ludicrous_mode else DRIVE_SPEED_KMH
        label = "Ludicrous" if self._ludicrous_mode else "Standard"
        self.log(f"[SYSTEM] {label} mode driving at {self.speed_kmh} km/h.")
        return CommandResult.done("driving")

    def stop_driving(self) -> CommandResult:
        refusal = self._gate("stop driving", OperatingMode.GROUND)
        if refusal is not None:
            return refusal

        if self.speed_kmh == 0:
            return self._refuse("stop driving: vehicle not moving")

        self._record.speed_kmh = 0
        recovered = self._ems.activate_regenerative_braking()
        self.log(f"[SYSTEM] Stopped. Regenerative braking recovered {recovered:.1f}%.")
        return CommandResult.done("stopped")

    def toggle_ludicrous_mode(self) -> CommandResult:
        refusal = self._gate("ludicrous mode", OperatingMode.GROUND)
        if refusal is not None:
            return refusal

        self._ludicrous_mode = not self._ludicrous_mode
        state = "ON" if self._ludicrous_mode else "OFF"
        self.log(f"[SYSTEM] Ludicrous mode {state}!")
        return CommandResult.done(f"ludicrous mode {state}")

    def toggle_eco_mode(self) -> CommandResult:
        refusal = self._gate("eco mode")
        if refusal is not None:
            return refusal

        enabled = self._ems.toggle_eco_mode()
        return CommandResult.done(f"eco mode {'ON' if enabled else 'OFF'}")

    def engage_autopilot(self) -> CommandResult:
        refusal = self._gate("autopilot")
        if refusal is not None:
            return refusal

        if self.speed_kmh <= 0:
            return self._refuse("autopilot: vehicle not moving")

        self.log(f"{self.model} autopilot engaged.")
        return CommandResult.done("autopilot engaged")

    # -------------------------
    # Capability interface (Drivable / Flyable)
    # -------------------------

    def take_off(self) -> CommandResult:
        return self.request_takeoff()

    def fly(self) -> CommandResult:
        return self.request_fly()

    def land(self) -> CommandResult:
        return self.request_landing()

    # -------------------------
    # Simulation hooks (fault injection)
    # -------------------------

    def inject_fault(self, kind: FaultKind | str) -> CommandResult:
        fault = kind if isinstance(kind, FaultKind) else FaultKind(kind)
        self.log(f"[MASTER] Injecting fault: {fault.value}")

        if fault is FaultKind.BATTERY:
            self._record.battery.set_charge(BATTERY_FAULT_SOC)
        else:
            self._sensors.inject_fault(fault)
        return CommandResult.done(f"fault injected: {fault.value}")

    def set_battery(self, percent: float) -> CommandResult:
        self._record.battery.set_charge(percent)
        return CommandResult.done(f"battery set to {self.battery_charge:.1f}%")
