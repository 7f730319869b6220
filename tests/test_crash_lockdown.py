"""
Title: Emergency Override and Crash Lockdown Tests
Date Created: 2026-02-06
Last Modified: 2026-02-07
Version: 1.1

Purpose:
Verifies that a fatal fault detected during cruise preempts normal flow,
forces the CRASHING mode, runs the crash sequence exactly once, cuts power
through the emergency path, and locks every subsequent command.

Dependencies:
- Python 3.10+
- pytest
- flying_car_controller.py
"""

import pytest

from emergency_protection import BRANCH_PARACHUTE
from fault_recorder import FaultRecorder
from flying_car_controller import FlyingCarController
from vehicle_modes import FaultKind, OperatingMode, PowerState


class FakeSleeper:
    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(float(seconds))


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.t = float(start)

    def __call__(self) -> float:
        return self.t


def make_cruising_car(**kwargs) -> FlyingCarController:
    car = FlyingCarController(model="TEST", sleep=FakeSleeper(), **kwargs)
    car.power_on()
    car.request_flight_mode()
    car.request_takeoff()
    car.request_fly()               # 68
    return car


@pytest.fixture
def crashed_car():
    car = make_cruising_car()
    car.inject_fault(FaultKind.PROPULSION)
    car.request_fly()
    return car


@pytest.mark.parametrize("kind", [FaultKind.PROPULSION, FaultKind.STRUCTURE, FaultKind.CONTROL, FaultKind.BATTERY])
def test_fault_during_cruise_forces_crashing(kind):
    car = make_cruising_car()
    car.inject_fault(kind)

    result = car.request_fly()

    assert result.accepted is False
    assert "locked by emergency system" in result.reason
    assert car.mode == OperatingMode.CRASHING


def test_fault_injection_accepts_string_kinds():
    car = make_cruising_car()

    assert car.inject_fault("Control").accepted is True
    assert car.sensors.flight_control_ok is False


def test_unknown_fault_kind_raises():
    car = FlyingCarController(sleep=FakeSleeper())

    with pytest.raises(ValueError):
        car.inject_fault("Wheels")


def test_battery_fault_sets_five_percent():
    car = make_cruising_car()

    car.inject_fault(FaultKind.BATTERY)

    assert car.battery_charge == 5.0


def test_fatal_fault_preempts_cruise_consumption():
    car = make_cruising_car()
    car.inject_fault(FaultKind.STRUCTURE)

    car.request_fly()

    assert car.battery_charge == 68.0


def test_crash_sequence_runs_and_cuts_power(crashed_car):
    assert crashed_car.eps.sequence_started is True
    assert crashed_car.eps.detected_fault == "PROPULSION"
    assert crashed_car.eps.selected_branch == BRANCH_PARACHUTE
    assert crashed_car.power_state is PowerState.EMERGENCY_CUT
    assert crashed_car.online is False


@pytest.mark.parametrize(
    "command",
    [
        "drive",
        "stop_driving",
        "request_takeoff",
        "request_landing",
        "request_fly",
        "request_flight_mode",
        "request_ground_mode",
        "toggle_ludicrous_mode",
        "toggle_eco_mode",
        "engage_autopilot",
        "power_on",
        "charge",
    ],
)
def test_every_command_locked_after_crash(crashed_car, command):
    charge_before = crashed_car.battery_charge

    result = getattr(crashed_car, command)()

    assert result.accepted is False
    assert result.reason == "locked by emergency system"
    assert crashed_car.mode == OperatingMode.CRASHING
    assert crashed_car.battery_charge == charge_before
    assert crashed_car.power_state is PowerState.EMERGENCY_CUT


def test_power_off_after_crash_reports_already_cut(crashed_car):
    result = crashed_car.power_off()

    assert "already cut" in result.reason
    assert crashed_car.power_state is PowerState.EMERGENCY_CUT


def test_normal_power_off_is_distinct_from_emergency_cut():
    car = FlyingCarController(sleep=FakeSleeper())
    car.power_on()

    result = car.power_off()

    assert result.accepted is True
    assert result.reason == "system shut down"
    assert car.power_state is PowerState.OFF
    assert car.power_off().reason == "power off: already offline"


def test_crash_sequence_runs_only_once(crashed_car):
    steps = crashed_car.eps.executed_steps

    crashed_car.request_fly()

    assert crashed_car.eps.executed_steps == steps


def test_no_fault_detection_on_ground():
    car = FlyingCarController(sleep=FakeSleeper())
    car.power_on()
    car.request_flight_mode()
    car.inject_fault(FaultKind.CONTROL)

    # Preflight would catch it, but the EPS never fires below altitude 0
    assert car.eps.check_for_fatal_errors(car.sensors) is False
    assert car.mode == OperatingMode.FLIGHT_READY


def test_fault_injection_still_writes_after_crash(crashed_car):
    assert crashed_car.inject_fault(FaultKind.STRUCTURE).accepted is True
    assert crashed_car.sensors.structural_ok is False


def test_crash_is_recorded(tmp_path):
    recorder = FaultRecorder(tmp_path / "faults.txt", clock=FakeClock())
    car = make_cruising_car(fault_recorder=recorder)
    car.inject_fault(FaultKind.PROPULSION)

    car.request_fly()

    assert [r.fault_code for r in recorder.records] == ["PROPULSION", "CRASH_BRANCH"]
