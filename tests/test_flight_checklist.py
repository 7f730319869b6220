"""
Title: Flight Checklist Gate Unit Tests
Date Created: 2026-02-04
Last Modified: 2026-02-05
Version: 1.1

Purpose:
Verifies ordering and short-circuit behaviour of the preflight, pre-landing
and post-landing checklists: the first failing group aborts the run, its
name appears in the reason, and later groups are not evaluated.

Scope and Limitations:
- Exercises the checklist against a real EMS and battery; no controller.

Dependencies:
- Python 3.10+
- pytest
- flight_checklist.py, energy_management.py, sims/sensor_snapshot.py
"""

import pytest

from battery_model import Battery
from energy_management import EnergyManagementSystem
from flight_checklist import FlightChecklist
from sims.sensor_snapshot import SensorSnapshot
from vehicle_modes import OperatingMode


class SpyFlightChecklist(FlightChecklist):
    # Checklist capturing log lines
    def __init__(self, ems):
        super().__init__(ems)
        self.logs: list[str] = []

    def log(self, msg: str) -> None:
        self.logs.append(msg)


@pytest.fixture
def battery():
    return Battery(100.0)


@pytest.fixture
def checklist(battery):
    return SpyFlightChecklist(EnergyManagementSystem(battery))


@pytest.fixture
def sensors():
    return SensorSnapshot()


# -----------------------------
# Preflight
# -----------------------------

def test_preflight_passes_with_default_sensors(checklist, sensors):
    result = checklist.run_preflight(sensors, speed_kmh=0)

    assert result.passed is True
    assert [line for line in checklist.logs if line[:2] in ("A.", "B.", "C.", "D.", "E.", "F.")] == [
        "A. Vehicle stationary and environment...",
        "B. Airframe and structure...",
        "C. Power and propulsion...",
        "D. Sensors and flight control...",
        "E. Weight and balance...",
        "F. Cabin confirmation...",
    ]


@pytest.mark.parametrize(
    "field, value, group",
    [
        ("parking_brake_on", False, "Environment"),
        ("wing_lock_ok", False, "Structure"),
        ("propeller_clear", False, "Structure"),
        ("structural_ok", False, "Structure"),
        ("bms_ok", False, "Power"),
        ("propulsion_ok", False, "Power"),
        ("imu_healthy", False, "Sensors"),
        ("gnss_satellites", 7, "Sensors"),
        ("flight_control_ok", False, "Sensors"),
        ("weight_kg", 400.1, "Weight and balance"),
        ("passenger_belted", False, "Cabin"),
    ],
)
def test_preflight_failure_names_group(checklist, sensors, field, value, group):
    setattr(sensors, field, value)

    result = checklist.run_preflight(sensors, speed_kmh=0)

    assert result.passed is False
    assert result.reason.startswith(f"{group}:")


def test_preflight_moving_vehicle_fails_environment(checklist, sensors):
    result = checklist.run_preflight(sensors, speed_kmh=120)

    assert result.passed is False
    assert result.reason.startswith("Environment:")


def test_preflight_gnss_boundary_eight_satellites_passes(checklist, sensors):
    sensors.gnss_satellites = 8

    assert checklist.run_preflight(sensors, speed_kmh=0).passed is True


def test_preflight_weight_equal_to_max_passes(checklist, sensors):
    sensors.weight_kg = sensors.max_takeoff_weight_kg

    assert checklist.run_preflight(sensors, speed_kmh=0).passed is True


def test_preflight_short_circuits_after_first_failure(checklist, sensors):
    sensors.wing_lock_ok = False
    sensors.passenger_belted = False

    result = checklist.run_preflight(sensors, speed_kmh=0)

    assert result.reason.startswith("Structure:")
    assert "C. Power and propulsion..." not in checklist.logs
    assert "F. Cabin confirmation..." not in checklist.logs


def test_preflight_low_battery_fails_power_with_soc_reason(battery, checklist, sensors):
    battery.set_charge(50.0)

    result = checklist.run_preflight(sensors, speed_kmh=0)

    assert result.passed is False
    assert result.reason.startswith("Power:")
    assert "TAKEOFF_MIN_SOC" in result.reason


def test_preflight_does_not_touch_battery_or_sensors(battery, checklist, sensors):
    before = SensorSnapshot(**vars(sensors))

    checklist.run_preflight(sensors, speed_kmh=0)

    assert battery.charge == 100.0
    assert sensors == before


# -----------------------------
# Pre-landing
# -----------------------------

def test_pre_landing_passes_above_reserve(checklist, sensors):
    assert checklist.run_pre_landing(sensors).passed is True


def test_pre_landing_fails_power_below_reserve(battery, checklist, sensors):
    battery.set_charge(20.0)

    result = checklist.run_pre_landing(sensors)

    assert result.passed is False
    assert result.reason.startswith("Power:")


def test_pre_landing_ignores_airborne_sensor_faults(checklist, sensors):
    sensors.structural_ok = False
    sensors.imu_healthy = False

    assert checklist.run_pre_landing(sensors).passed is True


# -----------------------------
# Post-landing
# -----------------------------

@pytest.mark.parametrize("mode", [OperatingMode.LANDED, OperatingMode.FLIGHT_READY, OperatingMode.GROUND])
def test_post_landing_passes_when_stopped(checklist, sensors, mode):
    assert checklist.run_post_landing(sensors, speed_kmh=0, mode=mode).passed is True


@pytest.mark.parametrize("speed, passed", [(10, True), (11, False), (50, False)])
def test_post_landing_ground_speed_limit(checklist, sensors, speed, passed):
    result = checklist.run_post_landing(sensors, speed_kmh=speed, mode=OperatingMode.LANDED)

    assert result.passed is passed


@pytest.mark.parametrize("mode", [OperatingMode.AIRBORNE, OperatingMode.TRANSFORMING_TO_AIR])
def test_post_landing_fails_while_rotors_turning(checklist, sensors, mode):
    result = checklist.run_post_landing(sensors, speed_kmh=0, mode=mode)

    assert result.passed is False
    assert result.reason.startswith("Propulsion:")


def test_post_landing_fails_with_obstacle(checklist, sensors):
    sensors.obstacle_near = True

    result = checklist.run_post_landing(sensors, speed_kmh=0, mode=OperatingMode.LANDED)

    assert result.passed is False
    assert result.reason.startswith("Obstacle:")
