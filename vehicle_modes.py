"""
Title: Flying Car Mode Definitions (OperatingMode / PowerState / FaultKind)
Date Created: 2026-02-02
Last Modified: 2026-02-04
Version: 1.1

Purpose:
Defines the authoritative set of operating modes used by the flying car
controller state machine, the single power state that distinguishes a
graceful shutdown from a forced emergency cut, and the fault kinds accepted
by the fault-injection hook.

Scope and Limitations:
- These enumerations define logical states only; they carry no timing,
  sensor, or energy information.
- CRASHING is terminal and absorbing. No hierarchy or substates are modeled.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- enum (standard library)
"""

from enum import Enum, auto


class OperatingMode(Enum):
    GROUND = auto()
    TRANSFORMING_TO_AIR = auto()
    FLIGHT_READY = auto()
    AIRBORNE = auto()
    LANDED = auto()
    TRANSFORMING_TO_GROUND = auto()
    CRASHING = auto()


class PowerState(Enum):
    OFF = auto()
    ON = auto()
    # Forced off by the emergency protection system; never set by power_off().
    EMERGENCY_CUT = auto()


class FaultKind(Enum):
    PROPULSION = "Propulsion"
    STRUCTURE = "Structure"
    CONTROL = "Control"
    BATTERY = "Battery"
