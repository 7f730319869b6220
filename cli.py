#!/usr/bin/env python3
"""
Title: Flying Car Interactive Command Console
Date Created: 2026-02-05
Last Modified: 2026-02-06
Version: 1.1

Purpose:
Interactive console for driving the flying car controller by hand: power,
charge, every flight and ground command, mode toggles, fault and battery
injection, sensor edits and status display. A ModeAnnunciator prints the
operating mode whenever it changes.

Scope and Limitations:
- Intended for CLI-driven simulation and manual testing only.
- Sensor edits write the shared snapshot directly (simulation hook).

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.
"""

import argparse
import dataclasses
import logging

from app_context import AppContext, build_context
from flying_car_controller import FlyingCarController
from procedures import ProcedureLibrary
from results import CommandResult
from vehicle_modes import FaultKind, OperatingMode


class ModeAnnunciator:
    # Prints the operating mode only when it changes.
    def __init__(self):
        self._last_mode: OperatingMode | None = None

    def __call__(self, controller: FlyingCarController) -> None:
        mode = controller.mode
        if mode != self._last_mode:
            print(f"MODE: {mode.name}")
            self._last_mode = mode


def _print_status(ctx: AppContext) -> None:
    c = ctx.controller
    print("\n=== STATUS ===")
    print(f"Model: {c.model}")
    print(f"Mode: {c.mode.name}")
    print(f"Power: {c.power_state.name}")
    print(f"Battery: {c.battery_charge:.1f}%")
    print(f"Speed_kmh: {c.speed_kmh}  Altitude_m: {c.altitude_m}")
    print(f"Ludicrous: {c.ludicrous_mode}  Eco: {c.eco_mode}")
    if c.eps.detected_fault is not None:
        print(f"FatalFault: {c.eps.detected_fault}  Branch: {c.eps.selected_branch}")
    print("=============\n")


def _print_sensors(ctx: AppContext) -> None:
    for f in dataclasses.fields(ctx.sensors):
        print(f"  {f.name} = {getattr(ctx.sensors, f.name)}")


def _print_help() -> None:
    print(
        """
Commands
  help                         Print help
  q                            Quit

Power
  on | off                     Power on / power off
  charge                       Charge battery to 100%

Flight
  fm                           Request flight mode (preflight checklist + air transform)
  takeoff                      Request takeoff
  fly                          Cruise one step (EPS check first)
  land                         Request landing (pre-landing checklist)
  gm                           Request ground mode (post-landing checklist + ground transform)

Ground
  drive | stop                 Drive / stop driving (regenerative braking)
  plaid                        Toggle ludicrous mode (ground mode only)
  eco                          Toggle eco cruise
  autopilot                    Engage autopilot

Simulation
  fault <kind>                 Inject fault: Propulsion | Structure | Control | Battery
  soc <percent>                Set battery charge
  sens show                    Print sensor snapshot
  sens <name> <value>          Set a sensor reading

State / diagnostics
  state                        Print operating mode
  status                       Print full status block
"""
    )


def _parse_sensor_value(current, raw: str):
    if isinstance(current, bool):
        if raw.lower() in ("1", "true", "on", "yes"):
            return True
        if raw.lower() in ("0", "false", "off", "no"):
            return False
        raise ValueError(f"expected a boolean, got {raw!r}")
    if isinstance(current, int):
        return int(raw)
    return float(raw)


def _set_sensor(ctx: AppContext, name: str, raw: str) -> None:
    names = {f.name for f in dataclasses.fields(ctx.sensors)}
    if name not in names:
        print(f"Unknown sensor: {name}")
        return
    try:
        value = _parse_sensor_value(getattr(ctx.sensors, name), raw)
    except ValueError as e:
        print(f"Invalid sensor value: {e}")
        return
    setattr(ctx.sensors, name, value)
    print(f"{name} set to {value}")


SIMPLE_COMMANDS = {
    "on": FlyingCarController.power_on,
    "off": FlyingCarController.power_off,
    "charge": FlyingCarController.charge,
    "fm": FlyingCarController.request_flight_mode,
    "takeoff": FlyingCarController.request_takeoff,
    "fly": FlyingCarController.request_fly,
    "land": FlyingCarController.request_landing,
    "gm": FlyingCarController.request_ground_mode,
    "drive": FlyingCarController.drive,
    "stop": FlyingCarController.stop_driving,
    "plaid": FlyingCarController.toggle_ludicrous_mode,
    "eco": FlyingCarController.toggle_eco_mode,
    "autopilot": FlyingCarController.engage_autopilot,
}


def _report(ctx: AppContext, cmd: str, result: CommandResult) -> None:
    status = "OK" if result.accepted else "REFUSED"
    print(f"{status}: {result.reason}")
    if ctx.command_recorder is not None:
        ctx.command_recorder.record(command=cmd, result=result)


def handle_command(ctx: AppContext, cmd: str) -> bool:
    # Returns False when the console should exit.
    parts = cmd.split()
    if not parts:
        return True

    op = parts[0].lower()

    if op in ("q", "quit", "exit"):
        return False

    if op in ("help", "?"):
        _print_help()
        return True

    if op in SIMPLE_COMMANDS:
        result = SIMPLE_COMMANDS[op](ctx.controller)
        _report(ctx, cmd, result)
        return True

    if op == "fault":
        if len(parts) != 2:
            print("Usage: fault Propulsion|Structure|Control|Battery")
            return True
        try:
            kind = FaultKind(parts[1].capitalize())
        except ValueError:
            print(f"Unknown fault kind: {parts[1]}")
            return True
        _report(ctx, cmd, ctx.controller.inject_fault(kind))
        return True

    if op == "soc":
        if len(parts) != 2:
            print("Usage: soc <percent>")
            return True
        try:
            result = ctx.controller.set_battery(float(parts[1]))
        except ValueError as e:
            print(f"Invalid battery value: {e}")
            return True
        _report(ctx, cmd, result)
        return True

    if op == "sens":
        if len(parts) == 2 and parts[1].lower() == "show":
            _print_sensors(ctx)
            return True
        if len(parts) != 3:
            print("Usage: sens show  OR  sens <name> <value>")
            return True
        _set_sensor(ctx, parts[1], parts[2])
        return True

    if op == "state":
        print(ctx.controller.mode.name)
        return True

    if op == "status":
        _print_status(ctx)
        return True

    print("Unknown command. Type 'help'.")
    return True


def _no_sleep(_seconds: float) -> None:
    return None


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Flying car interactive console")
    p.add_argument("--model", default="Flying Car", help="Vehicle model name")
    p.add_argument("--log-dir", default=None, help="Directory for fault and command logs")
    p.add_argument("--no-delays", action="store_true", help="Run procedures without simulated delays")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.no_delays:
        ctx = build_context(
            model=args.model,
            log_dir=args.log_dir,
            sleep=_no_sleep,
            procedures=ProcedureLibrary().without_delays(),
        )
    else:
        ctx = build_context(model=args.model, log_dir=args.log_dir)
    annunciator = ModeAnnunciator()

    _print_help()
    annunciator(ctx.controller)
    while True:
        try:
            cmd = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not handle_command(ctx, cmd):
            break
        annunciator(ctx.controller)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
