#!/usr/bin/env python3
import argparse
import logging

from flying_car_controller import FlyingCarController
from procedures import ProcedureLibrary
from reference_vehicles import Airplane, RegularCar
from vehicle_modes import FaultKind


def setup_logging():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _no_sleep(_seconds: float) -> None:
    return None


def run_regular_car() -> None:
    logging.info("--- Scenario 1: reference ground car ---")
    car = RegularCar("Model S Plaid (baseline)")
    car.power_on()
    car.toggle_ludicrous_mode()
    car.drive()
    car.stop_driving()
    car.power_off()


def run_airplane() -> None:
    logging.info("--- Scenario 2: reference aircraft ---")
    plane = Airplane("787 (electric conversion)")
    plane.power_on()
    plane.take_off()
    plane.fly()
    plane.land()
    plane.power_off()


def run_nominal_flight(make_car) -> FlyingCarController:
    logging.info("--- Scenario 3: nominal flight ---")
    car = make_car("Aero Model T")
    car.power_on()
    car.request_flight_mode()
    car.request_takeoff()       # 100 -> 80
    car.toggle_eco_mode()
    car.request_fly()           # 80 -> 72
    car.request_landing()
    car.request_ground_mode()
    car.drive()                 # 72 -> 71
    car.stop_driving()          # 71 -> 73.5
    logging.info("Final battery: %.1f%%", car.battery_charge)
    car.power_off()
    return car


def run_low_battery(make_car) -> FlyingCarController:
    logging.info("--- Scenario 4: insufficient energy ---")
    car = make_car("Test-Low-Battery")
    car.power_on()
    car.set_battery(50.0)
    result = car.request_flight_mode()
    logging.info("Flight mode: %s (%s)", result.accepted, result.reason)
    car.power_off()
    return car


def run_fatal_fault(make_car) -> FlyingCarController:
    logging.info("--- Scenario 5: fatal fault ---")
    car = make_car("Test-Failure-01")
    car.power_on()
    car.request_flight_mode()
    car.request_takeoff()       # 80
    car.request_fly()           # 68

    car.inject_fault(FaultKind.PROPULSION)
    car.request_fly()           # EPS takes over

    result = car.drive()
    logging.info("Drive after crash: %s", result.reason)
    result = car.power_off()
    logging.info("Power off after crash: %s", result.reason)
    return car


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Flying car demo scenarios")
    p.add_argument("--no-delays", action="store_true", help="Run procedures without simulated delays")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()

    if args.no_delays:
        def make_car(model: str) -> FlyingCarController:
            return FlyingCarController(
                model=model,
                procedures=ProcedureLibrary().without_delays(),
                sleep=_no_sleep,
            )
    else:
        make_car = FlyingCarController

    run_regular_car()
    run_airplane()
    run_nominal_flight(make_car)
    run_low_battery(make_car)
    run_fatal_fault(make_car)

    logging.info("Demo complete")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
