"""
Title: Battery Model (State of Charge)
Date Created: 2026-02-02
Last Modified: 2026-02-03
Version: 1.1

Purpose:
Tracks the traction battery state of charge (SOC) as a percentage in
[0, 100]. All energy movement goes through consume() and regain(); consume
refuses without mutation when the request exceeds the available charge and
regain saturates at full charge.

Scope and Limitations:
- SOC only; no voltage, current, temperature or ageing model.
- set_charge() is a simulation hook (low-battery scenarios, fault injection).

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- logging, math (standard library)
- results.py
"""

import logging
import math

from results import CheckResult

logger = logging.getLogger(__name__)

FULL_CHARGE = 100.0
EMPTY_CHARGE = 0.0


class Battery:
    def __init__(self, charge: float = FULL_CHARGE):
        self._charge = FULL_CHARGE
        self.set_charge(charge)

    @property
    def charge(self) -> float:
        return self._charge

    def log(self, msg: str) -> None:
        logger.info(msg)

    def consume(self, amount: float) -> CheckResult:
        amount = self._validate_amount(amount)

        if amount > self._charge:
            # Insufficient energy: no mutation
            reason = (
                f"insufficient energy: required {amount:.1f}%, "
                f"available {self._charge:.1f}%"
            )
            self.log(f"Consume rejected: {reason}")
            return CheckResult.fail(reason)

        self._charge -= amount
        return CheckResult.ok(f"consumed {amount:.1f}% (remaining {self._charge:.1f}%)")

    def regain(self, amount: float) -> float:
        # Returns the amount actually recovered after saturation.
        amount = self._validate_amount(amount)
        before = self._charge
        self._charge = min(FULL_CHARGE, self._charge + amount)
        recovered = self._charge - before
        self.log(f"Energy recovered {recovered:.1f}% (now {self._charge:.1f}%)")
        return recovered

    def charge_full(self) -> None:
        self._charge = FULL_CHARGE

    def set_charge(self, percent: float) -> None:
        value = float(percent)
        if not math.isfinite(value):
            raise ValueError(f"battery charge must be finite, got {percent!r}")
        self._charge = max(EMPTY_CHARGE, min(FULL_CHARGE, value))

    @staticmethod
    def _validate_amount(amount: float) -> float:
        value = float(amount)
        if not math.isfinite(value) or value < 0.0:
            raise ValueError(f"energy amount must be a finite non-negative number, got {amount!r}")
        return value
