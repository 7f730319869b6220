# results.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckResult:
    # Outcome of a single check or an ordered group of checks.
    passed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.passed

    @classmethod
    def ok(cls, reason: str = "") -> CheckResult:
        return cls(True, reason)

    @classmethod
    def fail(cls, reason: str) -> CheckResult:
        return cls(False, reason)


@dataclass(frozen=True)
class CommandResult:
    # Outcome reported by every controller command. Refusals are values, not exceptions.
    accepted: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def done(cls, reason: str = "") -> CommandResult:
        return cls(True, reason)

    @classmethod
    def refused(cls, reason: str) -> CommandResult:
        return cls(False, reason)
