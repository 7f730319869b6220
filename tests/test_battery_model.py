"""
Title: Battery Model Unit Tests
Date Created: 2026-02-03
Last Modified: 2026-02-03
Version: 1.0

Purpose:
Verifies the state-of-charge bounds of the battery model: consume refuses
without mutation when the request exceeds the available charge, regain
saturates at 100%, and the simulation hook clamps into [0, 100].

Dependencies:
- Python 3.10+
- pytest
- battery_model.py
"""

import math

import pytest

from battery_model import Battery


def test_new_battery_is_full():
    assert Battery().charge == 100.0


def test_consume_reduces_charge():
    b = Battery()

    result = b.consume(20.0)

    assert result.passed is True
    assert b.charge == 80.0


def test_consume_exact_remaining_charge_empties_battery():
    b = Battery(12.0)

    assert b.consume(12.0)
    assert b.charge == 0.0


def test_consume_more_than_available_fails_without_mutation():
    b = Battery(10.0)

    result = b.consume(12.0)

    assert result.passed is False
    assert bool(result) is False
    assert b.charge == 10.0
    assert "required 12.0%" in result.reason
    assert "available 10.0%" in result.reason


def test_regain_saturates_at_full_charge():
    b = Battery(99.0)

    recovered = b.regain(2.5)

    assert b.charge == 100.0
    assert recovered == pytest.approx(1.0)


def test_regain_below_full():
    b = Battery(71.0)

    b.regain(2.5)

    assert b.charge == 73.5


@pytest.mark.parametrize("value, expected", [(-5.0, 0.0), (0.0, 0.0), (55.5, 55.5), (100.0, 100.0), (150.0, 100.0)])
def test_set_charge_clamps_into_range(value, expected):
    b = Battery()

    b.set_charge(value)

    assert b.charge == expected


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_set_charge_rejects_non_finite(value):
    b = Battery()

    with pytest.raises(ValueError):
        b.set_charge(value)
    assert b.charge == 100.0


@pytest.mark.parametrize("amount", [-1.0, math.nan])
def test_negative_or_nan_amounts_rejected(amount):
    b = Battery()

    with pytest.raises(ValueError):
        b.consume(amount)
    with pytest.raises(ValueError):
        b.regain(amount)
    assert b.charge == 100.0


def test_charge_never_leaves_bounds_over_mixed_operations():
    b = Battery(50.0)

    for _ in range(30):
        b.consume(7.0)
        assert 0.0 <= b.charge <= 100.0
    for _ in range(60):
        b.regain(3.0)
        assert 0.0 <= b.charge <= 100.0

    assert b.charge == 100.0
