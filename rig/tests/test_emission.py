from __future__ import annotations

import pytest

from rig.config import RigParams
from rig.constants import HALVING_PERIOD, INITIAL_UPS, PRECISION, TAIL_UPS
from rig.economics.emission import EmissionSchedule, accrued, global_ups, slot_ups

T0 = 1_000_000


def _ups(now: int) -> int:
    return global_ups(now, T0, HALVING_PERIOD, INITIAL_UPS, TAIL_UPS)


def test_initial_rate_until_first_halving():
    assert _ups(T0) == INITIAL_UPS
    assert _ups(T0 + HALVING_PERIOD - 1) == INITIAL_UPS


def test_halves_every_period():
    for k in range(0, 8):
        expected = max(INITIAL_UPS >> k, TAIL_UPS)
        assert _ups(T0 + k * HALVING_PERIOD) == expected


def test_never_below_tail():
    assert _ups(T0 + 100 * HALVING_PERIOD) == TAIL_UPS
    assert _ups(T0 + 10_000 * HALVING_PERIOD) == TAIL_UPS


def test_rate_is_non_increasing():
    rates = [_ups(T0 + d * 86_400) for d in range(0, 600, 7)]
    assert rates == sorted(rates, reverse=True)


def test_now_before_deploy_rejected():
    with pytest.raises(ValueError):
        _ups(T0 - 1)


def test_slot_ups_divides_by_capacity():
    assert slot_ups(INITIAL_UPS, 1) == INITIAL_UPS
    assert slot_ups(INITIAL_UPS, 4) == PRECISION
    assert slot_ups(10, 3) == 3
    with pytest.raises(ValueError):
        slot_ups(INITIAL_UPS, 0)


def test_accrued_matches_formula():
    assert accrued(1800, INITIAL_UPS, PRECISION) == 7200 * PRECISION
    assert accrued(1800, INITIAL_UPS, 2 * PRECISION) == 14_400 * PRECISION
    assert accrued(0, INITIAL_UPS, 5 * PRECISION) == 0
    assert accrued(3, 1, PRECISION // 2) == 1


def test_schedule_binds_params():
    sched = EmissionSchedule.from_params(RigParams(), deploy_time=T0)
    assert sched.global_ups(T0) == INITIAL_UPS
    assert sched.slot_ups(T0 + HALVING_PERIOD, 2) == INITIAL_UPS // 4
