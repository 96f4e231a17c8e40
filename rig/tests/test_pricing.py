from __future__ import annotations

import pytest

from rig.constants import ABS_MAX_INIT_PRICE, EPOCH_PERIOD, MIN_INIT_PRICE, PRECISION, PRICE_MULTIPLIER
from rig.economics.pricing import next_init_price, price


def test_price_starts_at_init_price():
    assert price(10**18, 0, EPOCH_PERIOD) == 10**18


def test_price_decays_linearly():
    init = 3600 * 10**15
    assert price(init, 1800, EPOCH_PERIOD) == init // 2
    assert price(init, 900, EPOCH_PERIOD) == init * 3 // 4
    samples = [price(init, t, EPOCH_PERIOD) for t in range(0, EPOCH_PERIOD + 1, 60)]
    assert samples == sorted(samples, reverse=True)


def test_price_reaches_exactly_zero_at_and_after_period():
    assert price(10**18, EPOCH_PERIOD, EPOCH_PERIOD) == 0
    assert price(10**18, EPOCH_PERIOD + 1, EPOCH_PERIOD) == 0
    assert price(10**18, 10**12, EPOCH_PERIOD) == 0


def test_price_rounds_down():
    # 7 - floor(7 * 1 / 3) = 5
    assert price(7, 1, 3) == 5


def test_price_of_unset_slot_is_zero():
    assert price(0, 0, EPOCH_PERIOD) == 0


@pytest.mark.parametrize("elapsed,period", [(-1, EPOCH_PERIOD), (0, 0), (10, -5)])
def test_price_rejects_bad_inputs(elapsed, period):
    with pytest.raises(ValueError):
        price(10**18, elapsed, period)


def test_next_init_price_doubles():
    assert next_init_price(PRECISION, PRICE_MULTIPLIER, MIN_INIT_PRICE, ABS_MAX_INIT_PRICE) == 2 * PRECISION


def test_next_init_price_floors_at_minimum():
    assert next_init_price(0, PRICE_MULTIPLIER, MIN_INIT_PRICE, ABS_MAX_INIT_PRICE) == MIN_INIT_PRICE
    half = MIN_INIT_PRICE // 2
    assert next_init_price(half, PRICE_MULTIPLIER, MIN_INIT_PRICE, ABS_MAX_INIT_PRICE) == MIN_INIT_PRICE
    assert next_init_price(MIN_INIT_PRICE // 3, PRICE_MULTIPLIER, MIN_INIT_PRICE, ABS_MAX_INIT_PRICE) == MIN_INIT_PRICE


def test_next_init_price_caps_at_ceiling():
    assert next_init_price(ABS_MAX_INIT_PRICE, PRICE_MULTIPLIER, MIN_INIT_PRICE, ABS_MAX_INIT_PRICE) == ABS_MAX_INIT_PRICE
