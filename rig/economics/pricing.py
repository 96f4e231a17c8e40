from __future__ import annotations

"""
Pricing: the Dutch-auction curve for a slot.

Each round starts at `init_price` and decays linearly to exactly zero over
`period` seconds. When a taker pays `p`, the next round opens at
`p * price_multiplier / 1e18`, clamped into `[min_floor, abs_max_ceiling]`.

Design notes
-----------
- Pure and side-effect free; integer math only.
- Truncation toward zero everywhere, multiply before divide, so results match
  the original fixed-point implementation bit for bit.

Example
-------
>>> price(1000, 0, 3600)
1000
>>> price(1000, 1800, 3600)
500
>>> price(1000, 3601, 3600)
0
>>> next_init_price(500, 2 * 10**18, 100, 10**30)
1000
"""


from ..constants import PRECISION
from ..fixed import clamp, mul_div_down


def price(init_price: int, elapsed: int, period: int) -> int:
    """Current auction price after `elapsed` seconds of a `period`-long round."""
    if period <= 0:
        raise ValueError("period must be > 0")
    if elapsed < 0:
        raise ValueError(f"elapsed must be non-negative, got {elapsed}")
    if elapsed > period:
        return 0
    return init_price - mul_div_down(init_price, elapsed, period)


def next_init_price(paid_price: int, price_multiplier: int, min_floor: int, abs_max_ceiling: int) -> int:
    """Opening price of the next round, given the price just paid."""
    raw = mul_div_down(paid_price, price_multiplier, PRECISION)
    return clamp(raw, min_floor, abs_max_ceiling)


__all__ = ["price", "next_init_price"]
