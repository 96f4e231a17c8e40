from __future__ import annotations
"""
Stateless economics for the slot auction:

- pricing:  Dutch-auction decay and next-round opening price
- emission: halving UPS schedule, per-slot rate lock, accrued reward
- split:    treasury / team / faction / holder fee division
"""

from .emission import EmissionSchedule, accrued, global_ups, slot_ups
from .pricing import next_init_price, price
from .split import DEFAULT_FEE_POLICY, FeePolicy, FeeSplit, SplitError, split_fees

__all__ = [
    "price",
    "next_init_price",
    "global_ups",
    "slot_ups",
    "accrued",
    "EmissionSchedule",
    "FeePolicy",
    "FeeSplit",
    "SplitError",
    "DEFAULT_FEE_POLICY",
    "split_fees",
]
