"""
Rig protocol constants.

Compile-time defaults for the auction, fee and emission schedule. Networks
may override operational values through `rig.config.RigParams`; code that
needs the canonical defaults imports them from here.

All token amounts are integers at 1e18 fixed-point scale ("wad").
"""

from __future__ import annotations

from typing import Final, Optional

# -----------------------------
# Fixed-point scale
# -----------------------------
PRECISION: Final[int] = 10**18
DEFAULT_MULTIPLIER: Final[int] = PRECISION  # 1x

# -----------------------------
# Addresses
# -----------------------------
ZERO_ADDRESS: Final[str] = "0x" + "00" * 20

# -----------------------------
# Dutch auction
# -----------------------------
EPOCH_PERIOD: Final[int] = 60 * 60  # 1 hour
PRICE_MULTIPLIER: Final[int] = 2 * PRECISION  # next round starts at 2x the paid price
MIN_INIT_PRICE: Final[int] = PRECISION // 10_000  # 0.0001
ABS_MAX_INIT_PRICE: Final[int] = (1 << 192) - 1

# -----------------------------
# Emission schedule
# -----------------------------
INITIAL_UPS: Final[int] = 4 * PRECISION  # 4 units/s
TAIL_UPS: Final[int] = PRECISION // 100  # 0.01 units/s floor
HALVING_PERIOD: Final[int] = 30 * 24 * 60 * 60  # 30 days

# -----------------------------
# Multiplier refresh
# -----------------------------
MULTIPLIER_DURATION: Final[int] = 24 * 60 * 60  # 24 hours

# -----------------------------
# Fees (basis points over DIVISOR)
# -----------------------------
DIVISOR: Final[int] = 10_000
TOTAL_FEE: Final[int] = 2_000  # 20% off the top of every paid price
TEAM_FEE: Final[int] = 200  # 2%, carved out of TOTAL_FEE
FACTION_FEE: Final[int] = 200  # 2%, carved out of TOTAL_FEE

# -----------------------------
# Capacity
# -----------------------------
INITIAL_CAPACITY: Final[int] = 1
MAX_CAPACITY: Final[int] = 1_000_000


def is_zero_address(addr: Optional[str]) -> bool:
    """True for None, the empty string and the all-zero address."""
    if not addr:
        return True
    return addr.lower() == ZERO_ADDRESS


__all__ = [
    "PRECISION",
    "DEFAULT_MULTIPLIER",
    "ZERO_ADDRESS",
    "EPOCH_PERIOD",
    "PRICE_MULTIPLIER",
    "MIN_INIT_PRICE",
    "ABS_MAX_INIT_PRICE",
    "INITIAL_UPS",
    "TAIL_UPS",
    "HALVING_PERIOD",
    "MULTIPLIER_DURATION",
    "DIVISOR",
    "TOTAL_FEE",
    "TEAM_FEE",
    "FACTION_FEE",
    "INITIAL_CAPACITY",
    "MAX_CAPACITY",
    "is_zero_address",
]
