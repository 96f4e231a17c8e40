# -*- coding: utf-8 -*-
"""
rig.fixed
=========

Integer-only fixed-point helpers at 1e18 ("wad") scale.

Every amount in the rig core (prices, emission rates, multipliers, minted
reward) is a Python ``int`` interpreted at 1e18 scale. Floats are never used.
Order of operations matters for reproducible truncation, so callers always
multiply first and divide last (``mul_div_down``).

Conventions
-----------
- Results and inputs are range-checked against the U256 envelope; a value
  outside it raises ``ValueError`` (the original system would have reverted).
- Division by zero raises ``ZeroDivisionError``.
- Rounding is always toward zero (floor for non-negative inputs).

Examples
--------
    >>> mul_div_down(1800, 4 * WAD, 1)
    7200000000000000000000
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, localcontext
from typing import Final, Union

WAD: Final[int] = 10**18
U256_MAX: Final[int] = (1 << 256) - 1


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------


def require_u256(*xs: int) -> None:
    """Raise if any value is outside [0, U256_MAX]."""
    for n in xs:
        if not isinstance(n, int) or isinstance(n, bool):
            raise TypeError(f"expected int, got {type(n)!r}")
        if n < 0 or n > U256_MAX:
            raise ValueError(f"value out of u256 range: {n}")


def clamp(x: int, lo: int, hi: int) -> int:
    """Return x clamped into [lo, hi]."""
    if lo > hi:
        raise ValueError(f"bad clamp range [{lo}, {hi}]")
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def mul_div_down(a: int, b: int, d: int) -> int:
    """floor((a * b) / d) with u256 domain checks on inputs and result."""
    require_u256(a, b)
    if d == 0:
        raise ZeroDivisionError("mul_div_down by zero")
    q = (a * b) // d
    if q > U256_MAX:
        raise ValueError("mul_div_down result out of u256 range")
    return q


# ---------------------------------------------------------------------------
# Display conversion (CLI / logs only; never feed back into math)
# ---------------------------------------------------------------------------


def to_wad(units: Union[int, str, Decimal]) -> int:
    """Parse a human amount ("0.0001", 4, Decimal("1.5")) into wad integer."""
    d = Decimal(str(units))
    if not d.is_finite():
        raise ValueError(f"not a finite amount: {units!r}")
    if d < 0:
        raise ValueError(f"negative amount: {units!r}")
    _, digits, exponent = d.as_tuple()
    # Exact product: enough digits for the integer part plus the 18 wad places.
    with localcontext() as ctx:
        ctx.prec = len(digits) + max(exponent, 0) + 40
        return int((d * WAD).to_integral_value(rounding=ROUND_DOWN))


def format_wad(amount: int, places: int = 6) -> str:
    """Render a wad integer as a decimal string truncated to `places` digits."""
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), WAD)
    if places <= 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{f'{frac:018d}'[:places].ljust(places, '0')}"


__all__ = [
    "WAD",
    "U256_MAX",
    "require_u256",
    "clamp",
    "mul_div_down",
    "to_wad",
    "format_wad",
]
