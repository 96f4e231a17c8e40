from __future__ import annotations
"""
Fee split: divide a paid takeover price among treasury / team / faction /
previous holder.

Rates are basis points over a common divisor. Team and faction shares are
carved out of the total protocol fee; when either recipient is absent its share
stays with the treasury. Whatever is left after the protocol fee goes to the
outgoing holder, so the four shares always sum to the price exactly.

Design goals
------------
- Deterministic: pure integer arithmetic; no floating point.
- Conservation: treasury + team + faction + holder == price for every
  combination of present/absent recipients.
- Ordered payout plan: transfers are listed treasury -> team -> faction ->
  holder, which is the order the registry executes them in.

Example
-------
>>> s = split_fees(10_000, team="0xteam", faction=None)
>>> (s.treasury, s.team, s.faction, s.holder)
(1800, 200, 0, 8000)
"""


from dataclasses import dataclass
from typing import Final, List, Literal, Optional, Tuple

from ..constants import DIVISOR, FACTION_FEE, TEAM_FEE, TOTAL_FEE, is_zero_address
from ..errors import RigError
from ..fixed import mul_div_down

Amount = int

Recipient = Literal["treasury", "team", "faction", "holder"]


class SplitError(RigError):
    """Raised when fee policies are invalid or inputs are out of range."""
    code = "RIG_SPLIT_ERROR"


@dataclass(frozen=True)
class FeePolicy:
    """
    Fee rates in basis points over `divisor`.

    Attributes
    ----------
    total_bps : int
        Protocol cut of the paid price (treasury + team + faction).
    team_bps : int
        Part of the protocol cut routed to the team when one is configured.
    faction_bps : int
        Part of the protocol cut routed to the taker's faction when one is named.
    divisor : int
        Common denominator (10_000 = basis points).
    """

    total_bps: int = TOTAL_FEE
    team_bps: int = TEAM_FEE
    faction_bps: int = FACTION_FEE
    divisor: int = DIVISOR

    def __post_init__(self) -> None:
        for name, v in (
            ("total_bps", self.total_bps),
            ("team_bps", self.team_bps),
            ("faction_bps", self.faction_bps),
        ):
            if not isinstance(v, int):
                raise SplitError(f"{name} must be int basis points, got {type(v)!r}")
            if v < 0:
                raise SplitError(f"{name} must be non-negative, got {v}")
        if self.divisor <= 0:
            raise SplitError(f"divisor must be positive, got {self.divisor}")
        if self.total_bps > self.divisor:
            raise SplitError(f"total_bps {self.total_bps} exceeds divisor {self.divisor}")
        if self.team_bps + self.faction_bps > self.total_bps:
            raise SplitError(
                f"team_bps + faction_bps must fit inside total_bps "
                f"(team={self.team_bps}, faction={self.faction_bps}, total={self.total_bps})"
            )


DEFAULT_FEE_POLICY: Final[FeePolicy] = FeePolicy()


@dataclass(frozen=True)
class FeeSplit:
    price: Amount
    treasury: Amount
    team: Amount
    faction: Amount
    holder: Amount

    def transfers(
        self,
        *,
        treasury: str,
        team: Optional[str],
        faction: Optional[str],
        holder: str,
    ) -> List[Tuple[Recipient, str, Amount]]:
        """Non-zero transfers in execution order: treasury, team, faction, holder."""
        plan: List[Tuple[Recipient, str, Amount]] = []
        if self.treasury > 0:
            plan.append(("treasury", treasury, self.treasury))
        if self.team > 0 and team is not None:
            plan.append(("team", team, self.team))
        if self.faction > 0 and faction is not None:
            plan.append(("faction", faction, self.faction))
        if self.holder > 0:
            plan.append(("holder", holder, self.holder))
        return plan


def split_fees(
    price: Amount,
    *,
    team: Optional[str],
    faction: Optional[str],
    policy: FeePolicy = DEFAULT_FEE_POLICY,
) -> FeeSplit:
    """Compute the four-way split of `price`. Absent recipients are None or the zero address."""
    if not isinstance(price, int):
        raise SplitError(f"price must be int, got {type(price)!r}")
    if price < 0:
        raise SplitError(f"price must be non-negative, got {price}")

    team_fee = 0 if is_zero_address(team) else mul_div_down(price, policy.team_bps, policy.divisor)
    faction_fee = 0 if is_zero_address(faction) else mul_div_down(price, policy.faction_bps, policy.divisor)
    treasury_fee = mul_div_down(price, policy.total_bps, policy.divisor) - team_fee - faction_fee
    holder_fee = price - treasury_fee - team_fee - faction_fee

    assert treasury_fee + team_fee + faction_fee + holder_fee == price, "split invariant violated"
    assert min(treasury_fee, team_fee, faction_fee, holder_fee) >= 0, "negative split share"

    return FeeSplit(price=price, treasury=treasury_fee, team=team_fee, faction=faction_fee, holder=holder_fee)


__all__ = [
    "Amount",
    "Recipient",
    "SplitError",
    "FeePolicy",
    "DEFAULT_FEE_POLICY",
    "FeeSplit",
    "split_fees",
]
