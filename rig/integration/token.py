from __future__ import annotations

"""
Reward token ("Unit") collaborator.

The only contract the core relies on: `mint` succeeds solely when called by the
currently authorized minter, which after deployment wiring is the registry.
`UnitToken` is the in-memory reference implementation: mintable, burnable,
with a one-step minter handoff controlled by the token owner.

Typical wiring
~~~~~~~~~~~~~~
>>> token = UnitToken(owner="0xdeployer")
>>> token.set_minter("0xdeployer", registry.address)
"""

from threading import RLock
from typing import Dict, Optional, Protocol, Tuple

from ..errors import InsufficientBalance, MintUnauthorized, NotOwner, RigError

Amount = int


class RewardToken(Protocol):
    def mint(self, caller: str, to: str, amount: Amount) -> None: ...
    def total_supply(self) -> Amount: ...


class UnitToken:
    __slots__ = ("symbol", "owner", "minter", "_lock", "_balances", "_supply")

    def __init__(self, owner: str, *, symbol: str = "UNIT", minter: Optional[str] = None) -> None:
        self.symbol = symbol
        self.owner = owner
        self.minter = minter
        self._lock = RLock()
        self._balances: Dict[str, Amount] = {}
        self._supply: Amount = 0

    def set_minter(self, caller: str, minter: str) -> None:
        if caller != self.owner:
            raise NotOwner(caller=caller)
        self.minter = minter

    def balance_of(self, account: str) -> Amount:
        return self._balances.get(account, 0)

    def total_supply(self) -> Amount:
        return self._supply

    def mint(self, caller: str, to: str, amount: Amount) -> None:
        if self.minter is None or caller != self.minter:
            raise MintUnauthorized(caller=caller, minter=self.minter)
        if amount < 0:
            raise RigError(f"mint amount must be non-negative, got {amount}")
        with self._lock:
            self._balances[to] = self.balance_of(to) + amount
            self._supply += amount

    def burn(self, holder: str, amount: Amount) -> None:
        with self._lock:
            have = self.balance_of(holder)
            if have < amount:
                raise InsufficientBalance(account=holder, have=have, need=amount)
            self._balances[holder] = have - amount
            self._supply -= amount

    # --- journal participation ---

    def snapshot(self) -> Tuple[Dict[str, Amount], Amount]:
        with self._lock:
            return dict(self._balances), self._supply

    def restore(self, snap: Tuple[Dict[str, Amount], Amount]) -> None:
        with self._lock:
            self._balances, self._supply = dict(snap[0]), snap[1]


__all__ = ["Amount", "RewardToken", "UnitToken"]
