from __future__ import annotations

"""
Payment asset used to pay for takeovers.

The registry only needs one capability from the asset: move `amount` from the
taker to a recipient on the taker's behalf, honouring an allowance the taker
granted to the registry (`transfer_from`). Any failure must raise.

`QuoteLedger` is an in-memory reference implementation (balances + allowances)
used by tests, the CLI simulator, and local devnets. It is deliberately
minimal: integer base units, non-negativity checks, and a coarse RLock.
"""

from threading import RLock
from typing import Dict, Protocol, Tuple

from ..errors import InsufficientAllowance, InsufficientBalance, RigError

Amount = int


class PaymentAsset(Protocol):
    def transfer_from(self, spender: str, src: str, dst: str, amount: Amount) -> None: ...
    def balance_of(self, account: str) -> Amount: ...


class QuoteLedger:
    """Balances and allowances for the quote asset."""

    def __init__(self, name: str = "WETH") -> None:
        self.name = name
        self._lock = RLock()
        self._balances: Dict[str, Amount] = {}
        self._allowances: Dict[Tuple[str, str], Amount] = {}

    # --- views ---

    def balance_of(self, account: str) -> Amount:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def total_supply(self) -> Amount:
        return sum(self._balances.values())

    # --- mutations ---

    def deposit(self, account: str, amount: Amount) -> None:
        """Credit fresh units (wrapping native currency in the real system)."""
        if amount < 0:
            raise RigError(f"deposit amount must be non-negative, got {amount}")
        with self._lock:
            self._balances[account] = self.balance_of(account) + amount

    def approve(self, owner: str, spender: str, amount: Amount) -> None:
        if amount < 0:
            raise RigError(f"allowance must be non-negative, got {amount}")
        with self._lock:
            self._allowances[(owner, spender)] = amount

    def transfer(self, src: str, dst: str, amount: Amount) -> None:
        with self._lock:
            self._move(src, dst, amount)

    def transfer_from(self, spender: str, src: str, dst: str, amount: Amount) -> None:
        with self._lock:
            allowed = self.allowance(src, spender)
            if allowed < amount:
                raise InsufficientAllowance(owner=src, spender=spender, have=allowed, need=amount)
            self._move(src, dst, amount)
            self._allowances[(src, spender)] = allowed - amount

    def _move(self, src: str, dst: str, amount: Amount) -> None:
        if amount < 0:
            raise RigError(f"transfer amount must be non-negative, got {amount}")
        have = self.balance_of(src)
        if have < amount:
            raise InsufficientBalance(account=src, have=have, need=amount)
        self._balances[src] = have - amount
        self._balances[dst] = self.balance_of(dst) + amount

    # --- journal participation ---

    def snapshot(self) -> Tuple[Dict[str, Amount], Dict[Tuple[str, str], Amount]]:
        with self._lock:
            return dict(self._balances), dict(self._allowances)

    def restore(self, snap: Tuple[Dict[str, Amount], Dict[Tuple[str, str], Amount]]) -> None:
        with self._lock:
            balances, allowances = snap
            self._balances = dict(balances)
            self._allowances = dict(allowances)


__all__ = ["Amount", "PaymentAsset", "QuoteLedger"]
