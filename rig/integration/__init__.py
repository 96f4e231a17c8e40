from __future__ import annotations
"""
rig.integration
---------------

Collaborator contracts consumed by the core, plus in-memory reference
implementations used by tests, the simulator, and local devnets:

- ledger:  PaymentAsset protocol / QuoteLedger (balances + allowances)
- token:   RewardToken protocol / UnitToken (minter-gated mint)
- entropy: EntropyOracle protocol / LocalEntropyOracle (two-phase draws)
"""

from .entropy import EntropyOracle, FulfillCallback, LocalEntropyOracle, derive_random
from .ledger import PaymentAsset, QuoteLedger
from .token import RewardToken, UnitToken

__all__ = [
    "EntropyOracle",
    "FulfillCallback",
    "LocalEntropyOracle",
    "derive_random",
    "PaymentAsset",
    "QuoteLedger",
    "RewardToken",
    "UnitToken",
]
