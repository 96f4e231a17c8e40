from __future__ import annotations
# rig/errors.py
"""
Error types for the slot auction core. These are lightweight, serializable,
and safe to surface over RPC/logs.

Taxonomy:
- ValidationError: caller mistakes on a takeover (bad address, expired
  deadline, index out of range, stale epoch, slippage, unknown faction,
  re-entrant call). Full abort; the caller resubmits with corrected input.
- ConfigError: owner-gated parameter changes that break an invariant.
- FundingError: not enough value attached or held to complete an operation.

Late or orphaned randomness callbacks are *not* errors and never raise.
"""


import json
from typing import Any, Dict, Mapping, Optional


class RigError(Exception):
    """Base class for rig domain errors."""

    code: str = "RIG_ERROR"

    def __init__(self, message: str = "", *, details: Optional[Mapping[str, Any]] = None) -> None:
        self.message = message or self.__class__.__name__
        self.details = dict(details or {})
        super().__init__(self.__str__())

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.details:
            try:
                packed = json.dumps(self.details, sort_keys=True, separators=(",", ":"), default=str)
            except Exception:
                packed = str(self.details)
            return f"{self.code}: {self.message} [{packed}]"
        return f"{self.code}: {self.message}"


# ────────────────────────────────────────────────────────────────────────────────
# Validation (takeover preconditions)
# ────────────────────────────────────────────────────────────────────────────────


class ValidationError(RigError):
    code = "RIG_VALIDATION_ERROR"


class InvalidMiner(ValidationError):
    """The nominated miner is the zero address."""
    code = "RIG_INVALID_MINER"


class DeadlineExpired(ValidationError):
    code = "RIG_DEADLINE_EXPIRED"

    def __init__(self, *, now: int, deadline: int, message: str = "deadline passed") -> None:
        super().__init__(message, details={"now": int(now), "deadline": int(deadline)})


class IndexOutOfRange(ValidationError):
    code = "RIG_INDEX_OUT_OF_RANGE"

    def __init__(self, *, index: int, capacity: int, message: str = "slot index out of range") -> None:
        super().__init__(message, details={"index": int(index), "capacity": int(capacity)})


class EpochMismatch(ValidationError):
    """The caller acted on a stale view of the slot (someone else committed first)."""
    code = "RIG_EPOCH_MISMATCH"

    def __init__(self, *, index: int, expected: int, actual: int, message: str = "epoch id mismatch") -> None:
        super().__init__(
            message,
            details={"index": int(index), "expected": int(expected), "actual": int(actual)},
        )


class MaxPriceExceeded(ValidationError):
    code = "RIG_MAX_PRICE_EXCEEDED"

    def __init__(self, *, price: int, max_price: int, message: str = "price above caller limit") -> None:
        super().__init__(message, details={"price": int(price), "max_price": int(max_price)})


class InvalidFaction(ValidationError):
    code = "RIG_INVALID_FACTION"

    def __init__(self, *, faction: str, message: str = "faction not whitelisted") -> None:
        super().__init__(message, details={"faction": faction})


class ReentrantCall(ValidationError):
    code = "RIG_REENTRANT_CALL"


# ────────────────────────────────────────────────────────────────────────────────
# Configuration (owner-gated)
# ────────────────────────────────────────────────────────────────────────────────


class ConfigError(RigError):
    code = "RIG_CONFIG_ERROR"


class NotOwner(ConfigError):
    code = "RIG_NOT_OWNER"

    def __init__(self, *, caller: str, message: str = "caller is not the owner") -> None:
        super().__init__(message, details={"caller": caller})


class ZeroAddress(ConfigError):
    code = "RIG_ZERO_ADDRESS"


class InvalidCapacity(ConfigError):
    code = "RIG_INVALID_CAPACITY"

    def __init__(self, *, requested: int, current: int, maximum: int, message: str = "invalid capacity") -> None:
        super().__init__(
            message,
            details={"requested": int(requested), "current": int(current), "maximum": int(maximum)},
        )


class InvalidMultipliers(ConfigError):
    code = "RIG_INVALID_MULTIPLIERS"


# ────────────────────────────────────────────────────────────────────────────────
# Funding
# ────────────────────────────────────────────────────────────────────────────────


class FundingError(RigError):
    code = "RIG_FUNDING_ERROR"


class InsufficientFee(FundingError):
    """Value attached to a takeover does not cover the entropy request fee."""
    code = "RIG_INSUFFICIENT_FEE"

    def __init__(self, *, required: int, attached: int, message: str = "insufficient entropy fee") -> None:
        super().__init__(message, details={"required": int(required), "attached": int(attached)})


class InsufficientBalance(FundingError):
    code = "RIG_INSUFFICIENT_BALANCE"

    def __init__(self, *, account: str, have: int, need: int, message: str = "insufficient balance") -> None:
        super().__init__(message, details={"account": account, "have": int(have), "need": int(need)})


class InsufficientAllowance(FundingError):
    code = "RIG_INSUFFICIENT_ALLOWANCE"

    def __init__(
        self,
        *,
        owner: str,
        spender: str,
        have: int,
        need: int,
        message: str = "insufficient allowance",
    ) -> None:
        super().__init__(
            message,
            details={"owner": owner, "spender": spender, "have": int(have), "need": int(need)},
        )


class MintUnauthorized(FundingError):
    """Someone other than the authorized minter tried to mint reward units."""
    code = "RIG_MINT_UNAUTHORIZED"

    def __init__(self, *, caller: str, minter: Optional[str], message: str = "caller is not the minter") -> None:
        super().__init__(message, details={"caller": caller, "minter": minter})


__all__ = [
    "RigError",
    "ValidationError",
    "InvalidMiner",
    "DeadlineExpired",
    "IndexOutOfRange",
    "EpochMismatch",
    "MaxPriceExceeded",
    "InvalidFaction",
    "ReentrantCall",
    "ConfigError",
    "NotOwner",
    "ZeroAddress",
    "InvalidCapacity",
    "InvalidMultipliers",
    "FundingError",
    "InsufficientFee",
    "InsufficientBalance",
    "InsufficientAllowance",
    "MintUnauthorized",
]
