from __future__ import annotations
"""
rig.config — configuration for the slot auction core

Covers:
- Dutch auction timing and price bounds
- Emission schedule (initial rate, halving period, tail floor)
- Multiplier refresh window
- Fee rates (basis points over DIVISOR)
- Capacity bounds
- Deployment wiring (deploy time, owner, treasury, team, initial factions)

Amounts are wad integers (1e18 = one unit). Environment overrides accept either
a plain integer or, for amounts, a decimal with an explicit `u` suffix
("0.0001u" -> 10**14):

  # Auction
  RIG_EPOCH_PERIOD=3600
  RIG_PRICE_MULTIPLIER=2u
  RIG_MIN_INIT_PRICE=0.0001u

  # Emission
  RIG_INITIAL_UPS=4u
  RIG_TAIL_UPS=0.01u
  RIG_HALVING_PERIOD=2592000

  # Multiplier refresh
  RIG_MULTIPLIER_DURATION=86400

  # Fees (bps)
  RIG_TOTAL_FEE=2000
  RIG_TEAM_FEE=200
  RIG_FACTION_FEE=200

  # Deployment
  RIG_DEPLOY_TIME=1700000000
  RIG_INITIAL_CAPACITY=1
  RIG_OWNER=0x...
  RIG_TREASURY=0x...
  RIG_TEAM=0x...

You can also load from a JSON or YAML file via `RIG_CONFIG_FILE=/path/to/config.(json|yaml|yml)`.
File values override defaults; environment overrides the file.
"""


import json
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from . import constants as C
from .fixed import to_wad


# -------------------------- Data classes --------------------------


@dataclass(frozen=True)
class RigParams:
    """Protocol constants. Immutable once a registry is built from them."""

    epoch_period: int = C.EPOCH_PERIOD
    price_multiplier: int = C.PRICE_MULTIPLIER
    min_init_price: int = C.MIN_INIT_PRICE
    abs_max_init_price: int = C.ABS_MAX_INIT_PRICE

    initial_ups: int = C.INITIAL_UPS
    tail_ups: int = C.TAIL_UPS
    halving_period: int = C.HALVING_PERIOD

    multiplier_duration: int = C.MULTIPLIER_DURATION
    default_multiplier: int = C.DEFAULT_MULTIPLIER

    divisor: int = C.DIVISOR
    total_fee: int = C.TOTAL_FEE
    team_fee: int = C.TEAM_FEE
    faction_fee: int = C.FACTION_FEE

    max_capacity: int = C.MAX_CAPACITY

    def validate(self) -> None:
        for name in ("epoch_period", "halving_period", "multiplier_duration", "divisor", "max_capacity"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive (got {getattr(self, name)}).")
        if self.price_multiplier < C.PRECISION:
            raise ValueError("price_multiplier must be >= 1x (1e18).")
        if not (0 < self.min_init_price <= self.abs_max_init_price):
            raise ValueError("min_init_price must be in (0, abs_max_init_price].")
        if self.tail_ups <= 0 or self.initial_ups < self.tail_ups:
            raise ValueError("Emission rates must satisfy 0 < tail_ups <= initial_ups.")
        if self.default_multiplier != C.PRECISION:
            raise ValueError("default_multiplier must be exactly 1x (1e18).")
        for name in ("total_fee", "team_fee", "faction_fee"):
            v = getattr(self, name)
            if not (0 <= v <= self.divisor):
                raise ValueError(f"{name} must be between 0 and {self.divisor} (got {v}).")
        if self.team_fee + self.faction_fee > self.total_fee:
            raise ValueError(
                f"team_fee + faction_fee must fit inside total_fee "
                f"({self.team_fee} + {self.faction_fee} > {self.total_fee})."
            )


@dataclass
class RigConfig:
    """Top-level configuration container: protocol params plus deployment wiring."""

    params: RigParams = field(default_factory=RigParams)
    deploy_time: Optional[int] = None  # None = "now" at registry construction
    initial_capacity: int = C.INITIAL_CAPACITY
    owner: str = "0x" + "11" * 20
    treasury: str = "0x" + "22" * 20
    team: Optional[str] = None
    factions: List[str] = field(default_factory=list)
    multipliers: List[int] = field(default_factory=list)

    def validate(self) -> None:
        self.params.validate()
        if not (1 <= self.initial_capacity <= self.params.max_capacity):
            raise ValueError(
                f"initial_capacity must be in [1, {self.params.max_capacity}] (got {self.initial_capacity})."
            )
        if C.is_zero_address(self.owner):
            raise ValueError("owner must be a non-zero address.")
        if C.is_zero_address(self.treasury):
            raise ValueError("treasury must be a non-zero address.")
        if self.deploy_time is not None and self.deploy_time < 0:
            raise ValueError("deploy_time must be non-negative.")
        for m in self.multipliers:
            if m < self.params.default_multiplier:
                raise ValueError(f"multiplier {m} is below 1x.")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# -------------------------- Loaders --------------------------

_AMOUNT_FIELDS = frozenset(
    {"amount", "price_multiplier", "min_init_price", "abs_max_init_price", "initial_ups", "tail_ups", "default_multiplier"}
)


def _parse_int(name: str, raw: Any) -> int:
    s = str(raw).strip().replace("_", "")
    try:
        if name in _AMOUNT_FIELDS and s.endswith("u"):
            return to_wad(s[:-1])
        return int(s)
    except Exception as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e


def parse_amount(raw: Any) -> int:
    """Parse a wad amount: plain integer or decimal units with a `u` suffix."""
    return _parse_int("amount", raw)


def _getenv_int(name: str, key: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return _parse_int(key, v)


def _params_from_mapping(base: RigParams, data: Mapping[str, Any]) -> RigParams:
    known = {f.name for f in fields(RigParams)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown params: {sorted(unknown)}")
    return replace(base, **{k: _parse_int(k, v) for k, v in data.items()})


def from_env(base: Optional[RigConfig] = None, prefix: str = "RIG_") -> RigConfig:
    """
    Build a RigConfig from environment variables, optionally layering on top of `base`.
    """
    cfg = base or RigConfig()

    overrides = {
        f.name: _getenv_int(f"{prefix}{f.name.upper()}", f.name, getattr(cfg.params, f.name))
        for f in fields(RigParams)
    }
    params = replace(cfg.params, **overrides)

    deploy_time = os.getenv(f"{prefix}DEPLOY_TIME")
    factions = os.getenv(f"{prefix}FACTIONS")

    new_cfg = RigConfig(
        params=params,
        deploy_time=_parse_int("deploy_time", deploy_time) if deploy_time else cfg.deploy_time,
        initial_capacity=_getenv_int(f"{prefix}INITIAL_CAPACITY", "initial_capacity", cfg.initial_capacity),
        owner=os.getenv(f"{prefix}OWNER") or cfg.owner,
        treasury=os.getenv(f"{prefix}TREASURY") or cfg.treasury,
        team=os.getenv(f"{prefix}TEAM") or cfg.team,
        factions=[a.strip() for a in factions.split(",") if a.strip()] if factions else list(cfg.factions),
        multipliers=list(cfg.multipliers),
    )
    new_cfg.validate()
    return new_cfg


def from_file(path: str | os.PathLike[str]) -> RigConfig:
    """
    Load configuration from a JSON or YAML file.

    Layout:
        params: {epoch_period: 3600, min_init_price: "0.0001u", ...}
        deploy_time: 1700000000
        initial_capacity: 4
        owner / treasury / team: "0x..."
        factions: ["0x...", ...]
        multipliers: ["1u", "2u", "5u"]
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)

    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text or "{}")

    defaults = RigConfig()
    deploy_time = data.get("deploy_time")
    cfg = RigConfig(
        params=_params_from_mapping(RigParams(), data.get("params", {})),
        deploy_time=_parse_int("deploy_time", deploy_time) if deploy_time is not None else defaults.deploy_time,
        initial_capacity=_parse_int("initial_capacity", data.get("initial_capacity", defaults.initial_capacity)),
        owner=data.get("owner", defaults.owner),
        treasury=data.get("treasury", defaults.treasury),
        team=data.get("team", defaults.team),
        factions=list(data.get("factions", [])),
        multipliers=[_parse_int("default_multiplier", m) for m in data.get("multipliers", [])],
    )
    cfg.validate()
    return cfg


def load() -> RigConfig:
    """
    Load configuration using the following precedence:
      1) File at $RIG_CONFIG_FILE (JSON/YAML)
      2) Environment variables (RIG_*), applied on top of defaults or file values
    """
    file_path = os.getenv("RIG_CONFIG_FILE")
    base = from_file(file_path) if file_path else RigConfig()
    return from_env(base=base)


# -------------------------- Utilities --------------------------


def pretty(cfg: Optional[RigConfig] = None) -> str:
    """Return a human-readable JSON string of the current config."""
    obj = (cfg or load()).to_dict()
    return json.dumps(obj, indent=2, sort_keys=True)


__all__ = [
    "RigParams",
    "RigConfig",
    "from_env",
    "from_file",
    "load",
    "pretty",
    "parse_amount",
]
