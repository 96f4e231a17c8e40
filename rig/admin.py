from __future__ import annotations
"""
rig.admin
=========

Owner-controlled parameters read by the registry on every takeover:

- capacity     number of auctioned slots; strictly increasing, <= max_capacity
- treasury     non-zero recipient of the protocol fee share
- team         optional recipient of the team share (None disables it; the
               treasury absorbs the share)
- factions     whitelist of addresses a taker may nominate for the faction share
- multipliers  candidate table for random multiplier draws, each >= 1x

Every mutator is owner-gated (`require_owner`) and emits one admin event.
Reads are plain properties; the registry never mutates this object except
through these setters.
"""


import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from .config import RigConfig, RigParams
from .constants import is_zero_address
from .errors import InvalidCapacity, InvalidMultipliers, NotOwner, ZeroAddress
from .events import EventLog, EventType

log = logging.getLogger(__name__)


class AdminConfig:
    def __init__(
        self,
        *,
        owner: str,
        treasury: str,
        team: Optional[str] = None,
        capacity: int = 1,
        factions: Iterable[str] = (),
        multipliers: Iterable[int] = (),
        params: Optional[RigParams] = None,
        events: Optional[EventLog] = None,
    ) -> None:
        self.params = params or RigParams()
        if is_zero_address(owner):
            raise ZeroAddress("owner must be non-zero")
        if is_zero_address(treasury):
            raise ZeroAddress("treasury must be non-zero")
        if not (1 <= capacity <= self.params.max_capacity):
            raise InvalidCapacity(requested=capacity, current=0, maximum=self.params.max_capacity)
        self.events = events if events is not None else EventLog()
        self._owner = owner
        self._treasury = treasury
        self._team: Optional[str] = None if is_zero_address(team) else team
        self._capacity = capacity
        self._factions: Set[str] = set()
        for f in factions:
            if is_zero_address(f):
                raise ZeroAddress("faction must be non-zero")
            self._factions.add(f)
        table = list(multipliers)
        if table:
            self._check_multipliers(table)
        self._multipliers: List[int] = table

    @classmethod
    def from_config(cls, cfg: RigConfig, *, events: Optional[EventLog] = None) -> "AdminConfig":
        return cls(
            owner=cfg.owner,
            treasury=cfg.treasury,
            team=cfg.team,
            capacity=cfg.initial_capacity,
            factions=cfg.factions,
            multipliers=cfg.multipliers,
            params=cfg.params,
            events=events,
        )

    # --- reads ---

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def treasury(self) -> str:
        return self._treasury

    @property
    def team(self) -> Optional[str]:
        return self._team

    @property
    def multipliers(self) -> List[int]:
        return list(self._multipliers)

    def is_faction(self, addr: Optional[str]) -> bool:
        return addr is not None and addr in self._factions

    def factions(self) -> List[str]:
        return sorted(self._factions)

    # --- access control ---

    def require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise NotOwner(caller=caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self.require_owner(caller)
        if is_zero_address(new_owner):
            raise ZeroAddress("new owner must be non-zero")
        previous, self._owner = self._owner, new_owner
        self.events.emit(EventType.OWNERSHIP_TRANSFERRED, previous=previous, new=new_owner)
        log.info("ownership transferred from %s to %s", previous, new_owner)

    # --- mutators ---

    def set_capacity(self, caller: str, capacity: int) -> None:
        """Raise the number of slots. Never decreases."""
        self.require_owner(caller)
        maximum = self.params.max_capacity
        if capacity <= self._capacity or capacity > maximum:
            raise InvalidCapacity(requested=capacity, current=self._capacity, maximum=maximum)
        self._capacity = capacity
        self.events.emit(EventType.CAPACITY_SET, capacity=capacity)
        log.info("capacity set to %d", capacity)

    def set_treasury(self, caller: str, treasury: str) -> None:
        self.require_owner(caller)
        if is_zero_address(treasury):
            raise ZeroAddress("treasury must be non-zero")
        self._treasury = treasury
        self.events.emit(EventType.TREASURY_SET, treasury=treasury)
        log.info("treasury set to %s", treasury)

    def set_team(self, caller: str, team: Optional[str]) -> None:
        """Zero address (or None) disables the team share."""
        self.require_owner(caller)
        self._team = None if is_zero_address(team) else team
        self.events.emit(EventType.TEAM_SET, team=self._team)
        log.info("team set to %s", self._team)

    def set_faction(self, caller: str, faction: str, flag: bool) -> None:
        self.require_owner(caller)
        if is_zero_address(faction):
            raise ZeroAddress("faction must be non-zero")
        if flag:
            self._factions.add(faction)
        else:
            self._factions.discard(faction)
        self.events.emit(EventType.FACTION_SET, faction=faction, flag=bool(flag))
        log.info("faction %s whitelisted=%s", faction, bool(flag))

    def set_multipliers(self, caller: str, multipliers: Iterable[int]) -> None:
        self.require_owner(caller)
        table = list(multipliers)
        self._check_multipliers(table)
        self._multipliers = table
        self.events.emit(EventType.MULTIPLIERS_SET, multipliers=list(table))
        log.info("multiplier table replaced (%d entries)", len(table))

    def _check_multipliers(self, table: List[int]) -> None:
        if not table:
            raise InvalidMultipliers("multiplier table must not be empty")
        floor = self.params.default_multiplier
        for m in table:
            if not isinstance(m, int) or m < floor:
                raise InvalidMultipliers(
                    "multiplier below 1x", details={"multiplier": str(m), "minimum": floor}
                )

    # --- journal participation ---

    def snapshot(self) -> Tuple[Any, ...]:
        return (
            self._owner,
            self._treasury,
            self._team,
            self._capacity,
            frozenset(self._factions),
            tuple(self._multipliers),
        )

    def restore(self, snap: Tuple[Any, ...]) -> None:
        owner, treasury, team, capacity, factions, multipliers = snap
        self._owner = owner
        self._treasury = treasury
        self._team = team
        self._capacity = capacity
        self._factions = set(factions)
        self._multipliers = list(multipliers)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self._owner,
            "treasury": self._treasury,
            "team": self._team,
            "capacity": self._capacity,
            "factions": self.factions(),
            "multipliers": self.multipliers,
        }


__all__ = ["AdminConfig"]
