from __future__ import annotations
"""
Rig event log.

Events are small records `{name, args}` appended in emission order. The log is
a journal participant, so events emitted by an operation that later aborts are
discarded together with the rest of its effects.

Event names:
  - Rig__Mine             (caller, miner, faction, index, epoch_id, price, uri)
  - Rig__TreasuryFee      (recipient, index, epoch_id, amount)
  - Rig__TeamFee          (recipient, index, epoch_id, amount)
  - Rig__FactionFee       (recipient, index, epoch_id, amount)
  - Rig__MinerFee         (recipient, index, epoch_id, amount)
  - Rig__Mint             (miner, index, epoch_id, amount)
  - Rig__EntropyRequested (index, epoch_id, sequence_number)
  - Rig__MultiplierSet    (index, epoch_id, multiplier)
  - Rig__CapacitySet / Rig__TreasurySet / Rig__TeamSet / Rig__FactionSet /
    Rig__MultipliersSet / Rig__OwnershipTransferred
"""


from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class EventType(str, Enum):
    MINE = "Rig__Mine"
    TREASURY_FEE = "Rig__TreasuryFee"
    TEAM_FEE = "Rig__TeamFee"
    FACTION_FEE = "Rig__FactionFee"
    MINER_FEE = "Rig__MinerFee"
    MINT = "Rig__Mint"
    ENTROPY_REQUESTED = "Rig__EntropyRequested"
    MULTIPLIER_SET = "Rig__MultiplierSet"
    CAPACITY_SET = "Rig__CapacitySet"
    TREASURY_SET = "Rig__TreasurySet"
    TEAM_SET = "Rig__TeamSet"
    FACTION_SET = "Rig__FactionSet"
    MULTIPLIERS_SET = "Rig__MultipliersSet"
    OWNERSHIP_TRANSFERRED = "Rig__OwnershipTransferred"


# Fee recipient kind -> event emitted for that transfer.
FEE_EVENTS: Dict[str, EventType] = {
    "treasury": EventType.TREASURY_FEE,
    "team": EventType.TEAM_FEE,
    "faction": EventType.FACTION_FEE,
    "holder": EventType.MINER_FEE,
}


@dataclass(frozen=True)
class Event:
    name: EventType
    args: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name.value, "args": dict(self.args)}


class EventLog:
    """Append-only list of emitted events."""

    def __init__(self) -> None:
        self._events: List[Event] = []

    def emit(self, name: EventType, **args: Any) -> Event:
        ev = Event(name=name, args=args)
        self._events.append(ev)
        return ev

    def named(self, name: EventType) -> List[Event]:
        return [e for e in self._events if e.name == name]

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    # --- journal participation ---

    def snapshot(self) -> int:
        return len(self._events)

    def restore(self, snap: int) -> None:
        del self._events[snap:]


__all__ = ["EventType", "FEE_EVENTS", "Event", "EventLog"]
