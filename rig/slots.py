from __future__ import annotations
"""
Slot records and the table that holds them.

A `Slot` is immutable; every change produces a new record via
`dataclasses.replace` and is stored back in one assignment. The table creates
slots lazily: reading an index that was never written returns the all-zero
vacant slot without persisting it.

Fields:
  - epoch_id: bumps by exactly one on every successful takeover (replay token)
  - init_price: opening price of the current auction round (wad)
  - start_time: round start, unix seconds
  - ups: emission rate locked at acquisition, already divided by capacity (wad/s)
  - multiplier: reward multiplier locked for the current hold (wad, 1e18 = 1x)
  - last_multiplier_time: when the last random draw was applied (0 = never)
  - miner: current holder (zero address = never held)
  - uri: opaque metadata
"""


from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, Mapping, Tuple

from .constants import ZERO_ADDRESS, is_zero_address


@dataclass(frozen=True)
class Slot:
    epoch_id: int = 0
    init_price: int = 0
    start_time: int = 0
    ups: int = 0
    multiplier: int = 0
    last_multiplier_time: int = 0
    miner: str = ZERO_ADDRESS
    uri: str = ""

    @property
    def vacant(self) -> bool:
        return is_zero_address(self.miner)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Slot":
        return Slot(
            epoch_id=int(d.get("epoch_id", 0)),
            init_price=int(d.get("init_price", 0)),
            start_time=int(d.get("start_time", 0)),
            ups=int(d.get("ups", 0)),
            multiplier=int(d.get("multiplier", 0)),
            last_multiplier_time=int(d.get("last_multiplier_time", 0)),
            miner=str(d.get("miner", ZERO_ADDRESS)),
            uri=str(d.get("uri", "")),
        )


@dataclass(frozen=True)
class PendingRequest:
    """An outstanding entropy request, keyed by the oracle's sequence number."""

    slot_index: int
    expected_epoch_id: int


_VACANT = Slot()


class SlotTable:
    """Index -> Slot map with implicit all-zero slots."""

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        self._slots: Dict[int, Slot] = {}

    def get(self, index: int) -> Slot:
        return self._slots.get(index, _VACANT)

    def put(self, index: int, slot: Slot) -> None:
        self._slots[index] = slot

    def items(self) -> Iterator[Tuple[int, Slot]]:
        return iter(sorted(self._slots.items()))

    def __len__(self) -> int:
        return len(self._slots)

    # --- journal participation ---

    def snapshot(self) -> Dict[int, Slot]:
        return dict(self._slots)

    def restore(self, snap: Dict[int, Slot]) -> None:
        self._slots = dict(snap)


__all__ = ["Slot", "PendingRequest", "SlotTable"]
