from __future__ import annotations
"""
rig.coordinator
---------------

Bridges slot takeovers and the asynchronous entropy oracle.

`request()` pays the oracle fee, obtains a sequence number and records which
(slot, epoch) the draw was meant for. `on_fulfilled()` is the oracle's
delivery path: it removes the pending entry first, whatever happens next, and
only applies the draw if the slot is still held under the same epoch. A late
draw for a slot that has since changed hands is dropped silently; the oracle's
delivery must never fail because of a race it cannot see.

Multiplier selection:
    table empty -> DEFAULT_MULTIPLIER
    otherwise   -> table[int.from_bytes(random_bytes, "big") % len(table)]
"""


import logging
from dataclasses import replace
from typing import Callable, Dict, Optional, Sequence, Union

from . import metrics
from .constants import DEFAULT_MULTIPLIER
from .errors import InsufficientFee
from .events import EventLog, EventType
from .integration.entropy import EntropyOracle, FulfillCallback
from .slots import PendingRequest, SlotTable

log = logging.getLogger(__name__)

RandomInput = Union[bytes, bytearray, int]


def pick_multiplier(table: Sequence[int], random_value: RandomInput) -> int:
    if not table:
        return DEFAULT_MULTIPLIER
    if isinstance(random_value, (bytes, bytearray)):
        r = int.from_bytes(bytes(random_value), "big")
    else:
        r = int(random_value)
    return table[r % len(table)]


class RandomnessCoordinator:
    def __init__(
        self,
        oracle: EntropyOracle,
        slots: SlotTable,
        *,
        multipliers: Callable[[], Sequence[int]],
        clock: Callable[[], int],
        events: Optional[EventLog] = None,
    ) -> None:
        self.oracle = oracle
        self.slots = slots
        self._multipliers = multipliers
        self._clock = clock
        self.events = events if events is not None else EventLog()
        self._pending: Dict[int, PendingRequest] = {}
        self._callback: FulfillCallback = self.on_fulfilled

    def bind(self, callback: FulfillCallback) -> None:
        """Route oracle deliveries through `callback` (the registry's entry point)."""
        self._callback = callback

    # --- views ---

    def fee(self) -> int:
        return self.oracle.get_fee()

    def pending(self, sequence_number: int) -> Optional[PendingRequest]:
        return self._pending.get(sequence_number)

    def pending_count(self) -> int:
        return len(self._pending)

    # --- request path ---

    def request(self, index: int, epoch_id: int, attached_fee: int) -> int:
        required = self.oracle.get_fee()
        if attached_fee < required:
            raise InsufficientFee(required=required, attached=attached_fee)
        seq = self.oracle.request(required, self._callback)
        self._pending[seq] = PendingRequest(slot_index=index, expected_epoch_id=epoch_id)
        self.events.emit(EventType.ENTROPY_REQUESTED, index=index, epoch_id=epoch_id, sequence_number=seq)
        metrics.record_entropy_request()
        log.debug("entropy requested seq=%d slot=%d epoch=%d fee=%d", seq, index, epoch_id, required)
        return seq

    # --- delivery path ---

    def on_fulfilled(self, sequence_number: int, random_bytes: RandomInput) -> bool:
        """Apply a draw if still relevant. Returns True when the multiplier was set."""
        req = self._pending.pop(sequence_number, None)
        if req is None:
            return self._drop("orphan", sequence_number)

        slot = self.slots.get(req.slot_index)
        if slot.epoch_id != req.expected_epoch_id:
            return self._drop("stale", sequence_number, req)
        if slot.vacant:
            return self._drop("vacant", sequence_number, req)

        mult = pick_multiplier(self._multipliers(), random_bytes)
        self.slots.put(
            req.slot_index,
            replace(slot, multiplier=mult, last_multiplier_time=self._clock()),
        )
        self.events.emit(
            EventType.MULTIPLIER_SET,
            index=req.slot_index,
            epoch_id=req.expected_epoch_id,
            multiplier=mult,
        )
        metrics.record_callback("applied")
        log.info("multiplier %d applied to slot %d (epoch %d)", mult, req.slot_index, req.expected_epoch_id)
        return True

    def _drop(self, outcome: str, seq: int, req: Optional[PendingRequest] = None) -> bool:
        metrics.record_callback(outcome)
        log.debug("entropy callback seq=%d dropped (%s) %s", seq, outcome, req)
        return False

    # --- journal participation ---

    def snapshot(self) -> Dict[int, PendingRequest]:
        return dict(self._pending)

    def restore(self, snap: Dict[int, PendingRequest]) -> None:
        self._pending = dict(snap)


__all__ = ["RandomnessCoordinator", "pick_multiplier"]
