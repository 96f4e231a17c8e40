from __future__ import annotations
"""
rig.registry
============

The stateful core: per-slot records plus the `takeover` state machine.

A takeover, in order:

    1. precondition checks (miner, deadline, index, faction)
    2. epoch check against the caller's observed epoch (optimistic concurrency)
    3. current Dutch-auction price, bounded by the caller's max_price
    4. fee split and transfers: treasury -> team -> faction -> outgoing holder
    5. next round's opening price
    6. reward for the outgoing holder, minted one takeover in arrears
    7. slot update (epoch +1, new round, new holder, rate locked at capacity)
    8. multiplier refresh request when the last draw is older than the window

Everything from (4) onward touches collaborators. The whole body runs inside
`journal.atomic`, so any exception leaves slots, pending requests, balances,
supply, oracle queue and the event log exactly as they were.

Two entry points mutate slots: `takeover` and `on_fulfilled` (oracle delivery).
Both serialize on one RLock for the whole registry, not one per slot: the
journal snapshots the shared ledger, token, oracle and event log, so two
takeovers on different slots must not interleave or one abort would roll back
the other's transfers. Only `takeover` carries the re-entrancy guard.
The oracle is expected to deliver after `request()` has returned; a delivery
that arrives earlier finds no pending entry and is dropped as an orphan.
"""


import logging
import time
from dataclasses import replace
from hashlib import sha3_256
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from . import metrics
from .admin import AdminConfig
from .config import RigConfig
from .constants import ZERO_ADDRESS, is_zero_address
from .coordinator import RandomInput, RandomnessCoordinator
from .economics.emission import EmissionSchedule, accrued
from .economics.pricing import next_init_price, price as auction_price
from .economics.split import FeePolicy, split_fees
from .errors import (DeadlineExpired, EpochMismatch, IndexOutOfRange,
                     InvalidFaction, InvalidMiner, MaxPriceExceeded,
                     ReentrantCall, RigError)
from .events import FEE_EVENTS, EventLog, EventType
from .integration.entropy import EntropyOracle
from .integration.ledger import PaymentAsset
from .integration.token import RewardToken
from .journal import atomic
from .slots import Slot, SlotTable

log = logging.getLogger(__name__)

Clock = Callable[[], int]


def _wall_clock() -> int:
    return int(time.time())


def derive_address(label: str) -> str:
    return "0x" + sha3_256(b"rig/address/" + label.encode("utf-8")).digest()[:20].hex()


class SlotRegistry:
    def __init__(
        self,
        config: Optional[RigConfig] = None,
        *,
        ledger: PaymentAsset,
        token: RewardToken,
        oracle: EntropyOracle,
        clock: Optional[Clock] = None,
        admin: Optional[AdminConfig] = None,
        address: Optional[str] = None,
    ) -> None:
        self.config = config or RigConfig()
        self.config.validate()
        self.params = self.config.params
        self._clock: Clock = clock or _wall_clock

        self.ledger = ledger
        self.token = token
        self.oracle = oracle
        self.address = address or derive_address(f"registry/{self.config.owner}")

        if admin is None:
            self.events = EventLog()
            admin = AdminConfig.from_config(self.config, events=self.events)
        else:
            self.events = admin.events
        self.admin = admin

        deploy_time = self.config.deploy_time if self.config.deploy_time is not None else self._clock()
        self.schedule = EmissionSchedule.from_params(self.params, deploy_time)
        self.fee_policy = FeePolicy(
            total_bps=self.params.total_fee,
            team_bps=self.params.team_fee,
            faction_bps=self.params.faction_fee,
            divisor=self.params.divisor,
        )

        self.slots = SlotTable()
        self.coordinator = RandomnessCoordinator(
            oracle,
            self.slots,
            multipliers=lambda: self.admin.multipliers,
            clock=self._clock,
            events=self.events,
        )
        self.coordinator.bind(self.on_fulfilled)

        self._total_minted = 0
        self._lock = RLock()
        self._entered = False
        metrics.set_capacity(self.admin.capacity)
        log.info(
            "registry %s deployed at %d (capacity=%d, treasury=%s)",
            self.address,
            deploy_time,
            self.admin.capacity,
            self.admin.treasury,
        )

    @property
    def deploy_time(self) -> int:
        return self.schedule.deploy_time

    def now(self) -> int:
        return int(self._clock())

    # ------------------------------------------------------------------ takeover

    def takeover(
        self,
        caller: str,
        miner: str,
        faction: Optional[str],
        index: int,
        epoch_id: int,
        deadline: int,
        max_price: int,
        uri: str = "",
        attached_fee: int = 0,
    ) -> int:
        """Buy slot `index` at its current price. Returns the price paid."""
        with self._lock:
            try:
                if self._entered:
                    raise ReentrantCall("takeover is not re-entrant")
                self._entered = True
                try:
                    with atomic(*self._participants()):
                        return self._takeover(
                            caller, miner, faction, index, epoch_id, deadline, max_price, uri, attached_fee
                        )
                finally:
                    self._entered = False
            except RigError as e:
                metrics.record_rejection(e.code)
                log.warning("takeover of slot %s by %s rejected: %s", index, caller, e)
                raise

    def _participants(self) -> List[Any]:
        return [
            self,
            self.slots,
            self.coordinator,
            self.admin,
            self.events,
            self.ledger,
            self.token,
            self.oracle,
        ]

    def _takeover(
        self,
        caller: str,
        miner: str,
        faction: Optional[str],
        index: int,
        epoch_id: int,
        deadline: int,
        max_price: int,
        uri: str,
        attached_fee: int,
    ) -> int:
        now = self.now()
        p = self.params

        if is_zero_address(miner):
            raise InvalidMiner("miner must be non-zero")
        if now > deadline:
            raise DeadlineExpired(now=now, deadline=deadline)
        capacity = self.admin.capacity
        if not (0 <= index < capacity):
            raise IndexOutOfRange(index=index, capacity=capacity)
        if is_zero_address(faction):
            faction = None
        elif not self.admin.is_faction(faction):
            raise InvalidFaction(faction=str(faction))

        slot = self.slots.get(index)
        if epoch_id != slot.epoch_id:
            raise EpochMismatch(index=index, expected=epoch_id, actual=slot.epoch_id)

        held_for = now - slot.start_time
        paid = auction_price(slot.init_price, held_for, p.epoch_period)
        if paid > max_price:
            raise MaxPriceExceeded(price=paid, max_price=max_price)

        if paid > 0:
            split = split_fees(paid, team=self.admin.team, faction=faction, policy=self.fee_policy)
            plan = split.transfers(
                treasury=self.admin.treasury,
                team=self.admin.team,
                faction=faction,
                holder=slot.miner,
            )
            for kind, recipient, amount in plan:
                self.ledger.transfer_from(self.address, caller, recipient, amount)
                self.events.emit(
                    FEE_EVENTS[kind], recipient=recipient, index=index, epoch_id=slot.epoch_id, amount=amount
                )
                metrics.record_fee(kind, amount)

        new_init_price = next_init_price(paid, p.price_multiplier, p.min_init_price, p.abs_max_init_price)

        minted = 0
        if not slot.vacant:
            minted = accrued(held_for, slot.ups, slot.multiplier)
            if minted > 0:
                self.token.mint(self.address, slot.miner, minted)
                self._total_minted += minted
                self.events.emit(
                    EventType.MINT, miner=slot.miner, index=index, epoch_id=slot.epoch_id, amount=minted
                )

        updated = replace(
            slot,
            epoch_id=slot.epoch_id + 1,
            init_price=new_init_price,
            start_time=now,
            miner=miner,
            ups=self.schedule.slot_ups(now, capacity),
            uri=uri,
        )
        # last_multiplier_time 0: never drawn
        refresh = slot.last_multiplier_time == 0 or now - slot.last_multiplier_time > p.multiplier_duration
        if refresh:
            updated = replace(updated, multiplier=p.default_multiplier)
        self.slots.put(index, updated)

        self.events.emit(
            EventType.MINE,
            caller=caller,
            miner=miner,
            faction=faction or ZERO_ADDRESS,
            index=index,
            epoch_id=slot.epoch_id,
            price=paid,
            uri=uri,
        )

        if refresh:
            self.coordinator.request(index, updated.epoch_id, attached_fee)

        metrics.record_takeover(paid, minted)
        log.info(
            "slot %d taken by %s for %d (epoch %d -> %d, minted %d to %s)",
            index,
            miner,
            paid,
            slot.epoch_id,
            updated.epoch_id,
            minted,
            slot.miner,
        )
        return paid

    # ------------------------------------------------------------------ oracle delivery

    def on_fulfilled(self, sequence_number: int, random_bytes: RandomInput) -> bool:
        """Oracle callback. Never raises on stale or unknown sequence numbers."""
        with self._lock:
            return self.coordinator.on_fulfilled(sequence_number, random_bytes)

    # ------------------------------------------------------------------ views

    @property
    def capacity(self) -> int:
        return self.admin.capacity

    @property
    def total_minted(self) -> int:
        return self._total_minted

    def get_slot(self, index: int) -> Slot:
        return self.slots.get(index)

    def get_price(self, index: int) -> int:
        slot = self.slots.get(index)
        return auction_price(slot.init_price, self.now() - slot.start_time, self.params.epoch_period)

    def get_ups(self) -> int:
        return self.schedule.global_ups(self.now())

    def get_multipliers(self) -> List[int]:
        return self.admin.multipliers

    def get_multipliers_length(self) -> int:
        return len(self.admin.multipliers)

    def get_entropy_fee(self) -> int:
        return self.coordinator.fee()

    def is_faction(self, addr: Optional[str]) -> bool:
        return self.admin.is_faction(addr)

    # ------------------------------------------------------------------ owner-gated

    def set_capacity(self, caller: str, capacity: int) -> None:
        with self._lock:
            self.admin.set_capacity(caller, capacity)
            metrics.set_capacity(capacity)

    def set_treasury(self, caller: str, treasury: str) -> None:
        with self._lock:
            self.admin.set_treasury(caller, treasury)

    def set_team(self, caller: str, team: Optional[str]) -> None:
        with self._lock:
            self.admin.set_team(caller, team)

    def set_faction(self, caller: str, faction: str, flag: bool) -> None:
        with self._lock:
            self.admin.set_faction(caller, faction, flag)

    def set_multipliers(self, caller: str, multipliers: List[int]) -> None:
        with self._lock:
            self.admin.set_multipliers(caller, multipliers)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        with self._lock:
            self.admin.transfer_ownership(caller, new_owner)

    # ------------------------------------------------------------------ state

    def snapshot(self) -> int:
        return self._total_minted

    def restore(self, snap: int) -> None:
        self._total_minted = snap

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "deploy_time": self.deploy_time,
            "admin": self.admin.to_dict(),
            "total_minted": self._total_minted,
            "pending_requests": self.coordinator.pending_count(),
            "slots": {str(i): s.to_dict() for i, s in self.slots.items()},
        }


__all__ = ["Clock", "SlotRegistry", "derive_address"]
