from __future__ import annotations

from typing import Callable, Dict

import pytest

from rig.clock import ManualClock
from rig.config import RigConfig
from rig.constants import PRECISION
from rig.integration import LocalEntropyOracle, QuoteLedger, UnitToken
from rig.registry import SlotRegistry
from rig.tests import ALICE, BOB, CAROL, FACTION, FUNDING, OWNER, T0, TREASURY


@pytest.fixture
def clock(request) -> ManualClock:
    marker = request.node.get_closest_marker("clock_start")
    return ManualClock(marker.args[0] if marker else T0)


@pytest.fixture
def ledger() -> QuoteLedger:
    return QuoteLedger()


@pytest.fixture
def token() -> UnitToken:
    return UnitToken(owner=OWNER)


@pytest.fixture
def oracle() -> LocalEntropyOracle:
    return LocalEntropyOracle(fee=0)


@pytest.fixture
def config() -> RigConfig:
    return RigConfig(
        deploy_time=T0,
        initial_capacity=1,
        owner=OWNER,
        treasury=TREASURY,
        team=None,
        factions=[FACTION],
        multipliers=[1 * PRECISION, 2 * PRECISION, 5 * PRECISION],
    )


@pytest.fixture
def make_registry(clock, ledger, token, oracle) -> Callable[..., SlotRegistry]:
    """Build a registry wired to the shared collaborators, with takers funded."""

    def _make(cfg: RigConfig) -> SlotRegistry:
        reg = SlotRegistry(cfg, ledger=ledger, token=token, oracle=oracle, clock=clock)
        token.set_minter(OWNER, reg.address)
        for who in (ALICE, BOB, CAROL):
            ledger.deposit(who, FUNDING)
            ledger.approve(who, reg.address, FUNDING)
        return reg

    return _make


@pytest.fixture
def registry(make_registry, config) -> SlotRegistry:
    return make_registry(config)


@pytest.fixture
def take(registry, clock) -> Callable[..., int]:
    """Take over `index` at the current price using the slot's current epoch."""

    def _take(who: str, index: int = 0, *, faction=None, uri: str = "", fee: int = 0, **overrides) -> int:
        slot = registry.get_slot(index)
        kwargs: Dict[str, object] = dict(
            caller=who,
            miner=who,
            faction=faction,
            index=index,
            epoch_id=slot.epoch_id,
            deadline=clock() + 3600,
            max_price=registry.get_price(index),
            uri=uri,
            attached_fee=fee,
        )
        kwargs.update(overrides)
        return registry.takeover(**kwargs)

    return _take
