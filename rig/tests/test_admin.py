from __future__ import annotations

import pytest

from rig.admin import AdminConfig
from rig.constants import MAX_CAPACITY, PRECISION, ZERO_ADDRESS
from rig.errors import InvalidCapacity, InvalidMultipliers, NotOwner, ZeroAddress
from rig.events import EventType
from rig.tests import ALICE, FACTION, OWNER, TEAM, TREASURY


@pytest.fixture
def admin() -> AdminConfig:
    return AdminConfig(owner=OWNER, treasury=TREASURY)


def test_defaults(admin):
    assert admin.capacity == 1
    assert admin.treasury == TREASURY
    assert admin.team is None
    assert admin.multipliers == []
    assert not admin.is_faction(FACTION)


def test_every_mutator_is_owner_gated(admin):
    calls = [
        lambda: admin.set_capacity(ALICE, 2),
        lambda: admin.set_treasury(ALICE, ALICE),
        lambda: admin.set_team(ALICE, TEAM),
        lambda: admin.set_faction(ALICE, FACTION, True),
        lambda: admin.set_multipliers(ALICE, [PRECISION]),
        lambda: admin.transfer_ownership(ALICE, ALICE),
    ]
    for call in calls:
        with pytest.raises(NotOwner):
            call()
    assert len(admin.events) == 0


def test_capacity_only_increases(admin):
    admin.set_capacity(OWNER, 5)
    assert admin.capacity == 5
    for bad in (5, 4, 1, 0, MAX_CAPACITY + 1):
        with pytest.raises(InvalidCapacity):
            admin.set_capacity(OWNER, bad)
    assert admin.capacity == 5
    admin.set_capacity(OWNER, MAX_CAPACITY)
    assert admin.capacity == MAX_CAPACITY
    assert [e.args["capacity"] for e in admin.events.named(EventType.CAPACITY_SET)] == [5, MAX_CAPACITY]


def test_treasury_rejects_zero(admin):
    with pytest.raises(ZeroAddress):
        admin.set_treasury(OWNER, ZERO_ADDRESS)
    admin.set_treasury(OWNER, ALICE)
    assert admin.treasury == ALICE


def test_team_zero_disables(admin):
    admin.set_team(OWNER, TEAM)
    assert admin.team == TEAM
    admin.set_team(OWNER, ZERO_ADDRESS)
    assert admin.team is None
    admin.set_team(OWNER, TEAM)
    admin.set_team(OWNER, None)
    assert admin.team is None


def test_faction_toggle_is_idempotent(admin):
    with pytest.raises(ZeroAddress):
        admin.set_faction(OWNER, ZERO_ADDRESS, True)
    admin.set_faction(OWNER, FACTION, True)
    admin.set_faction(OWNER, FACTION, True)
    assert admin.is_faction(FACTION)
    assert admin.factions() == [FACTION]
    admin.set_faction(OWNER, FACTION, False)
    admin.set_faction(OWNER, FACTION, False)
    assert not admin.is_faction(FACTION)
    assert not admin.is_faction(None)


def test_multipliers_replaced_wholesale(admin):
    admin.set_multipliers(OWNER, [PRECISION, 3 * PRECISION])
    admin.set_multipliers(OWNER, [2 * PRECISION])
    assert admin.multipliers == [2 * PRECISION]


@pytest.mark.parametrize("table", [[], [PRECISION - 1], [PRECISION, 0], [2 * PRECISION, PRECISION // 2]])
def test_multipliers_validation(admin, table):
    admin.set_multipliers(OWNER, [PRECISION])
    with pytest.raises(InvalidMultipliers):
        admin.set_multipliers(OWNER, table)
    assert admin.multipliers == [PRECISION]


def test_multipliers_view_is_a_copy(admin):
    admin.set_multipliers(OWNER, [PRECISION])
    admin.multipliers.append(7)
    assert admin.multipliers == [PRECISION]


def test_transfer_ownership(admin):
    with pytest.raises(ZeroAddress):
        admin.transfer_ownership(OWNER, ZERO_ADDRESS)
    admin.transfer_ownership(OWNER, ALICE)
    assert admin.owner == ALICE
    with pytest.raises(NotOwner):
        admin.set_capacity(OWNER, 2)
    admin.set_capacity(ALICE, 2)
    (ev,) = admin.events.named(EventType.OWNERSHIP_TRANSFERRED)
    assert ev.args == {"previous": OWNER, "new": ALICE}


def test_constructor_validation():
    with pytest.raises(ZeroAddress):
        AdminConfig(owner=OWNER, treasury=ZERO_ADDRESS)
    with pytest.raises(ZeroAddress):
        AdminConfig(owner=ZERO_ADDRESS, treasury=TREASURY)
    with pytest.raises(InvalidCapacity):
        AdminConfig(owner=OWNER, treasury=TREASURY, capacity=0)
    with pytest.raises(InvalidMultipliers):
        AdminConfig(owner=OWNER, treasury=TREASURY, multipliers=[1])


def test_snapshot_restore(admin):
    snap = admin.snapshot()
    admin.set_capacity(OWNER, 9)
    admin.set_faction(OWNER, FACTION, True)
    admin.set_multipliers(OWNER, [PRECISION])
    admin.restore(snap)
    assert admin.capacity == 1
    assert not admin.is_faction(FACTION)
    assert admin.multipliers == []
