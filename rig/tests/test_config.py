from __future__ import annotations

import json

import pytest

from rig import config as rig_config
from rig.config import RigConfig, RigParams
from rig.constants import MIN_INIT_PRICE, PRECISION


def test_defaults_validate():
    cfg = RigConfig()
    cfg.validate()
    assert cfg.params.min_init_price == MIN_INIT_PRICE
    assert cfg.params.epoch_period == 3600


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(epoch_period=0),
        dict(price_multiplier=PRECISION - 1),
        dict(min_init_price=0),
        dict(tail_ups=0),
        dict(initial_ups=1, tail_ups=2),
        dict(default_multiplier=2 * PRECISION),
        dict(total_fee=10_001),
        dict(team_fee=1_500, faction_fee=600),
    ],
)
def test_invalid_params(kwargs):
    with pytest.raises(ValueError):
        RigParams(**kwargs).validate()


def test_invalid_wiring():
    with pytest.raises(ValueError):
        RigConfig(initial_capacity=0).validate()
    with pytest.raises(ValueError):
        RigConfig(treasury="0x" + "00" * 20).validate()
    with pytest.raises(ValueError):
        RigConfig(multipliers=[PRECISION // 2]).validate()


def test_from_env(monkeypatch):
    monkeypatch.setenv("RIG_EPOCH_PERIOD", "7200")
    monkeypatch.setenv("RIG_MIN_INIT_PRICE", "0.5u")
    monkeypatch.setenv("RIG_INITIAL_CAPACITY", "8")
    monkeypatch.setenv("RIG_FACTIONS", "0xaa, 0xbb,")
    monkeypatch.setenv("RIG_DEPLOY_TIME", "1700000000")
    cfg = rig_config.from_env()
    assert cfg.params.epoch_period == 7200
    assert cfg.params.min_init_price == PRECISION // 2
    assert cfg.initial_capacity == 8
    assert cfg.factions == ["0xaa", "0xbb"]
    assert cfg.deploy_time == 1_700_000_000


def test_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("RIG_EPOCH_PERIOD", "soon")
    with pytest.raises(ValueError, match="epoch_period"):
        rig_config.from_env()


def test_from_json_file(tmp_path):
    p = tmp_path / "rig.json"
    p.write_text(
        json.dumps(
            {
                "params": {"epoch_period": 600, "min_init_price": "1u"},
                "initial_capacity": 4,
                "team": "0x" + "33" * 20,
                "multipliers": ["1u", "2u"],
            }
        )
    )
    cfg = rig_config.from_file(p)
    assert cfg.params.epoch_period == 600
    assert cfg.params.min_init_price == PRECISION
    assert cfg.initial_capacity == 4
    assert cfg.team == "0x" + "33" * 20
    assert cfg.multipliers == [PRECISION, 2 * PRECISION]


def test_from_yaml_file(tmp_path):
    p = tmp_path / "rig.yaml"
    p.write_text("params:\n  halving_period: 86400\nfactions:\n  - '0xfa'\n")
    cfg = rig_config.from_file(p)
    assert cfg.params.halving_period == 86_400
    assert cfg.factions == ["0xfa"]


def test_unknown_param_in_file(tmp_path):
    p = tmp_path / "rig.json"
    p.write_text(json.dumps({"params": {"epoch_length": 1}}))
    with pytest.raises(ValueError, match="Unknown params"):
        rig_config.from_file(p)


def test_load_layers_env_over_file(tmp_path, monkeypatch):
    p = tmp_path / "rig.json"
    p.write_text(json.dumps({"params": {"epoch_period": 600}, "initial_capacity": 2}))
    monkeypatch.setenv("RIG_CONFIG_FILE", str(p))
    monkeypatch.setenv("RIG_INITIAL_CAPACITY", "5")
    cfg = rig_config.load()
    assert cfg.params.epoch_period == 600
    assert cfg.initial_capacity == 5
    assert json.loads(rig_config.pretty(cfg))["initial_capacity"] == 5


def test_parse_amount():
    assert rig_config.parse_amount("0.0001u") == MIN_INIT_PRICE
    assert rig_config.parse_amount("1_000") == 1000
    with pytest.raises(ValueError):
        rig_config.parse_amount("1.5")


def test_parse_amount_keeps_full_precision():
    assert rig_config.parse_amount("12345678901234567890.123456789012345678u") == (
        12345678901234567890123456789012345678
    )
    assert rig_config.parse_amount("1e30u") == 10**48
    with pytest.raises(ValueError):
        rig_config.parse_amount("NaNu")


def test_file_deploy_time_is_coerced(tmp_path):
    p = tmp_path / "rig.yaml"
    p.write_text("deploy_time: '1700000000'\ninitial_capacity: '3'\n")
    cfg = rig_config.from_file(p)
    assert cfg.deploy_time == 1_700_000_000
    assert cfg.initial_capacity == 3

    p.write_text("deploy_time: tomorrow\n")
    with pytest.raises(ValueError, match="deploy_time"):
        rig_config.from_file(p)
