from __future__ import annotations

import json

from typer.testing import CliRunner

from rig.cli.main import app, simulate
from rig.config import RigConfig
from rig.constants import ABS_MAX_INIT_PRICE, MIN_INIT_PRICE
from rig.fixed import format_wad

runner = CliRunner()


def test_params_json():
    r = runner.invoke(app, ["params", "--json"])
    assert r.exit_code == 0, r.output
    data = json.loads(r.stdout)
    assert data["params"]["epoch_period"] == 3600
    assert data["initial_capacity"] == 1


def test_params_table():
    r = runner.invoke(app, ["params"])
    assert r.exit_code == 0, r.output
    assert "epoch_period" in r.stdout
    assert "3600s" in r.stdout


def test_price_half_way():
    r = runner.invoke(app, ["price", "--init-price", "0.0001u", "--elapsed", "1800", "--json"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.stdout)["price"] == MIN_INIT_PRICE // 2


def test_price_after_period_is_zero():
    r = runner.invoke(app, ["price", "--init-price", "1000", "--elapsed", "3600"])
    assert r.exit_code == 0, r.output
    assert r.stdout.startswith("0 ")


def test_price_rejects_bad_amount():
    r = runner.invoke(app, ["price", "--init-price", "lots", "--elapsed", "1"])
    assert r.exit_code != 0


def test_simulate_command():
    r = runner.invoke(
        app,
        ["simulate", "--takeovers", "12", "--interval", "1800", "--capacity", "2", "--seed", "3", "--fulfill"],
    )
    assert r.exit_code == 0, r.output
    data = json.loads(r.stdout)
    assert data["takeovers"] == 12
    assert data["rejected"] == {}
    assert data["pending_requests"] == 0
    assert data["total_minted"] == data["token_supply"]
    assert sum(s["epoch_id"] for s in data["slots"].values()) == 12


def test_simulate_is_deterministic():
    cfg = RigConfig(deploy_time=1_700_000_000, initial_capacity=3, multipliers=[10**18, 3 * 10**18])
    a = simulate(cfg, takeovers=30, interval=600, seed=11, fulfill=True)
    b = simulate(cfg, takeovers=30, interval=600, seed=11, fulfill=True)
    assert a == b
    assert a["total_minted"] > 0


def test_price_at_absolute_ceiling():
    r = runner.invoke(app, ["price", "--init-price", "10000000000000000000000000u", "--elapsed", "0"])
    assert r.exit_code == 0, r.output
    assert r.stdout.startswith(str(10**43))
    assert "(10000000000000000000000000.000000 units)" in r.stdout


def test_format_wad():
    whole, frac = divmod(ABS_MAX_INIT_PRICE, 10**18)
    assert format_wad(ABS_MAX_INIT_PRICE, 0) == str(whole)
    assert format_wad(ABS_MAX_INIT_PRICE, 18) == f"{whole}.{frac:018d}"
    assert format_wad(MIN_INIT_PRICE) == "0.000100"
    assert format_wad(3 * 10**18 // 2, 2) == "1.50"
    assert format_wad(-(10**18)) == "-1.000000"
