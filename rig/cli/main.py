from __future__ import annotations

"""
rig.cli.main
------------

Operator commands for the slot auction core:

- params:   print the effective configuration (defaults < $RIG_CONFIG_FILE < RIG_* env)
- price:    evaluate the Dutch-auction curve for an opening price and elapsed time
- simulate: drive an in-memory registry (reference ledger / token / oracle) through
            a sequence of takeovers and print the final state

Examples
--------
# Effective configuration as JSON
rig params --json

# Price of a 1-unit auction half way through the round
rig price --init-price 1u --elapsed 1800

# 50 takeovers over 4 slots, 30 minutes apart, fulfilling every draw
rig simulate --takeovers 50 --interval 1800 --capacity 4 --seed 7 --fulfill
"""

import json
import logging
import random
from typing import Any, Dict, List, Optional

import typer

from .. import config as rig_config
from ..clock import ManualClock
from ..economics.pricing import price as auction_price
from ..errors import RigError
from ..fixed import format_wad
from ..integration import LocalEntropyOracle, QuoteLedger, UnitToken
from ..registry import SlotRegistry, derive_address

log = logging.getLogger(__name__)

app = typer.Typer(
    name="rig",
    add_completion=False,
    no_args_is_help=True,
    help="Inspect and simulate the slot auction core.",
)

_SIM_START = 1_700_000_000
_SIM_FUNDING = 10**60


# -------------------- utils --------------------


def _load_config() -> rig_config.RigConfig:
    try:
        return rig_config.load()
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"error: invalid configuration: {e}", err=True)
        raise typer.Exit(2)


def _parse_amount(raw: str) -> int:
    try:
        return rig_config.parse_amount(raw)
    except ValueError as e:
        raise typer.BadParameter(str(e))


# -------------------- commands --------------------


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level (DEBUG, INFO, WARNING, ...)."),
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("params")
def params_cmd(
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Print the effective configuration."""
    cfg = _load_config()
    if json_out:
        typer.echo(rig_config.pretty(cfg))
        return
    p = cfg.params
    rows = [
        ("epoch_period", f"{p.epoch_period}s"),
        ("price_multiplier", f"{format_wad(p.price_multiplier, 2)}x"),
        ("min_init_price", format_wad(p.min_init_price)),
        ("initial_ups", format_wad(p.initial_ups)),
        ("tail_ups", format_wad(p.tail_ups)),
        ("halving_period", f"{p.halving_period}s"),
        ("multiplier_duration", f"{p.multiplier_duration}s"),
        ("fees (total/team/faction)", f"{p.total_fee}/{p.team_fee}/{p.faction_fee} of {p.divisor}"),
        ("max_capacity", str(p.max_capacity)),
        ("initial_capacity", str(cfg.initial_capacity)),
        ("owner", cfg.owner),
        ("treasury", cfg.treasury),
        ("team", cfg.team or "-"),
    ]
    width = max(len(k) for k, _ in rows)
    for k, v in rows:
        typer.echo(f"{k.ljust(width)}  {v}")


@app.command("price")
def price_cmd(
    init_price: str = typer.Option(..., "--init-price", help="Opening price, wad integer or decimal with 'u' suffix."),
    elapsed: int = typer.Option(..., "--elapsed", min=0, help="Seconds since the round started."),
    period: Optional[int] = typer.Option(None, "--period", min=1, help="Round length (default: configured epoch_period)."),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Evaluate the Dutch-auction price."""
    start = _parse_amount(init_price)
    if period is None:
        period = _load_config().params.epoch_period
    p = auction_price(start, elapsed, period)
    if json_out:
        typer.echo(json.dumps({"init_price": start, "elapsed": elapsed, "period": period, "price": p}, sort_keys=True))
    else:
        typer.echo(f"{p} ({format_wad(p)} units)")


@app.command("simulate")
def simulate_cmd(
    takeovers: int = typer.Option(20, "--takeovers", min=1, max=100_000, help="Number of takeovers to attempt."),
    interval: int = typer.Option(1800, "--interval", min=0, help="Seconds between takeovers."),
    capacity: int = typer.Option(1, "--capacity", min=1, help="Number of slots."),
    seed: int = typer.Option(0, "--seed", help="Seed for slot/taker selection and entropy."),
    takers: int = typer.Option(3, "--takers", min=1, max=1000, help="Number of competing takers."),
    entropy_fee: int = typer.Option(0, "--entropy-fee", min=0, help="Oracle fee per refresh request."),
    fulfill: bool = typer.Option(False, "--fulfill/--no-fulfill", help="Reveal every entropy request after each takeover."),
) -> None:
    """Run an in-memory takeover sequence and print the final state as JSON."""
    base = _load_config()
    cfg = rig_config.RigConfig(
        params=base.params,
        deploy_time=_SIM_START,
        initial_capacity=min(capacity, base.params.max_capacity),
        owner=base.owner,
        treasury=base.treasury,
        team=base.team,
        factions=list(base.factions),
        multipliers=list(base.multipliers) or [1 * 10**18, 2 * 10**18, 3 * 10**18, 5 * 10**18],
    )
    result = simulate(
        cfg,
        takeovers=takeovers,
        interval=interval,
        seed=seed,
        takers=takers,
        entropy_fee=entropy_fee,
        fulfill=fulfill,
    )
    typer.echo(json.dumps(result, indent=2, sort_keys=True))


def simulate(
    cfg: rig_config.RigConfig,
    *,
    takeovers: int,
    interval: int,
    seed: int,
    takers: int = 3,
    entropy_fee: int = 0,
    fulfill: bool = False,
) -> Dict[str, Any]:
    clock = ManualClock(cfg.deploy_time if cfg.deploy_time is not None else _SIM_START)
    rng = random.Random(seed)
    ledger = QuoteLedger()
    token = UnitToken(owner=cfg.owner)
    oracle = LocalEntropyOracle(fee=entropy_fee, seed=seed.to_bytes(8, "big", signed=True))
    registry = SlotRegistry(cfg, ledger=ledger, token=token, oracle=oracle, clock=clock)
    token.set_minter(cfg.owner, registry.address)

    accounts: List[str] = [derive_address(f"sim/taker/{i}") for i in range(takers)]
    for a in accounts:
        ledger.deposit(a, _SIM_FUNDING)
        ledger.approve(a, registry.address, _SIM_FUNDING)

    ok = 0
    rejected: Dict[str, int] = {}
    paid_total = 0
    for step in range(takeovers):
        if step:
            clock.advance(interval)
        who = accounts[rng.randrange(len(accounts))]
        index = rng.randrange(registry.capacity)
        slot = registry.get_slot(index)
        quote = registry.get_price(index)
        try:
            paid = registry.takeover(
                who,
                who,
                None,
                index,
                slot.epoch_id,
                clock() + 60,
                quote,
                uri=f"sim:{step}",
                attached_fee=registry.get_entropy_fee(),
            )
        except RigError as e:
            rejected[e.code] = rejected.get(e.code, 0) + 1
            continue
        ok += 1
        paid_total += paid
        if fulfill:
            oracle.reveal_all()

    return {
        "now": clock(),
        "takeovers": ok,
        "rejected": rejected,
        "paid_total": paid_total,
        "total_minted": registry.total_minted,
        "token_supply": token.total_supply(),
        "pending_requests": len(oracle.outstanding),
        "ups": registry.get_ups(),
        "events": len(registry.events),
        "balances": {
            a: {"quote": ledger.balance_of(a), "reward": token.balance_of(a)} for a in accounts
        },
        "treasury": ledger.balance_of(cfg.treasury),
        "slots": {str(i): s.to_dict() for i, s in registry.slots.items()},
    }


if __name__ == "__main__":
    app()
