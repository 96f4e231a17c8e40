from __future__ import annotations

"""
Prometheus metrics for the slot auction core.

We expose counters, gauges and histograms covering:
- takeovers: successful takeovers and rejections by error code
- fees: amounts routed per recipient kind (treasury / team / faction / holder)
- emission: reward units minted to outgoing holders
- entropy: refresh requests issued and callbacks by outcome
- capacity: current number of auctioned slots

Amounts are wad integers in the core; they are exported here as float *units*
(divided by 1e18) to keep histogram buckets readable.
"""


from typing import Optional

from prometheus_client import (CONTENT_TYPE_LATEST, CollectorRegistry, Counter,
                               Gauge, Histogram, generate_latest)

from .constants import PRECISION

# Use a dedicated registry so embedding apps can choose to merge or expose it directly.
REGISTRY = CollectorRegistry()

# ────────────────────────────────────────────────────────────────────────────────
# Label conventions
#   recipient: "treasury" | "team" | "faction" | "holder"
#   outcome:   "applied" | "orphan" | "stale" | "vacant"
#   code:      RigError.code of the rejection
# ────────────────────────────────────────────────────────────────────────────────

TAKEOVERS = Counter(
    "rig_takeovers_total",
    "Total successful slot takeovers.",
    registry=REGISTRY,
)

TAKEOVER_REJECTIONS = Counter(
    "rig_takeover_rejections_total",
    "Total aborted takeovers by error code.",
    labelnames=("code",),
    registry=REGISTRY,
)

FEES_PAID = Counter(
    "rig_fees_paid_units_total",
    "Total fee amounts routed, by recipient kind (in units).",
    labelnames=("recipient",),
    registry=REGISTRY,
)

REWARD_MINTED = Counter(
    "rig_reward_minted_units_total",
    "Total reward units minted to outgoing holders.",
    registry=REGISTRY,
)

ENTROPY_REQUESTS = Counter(
    "rig_entropy_requests_total",
    "Total multiplier refresh requests sent to the entropy oracle.",
    registry=REGISTRY,
)

ENTROPY_CALLBACKS = Counter(
    "rig_entropy_callbacks_total",
    "Total entropy callbacks by outcome.",
    labelnames=("outcome",),
    registry=REGISTRY,
)

CAPACITY = Gauge(
    "rig_capacity",
    "Current number of auctioned slots.",
    registry=REGISTRY,
)

TAKEOVER_PRICE_UNITS = Histogram(
    "rig_takeover_price_units",
    "Distribution of prices paid per takeover (in units).",
    buckets=(
        0.0,
        0.0001,
        0.001,
        0.01,
        0.05,
        0.1,
        0.5,
        1,
        5,
        10,
        50,
        100,
        1000,
    ),
    registry=REGISTRY,
)


def _units(amount: int) -> float:
    return amount / PRECISION


# ────────────────────────────────────────────────────────────────────────────────
# Recording helpers
# ────────────────────────────────────────────────────────────────────────────────


def record_takeover(price: int, minted: int = 0) -> None:
    """Record one successful takeover, its price and any reward minted."""
    TAKEOVERS.inc()
    TAKEOVER_PRICE_UNITS.observe(_units(price))
    if minted > 0:
        REWARD_MINTED.inc(_units(minted))


def record_rejection(code: str) -> None:
    TAKEOVER_REJECTIONS.labels(code=code).inc()


def record_fee(recipient: str, amount: int) -> None:
    if amount > 0:
        FEES_PAID.labels(recipient=recipient).inc(_units(amount))


def record_entropy_request() -> None:
    ENTROPY_REQUESTS.inc()


def record_callback(outcome: str) -> None:
    """Outcome: 'applied' | 'orphan' | 'stale' | 'vacant'."""
    ENTROPY_CALLBACKS.labels(outcome=outcome).inc()


def set_capacity(capacity: int) -> None:
    CAPACITY.set(capacity)


def render_metrics(registry: Optional[CollectorRegistry] = None) -> bytes:
    """Return the Prometheus text exposition for `registry` (default: ours)."""
    return generate_latest(registry or REGISTRY)


__all__ = [
    "REGISTRY",
    "CONTENT_TYPE_LATEST",
    "TAKEOVERS",
    "TAKEOVER_REJECTIONS",
    "FEES_PAID",
    "REWARD_MINTED",
    "ENTROPY_REQUESTS",
    "ENTROPY_CALLBACKS",
    "CAPACITY",
    "TAKEOVER_PRICE_UNITS",
    "record_takeover",
    "record_rejection",
    "record_fee",
    "record_entropy_request",
    "record_callback",
    "set_capacity",
    "render_metrics",
]
