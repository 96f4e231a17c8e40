from __future__ import annotations
"""
Rig - slot auction core.

A fixed number of exclusive mining slots are sold through continuous Dutch
auctions. Whoever pays the current (decaying) price takes over a slot and
accrues reward units at a halving emission rate scaled by a randomly drawn
multiplier. Reward is minted to the outgoing holder when the next taker wins.

Public surface (lazily loaded):
- config, constants, errors, fixed, metrics
- economics (pricing / emission / split)
- admin, coordinator, registry (slots, events, journal, clock)
- integration (payment ledger, reward token, entropy oracle)
- cli
"""


from typing import List

from .version import __version__

__all__: List[str] = [
    "__version__",
    # lazily importable subpackages/modules
    "admin",
    "cli",
    "clock",
    "config",
    "constants",
    "coordinator",
    "economics",
    "errors",
    "events",
    "fixed",
    "integration",
    "journal",
    "metrics",
    "registry",
    "slots",
]

# --- Lazy module loader (PEP 562) -------------------------------------------------
import importlib


_lazy_modules = set(__all__) - {"__version__"}


def __getattr__(name: str):
    if name in _lazy_modules:
        return importlib.import_module(f".{name}", __name__)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(set(globals().keys()) | _lazy_modules)


def get_version() -> str:
    """Return the rig package version string."""
    return __version__
