from __future__ import annotations
"""
Rig test suite package.

Shared address helpers live here so individual modules can build readable
fixtures without importing each other.
"""

from hashlib import sha3_256


def addr(label: str) -> str:
    """Deterministic 20-byte hex address for a human label."""
    return "0x" + sha3_256(label.encode("utf-8")).digest()[:20].hex()


T0 = 1_700_000_000
FUNDING = 10**30

OWNER = addr("owner")
TREASURY = addr("treasury")
TEAM = addr("team")
FACTION = addr("faction")
ALICE = addr("alice")
BOB = addr("bob")
CAROL = addr("carol")
