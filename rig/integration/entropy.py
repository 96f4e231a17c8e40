from __future__ import annotations
"""
rig.integration.entropy
-----------------------

Entropy oracle collaborator for multiplier draws.

The oracle is two-phase: `request(value, callback)` pays the current fee and
returns a sequence number immediately; some time later the oracle invokes
`callback(sequence_number, random_bytes)`. Nothing about delivery order or
latency is assumed by the core.

`LocalEntropyOracle` is a deterministic in-process stand-in. Requests are
queued until a test or the simulator calls `reveal()` (explicit bytes) or
`reveal_seeded()` (bytes derived from a seed). Derivation is domain separated:

    r = SHA3-256(DS || seed || seq_be8)

Fees paid with each request are accumulated in `collected`.
"""


from dataclasses import dataclass
from hashlib import sha3_256
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from ..errors import InsufficientFee, RigError

FulfillCallback = Callable[[int, bytes], None]

_DS = b"rig/entropy/local/v1"


class EntropyOracle(Protocol):
    def get_fee(self) -> int: ...
    def request(self, value: int, callback: FulfillCallback) -> int: ...


@dataclass(frozen=True)
class _Request:
    sequence_number: int
    callback: FulfillCallback
    paid: int


def derive_random(seed: bytes, sequence_number: int) -> bytes:
    h = sha3_256()
    h.update(_DS)
    h.update(seed)
    h.update(int(sequence_number).to_bytes(8, "big", signed=False))
    return h.digest()


class LocalEntropyOracle:
    """Queue-backed oracle; fulfilment is driven explicitly by the caller."""

    def __init__(self, fee: int = 0, *, seed: bytes = b"rig-local") -> None:
        if fee < 0:
            raise RigError(f"fee must be non-negative, got {fee}")
        self.fee = fee
        self.seed = seed
        self.collected = 0
        self._next_seq = 1
        self._queue: Dict[int, _Request] = {}

    def get_fee(self) -> int:
        return self.fee

    def request(self, value: int, callback: FulfillCallback) -> int:
        if value < self.fee:
            raise InsufficientFee(required=self.fee, attached=value)
        seq = self._next_seq
        self._next_seq += 1
        self._queue[seq] = _Request(sequence_number=seq, callback=callback, paid=value)
        self.collected += value
        return seq

    @property
    def outstanding(self) -> List[int]:
        return sorted(self._queue)

    def reveal(self, sequence_number: int, random_bytes: bytes) -> None:
        """Deliver `random_bytes` for an outstanding request."""
        req = self._queue.pop(sequence_number, None)
        if req is None:
            raise RigError(f"unknown or already revealed sequence number {sequence_number}")
        req.callback(sequence_number, random_bytes)

    def reveal_seeded(self, sequence_number: int, seed: Optional[bytes] = None) -> bytes:
        rnd = derive_random(self.seed if seed is None else seed, sequence_number)
        self.reveal(sequence_number, rnd)
        return rnd

    def reveal_all(self) -> int:
        """Fulfil every outstanding request in sequence order; returns how many."""
        seqs = self.outstanding
        for seq in seqs:
            self.reveal_seeded(seq)
        return len(seqs)

    # --- journal participation ---

    def snapshot(self) -> Tuple[int, int, Dict[int, _Request]]:
        return self._next_seq, self.collected, dict(self._queue)

    def restore(self, snap: Tuple[int, int, Dict[int, _Request]]) -> None:
        self._next_seq, self.collected, queue = snap
        self._queue = dict(queue)


__all__ = ["FulfillCallback", "EntropyOracle", "LocalEntropyOracle", "derive_random"]
