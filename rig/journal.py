from __future__ import annotations

"""
All-or-nothing execution for multi-party operations.

A takeover touches several independent ledgers (slot table, pending request
table, payment asset, reward token, entropy oracle, event log). Any failure
part-way through must leave every one of them exactly as it was. Each
participant exposes `snapshot()` / `restore(snap)`; `atomic()` takes the
snapshots on entry and restores them in reverse order if the body raises.

Participants that do not implement the pair (e.g. a remote collaborator that
provides its own transactional boundary) are passed through untouched.
"""

from contextlib import contextmanager
from typing import Any, Iterator, List, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Snapshottable(Protocol):
    def snapshot(self) -> Any: ...
    def restore(self, snap: Any) -> None: ...


@contextmanager
def atomic(*participants: Any) -> Iterator[None]:
    taken: List[Tuple[Snapshottable, Any]] = [
        (p, p.snapshot()) for p in participants if isinstance(p, Snapshottable)
    ]
    try:
        yield
    except BaseException:
        for p, snap in reversed(taken):
            p.restore(snap)
        raise


__all__ = ["Snapshottable", "atomic"]
