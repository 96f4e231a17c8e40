from __future__ import annotations

"""
Emission schedule for slot holders.

The global rate ("units per second", UPS) starts at `initial_ups` and halves
every `halving_period` seconds of wall-clock time since deployment, never
dropping below `tail_ups`:

    halvings = floor((now - deploy_time) / halving_period)
    ups      = max(initial_ups >> halvings, tail_ups)

A holder's rate is locked at acquisition as `ups / capacity`. Reward for a
completed hold is

    duration * locked_ups * locked_multiplier / 1e18

and is paid to the outgoing holder when the next taker wins the slot.

The schedule is deterministic and side-effect free; the `EmissionSchedule`
dataclass just binds the parameters so callers can pass one object around.
"""


from dataclasses import dataclass

from ..config import RigParams
from ..constants import PRECISION
from ..fixed import mul_div_down


def global_ups(now: int, deploy_time: int, halving_period: int, initial_rate: int, tail_rate: int) -> int:
    if halving_period <= 0:
        raise ValueError("halving_period must be > 0")
    if now < deploy_time:
        raise ValueError(f"now ({now}) precedes deploy_time ({deploy_time})")
    halvings = (now - deploy_time) // halving_period
    # Python ints never wrap; past the bit length the shift is simply zero.
    rate = initial_rate >> halvings if halvings < initial_rate.bit_length() else 0
    return rate if rate >= tail_rate else tail_rate


def slot_ups(global_rate: int, capacity: int) -> int:
    if capacity <= 0:
        raise ValueError(f"capacity must be > 0, got {capacity}")
    return global_rate // capacity


def accrued(hold_duration: int, locked_ups: int, locked_multiplier: int) -> int:
    if hold_duration < 0:
        raise ValueError(f"hold_duration must be non-negative, got {hold_duration}")
    return mul_div_down(hold_duration * locked_ups, locked_multiplier, PRECISION)


@dataclass(frozen=True)
class EmissionSchedule:
    """Emission parameters bound to a deployment time."""

    deploy_time: int
    halving_period: int
    initial_ups: int
    tail_ups: int

    @classmethod
    def from_params(cls, params: RigParams, deploy_time: int) -> "EmissionSchedule":
        return cls(
            deploy_time=deploy_time,
            halving_period=params.halving_period,
            initial_ups=params.initial_ups,
            tail_ups=params.tail_ups,
        )

    def global_ups(self, now: int) -> int:
        return global_ups(now, self.deploy_time, self.halving_period, self.initial_ups, self.tail_ups)

    def slot_ups(self, now: int, capacity: int) -> int:
        """Rate to lock onto a slot acquired at `now` under `capacity`."""
        return slot_ups(self.global_ups(now), capacity)


__all__ = ["global_ups", "slot_ups", "accrued", "EmissionSchedule"]
