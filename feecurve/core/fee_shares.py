"""
Fee share distribution (deterministic, integer-only).

Each recipient gets `floor(total_fee * share / 100)`; the rounding remainder
goes entirely to the first configured recipient, so the split always sums to
exactly `total_fee`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..state.params import SHARES_TOTAL, FeeSetup
from .errors import FeeInvariantError


@dataclass(frozen=True)
class FeeDistribution:
    recipients: Tuple[str, ...] = ()
    shares: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "recipients", tuple(self.recipients))
        object.__setattr__(self, "shares", tuple(self.shares))
        if len(self.recipients) != len(self.shares):
            raise ValueError("recipients and shares must have the same length")
        for name, v in zip(self.recipients, self.shares):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"share for {name} must be an int")
            if v < 0:
                raise ValueError(f"share for {name} must be non-negative: {v}")

    @property
    def total(self) -> int:
        return sum(self.shares)

    @property
    def is_empty(self) -> bool:
        return not self.recipients

    def as_pairs(self) -> list[tuple[str, int]]:
        return list(zip(self.recipients, self.shares))


EMPTY_DISTRIBUTION = FeeDistribution()


def distribute_fee(total_fee: int, setup: FeeSetup) -> FeeDistribution:
    """
    Split `total_fee` across `setup.recipients` by percentage share.

    A zero fee yields the empty distribution (nothing to pay anyone).
    """
    if not isinstance(total_fee, int) or isinstance(total_fee, bool) or total_fee < 0:
        raise ValueError(f"total_fee must be a non-negative int, got {total_fee}")
    if total_fee == 0:
        return EMPTY_DISTRIBUTION

    amounts = [(total_fee * share) // SHARES_TOTAL for share in setup.shares]
    rest = total_fee - sum(amounts)
    if rest < 0:
        raise FeeInvariantError("fee split over-distributed", code="fee_split_over_distributed")
    amounts[0] += rest

    return FeeDistribution(recipients=setup.recipients, shares=tuple(amounts))
