"""Tests for fee share distribution (floor per share, remainder to the first recipient)."""

from __future__ import annotations

import pytest

from feecurve.core.fee_shares import EMPTY_DISTRIBUTION, FeeDistribution, distribute_fee
from feecurve.state.params import FeeSetup

FIVE_WAY = FeeSetup(recipients=("r0", "r1", "r2", "r3", "r4"), shares=(15, 30, 50, 3, 2))


def test_five_recipients_remainder_to_first() -> None:
    dist = distribute_fee(1001, FIVE_WAY)
    # floors: 150, 300, 500, 30, 20 -> remainder 1
    assert dist.shares == (151, 300, 500, 30, 20)
    assert dist.recipients == FIVE_WAY.recipients
    assert dist.total == 1001


@pytest.mark.parametrize("total_fee", [1, 7, 99, 100, 12_345, 10**18 + 3, 9_718_000_000_000_000_017])
def test_five_recipients_exact_floors(total_fee: int) -> None:
    dist = distribute_fee(total_fee, FIVE_WAY)
    floors = [(total_fee * s) // 100 for s in FIVE_WAY.shares]
    assert dist.shares[0] == floors[0] + (total_fee - sum(floors))
    assert list(dist.shares[1:]) == floors[1:]
    assert sum(dist.shares) == total_fee


def test_single_recipient_gets_everything() -> None:
    setup = FeeSetup(recipients=("treasury",), shares=(100,))
    assert distribute_fee(987, setup).shares == (987,)


def test_duplicate_recipients_are_kept_positionally() -> None:
    setup = FeeSetup(recipients=("a", "b", "a"), shares=(50, 25, 25))
    dist = distribute_fee(10, setup)
    assert dist.recipients == ("a", "b", "a")
    assert dist.shares == (6, 2, 2)


def test_zero_share_recipient_still_listed() -> None:
    setup = FeeSetup(recipients=("a", "b"), shares=(0, 100))
    dist = distribute_fee(9, setup)
    assert dist.shares == (0, 9)


def test_zero_fee_is_empty_distribution() -> None:
    dist = distribute_fee(0, FIVE_WAY)
    assert dist is EMPTY_DISTRIBUTION
    assert dist.is_empty
    assert dist.recipients == () and dist.shares == ()


def test_negative_fee_rejected() -> None:
    with pytest.raises(ValueError):
        distribute_fee(-1, FIVE_WAY)


def test_distribution_validates_shape() -> None:
    with pytest.raises(ValueError):
        FeeDistribution(recipients=("a",), shares=(1, 2))
    with pytest.raises(ValueError):
        FeeDistribution(recipients=("a",), shares=(-1,))


def test_as_pairs() -> None:
    assert distribute_fee(100, FIVE_WAY).as_pairs() == [("r0", 15), ("r1", 30), ("r2", 50), ("r3", 3), ("r4", 2)]
