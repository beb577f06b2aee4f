"""Tests for dominance ratios before/after deposits and redemptions."""

from __future__ import annotations

import pytest

from feecurve.core.dominance import DominancePair, deposit_dominance, redemption_dominance
from feecurve.core.errors import FeeDomainError
from feecurve.core.fixed_point import UNIT

E18 = 10**18


def test_deposit_dominance_basic() -> None:
    pair = deposit_dominance(100 * E18, 500 * E18, 1000 * E18)
    assert pair == DominancePair(a=UNIT // 2, b=(600 * UNIT) // 1100)


def test_deposit_dominance_empty_pool() -> None:
    # a is clamped to 0 when the pool is empty; b is the whole pool after the deposit.
    pair = deposit_dominance(5 * E18, 0, 0)
    assert pair.a == 0
    assert pair.b == UNIT


def test_redemption_dominance_basic() -> None:
    pair = redemption_dominance(100 * E18, 500 * E18, 1000 * E18)
    assert pair.a == UNIT // 2
    assert pair.b == (400 * UNIT) // 900


def test_redemption_dominance_pool_emptied() -> None:
    pair = redemption_dominance(10 * E18, 10 * E18, 10 * E18)
    assert pair.a == UNIT
    assert pair.b == 0


def test_redemption_dominance_asset_fully_redeemed() -> None:
    pair = redemption_dominance(10 * E18, 10 * E18, 40 * E18)
    assert pair.a == UNIT // 4
    assert pair.b == 0


def test_total_below_current_rejected() -> None:
    for fn in (deposit_dominance, redemption_dominance):
        with pytest.raises(FeeDomainError) as excinfo:
            fn(1, 10, 5)
        assert excinfo.value.code == "invalid_pool_state"


def test_redemption_above_balance_rejected() -> None:
    with pytest.raises(FeeDomainError) as excinfo:
        redemption_dominance(11, 10, 100)
    assert excinfo.value.code == "redemption_exceeds_balance"


def test_ratios_stay_in_unit_range() -> None:
    for current, total, amount in ((0, 1, 1), (1, 1, 1), (3, 7, 2), (10**30, 10**31, 10**29)):
        d = deposit_dominance(amount, current, total)
        assert 0 <= d.a <= UNIT and 0 <= d.b <= UNIT
        if amount <= current:
            r = redemption_dominance(amount, current, total)
            assert 0 <= r.a <= UNIT and 0 <= r.b <= UNIT
