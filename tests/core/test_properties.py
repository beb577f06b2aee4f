"""Property tests for the fee curves and the share split."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from feecurve.core.deposit_fee import deposit_fee
from feecurve.core.errors import FeeInvariantError
from feecurve.core.fee_shares import distribute_fee
from feecurve.core.fixed_point import UNIT, log10, mul
from feecurve.core.redemption_fee import redemption_fee, redemption_fee_raw
from feecurve.state.params import FeeParameters, FeeSetup

E18 = 10**18
DEFAULTS = FeeParameters()


@st.composite
def deposit_inputs(draw):
    total = draw(st.integers(min_value=0, max_value=10**9 * E18))
    current = draw(st.integers(min_value=0, max_value=total))
    amount = draw(st.integers(min_value=E18, max_value=10**9 * E18))
    return amount, current, total


@st.composite
def redemption_inputs(draw):
    total = draw(st.integers(min_value=E18, max_value=10**9 * E18))
    current = draw(st.integers(min_value=E18, max_value=total))
    amount = draw(st.integers(min_value=E18, max_value=current))
    return amount, current, total


@st.composite
def dominant_small_redemptions(draw):
    # Tiny redemptions of an asset holding 90-100% of the pool.
    total = draw(st.integers(min_value=E18, max_value=10**4 * E18))
    current = draw(st.integers(min_value=(total * 9) // 10, max_value=total))
    amount = draw(st.integers(min_value=1, max_value=min(current, 10**9)))
    return amount, current, total


@st.composite
def fee_setups(draw):
    cuts = sorted(draw(st.lists(st.integers(min_value=0, max_value=100), max_size=7)))
    bounds = [0] + cuts + [100]
    shares = tuple(hi - lo for lo, hi in zip(bounds, bounds[1:]))
    recipients = tuple(f"0x{i:02x}" for i in range(len(shares)))
    return FeeSetup(recipients=recipients, shares=shares)


@settings(max_examples=200, deadline=None)
@given(deposit_inputs())
def test_deposit_fee_bounded_and_deterministic(inputs) -> None:
    amount, current, total = inputs
    fee = deposit_fee(amount, current, total, DEFAULTS)
    assert 0 <= fee <= amount
    assert fee == deposit_fee(amount, current, total, DEFAULTS)


@settings(max_examples=200, deadline=None)
@given(redemption_inputs())
def test_redemption_fee_bounded_and_deterministic(inputs) -> None:
    amount, current, total = inputs
    fee = redemption_fee(amount, current, total, DEFAULTS)
    assert 0 <= fee <= amount
    assert fee == redemption_fee(amount, current, total, DEFAULTS)


@settings(max_examples=200, deadline=None)
@given(st.one_of(redemption_inputs(), dominant_small_redemptions()))
def test_negative_redemption_result_charges_dust_fee(inputs) -> None:
    amount, current, total = inputs
    if current == total:
        assert redemption_fee(amount, current, total, DEFAULTS) == mul(
            amount, DEFAULTS.single_asset_redemption_relative_fee
        )
        return
    raw = redemption_fee_raw(amount, current, total, DEFAULTS)
    if raw > amount:
        # Rounding noise can exceed a few-wei amount.
        with pytest.raises(FeeInvariantError):
            redemption_fee(amount, current, total, DEFAULTS)
        return
    expected = mul(amount, DEFAULTS.dust_asset_redemption_relative_fee) if raw < 0 else raw
    assert redemption_fee(amount, current, total, DEFAULTS) == expected


@settings(max_examples=200, deadline=None)
@given(st.integers(min_value=1, max_value=10**40), fee_setups())
def test_distribution_sums_to_fee(total_fee, setup) -> None:
    dist = distribute_fee(total_fee, setup)
    assert dist.recipients == setup.recipients
    assert sum(dist.shares) == total_fee
    for i, share in enumerate(setup.shares):
        floor = (total_fee * share) // 100
        if i == 0:
            assert dist.shares[0] >= floor
        else:
            assert dist.shares[i] == floor


@given(st.integers(min_value=0, max_value=76))
def test_log10_exact_on_powers_of_ten(k) -> None:
    assert log10(10**k) == (k - 18) * UNIT
