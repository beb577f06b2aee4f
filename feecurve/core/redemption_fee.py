"""
Redemption fee curve.

    fee = scale * (tb * log10(b + shift) - ta * log10(a + shift)) + constant * amount

with `ta = current`, `tb = current - amount`, `(a, b)` the dominance before
and after the redemption and `constant = scale * log10(1 + shift)`.
Redeeming a dominant asset is cheap; redeeming a minority asset costs up to
`scale * (log10(1 + shift) - log10(shift))` of the amount.

Negative results:
The constant term keeps the exact curve non-negative, but near full dominance
(or for amounts tiny relative to the pool) fixed-point rounding can push the
computed value slightly below zero. Those calls are charged the flat dust
fee (`dust_asset_redemption_relative_fee`) instead of zero or a rejection.
"""

from __future__ import annotations

from ..state.params import FeeParameters
from .dominance import check_amount, check_pool_state, check_redemption_balance, redemption_dominance
from .errors import FeeDomainError, FeeInvariantError
from .fixed_point import log10, mul


def _weighted_log(weight: int, ratio: int, shift: int) -> int:
    # A zero balance weight contributes nothing, even where log10 is undefined.
    if weight == 0:
        return 0
    if ratio + shift <= 0:
        # Only reachable with shift == 0 and a ratio that truncates to zero.
        raise FeeDomainError(
            f"Redemption outside range: log10 argument is zero for a non-zero balance weight={weight}",
            code="redemption_outside_range",
        )
    return mul(weight, log10(ratio + shift))


def redemption_fee_raw(amount: int, current: int, total: int, params: FeeParameters) -> int:
    """Signed curve value for the general (multi-asset) case, before clamping."""
    ratios = redemption_dominance(amount, current, total)
    ta = current
    tb = current - amount
    shift = params.redemption_fee_shift

    i_a = _weighted_log(ta, ratios.a, shift)
    i_b = _weighted_log(tb, ratios.b, shift)
    return mul(params.redemption_fee_scale, i_b - i_a) + mul(params.redemption_fee_constant, amount)


def redemption_fee(amount: int, current: int, total: int, params: FeeParameters) -> int:
    """
    Absolute redemption fee for `amount` (same units as `amount`).

    Raises:
        FeeDomainError: zero amount, inconsistent pool balances, or an amount
            above the asset's balance in the pool, or (with `shift == 0`) a
            dominance ratio that truncates to zero under a non-zero weight.
        FeeInvariantError: the curve produced a fee above `amount`.
    """
    check_amount(amount)
    check_pool_state(current, total)
    check_redemption_balance(amount, current)

    if current == total:
        fee = mul(amount, params.single_asset_redemption_relative_fee)
    else:
        fee = redemption_fee_raw(amount, current, total, params)
        if fee < 0:
            fee = mul(amount, params.dust_asset_redemption_relative_fee)

    if fee > amount:
        raise FeeInvariantError(
            f"Fee must be lower or equal to redemption amount: fee={fee} amount={amount}",
            code="fee_exceeds_amount",
        )
    return fee
