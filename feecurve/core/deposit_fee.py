"""
Deposit fee curve.

    fee = scale * (ta * log10(1 - a*N) - tb * log10(1 - b*N))

with `ta = current`, `tb = current + amount`, `(a, b)` the dominance before
and after the deposit, and `N = deposit_fee_ratio_scale`. Deposits that raise
an already dominant asset's share pay more; diversifying deposits pay little.

As b -> 1 the relative fee tends to `-scale * log10(1 - N)`; with the default
N = 0.99 and scale = 0.18 that caps it at 36%.
"""

from __future__ import annotations

from ..state.params import FeeParameters
from .dominance import check_amount, check_pool_state, deposit_dominance
from .errors import FeeDomainError, FeeInvariantError
from .fixed_point import UNIT, log10, mul


def deposit_fee(amount: int, current: int, total: int, params: FeeParameters) -> int:
    """
    Absolute deposit fee for `amount` (same units as `amount`).

    Raises:
        FeeDomainError: zero amount, inconsistent pool balances, or a
            dominance that pushes the logarithm argument to <= 0.
        FeeInvariantError: the curve produced a fee above `amount`
            (misconfigured scale / ratio scale).
    """
    check_amount(amount)
    check_pool_state(current, total)

    if current == total:
        # Single asset (or empty pool): the ratio curve is degenerate.
        fee = mul(amount, params.single_asset_deposit_relative_fee)
    else:
        ratios = deposit_dominance(amount, current, total)
        ta = current
        tb = current + amount
        n = params.deposit_fee_ratio_scale

        one_minus_a = UNIT - mul(ratios.a, n)
        one_minus_b = UNIT - mul(ratios.b, n)
        if one_minus_b <= 0:
            raise FeeDomainError(
                f"Deposit outside range: b*N={mul(ratios.b, n)} must be < 1",
                code="deposit_outside_range",
            )

        fee = mul(
            params.deposit_fee_scale,
            mul(ta, log10(one_minus_a)) - mul(tb, log10(one_minus_b)),
        )
        # Negligible deposits into large balanced pools can round just below zero.
        fee = max(fee, 0)

    if fee > amount:
        raise FeeInvariantError(
            f"Fee must be lower or equal to deposit amount: fee={fee} amount={amount}",
            code="fee_exceeds_amount",
        )
    return fee
