"""
Dominance ratios: the share of the pool held by one asset before (`a`) and
after (`b`) a deposit or redemption.

Ratios are raw fixed-point values in [0, 1e18]; a zero denominator yields 0.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import FeeDomainError
from .fixed_point import div


@dataclass(frozen=True)
class DominancePair:
    a: int
    b: int


def check_amount(amount: int) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise TypeError("amount must be an int")
    if amount <= 0:
        raise FeeDomainError(f"amount must be > 0, got {amount}", code="zero_amount")


def check_pool_state(current: int, total: int) -> None:
    if current < 0 or total < 0:
        raise FeeDomainError(
            f"pool balances must be non-negative: current={current} total={total}",
            code="invalid_pool_state",
        )
    if total < current:
        raise FeeDomainError(
            "The total volume in the pool must be greater than or equal to the volume for an individual asset: "
            f"current={current} total={total}",
            code="invalid_pool_state",
        )


def check_redemption_balance(amount: int, current: int) -> None:
    if amount > current:
        raise FeeDomainError(
            f"The amount to be redeemed cannot exceed the current balance of the pool: amount={amount} current={current}",
            code="redemption_exceeds_balance",
        )


def _ratio_before(current: int, total: int) -> int:
    return 0 if total == 0 else div(current, total)


def deposit_dominance(amount: int, current: int, total: int) -> DominancePair:
    """
    a = current / total
    b = (current + amount) / (total + amount)
    """
    check_pool_state(current, total)
    a = _ratio_before(current, total)
    denom = total + amount
    b = 0 if denom == 0 else div(current + amount, denom)
    return DominancePair(a=a, b=b)


def redemption_dominance(amount: int, current: int, total: int) -> DominancePair:
    """
    a = current / total
    b = (current - amount) / (total - amount), or 0 when the pool empties
    """
    check_pool_state(current, total)
    check_redemption_balance(amount, current)
    a = _ratio_before(current, total)
    remaining = total - amount
    b = 0 if remaining == 0 else div(current - amount, remaining)
    return DominancePair(a=a, b=b)
