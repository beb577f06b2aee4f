"""
Core fee algorithms
"""

from .dominance import DominancePair, deposit_dominance, redemption_dominance
from .deposit_fee import deposit_fee
from .redemption_fee import redemption_fee, redemption_fee_raw
from .fee_shares import EMPTY_DISTRIBUTION, FeeDistribution, distribute_fee
from .calculator import FeeCalculator, calculate_fee
from .errors import (
    FeeCalculatorError,
    FeeConfigError,
    FeeDomainError,
    FeeInvariantError,
    FixedPointDomainError,
    FixedPointOverflowError,
    NotOwnerError,
    UnknownAssetError,
)

__all__ = [
    "DominancePair",
    "deposit_dominance",
    "redemption_dominance",
    "deposit_fee",
    "redemption_fee",
    "redemption_fee_raw",
    "EMPTY_DISTRIBUTION",
    "FeeDistribution",
    "distribute_fee",
    "FeeCalculator",
    "calculate_fee",
    "FeeCalculatorError",
    "FeeConfigError",
    "FeeDomainError",
    "FeeInvariantError",
    "FixedPointDomainError",
    "FixedPointOverflowError",
    "NotOwnerError",
    "UnknownAssetError",
]
