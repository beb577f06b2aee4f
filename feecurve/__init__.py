"""
Dominance-based deposit/redemption fee engine for multi-asset pools.
"""

# Import order matters: `core` pulls in `state` while initializing.
from .core import (
    FeeCalculator,
    FeeCalculatorError,
    FeeConfigError,
    FeeDistribution,
    FeeDomainError,
    FeeInvariantError,
    NotOwnerError,
)
from .state import FeeConfig, FeeParameters, FeeSetup, MultiTokenPool, ProjectVintagePool, TokenPool

__version__ = "0.1.0"

__all__ = [
    "FeeCalculator",
    "FeeCalculatorError",
    "FeeConfigError",
    "FeeDistribution",
    "FeeDomainError",
    "FeeInvariantError",
    "NotOwnerError",
    "FeeConfig",
    "FeeParameters",
    "FeeSetup",
    "MultiTokenPool",
    "ProjectVintagePool",
    "TokenPool",
]
