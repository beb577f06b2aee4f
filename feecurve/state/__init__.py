"""
Fee configuration and pool balance adapters
"""

from .params import FeeConfig, FeeParameters, FeeSetup
from .pools import (
    MultiTokenPool,
    PoolBalances,
    PoolQuantities,
    ProjectVintagePool,
    TokenPool,
    pool_from_dict,
    resolve_quantities,
)

__all__ = [
    "FeeConfig",
    "FeeParameters",
    "FeeSetup",
    "MultiTokenPool",
    "PoolBalances",
    "PoolQuantities",
    "ProjectVintagePool",
    "TokenPool",
    "pool_from_dict",
    "resolve_quantities",
]
