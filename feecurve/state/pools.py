"""
Pool balance adapters.

The fee curves only need two numbers per call: the balance of the asset being
deposited/redeemed and the pool's total balance. Pools come in a small closed
set of shapes; each adapter resolves its own kind of asset reference to those
numbers so the curve code never branches on asset shape:

- `TokenPool`: one fungible token per asset.
- `ProjectVintagePool`: vintage tokens grouped by project; an asset's balance
  is its project's balance summed across vintages.
- `MultiTokenPool`: ERC-1155 style `(contract, token_id)` references.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Mapping, Optional, Protocol

from ..core.errors import FeeDomainError, UnknownAssetError


POOL_KIND_TOKEN = "token"
POOL_KIND_PROJECT_VINTAGE = "project_vintage"
POOL_KIND_MULTI_TOKEN = "multi_token"


@dataclass(frozen=True)
class PoolQuantities:
    """Caller-side inputs of one fee computation."""

    amount: int
    current: int
    total: int

    def __post_init__(self) -> None:
        for name, v in (("amount", self.amount), ("current", self.current), ("total", self.total)):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise FeeDomainError(
                    f"{name} must be non-negative: {v}",
                    code="zero_amount" if name == "amount" else "invalid_pool_state",
                )


class PoolBalances(Protocol):
    pool_id: str

    def total_supply(self) -> int: ...

    def asset_balance(self, asset_ref: Any) -> int: ...

    def balance_key(self, asset_ref: Any) -> Hashable: ...


class _BalancePool:
    """Sparse `key -> amount` table shared by the concrete adapters."""

    kind = ""

    def __init__(self, pool_id: str, balances: Optional[Mapping[Hashable, int]] = None):
        if not isinstance(pool_id, str) or not pool_id:
            raise ValueError("pool_id must be a non-empty string")
        self.pool_id = pool_id
        self._balances: Dict[Hashable, int] = {}
        for key, amount in (balances or {}).items():
            self._set(self._key(key), amount)

    def _key(self, asset_ref: Any) -> Hashable:
        if not isinstance(asset_ref, str) or not asset_ref:
            raise UnknownAssetError(f"{self.kind} pool asset must be a non-empty string: {asset_ref!r}")
        return asset_ref

    def _get(self, key: Hashable) -> int:
        return self._balances.get(key, 0)

    def _set(self, key: Hashable, amount: int) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError("balance must be an int")
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(key, None)
        else:
            self._balances[key] = amount

    def total_supply(self) -> int:
        return sum(self._balances.values())

    def token_balance(self, asset_ref: Any) -> int:
        """Balance held under this exact reference (no grouping)."""
        return self._get(self._key(asset_ref))

    def asset_balance(self, asset_ref: Any) -> int:
        return self.token_balance(asset_ref)

    def balance_key(self, asset_ref: Any) -> Hashable:
        """Key under which `asset_balance` groups holdings (one entry per distinct asset)."""
        return self._key(asset_ref)

    def deposit(self, asset_ref: Any, amount: int) -> None:
        key = self._key(asset_ref)
        if amount <= 0:
            raise FeeDomainError(f"deposit amount must be positive: {amount}", code="zero_amount")
        self._set(key, self._get(key) + amount)

    def redeem(self, asset_ref: Any, amount: int) -> None:
        key = self._key(asset_ref)
        if amount <= 0:
            raise FeeDomainError(f"redeem amount must be positive: {amount}", code="zero_amount")
        current = self._get(key)
        if amount > current:
            raise FeeDomainError(
                f"Insufficient pool balance: {current} < {amount}",
                code="redemption_exceeds_balance",
            )
        self._set(key, current - amount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "pool_id": self.pool_id,
            "balances": {str(k): v for k, v in sorted(self._balances.items(), key=lambda kv: str(kv[0]))},
        }


class TokenPool(_BalancePool):
    kind = POOL_KIND_TOKEN


class ProjectVintagePool(_BalancePool):
    """Vintage tokens grouped by project id. Unregistered vintages form their own project."""

    kind = POOL_KIND_PROJECT_VINTAGE

    def __init__(
        self,
        pool_id: str,
        balances: Optional[Mapping[str, int]] = None,
        projects: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(pool_id, balances)
        self._projects: Dict[str, str] = {}
        for vintage, project in (projects or {}).items():
            self.register_vintage(vintage, project)

    def register_vintage(self, vintage: str, project: str) -> None:
        key = self._key(vintage)
        if not isinstance(project, str) or not project:
            raise ValueError(f"project id must be a non-empty string: {project!r}")
        self._projects[key] = project

    def project_of(self, vintage: str) -> str:
        key = self._key(vintage)
        return self._projects.get(key, key)

    def balance_key(self, asset_ref: Any) -> Hashable:
        return self.project_of(asset_ref)

    def asset_balance(self, asset_ref: Any) -> int:
        project = self.project_of(asset_ref)
        return sum(amount for vintage, amount in self._balances.items() if self.project_of(vintage) == project)

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["projects"] = dict(sorted(self._projects.items()))
        return out


class MultiTokenPool(_BalancePool):
    kind = POOL_KIND_MULTI_TOKEN

    def _key(self, asset_ref: Any) -> Hashable:
        if isinstance(asset_ref, list):
            asset_ref = tuple(asset_ref)
        if not isinstance(asset_ref, tuple) or len(asset_ref) != 2:
            raise UnknownAssetError(f"multi-token asset must be a (contract, token_id) pair: {asset_ref!r}")
        contract, token_id = asset_ref
        if not isinstance(contract, str) or not contract:
            raise UnknownAssetError(f"multi-token contract must be a non-empty string: {contract!r}")
        if not isinstance(token_id, int) or isinstance(token_id, bool) or token_id < 0:
            raise UnknownAssetError(f"multi-token token_id must be a non-negative int: {token_id!r}")
        return (contract, token_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "pool_id": self.pool_id,
            "balances": [[c, t, v] for (c, t), v in sorted(self._balances.items())],
        }


def pool_from_dict(obj: Mapping[str, Any]) -> _BalancePool:
    """Build an adapter from its `to_dict()` form (also used for YAML pool files)."""
    if not isinstance(obj, Mapping):
        raise ValueError("pool must be a mapping")
    kind = obj.get("kind", POOL_KIND_TOKEN)
    pool_id = obj.get("pool_id")
    balances = obj.get("balances") or {}
    if kind == POOL_KIND_TOKEN:
        return TokenPool(pool_id, balances)
    if kind == POOL_KIND_PROJECT_VINTAGE:
        return ProjectVintagePool(pool_id, balances, obj.get("projects") or {})
    if kind == POOL_KIND_MULTI_TOKEN:
        if isinstance(balances, Mapping):
            raise ValueError("multi_token balances must be a list of [contract, token_id, amount]")
        pool = MultiTokenPool(pool_id)
        for row in balances:
            if not isinstance(row, (list, tuple)) or len(row) != 3:
                raise ValueError(f"invalid multi_token balance row: {row!r}")
            contract, token_id, amount = row
            pool._set(pool._key((contract, token_id)), amount)
        return pool
    raise ValueError(f"unsupported pool kind: {kind!r}")


def resolve_quantities(pool: PoolBalances, asset_ref: Any, amount: int) -> PoolQuantities:
    """Read `(current, total)` for one asset reference."""
    return PoolQuantities(amount=amount, current=pool.asset_balance(asset_ref), total=pool.total_supply())
