"""
Fee calculator facade.

Every quote runs the same pipeline against one configuration snapshot:

1. Validate the request (amount, batch shape).
2. Resolve `(current, total)` from the pool adapter.
3. Evaluate the curve (deposit or redemption, passed as a function).
4. Check the fee bound (`fee <= amount`).
5. Return the empty distribution for a zero fee, otherwise split it across
   the configured recipients.

Quotes never mutate anything. Configuration changes go through the
owner-gated setters, each of which swaps in a complete new `FeeConfig`.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from ..log import get_logger
from ..state.params import FeeConfig, FeeParameters, FeeSetup
from ..state.pools import PoolBalances, PoolQuantities, resolve_quantities
from .deposit_fee import deposit_fee
from .dominance import check_amount, check_redemption_balance
from .errors import FeeCalculatorError, FeeConfigError, FeeDomainError, FeeInvariantError, NotOwnerError
from .fee_shares import EMPTY_DISTRIBUTION, FeeDistribution, distribute_fee
from .fixed_point import parse_fixed
from .redemption_fee import redemption_fee

logger = get_logger(__name__)

FeeCurve = Callable[[int, int, int, FeeParameters], int]


def _check_fee_bound(fee: int, amount: int) -> None:
    if fee < 0 or fee > amount:
        raise FeeInvariantError(
            f"Fee must be lower or equal to requested amount: fee={fee} amount={amount}",
            code="fee_exceeds_amount",
        )


def calculate_fee(curve: FeeCurve, quantities: PoolQuantities, config: FeeConfig) -> FeeDistribution:
    """Run one curve against `quantities` and distribute the result under `config`."""
    check_amount(quantities.amount)
    fee = curve(quantities.amount, quantities.current, quantities.total, config.parameters)
    _check_fee_bound(fee, quantities.amount)
    if fee == 0:
        return EMPTY_DISTRIBUTION
    if config.setup is None:
        raise FeeConfigError("fee recipients have not been configured", code="fee_setup_missing")
    return distribute_fee(fee, config.setup)


class FeeCalculator:
    """Owner-configured deposit/redemption fee quotes for multi-asset pools."""

    def __init__(
        self,
        owner: str,
        parameters: Optional[FeeParameters] = None,
        setup: Optional[FeeSetup] = None,
    ):
        if not isinstance(owner, str) or not owner:
            raise ValueError("owner must be a non-empty string")
        self._owner = owner
        self._config = FeeConfig(parameters=parameters or FeeParameters(), setup=setup)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def config(self) -> FeeConfig:
        return self._config

    def get_fee_setup(self) -> Optional[FeeSetup]:
        return self._config.setup

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    def _quote(self, op: str, curve: FeeCurve, quantities: PoolQuantities, config: FeeConfig) -> FeeDistribution:
        log = logger.bind(
            op=op,
            amount=quantities.amount,
            current=quantities.current,
            total=quantities.total,
            config_version=config.version,
        )
        try:
            distribution = calculate_fee(curve, quantities, config)
        except FeeInvariantError as exc:
            log.error("fee_invariant_violated", code=exc.code, error=str(exc))
            raise
        except FeeCalculatorError as exc:
            log.debug("fee_quote_rejected", code=exc.code, error=str(exc))
            raise
        log.debug("fee_quote", fee=distribution.total, recipients=len(distribution.recipients))
        return distribution

    def quote_deposit(self, amount: int, current: int, total: int) -> FeeDistribution:
        """Deposit quote from raw pool quantities (no adapter)."""
        check_amount(amount)
        return self._quote("deposit", deposit_fee, PoolQuantities(amount, current, total), self._config)

    def quote_redemption(self, amount: int, current: int, total: int) -> FeeDistribution:
        """Redemption quote from raw pool quantities (no adapter)."""
        check_amount(amount)
        return self._quote("redemption", redemption_fee, PoolQuantities(amount, current, total), self._config)

    def calculate_deposit_fees(self, asset: Any, pool: PoolBalances, amount: int) -> FeeDistribution:
        config = self._config
        check_amount(amount)
        quantities = resolve_quantities(pool, asset, amount)
        return self._quote("deposit", deposit_fee, quantities, config)

    def calculate_redemption_fees(self, asset: Any, pool: PoolBalances, amount: int) -> FeeDistribution:
        config = self._config
        check_amount(amount)
        quantities = resolve_quantities(pool, asset, amount)
        return self._quote("redemption", redemption_fee, quantities, config)

    def calculate_batch_redemption_fees(
        self, assets: Sequence[Any], pool: PoolBalances, amounts: Sequence[int]
    ) -> FeeDistribution:
        """
        Quote a multi-asset redemption as a single curve evaluation.

        Amounts are summed and the balances of the distinct assets involved
        are summed; the redemption curve then runs once on the aggregate.
        Each asset's requested amount must still fit within its own balance.
        """
        config = self._config
        if len(assets) != len(amounts):
            raise FeeDomainError(
                f"assets and amounts must have the same length: {len(assets)} != {len(amounts)}",
                code="length_mismatch",
            )
        if not assets:
            raise FeeDomainError("redemption batch is empty", code="empty_batch")

        grouped: Dict[Any, Tuple[Any, int]] = {}
        for asset, amount in zip(assets, amounts):
            check_amount(amount)
            key = pool.balance_key(asset)
            ref, subtotal = grouped.get(key, (asset, 0))
            grouped[key] = (ref, subtotal + amount)

        current = 0
        for ref, subtotal in grouped.values():
            balance = pool.asset_balance(ref)
            check_redemption_balance(subtotal, balance)
            current += balance

        quantities = PoolQuantities(amount=sum(amounts), current=current, total=pool.total_supply())
        return self._quote("batch_redemption", redemption_fee, quantities, config)

    # ------------------------------------------------------------------
    # Owner-gated configuration
    # ------------------------------------------------------------------

    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise NotOwnerError(f"caller is not the owner: {caller!r}")

    def _set_parameter(self, caller: str, name: str, value: Any) -> None:
        self.update_parameters({name: value}, caller=caller)

    def update_parameters(self, values: Mapping[str, Any], *, caller: str) -> None:
        """Replace several parameters in one configuration version (all or none)."""
        if not values:
            raise FeeConfigError("no fee parameters given", code="invalid_param:parameters")
        parsed: Dict[str, int] = {}
        for name, value in values.items():
            try:
                parsed[name] = parse_fixed(value)
            except (TypeError, ValueError) as exc:
                raise FeeConfigError(f"invalid value for {name}: {exc}", code=f"invalid_param:{name}") from exc
        with self._lock:
            self._require_owner(caller)
            parameters = self._config.parameters
            for name, raw in parsed.items():
                parameters = parameters.with_param(name, raw)
            self._config = self._config.with_parameters(parameters)
            version = self._config.version
        for name, raw in parsed.items():
            logger.info("fee_parameter_updated", name=name, value=raw, config_version=version)

    def set_deposit_fee_scale(self, value: Any, *, caller: str) -> None:
        self._set_parameter(caller, "deposit_fee_scale", value)

    def set_deposit_fee_ratio_scale(self, value: Any, *, caller: str) -> None:
        self._set_parameter(caller, "deposit_fee_ratio_scale", value)

    def set_single_asset_deposit_relative_fee(self, value: Any, *, caller: str) -> None:
        self._set_parameter(caller, "single_asset_deposit_relative_fee", value)

    def set_redemption_fee_scale(self, value: Any, *, caller: str) -> None:
        self._set_parameter(caller, "redemption_fee_scale", value)

    def set_redemption_fee_shift(self, value: Any, *, caller: str) -> None:
        self._set_parameter(caller, "redemption_fee_shift", value)

    def set_single_asset_redemption_relative_fee(self, value: Any, *, caller: str) -> None:
        self._set_parameter(caller, "single_asset_redemption_relative_fee", value)

    def set_dust_asset_redemption_relative_fee(self, value: Any, *, caller: str) -> None:
        self._set_parameter(caller, "dust_asset_redemption_relative_fee", value)

    def fee_setup(self, recipients: Sequence[str], shares: Sequence[int], *, caller: str) -> None:
        """Replace recipients and shares together (both or neither)."""
        setup = FeeSetup(recipients=tuple(recipients), shares=tuple(shares))
        with self._lock:
            self._require_owner(caller)
            self._config = self._config.with_setup(setup)
            version = self._config.version
        logger.info(
            "fee_setup_updated",
            recipients=list(setup.recipients),
            shares=list(setup.shares),
            config_version=version,
        )

    def transfer_ownership(self, new_owner: str, *, caller: str) -> None:
        if not isinstance(new_owner, str) or not new_owner:
            raise ValueError("new_owner must be a non-empty string")
        with self._lock:
            self._require_owner(caller)
            previous, self._owner = self._owner, new_owner
        logger.info("ownership_transferred", previous_owner=previous, new_owner=new_owner)
