"""
Fee configuration: curve parameters, recipient setup and the snapshot that
binds them together.

All parameters are raw signed 18-decimal fixed-point ints (see
`feecurve.core.fixed_point`). Instances are immutable; updates produce a new,
fully validated value so a reader never observes a half-applied change.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

from ..core.errors import FeeConfigError
from ..core.fixed_point import UNIT, log10, mul


SHARES_TOTAL = 100

# Every parameter except the deposit ratio scale is a fraction in [0, 1].
UNIT_BOUNDED_PARAMS = (
    "deposit_fee_scale",
    "single_asset_deposit_relative_fee",
    "redemption_fee_scale",
    "redemption_fee_shift",
    "single_asset_redemption_relative_fee",
    "dust_asset_redemption_relative_fee",
)
PARAM_NAMES = UNIT_BOUNDED_PARAMS + ("deposit_fee_ratio_scale",)


@dataclass(frozen=True)
class FeeParameters:
    """Tunable curve parameters (raw fixed-point)."""

    deposit_fee_scale: int = 18 * 10**16  # 0.18
    deposit_fee_ratio_scale: int = 99 * 10**16  # 0.99
    single_asset_deposit_relative_fee: int = 10**17  # 0.1
    redemption_fee_scale: int = 3 * 10**17  # 0.3
    redemption_fee_shift: int = 10**17  # 0.1; -log10(0 + 0.1) = 1
    single_asset_redemption_relative_fee: int = 10**17  # 0.1
    dust_asset_redemption_relative_fee: int = 3 * 10**17  # 0.3

    def __post_init__(self) -> None:
        for name in PARAM_NAMES:
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise FeeConfigError(f"{name} must be an int", code=f"invalid_param:{name}")
        for name in UNIT_BOUNDED_PARAMS:
            v = getattr(self, name)
            if not (0 <= v <= UNIT):
                raise FeeConfigError(
                    f"{name} must be between 0 and 1 (raw [0, {UNIT}]): {v}",
                    code=f"param_out_of_range:{name}",
                )
        if self.deposit_fee_ratio_scale < 0:
            raise FeeConfigError(
                f"deposit_fee_ratio_scale must be non-negative: {self.deposit_fee_ratio_scale}",
                code="param_out_of_range:deposit_fee_ratio_scale",
            )

    @property
    def redemption_fee_constant(self) -> int:
        """`redemption_fee_scale * log10(1 + redemption_fee_shift)`; keeps the curve minimum non-negative."""
        return mul(self.redemption_fee_scale, log10(UNIT + self.redemption_fee_shift))

    def with_param(self, name: str, value: int) -> "FeeParameters":
        """Return a copy with exactly one parameter replaced (validated)."""
        if name not in PARAM_NAMES:
            raise FeeConfigError(f"unknown fee parameter: {name}", code=f"invalid_param:{name}")
        return replace(self, **{name: value})

    def to_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in PARAM_NAMES}


@dataclass(frozen=True)
class FeeSetup:
    """
    Ordered fee recipients with integer percentage shares.

    Shares index recipients positionally; the same address may appear more
    than once. The first recipient absorbs rounding remainders.
    """

    recipients: Tuple[str, ...]
    shares: Tuple[int, ...]

    def __post_init__(self) -> None:
        # Normalize list inputs so the instance stays hashable/immutable.
        object.__setattr__(self, "recipients", tuple(self.recipients))
        object.__setattr__(self, "shares", tuple(self.shares))

        if len(self.recipients) != len(self.shares):
            raise FeeConfigError(
                "Recipients and shares arrays must have the same length",
                code="recipients_shares_length_mismatch",
            )
        if not self.recipients:
            raise FeeConfigError("at least one fee recipient is required", code="empty_recipients")
        for r in self.recipients:
            if not isinstance(r, str) or not r:
                raise FeeConfigError(f"recipient must be a non-empty string: {r!r}", code="invalid_param:recipients")
        for s in self.shares:
            if not isinstance(s, int) or isinstance(s, bool) or s < 0:
                raise FeeConfigError(f"share must be a non-negative int: {s!r}", code="invalid_param:shares")
        total = sum(self.shares)
        if total != SHARES_TOTAL:
            raise FeeConfigError(f"Total shares must equal {SHARES_TOTAL}, got {total}", code="shares_total_not_100")

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[str, int]]) -> "FeeSetup":
        return cls(recipients=tuple(r for r, _ in pairs), shares=tuple(s for _, s in pairs))


@dataclass(frozen=True)
class FeeConfig:
    """
    Consistent snapshot read by every fee computation.

    `setup` stays None until the owner configures recipients; quotes that
    produce a non-zero fee are rejected until then.
    """

    parameters: FeeParameters = field(default_factory=FeeParameters)
    setup: Optional[FeeSetup] = None
    version: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.parameters, FeeParameters):
            raise TypeError("parameters must be a FeeParameters")
        if self.setup is not None and not isinstance(self.setup, FeeSetup):
            raise TypeError("setup must be a FeeSetup")
        if not isinstance(self.version, int) or isinstance(self.version, bool) or self.version < 0:
            raise ValueError(f"version must be a non-negative int: {self.version}")

    def with_parameters(self, parameters: FeeParameters) -> "FeeConfig":
        return replace(self, parameters=parameters, version=self.version + 1)

    def with_setup(self, setup: FeeSetup) -> "FeeConfig":
        return replace(self, setup=setup, version=self.version + 1)
