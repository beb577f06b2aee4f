"""Exception types for the fee engine.

Every error carries a stable ``code`` so callers can tell a hard rejection
("operation not permitted in this pool state") from configuration mistakes.

``FeeInvariantError`` derives from ``AssertionError``: it signals a broken
curve configuration, not a caller error, and must not be caught by handlers
that deal with ordinary ``ValueError`` rejections.
"""

from __future__ import annotations


class FeeCalculatorError(Exception):
    """Root of every error raised by the fee engine."""

    default_code = "fee_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        self.code = code or self.default_code
        super().__init__(message)


class FeeConfigError(FeeCalculatorError, ValueError):
    """Rejected configuration update (parameter bound or fee setup shape)."""

    default_code = "invalid_config"


class FeeDomainError(FeeCalculatorError, ValueError):
    """Fee request outside the domain of the curves (rejects the whole call)."""

    default_code = "invalid_request"


class FeeInvariantError(FeeCalculatorError, AssertionError):
    """Internal consistency failure, e.g. a computed fee above the amount."""

    default_code = "fee_exceeds_amount"


class NotOwnerError(FeeCalculatorError, PermissionError):
    """Configuration mutation attempted by someone other than the owner."""

    default_code = "not_owner"


class UnknownAssetError(FeeCalculatorError, KeyError):
    """Malformed asset reference for a pool adapter."""

    default_code = "unknown_asset"

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else self.code


class FixedPointDomainError(FeeCalculatorError, ValueError):
    """Fixed-point operation outside its mathematical domain."""

    default_code = "fixed_point_domain"


class FixedPointOverflowError(FeeCalculatorError, OverflowError):
    """Fixed-point result outside the signed 59.18 range."""

    default_code = "overflow"
