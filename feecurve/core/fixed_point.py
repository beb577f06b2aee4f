"""Signed 18-decimal fixed-point arithmetic (SD59x18 semantics).

Every value is a plain Python int holding `real * 10**18`.

Rounding rules (all results are consensus-critical):
- `mul` / `div` operate on absolute values with floor division and then
  re-apply the sign, so results truncate toward zero.
- `log2` uses the iterative-squaring approximation (59 fractional rounds).
- `log10` returns exact results for powers of ten and otherwise divides
  `log2(x)` by a truncated `log2(10)` constant, again truncating toward zero.

Downstream tests assert exact integers, so do not "improve" these rules.
"""

from __future__ import annotations

from .errors import FixedPointDomainError, FixedPointOverflowError


UNIT: int = 10**18
HALF_UNIT: int = 5 * 10**17
DOUBLE_UNIT: int = 2 * 10**18
UNIT_SQUARED: int = 10**36
DECIMALS: int = 18

# log2(10) truncated to 18 decimals.
LOG2_10: int = 3_321928094887362347

MAX_SD59x18: int = 2**255 - 1
MIN_SD59x18: int = -(2**255)

# Largest power of ten representable as a raw value.
_MAX_POW10_EXP = 76
_POW10_LOG10 = {10**k: (k - DECIMALS) * UNIT for k in range(_MAX_POW10_EXP + 1)}


def _require_int(name: str, v: object) -> int:
    if not isinstance(v, int) or isinstance(v, bool):
        raise TypeError(f"{name} must be an int")
    return v


def _trunc_div(n: int, d: int) -> int:
    """Integer division truncating toward zero (Solidity `/`)."""
    q = abs(n) // abs(d)
    return q if (n >= 0) == (d > 0) else -q


def _check_range(x: int, op: str) -> int:
    if x > MAX_SD59x18 or x < MIN_SD59x18:
        raise FixedPointOverflowError(f"{op} result out of SD59x18 range: {x}")
    return x


# -- Conversions -------------------------------------------------------------

def to_fixed(whole_units: int) -> int:
    """Whole units -> raw fixed-point (`3` -> `3e18`)."""
    return _check_range(_require_int("whole_units", whole_units) * UNIT, "to_fixed")


def into_uint(x: int) -> int:
    """Raw fixed-point -> unsigned raw amount. Negative values are rejected."""
    _require_int("x", x)
    if x < 0:
        raise FixedPointDomainError(f"cannot convert negative value to uint: {x}", code="into_uint_underflow")
    return x


def parse_fixed(value: object) -> int:
    """
    Parse a configuration value into a raw fixed-point int.

    - `int` values are taken as raw units (already scaled).
    - `str` values are decimal literals (`"0.18"`, `"-1.5"`, `"2"`) and are
      scaled exactly, without going through float.
    """
    if isinstance(value, bool):
        raise TypeError("fixed-point value must be an int or decimal string, not bool")
    if isinstance(value, int):
        return _check_range(value, "parse_fixed")
    if not isinstance(value, str):
        raise TypeError(f"fixed-point value must be an int or decimal string, got {type(value).__name__}")

    text = value.strip().replace("_", "")
    if not text:
        raise ValueError("empty fixed-point literal")
    negative = text.startswith("-")
    if text[0] in "+-":
        text = text[1:]
    whole, _, frac = text.partition(".")
    if not whole:
        whole = "0"
    if not whole.isdigit() or (frac and not frac.isdigit()):
        raise ValueError(f"invalid fixed-point literal: {value!r}")
    if len(frac) > DECIMALS:
        raise ValueError(f"fixed-point literal has more than {DECIMALS} decimals: {value!r}")

    raw = int(whole) * UNIT + int(frac.ljust(DECIMALS, "0") or "0")
    return _check_range(-raw if negative else raw, "parse_fixed")


def format_fixed(x: int) -> str:
    """Raw fixed-point -> shortest exact decimal string (`18e16` -> `"0.18"`)."""
    _require_int("x", x)
    sign = "-" if x < 0 else ""
    whole, frac = divmod(abs(x), UNIT)
    if frac == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{str(frac).rjust(DECIMALS, '0').rstrip('0')}"


# -- Arithmetic --------------------------------------------------------------

def mul(x: int, y: int) -> int:
    """Fixed-point product: `sign * floor(|x| * |y| / 1e18)`."""
    _require_int("x", x)
    _require_int("y", y)
    if x == MIN_SD59x18 or y == MIN_SD59x18:
        raise FixedPointOverflowError("mul input too small")
    result_abs = (abs(x) * abs(y)) // UNIT
    if result_abs > MAX_SD59x18:
        raise FixedPointOverflowError(f"mul overflow: {x} * {y}")
    return result_abs if (x >= 0) == (y >= 0) else -result_abs


def div(x: int, y: int) -> int:
    """Fixed-point quotient: `sign * floor(|x| * 1e18 / |y|)`."""
    _require_int("x", x)
    _require_int("y", y)
    if y == 0:
        raise FixedPointDomainError("division by zero", code="division_by_zero")
    if x == MIN_SD59x18 or y == MIN_SD59x18:
        raise FixedPointOverflowError("div input too small")
    result_abs = (abs(x) * UNIT) // abs(y)
    if result_abs > MAX_SD59x18:
        raise FixedPointOverflowError(f"div overflow: {x} / {y}")
    return result_abs if (x >= 0) == (y >= 0) else -result_abs


# -- Logarithms --------------------------------------------------------------

def log2(x: int) -> int:
    """Binary logarithm by iterative squaring. Requires `x > 0`."""
    _require_int("x", x)
    if x <= 0:
        raise FixedPointDomainError(f"log input too small: {x}", code="log_input_too_small")

    if x >= UNIT:
        sign = 1
    else:
        sign = -1
        x = UNIT_SQUARED // x

    # Integer part: most significant bit of the whole-unit component.
    n = (x // UNIT).bit_length() - 1
    result = n * UNIT

    y = x >> n
    if y == UNIT:
        return result * sign

    delta = HALF_UNIT
    while delta > 0:
        y = (y * y) // UNIT
        if y >= DOUBLE_UNIT:
            result += delta
            y >>= 1
        delta >>= 1

    return result * sign


def log10(x: int) -> int:
    """Common logarithm. Exact for powers of ten, otherwise `log2(x) / log2(10)`."""
    _require_int("x", x)
    if x < 0:
        raise FixedPointDomainError(f"log input too small: {x}", code="log_input_too_small")
    exact = _POW10_LOG10.get(x)
    if exact is not None:
        return exact
    return _trunc_div(log2(x) * UNIT, LOG2_10)
