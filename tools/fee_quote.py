#!/usr/bin/env python3
"""
Quote deposit/redemption fees from a YAML fee config.

Examples:
    python tools/fee_quote.py deposit --config fees.yaml --asset 0xabc --amount 100
    python tools/fee_quote.py redeem --amount 1 --current 1 --total 1000000 --raw
    python tools/fee_quote.py redeem --config fees.yaml --asset 0xa --asset 0xb --amount 5 --amount 7

Amounts are whole units unless `--raw` is given (then 1e18 = 1 unit).
Prints a JSON object; exits 2 on a rejected quote.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from feecurve.config import CONFIG_ENV_VAR, load_fee_config_and_pool
from feecurve.core.calculator import FeeCalculator
from feecurve.core.errors import FeeCalculatorError
from feecurve.core.fixed_point import format_fixed, parse_fixed, to_fixed
from feecurve.log import get_logger, setup_logging
from feecurve.state.params import FeeConfig

logger = get_logger(__name__)

CLI_OWNER = "fee-quote-cli"


def _amount(text: str, raw: bool) -> int:
    if raw:
        return int(text)
    if "." in text:
        return parse_fixed(text)
    return to_fixed(int(text))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Quote dominance-based pool fees.")
    ap.add_argument("operation", choices=("deposit", "redeem"))
    ap.add_argument("--config", default=None, help="YAML fee config (defaults to $FEECURVE_CONFIG when set)")
    ap.add_argument("--asset", action="append", default=[], help="asset reference in the config's pool (repeatable for redeem)")
    ap.add_argument("--amount", action="append", required=True, help="amount (repeatable for batch redeem)")
    ap.add_argument("--current", default=None, help="asset balance in the pool (instead of --asset)")
    ap.add_argument("--total", default=None, help="pool total balance (instead of --asset)")
    ap.add_argument("--raw", action="store_true", help="amounts/balances are raw 18-decimal ints")
    ap.add_argument("--log-level", default=None)
    return ap


def run(args: argparse.Namespace) -> dict:
    config = FeeConfig()
    pool = None
    config_path = args.config or os.getenv(CONFIG_ENV_VAR)
    if config_path:
        config, pool = load_fee_config_and_pool(config_path)

    calc = FeeCalculator(owner=CLI_OWNER, parameters=config.parameters, setup=config.setup)
    if config.setup is None:
        calc.fee_setup([CLI_OWNER], [100], caller=CLI_OWNER)

    amounts = [_amount(a, args.raw) for a in args.amount]

    if args.current is not None or args.total is not None:
        if args.current is None or args.total is None or len(amounts) != 1:
            raise SystemExit("--current and --total must be given together with a single --amount")
        current = _amount(args.current, args.raw)
        total = _amount(args.total, args.raw)
        if args.operation == "deposit":
            dist = calc.quote_deposit(amounts[0], current, total)
        else:
            dist = calc.quote_redemption(amounts[0], current, total)
    else:
        if pool is None:
            raise SystemExit("--asset requires a config with a pool: section")
        if not args.asset:
            raise SystemExit("--asset is required when quoting against a pool")
        if args.operation == "deposit":
            if len(args.asset) != 1 or len(amounts) != 1:
                raise SystemExit("deposit takes exactly one --asset and one --amount")
            dist = calc.calculate_deposit_fees(args.asset[0], pool, amounts[0])
        elif len(args.asset) == 1 and len(amounts) == 1:
            dist = calc.calculate_redemption_fees(args.asset[0], pool, amounts[0])
        else:
            dist = calc.calculate_batch_redemption_fees(args.asset, pool, amounts)

    return {
        "operation": args.operation,
        "amount": sum(amounts),
        "fee": dist.total,
        "fee_units": format_fixed(dist.total),
        "distribution": [{"recipient": r, "amount": a} for r, a in dist.as_pairs()],
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)
    try:
        out = run(args)
    except FeeCalculatorError as exc:
        logger.warning("fee_quote_failed", code=exc.code, error=str(exc))
        print(json.dumps({"error": exc.code, "message": str(exc)}))
        return 2
    print(json.dumps(out, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
