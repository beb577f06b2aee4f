"""
Fee configuration files (YAML).

Format:

    parameters:
      deposit_fee_scale: "0.18"          # decimal string, or a raw int (1e18 = 1.0)
      deposit_fee_ratio_scale: "0.99"
      redemption_fee_shift: "0.1"
    setup:
      recipients: ["0xaaa...", "0xbbb..."]
      shares: [60, 40]
    pool:                                # optional, used by tools/fee_quote.py
      kind: token
      pool_id: demo
      balances: {"0xasset": 500000000000000000000}

Omitted parameters keep their defaults. `FEECURVE_CONFIG` names the file read
when `load_fee_config()` is called without a path.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .core.errors import FeeConfigError
from .core.fixed_point import format_fixed, parse_fixed
from .state.params import PARAM_NAMES, FeeConfig, FeeParameters, FeeSetup
from .state.pools import pool_from_dict


CONFIG_ENV_VAR = "FEECURVE_CONFIG"
_TOP_LEVEL_KEYS = ("parameters", "setup", "pool")

PathLike = Union[str, os.PathLike]


def _load_mapping(path: Path) -> Mapping[str, Any]:
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise FeeConfigError(f"invalid YAML in {path}: {exc}", code="invalid_config") from exc
    if obj is None:
        return {}
    if not isinstance(obj, Mapping):
        raise FeeConfigError(f"config root must be a mapping: {path}", code="invalid_config")
    for key in obj:
        if key not in _TOP_LEVEL_KEYS:
            raise FeeConfigError(f"unknown config section: {key!r}", code=f"invalid_param:{key}")
    return obj


def parameters_from_mapping(obj: Optional[Mapping[str, Any]]) -> FeeParameters:
    raw: dict[str, int] = {}
    for key, value in (obj or {}).items():
        if key not in PARAM_NAMES:
            raise FeeConfigError(f"unknown fee parameter: {key!r}", code=f"invalid_param:{key}")
        try:
            raw[key] = parse_fixed(value)
        except (TypeError, ValueError) as exc:
            raise FeeConfigError(f"invalid value for {key}: {exc}", code=f"invalid_param:{key}") from exc
    return FeeParameters(**raw)


def setup_from_mapping(obj: Optional[Mapping[str, Any]]) -> Optional[FeeSetup]:
    if not obj:
        return None
    recipients = obj.get("recipients")
    shares = obj.get("shares")
    if not isinstance(recipients, list) or not isinstance(shares, list):
        raise FeeConfigError("setup.recipients and setup.shares must be lists", code="invalid_param:setup")
    return FeeSetup(recipients=tuple(recipients), shares=tuple(shares))


def resolve_config_path(path: Optional[PathLike] = None) -> Path:
    chosen = path if path is not None else os.getenv(CONFIG_ENV_VAR)
    if not chosen:
        raise FeeConfigError(f"no config path given and {CONFIG_ENV_VAR} is not set", code="invalid_config")
    return Path(chosen)


def load_fee_config(path: Optional[PathLike] = None) -> FeeConfig:
    """Load parameters + recipient setup from YAML."""
    config, _pool = load_fee_config_and_pool(path)
    return config


def load_fee_config_and_pool(path: Optional[PathLike] = None) -> Tuple[FeeConfig, Any]:
    """Like `load_fee_config`, plus the optional `pool:` section (None when absent)."""
    obj = _load_mapping(resolve_config_path(path))
    config = FeeConfig(
        parameters=parameters_from_mapping(obj.get("parameters")),
        setup=setup_from_mapping(obj.get("setup")),
    )
    pool_obj = obj.get("pool")
    if pool_obj is None:
        return config, None
    try:
        pool = pool_from_dict(pool_obj)
    except (TypeError, ValueError) as exc:
        raise FeeConfigError(f"invalid pool section: {exc}", code="invalid_param:pool") from exc
    return config, pool


def dump_fee_config(config: FeeConfig, path: PathLike) -> None:
    """Write `config` in the format read by `load_fee_config` (decimal strings)."""
    out: dict[str, Any] = {
        "parameters": {name: format_fixed(v) for name, v in config.parameters.to_dict().items()},
    }
    if config.setup is not None:
        out["setup"] = {"recipients": list(config.setup.recipients), "shares": list(config.setup.shares)}
    Path(path).write_text(yaml.safe_dump(out, sort_keys=True), encoding="utf-8")
