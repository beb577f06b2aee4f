"""
Logging setup (structlog on top of the standard library handlers).

The pure kernels in `feecurve.core` never log; the calculator facade and the
tools do, through `get_logger(__name__)`.

Environment:
- `LOG_LEVEL`: DEBUG/INFO/WARNING/ERROR (default INFO)
- `LOG_JSON`: "1"/"true" renders JSON lines instead of the console renderer
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import structlog


_TRUTHY = ("1", "true", "yes", "on")


def setup_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """Configure structlog + stdlib logging. Environment variables win over arguments."""
    level_name = os.getenv("LOG_LEVEL", level or "INFO").upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        raise ValueError(f"unknown log level: {level_name}")

    json_env = os.getenv("LOG_JSON")
    use_json = json_env.lower() in _TRUTHY if json_env is not None else bool(json)

    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
