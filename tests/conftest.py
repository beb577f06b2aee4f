from __future__ import annotations

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    # Drop handlers installed by feecurve.log.setup_logging.
    for h in list(root.handlers):
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(h)
    root.setLevel(level)
