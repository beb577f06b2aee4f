from __future__ import annotations

import json
import logging

import pytest

from feecurve.log import get_logger, setup_logging


def test_json_lines_on_stderr(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_JSON", "1")
    setup_logging(level="DEBUG")
    get_logger("feecurve.test").info("fee_quote", fee=7)
    line = capsys.readouterr().err.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "fee_quote"
    assert entry["fee"] == 7
    assert entry["level"] == "info"
    assert entry["logger"] == "feecurve.test"


def test_level_from_environment_wins(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.delenv("LOG_JSON", raising=False)
    setup_logging(level="DEBUG")
    assert logging.getLogger().level == logging.WARNING
    log = get_logger("feecurve.test")
    log.info("hidden")
    log.warning("shown")
    err = capsys.readouterr().err
    assert "shown" in err
    assert "hidden" not in err


def test_unknown_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    with pytest.raises(ValueError):
        setup_logging(level="chatty")
