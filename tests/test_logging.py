from __future__ import annotations

import sys

import pytest
from loguru import logger

from cdlkit.api.candles import SimpleCandle
from cdlkit.api.patterns import Pattern
from cdlkit.core.settings import settings as runtime_settings
from cdlkit.engines.talib.engine import TaLibEngine
from cdlkit.utils.logger import configure_logging
from cdlkit.utils.perf import perf_span, timed_analysis

from conftest import FakeBackend


@pytest.fixture
def messages():
    out: list[str] = []
    sink_id = logger.add(lambda m: out.append(str(m)), level="DEBUG", format="{level} {message}")
    yield out
    logger.remove(sink_id)


def test_perf_span_logs_when_always(monkeypatch, messages):
    monkeypatch.setattr(runtime_settings, "PERF_LOG_ALWAYS", True)
    monkeypatch.setattr(runtime_settings, "PERF_LOG_SLOW_MS", 10_000)
    with perf_span("unit.block", n=3, skipped=None):
        pass
    line = next(m for m in messages if "PERF unit.block" in m)
    assert line.startswith("DEBUG")
    assert " ok:" in line
    assert "'n': 3" in line
    assert "skipped" not in line


def test_perf_span_quiet_for_fast_blocks(monkeypatch, messages):
    monkeypatch.setattr(runtime_settings, "PERF_LOG_ALWAYS", False)
    monkeypatch.setattr(runtime_settings, "PERF_LOG_SLOW_MS", 10_000)
    with perf_span("unit.fast"):
        pass
    assert not any("unit.fast" in m for m in messages)


def test_perf_span_reraises_and_marks_error(monkeypatch, messages):
    monkeypatch.setattr(runtime_settings, "PERF_LOG_ALWAYS", True)
    with pytest.raises(KeyError):
        with perf_span("unit.boom"):
            raise KeyError("x")
    assert any("PERF unit.boom err" in m for m in messages)


def test_timed_analysis_tags_pattern_and_size(monkeypatch, messages):
    monkeypatch.setattr(runtime_settings, "PERF_LOG_ALWAYS", True)

    class Analyzer:
        @timed_analysis("unit.analysis")
        def pattern(self, pattern, candles):
            return len(candles)

    assert Analyzer().pattern(Pattern.Hammer, [1, 2, 3]) == 3
    line = next(m for m in messages if "PERF unit.analysis ok" in m)
    assert "'pattern': 'hammer'" in line
    assert "'n': 3" in line


def test_engine_span_names_the_pattern(monkeypatch, messages):
    monkeypatch.setattr(runtime_settings, "PERF_LOG_ALWAYS", True)
    candles = [SimpleCandle.try_new(10.0, 10.5, 11.0, 9.0) for _ in range(4)]

    TaLibEngine(backend=FakeBackend()).pattern(Pattern.Doji, candles)

    line = next(m for m in messages if "PERF engine.pattern ok" in m)
    assert "'pattern': 'doji'" in line
    assert "'n': 4" in line


def test_perf_disabled(monkeypatch, messages):
    monkeypatch.setattr(runtime_settings, "PERF_LOG_ENABLED", False)
    monkeypatch.setattr(runtime_settings, "PERF_LOG_ALWAYS", True)
    with perf_span("unit.off"):
        pass
    assert not any("unit.off" in m for m in messages)


def test_configure_logging_replaces_sinks(monkeypatch):
    monkeypatch.setattr(runtime_settings, "LOG_JSON", True)
    configure_logging("debug")
    try:
        logger.debug("configured")
        logger.complete()
    finally:
        logger.remove()
        logger.add(sys.stderr)
