import os
import sys

import numpy as np
import pytest

# Ensure repository root is on sys.path so `import cdlkit` works when running pytest.
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture(autouse=True)
def _isolate_engine(monkeypatch):
    """Give every test a fresh configuration gate and engine singleton.

    Both are process-wide and set-once; without this, the first test to touch
    them would fix the settings for the whole session. TA-Lib's own
    thresholds stay latched by the backend, so real-engine tests keep to
    the default Settings.
    """

    from cdlkit.engines.gate import ConfigurationGate, LazyEngine
    from cdlkit.engines.talib import engine as talib_engine

    gate = ConfigurationGate()
    monkeypatch.setattr(talib_engine, "_gate", gate)
    monkeypatch.setattr(talib_engine, "_engine", LazyEngine(lambda s: talib_engine.TaLibEngine(s), gate))
    yield


class FakeBackend:
    """In-memory CandleBackend: returns canned raw outputs per TA-Lib function."""

    def __init__(self, outputs=None, lookback=0, fail=None):
        self.outputs = dict(outputs or {})
        self.lookback = int(lookback)
        self.fail = dict(fail or {})
        self.settings_calls = []
        self.calls = []

    def set_candle_setting(self, setting, range_type, period, factor):
        self.settings_calls.append((setting, range_type, period, factor))

    def call(self, function, start_index, end_index, opens, highs, lows, closes, **params):
        from cdlkit.engines.base import EngineOutput, RetCode

        self.calls.append((function, start_index, end_index, len(opens), params))
        if function in self.fail:
            return EngineOutput.failure(self.fail[function], f"{function} failed")
        n = end_index - start_index + 1
        raw = np.asarray(self.outputs.get(function, [0] * n), dtype=np.int32)
        values = raw[self.lookback :].copy()
        return EngineOutput(
            ret_code=RetCode.SUCCESS,
            begin_index=start_index + self.lookback,
            count=len(values),
            values=values,
        )


@pytest.fixture
def fake_backend():
    return FakeBackend()
