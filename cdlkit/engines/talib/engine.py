from __future__ import annotations

from typing import Sequence

import numpy as np
from loguru import logger

from cdlkit.api.candles import SimpleCandle
from cdlkit.api.patterns import Pattern
from cdlkit.api.settings import Settings
from cdlkit.api.signal import Signal
from cdlkit.core.errors import CalculationError
from cdlkit.engines.base import CandleBackend, CandleSettingType, RangeType
from cdlkit.engines.dispatch import dispatch
from cdlkit.engines.gate import ConfigurationGate, LazyEngine
from cdlkit.engines.reconstruct import reconstruct
from cdlkit.utils.perf import timed_analysis

# (setting, range type, Settings attribute)
_CANDLE_SETTINGS: list[tuple[CandleSettingType, RangeType, str]] = [
    (CandleSettingType.BodyLong, RangeType.RealBody, "body_long_factor"),
    (CandleSettingType.BodyVeryLong, RangeType.RealBody, "body_very_long_factor"),
    (CandleSettingType.BodyShort, RangeType.RealBody, "body_short_factor"),
    (CandleSettingType.BodyDoji, RangeType.HighLow, "body_doji_factor"),
    (CandleSettingType.ShadowLong, RangeType.RealBody, "shadow_long_factor"),
    (CandleSettingType.ShadowVeryLong, RangeType.RealBody, "shadow_very_long_factor"),
    (CandleSettingType.ShadowShort, RangeType.HighLow, "shadow_short_factor"),
    (CandleSettingType.ShadowVeryShort, RangeType.HighLow, "shadow_very_short_factor"),
    (CandleSettingType.Near, RangeType.RealBody, "near_factor"),
    (CandleSettingType.Far, RangeType.RealBody, "far_factor"),
    (CandleSettingType.Equal, RangeType.RealBody, "equal_factor"),
]


def _default_backend() -> CandleBackend:
    from cdlkit.engines.talib.backend import TaLibBackend

    return TaLibBackend()


class TaLibEngine:
    """Pattern engine over a TA-Lib style backend.

    Construction pushes every Settings threshold into the backend; afterwards
    the engine is read-only and safe to share between threads.
    """

    def __init__(self, settings: Settings | None = None, backend: CandleBackend | None = None) -> None:
        self._settings = settings or Settings()
        self._backend = backend or _default_backend()
        self._apply_settings()
        logger.info("Candlestick engine ready: {s}", s=self._settings.model_dump())

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def backend(self) -> CandleBackend:
        return self._backend

    def _apply_settings(self) -> None:
        s = self._settings
        for setting, range_type, attr in _CANDLE_SETTINGS:
            self._backend.set_candle_setting(setting, range_type, int(s.period), float(getattr(s, attr)))

    @timed_analysis("engine.pattern")
    def pattern(self, pattern: Pattern, candles: Sequence[SimpleCandle]) -> list[Signal | None]:
        n = len(candles)
        if n == 0:
            return []

        opens = np.fromiter((c.open for c in candles), dtype=np.float64, count=n)
        highs = np.fromiter((c.high for c in candles), dtype=np.float64, count=n)
        lows = np.fromiter((c.low for c in candles), dtype=np.float64, count=n)
        closes = np.fromiter((c.close for c in candles), dtype=np.float64, count=n)

        out = dispatch(pattern)(self, 0, n - 1, opens, highs, lows, closes)
        if not out.ok:
            logger.warning("{p} failed on {n} candles: {d}", p=pattern.name, n=n, d=out.describe())
            raise CalculationError(out.describe())

        return reconstruct(out.begin_index, out.count, out.values, n)


_gate = ConfigurationGate()
_engine: LazyEngine[TaLibEngine] = LazyEngine(lambda s: TaLibEngine(s), _gate)


def configure(settings: Settings) -> None:
    """Register engine settings for this process.

    Call once, at startup, before the first analysis call and before
    starting threads that analyse. Raises AlreadyConfigured on any later
    call. Without it, Settings() defaults are used.
    """
    _gate.set(settings)


def instance() -> TaLibEngine:
    return _engine.get()
