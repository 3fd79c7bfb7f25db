"""Public entry points.

    from cdlkit.api.cdl import Pattern, SimpleCandle, cdl, configure

    configure(Settings(period=14))          # optional, once, at startup
    signals = cdl().pattern(Pattern.Hammer, candles)

`signals` has one slot per input candle: a Signal where the pattern was
found, None elsewhere.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from cdlkit.api.candles import Candle, SimpleCandle, to_simple_candles
from cdlkit.api.patterns import Pattern
from cdlkit.api.settings import Settings
from cdlkit.api.signal import Quality, Signal
from cdlkit.core.errors import AlreadyConfigured, CalculationError, CdlError, InvalidCandle
from cdlkit.engines.talib.engine import configure, instance
from cdlkit.utils.perf import perf_span

__all__ = [
    "AlreadyConfigured",
    "CalculationError",
    "Candle",
    "Cdl",
    "CdlError",
    "InvalidCandle",
    "Pattern",
    "Quality",
    "Settings",
    "Signal",
    "SimpleCandle",
    "cdl",
    "configure",
]


class PatternEngine(Protocol):
    def pattern(self, pattern: Pattern, candles: Sequence[SimpleCandle]) -> list[Signal | None]: ...


class Cdl:
    """Candlestick pattern analyzer. Obtain one from `cdl()`."""

    def __init__(self, engine: PatternEngine) -> None:
        self._engine = engine

    def pattern(self, pattern: Pattern | str, candles: Iterable[Candle | Mapping[str, Any]]) -> list[Signal | None]:
        """Scan `candles` for one pattern.

        Raises InvalidCandle if any candle is inconsistent and CalculationError
        if the engine fails; nothing is returned in either case.
        """
        p = Pattern.parse(pattern)
        cs = to_simple_candles(candles)
        with perf_span("cdl.pattern", pattern=p.value, n=len(cs)):
            return self._engine.pattern(p, cs)

    def scan(
        self,
        candles: Iterable[Candle | Mapping[str, Any]],
        patterns: Iterable[Pattern | str] | None = None,
    ) -> dict[Pattern, list[Signal | None]]:
        """Run several patterns over one series (all of them by default)."""
        wanted = [Pattern.parse(p) for p in patterns] if patterns is not None else list(Pattern)
        cs = to_simple_candles(candles)
        out: dict[Pattern, list[Signal | None]] = {}
        with perf_span("cdl.scan", patterns=len(wanted), n=len(cs)):
            for p in wanted:
                out[p] = self._engine.pattern(p, cs)
        return out

    def detected(self, pattern: Pattern | str, candles: Iterable[Candle | Mapping[str, Any]]) -> list[tuple[int, Signal]]:
        return [(i, s) for i, s in enumerate(self.pattern(pattern, candles)) if s is not None]


def cdl() -> Cdl:
    """Analyzer bound to the process-wide engine (built on first call)."""
    return Cdl(instance())
