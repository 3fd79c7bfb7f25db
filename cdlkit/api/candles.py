from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, SupportsFloat

from cdlkit.core.errors import InvalidCandle


class Candle(Protocol):
    """Anything with open/close/high/low prices convertible to float.

    Plain mappings with the same keys are accepted wherever a Candle is.
    """

    @property
    def open(self) -> SupportsFloat: ...

    @property
    def close(self) -> SupportsFloat: ...

    @property
    def high(self) -> SupportsFloat: ...

    @property
    def low(self) -> SupportsFloat: ...


_MISSING = object()


def _price(candle: Any, field: str) -> float:
    if isinstance(candle, Mapping):
        raw = candle.get(field, _MISSING)
    else:
        raw = getattr(candle, field, _MISSING)
    if raw is _MISSING or raw is None:
        raise InvalidCandle(f"missing {field} price")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise InvalidCandle(f"{field} price is not numeric: {raw!r}") from None


def _check(open: float, close: float, high: float, low: float) -> None:
    # First violation wins.
    if high < low:
        raise InvalidCandle("a high price must be greater or equal than a low price")
    if close < low or close > high:
        raise InvalidCandle("a close price must be between a low and a high price")
    if open < low or open > high:
        raise InvalidCandle("an open price must be between a low and a high price")
    # NaN slips through every comparison above.
    if any(math.isnan(x) for x in (open, close, high, low)):
        raise InvalidCandle("prices must not be NaN")


@dataclass(frozen=True)
class SimpleCandle:
    open: float
    close: float
    high: float
    low: float

    def __post_init__(self) -> None:
        prices = {}
        for name in ("open", "close", "high", "low"):
            prices[name] = _price(self, name)
            object.__setattr__(self, name, prices[name])
        _check(**prices)

    @classmethod
    def try_new(cls, open: float, close: float, high: float, low: float) -> SimpleCandle:
        """Build a validated candle; raises InvalidCandle on inconsistent prices."""
        return cls(open=open, close=close, high=high, low=low)

    @classmethod
    def try_from_candle(cls, candle: Candle | Mapping[str, Any]) -> SimpleCandle:
        if isinstance(candle, SimpleCandle):
            return candle
        return cls(
            open=_price(candle, "open"),
            close=_price(candle, "close"),
            high=_price(candle, "high"),
            low=_price(candle, "low"),
        )


def to_simple_candles(candles: Iterable[Candle | Mapping[str, Any]]) -> list[SimpleCandle]:
    out: list[SimpleCandle] = []
    for i, c in enumerate(candles if candles is not None else []):
        try:
            out.append(SimpleCandle.try_from_candle(c))
        except InvalidCandle as e:
            raise InvalidCandle(f"candle #{i}: {e.reason}") from e
    return out
