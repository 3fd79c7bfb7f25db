from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import numpy as np

from cdlkit.engines.base import EngineContext, EngineOutput


class Polarity(str, Enum):
    Bullish = "bullish"
    Bearish = "bearish"


def apply_directional_filter(values: np.ndarray, count: int, polarity: Polarity) -> np.ndarray:
    """Collapse signed strengths to a one-sided 0/100 signal, in place.

    Positive values are bullish, negative bearish. Only `values[:count]` is
    rewritten; the rest of the buffer is left alone.
    """
    n = max(0, min(int(count), len(values)))
    window = values[:n]
    if polarity == Polarity.Bullish:
        hit = window > 0
    else:
        hit = window < 0
    window[:] = np.where(hit, 100, 0)
    return values


class Primitive(ABC):
    """One calculation primitive: (start, end, O, H, L, C) -> EngineOutput."""

    @abstractmethod
    def __call__(
        self,
        ctx: EngineContext,
        start_index: int,
        end_index: int,
        opens: np.ndarray,
        highs: np.ndarray,
        lows: np.ndarray,
        closes: np.ndarray,
    ) -> EngineOutput:
        raise NotImplementedError


@dataclass(frozen=True)
class Direct(Primitive):
    function: str

    def __call__(
        self,
        ctx: EngineContext,
        start_index: int,
        end_index: int,
        opens: np.ndarray,
        highs: np.ndarray,
        lows: np.ndarray,
        closes: np.ndarray,
    ) -> EngineOutput:
        return ctx.backend.call(self.function, start_index, end_index, opens, highs, lows, closes)


@dataclass(frozen=True)
class PenetrationAdapted(Primitive):
    """Injects a penetration factor taken from the engine's settings."""

    function: str
    factor: str  # Settings attribute name

    def __call__(
        self,
        ctx: EngineContext,
        start_index: int,
        end_index: int,
        opens: np.ndarray,
        highs: np.ndarray,
        lows: np.ndarray,
        closes: np.ndarray,
    ) -> EngineOutput:
        penetration = float(getattr(ctx.settings, self.factor))
        return ctx.backend.call(
            self.function,
            start_index,
            end_index,
            opens,
            highs,
            lows,
            closes,
            penetration=penetration,
        )


@dataclass(frozen=True)
class DirectionalFilter(Primitive):
    """Bullish or bearish view over a bidirectional primitive."""

    base: Primitive
    polarity: Polarity

    def __call__(
        self,
        ctx: EngineContext,
        start_index: int,
        end_index: int,
        opens: np.ndarray,
        highs: np.ndarray,
        lows: np.ndarray,
        closes: np.ndarray,
    ) -> EngineOutput:
        out = self.base(ctx, start_index, end_index, opens, highs, lows, closes)
        # A failed call's buffer is not to be interpreted.
        if not out.ok:
            return out
        values = np.array(out.values, dtype=np.int32, copy=True)
        apply_directional_filter(values, out.count, self.polarity)
        return EngineOutput(
            ret_code=out.ret_code,
            begin_index=out.begin_index,
            count=out.count,
            values=values,
            message=out.message,
        )
