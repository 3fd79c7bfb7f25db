from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Quality:
    """Pattern quality score, always within 1..100."""

    value: int

    MAX = 100

    def __post_init__(self) -> None:
        v = int(self.value)
        if not (1 <= v <= self.MAX):
            raise ValueError(f"quality must be within 1..{self.MAX}, got {self.value!r}")
        object.__setattr__(self, "value", v)

    @classmethod
    def try_new(cls, score: int) -> Quality | None:
        # 0 means "not detected"; the engine's sign only carries direction.
        s = abs(int(score))
        if s == 0:
            return None
        return cls(min(s, cls.MAX))


@dataclass(frozen=True)
class Signal:
    """A detected pattern at one candle. Created by the library, not by callers."""

    quality: Quality

    @classmethod
    def try_from_quality(cls, score: int) -> Signal | None:
        q = Quality.try_new(score)
        if q is None:
            return None
        return cls(q)
