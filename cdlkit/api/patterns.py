from __future__ import annotations

from enum import Enum


class Pattern(str, Enum):
    # Single directional
    Hammer = "hammer"
    InvertedHammer = "inverted_hammer"
    ThreeWhiteSoldiers = "three_white_soldiers"
    MorningStar = "morning_star"
    PiercingLine = "piercing_line"
    DragonFly = "dragonfly_doji"

    # Bearish reversal
    HangingMan = "hanging_man"
    ShootingStar = "shooting_star"
    ThreeBlackCrows = "three_black_crows"
    EveningStar = "evening_star"
    DarkCloudCover = "dark_cloud_cover"
    Gravestone = "gravestone_doji"

    # Indecision
    Doji = "doji"
    SpinningTop = "spinning_top"

    # Bullish side of bidirectional primitives
    BullishEngulfing = "bullish_engulfing"
    BullishHarami = "bullish_harami"
    BullishHaramiCross = "bullish_harami_cross"
    BullishMarubozu = "bullish_marubozu"
    BullishLongLine = "bullish_long_line"
    BullishShortLine = "bullish_short_line"
    BullishKicking = "bullish_kicking"

    # Bearish side of bidirectional primitives
    BearishEngulfing = "bearish_engulfing"
    BearishHarami = "bearish_harami"
    BearishHaramiCross = "bearish_harami_cross"
    BearishMarubozu = "bearish_marubozu"
    BearishLongLine = "bearish_long_line"
    BearishShortLine = "bearish_short_line"
    BearishKicking = "bearish_kicking"

    @classmethod
    def parse(cls, name: Pattern | str) -> Pattern:
        """Accept a member, its value ("bullish_engulfing") or its name ("BullishEngulfing")."""
        if isinstance(name, cls):
            return name
        key = str(name or "").strip()
        try:
            return cls(key)
        except ValueError:
            pass
        if key in cls.__members__:
            return cls.__members__[key]
        raise ValueError(f"unknown candlestick pattern: {name!r}")
