from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from cdlkit.api.patterns import Pattern
from cdlkit.engines.primitives import Direct, DirectionalFilter, PenetrationAdapted, Polarity, Primitive


def _split(function: str) -> tuple[DirectionalFilter, DirectionalFilter]:
    # Both views share the one raw primitive.
    base = Direct(function)
    return DirectionalFilter(base, Polarity.Bullish), DirectionalFilter(base, Polarity.Bearish)


def _build_table() -> dict[Pattern, Primitive]:
    P = Pattern
    table: dict[Pattern, Primitive] = {
        P.Hammer: Direct("CDLHAMMER"),
        P.InvertedHammer: Direct("CDLINVERTEDHAMMER"),
        P.ThreeWhiteSoldiers: Direct("CDL3WHITESOLDIERS"),
        P.PiercingLine: Direct("CDLPIERCING"),
        P.DragonFly: Direct("CDLDRAGONFLYDOJI"),
        P.HangingMan: Direct("CDLHANGINGMAN"),
        P.ShootingStar: Direct("CDLSHOOTINGSTAR"),
        P.ThreeBlackCrows: Direct("CDL3BLACKCROWS"),
        P.Gravestone: Direct("CDLGRAVESTONEDOJI"),
        P.Doji: Direct("CDLDOJI"),
        P.SpinningTop: Direct("CDLSPINNINGTOP"),
        P.MorningStar: PenetrationAdapted("CDLMORNINGSTAR", "star_penetration_factor"),
        P.EveningStar: PenetrationAdapted("CDLEVENINGSTAR", "star_penetration_factor"),
        P.DarkCloudCover: PenetrationAdapted("CDLDARKCLOUDCOVER", "piercing_penetration_factor"),
    }

    pairs = [
        (P.BullishEngulfing, P.BearishEngulfing, "CDLENGULFING"),
        (P.BullishHarami, P.BearishHarami, "CDLHARAMI"),
        (P.BullishHaramiCross, P.BearishHaramiCross, "CDLHARAMICROSS"),
        (P.BullishMarubozu, P.BearishMarubozu, "CDLMARUBOZU"),
        (P.BullishLongLine, P.BearishLongLine, "CDLLONGLINE"),
        (P.BullishShortLine, P.BearishShortLine, "CDLSHORTLINE"),
        (P.BullishKicking, P.BearishKicking, "CDLKICKING"),
    ]
    for bull, bear, fn in pairs:
        table[bull], table[bear] = _split(fn)

    missing = [p for p in Pattern if p not in table]
    if missing:
        raise RuntimeError(f"dispatch table incomplete: {missing}")
    return table


DISPATCH: Mapping[Pattern, Primitive] = MappingProxyType(_build_table())


def dispatch(pattern: Pattern) -> Primitive:
    return DISPATCH[pattern]
