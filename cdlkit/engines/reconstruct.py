from __future__ import annotations

from typing import Sequence

import numpy as np
from loguru import logger

from cdlkit.api.signal import Signal


def reconstruct(
    begin_index: int,
    count: int,
    compact_values: Sequence[int] | np.ndarray,
    input_length: int,
) -> list[Signal | None]:
    """Expand the engine's compact output window into one slot per input candle.

    Slots outside `begin_index .. begin_index + count - 1` stay empty. A window
    that does not fit the destination is dropped entirely.
    """
    n = max(0, int(input_length))
    dense = np.zeros(n, dtype=np.int32)

    count = int(count)
    begin = int(begin_index)
    if count > 0:
        end = begin + count
        if begin >= 0 and end <= n and len(compact_values) >= count:
            dense[begin:end] = np.asarray(compact_values[:count], dtype=np.int32)
        else:
            logger.warning(
                "Engine output window [{b}, {e}) does not fit {n} candles (values={v}); skipping copy",
                b=begin,
                e=end,
                n=n,
                v=len(compact_values),
            )

    return [Signal.try_from_quality(int(x)) for x in dense]
