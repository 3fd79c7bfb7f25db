from __future__ import annotations

import re
import threading
from typing import Any

import numpy as np
import talib
from loguru import logger
from talib import _ta_lib, abstract

from cdlkit.core.errors import AlreadyConfigured, CalculationError
from cdlkit.engines.base import CandleSettingType, EngineOutput, RangeType, RetCode

_ERROR_CODE_RE = re.compile(r"error code (\d+)")

# TA-Lib keeps candle thresholds in process-global C state. The first value
# pushed for a setting is latched; re-pushing the same value is a no-op.
_settings_lock = threading.Lock()
_applied: dict[CandleSettingType, tuple[RangeType, int, float]] = {}


def _ret_code_of(exc: Exception) -> RetCode:
    # talib reports failures as "<FUNC> function failed with error code N: <text>".
    m = _ERROR_CODE_RE.search(str(exc))
    if m is None:
        return RetCode.UNKNOWN_ERR
    return RetCode.from_code(int(m.group(1)))


class TaLibBackend:
    """TA-Lib as a CandleBackend.

    talib's wrappers always compute over the whole array and return it
    dense; the compact window is recovered from the function's lookback so
    the core sees the engine's native (begin, count, values) shape.
    """

    def set_candle_setting(self, setting: CandleSettingType, range_type: RangeType, period: int, factor: float) -> None:
        """Push one threshold into TA-Lib.

        Raises AlreadyConfigured if the setting already holds a different
        value, so a second engine cannot retune the one already serving.
        """
        wanted = (RangeType(range_type), int(period), float(factor))
        with _settings_lock:
            current = _applied.get(CandleSettingType(setting))
            if current is not None:
                if current == wanted:
                    return
                logger.warning(
                    "Refusing to change TA-Lib {s} from {cur} to {new}",
                    s=CandleSettingType(setting).name,
                    cur=current,
                    new=wanted,
                )
                raise AlreadyConfigured()
            try:
                _ta_lib._ta_set_candle_settings(int(setting), int(range_type), int(period), float(factor))
            except Exception as e:
                raise CalculationError(f"TA-Lib error: {_ret_code_of(e).name} ({e})") from e
            _applied[CandleSettingType(setting)] = wanted

    def call(
        self,
        function: str,
        start_index: int,
        end_index: int,
        opens: np.ndarray,
        highs: np.ndarray,
        lows: np.ndarray,
        closes: np.ndarray,
        **params: Any,
    ) -> EngineOutput:
        fn = getattr(talib, function, None)
        if fn is None:
            return EngineOutput.failure(RetCode.FUNC_NOT_FOUND, function)

        n = len(opens)
        if start_index < 0 or start_index >= n:
            return EngineOutput.failure(RetCode.OUT_OF_RANGE_START_INDEX, f"start_index={start_index}")
        if end_index < start_index or end_index >= n:
            return EngineOutput.failure(RetCode.OUT_OF_RANGE_END_INDEX, f"end_index={end_index}")

        window = slice(int(start_index), int(end_index) + 1)
        o, h, l, c = (np.ascontiguousarray(x[window], dtype=np.float64) for x in (opens, highs, lows, closes))

        try:
            dense = fn(o, h, l, c, **params)
            lookback = int(abstract.Function(function, **params).lookback)
        except Exception as e:
            return EngineOutput.failure(_ret_code_of(e), str(e))

        lookback = max(0, min(lookback, len(dense)))
        values = np.asarray(dense[lookback:], dtype=np.int32)
        return EngineOutput(
            ret_code=RetCode.SUCCESS,
            begin_index=int(start_index) + lookback,
            count=int(len(values)),
            values=values,
        )
