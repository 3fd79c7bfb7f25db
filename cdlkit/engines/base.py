from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Protocol

import numpy as np

from cdlkit.api.settings import Settings


class RetCode(IntEnum):
    """Status codes of the analytics engine (mirrors TA-Lib's TA_RetCode)."""

    SUCCESS = 0
    LIB_NOT_INITIALIZE = 1
    BAD_PARAM = 2
    ALLOC_ERR = 3
    GROUP_NOT_FOUND = 4
    FUNC_NOT_FOUND = 5
    INVALID_HANDLE = 6
    INVALID_PARAM_HOLDER = 7
    INVALID_PARAM_HOLDER_TYPE = 8
    INVALID_PARAM_FUNCTION = 9
    INPUT_NOT_ALL_INITIALIZE = 10
    OUTPUT_NOT_ALL_INITIALIZE = 11
    OUT_OF_RANGE_START_INDEX = 12
    OUT_OF_RANGE_END_INDEX = 13
    INVALID_LIST_TYPE = 14
    BAD_OBJECT = 15
    NOT_SUPPORTED = 16
    INTERNAL_ERROR = 5000
    UNKNOWN_ERR = 0xFFFF

    @classmethod
    def from_code(cls, code: int) -> RetCode:
        try:
            return cls(int(code))
        except ValueError:
            return cls.UNKNOWN_ERR


class CandleSettingType(IntEnum):
    BodyLong = 0
    BodyVeryLong = 1
    BodyShort = 2
    BodyDoji = 3
    ShadowLong = 4
    ShadowVeryLong = 5
    ShadowShort = 6
    ShadowVeryShort = 7
    Near = 8
    Far = 9
    Equal = 10


class RangeType(IntEnum):
    RealBody = 0
    HighLow = 1
    Shadows = 2


@dataclass(frozen=True)
class EngineOutput:
    """Result of one primitive call.

    Only `values[:count]` is meaningful; it belongs to input indices
    `begin_index .. begin_index + count - 1`.
    """

    ret_code: RetCode
    begin_index: int = 0
    count: int = 0
    values: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int32))
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.ret_code == RetCode.SUCCESS

    def describe(self) -> str:
        text = f"TA-Lib error: {self.ret_code.name}"
        if self.message:
            text = f"{text} ({self.message})"
        return text

    @classmethod
    def failure(cls, ret_code: RetCode, message: str = "") -> EngineOutput:
        return cls(ret_code=ret_code, message=str(message or ""))


class CandleBackend(Protocol):
    """The native engine as seen by the core."""

    def set_candle_setting(self, setting: CandleSettingType, range_type: RangeType, period: int, factor: float) -> None: ...

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
    ) -> EngineOutput: ...


class EngineContext(Protocol):
    """What a primitive may see of the engine invoking it."""

    @property
    def backend(self) -> CandleBackend: ...

    @property
    def settings(self) -> Settings: ...
