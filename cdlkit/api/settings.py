from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseModel):
    """Tunable thresholds for the pattern recognition engine.

    Body and shadow factors decide when a candle component counts as "long",
    "short" or "doji" relative to the average over the last `period` candles.
    Near/far/equal factors govern price comparisons between candles.

    Defaults are tuned for general use and differ from TA-Lib's own defaults.
    Pass an instance to `configure()` once, before the first analysis call.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # Lookback period for averaging candle component sizes.
    period: int = 10

    body_long_factor: float = 1.0
    body_very_long_factor: float = 3.0
    body_short_factor: float = 1.0
    body_doji_factor: float = 0.1

    shadow_long_factor: float = 1.0
    shadow_very_long_factor: float = 2.0
    shadow_short_factor: float = 0.1
    shadow_very_short_factor: float = 0.05

    near_factor: float = 0.2
    far_factor: float = 0.6
    equal_factor: float = 0.25

    # MorningStar / EveningStar.
    star_penetration_factor: float = Field(0.3, description="Penetration for star patterns")
    # DarkCloudCover.
    piercing_penetration_factor: float = Field(0.5, description="Penetration for cloud-cover patterns")

    @classmethod
    def from_env(cls) -> Settings:
        """Read overrides from CDL_* environment variables (e.g. CDL_PERIOD=14)."""
        return cls(**_EnvSettings().model_dump())


class _EnvSettings(BaseSettings, Settings):
    model_config = SettingsConfigDict(env_prefix="CDL_", env_file=".env", env_file_encoding="utf-8", extra="ignore")
