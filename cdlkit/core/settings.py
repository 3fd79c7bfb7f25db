from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Timing spans around analysis calls.
    PERF_LOG_ENABLED: bool = True
    # Spans at or above this threshold are logged at WARNING.
    PERF_LOG_SLOW_MS: int = 250
    # If true, logs every span (noisy). If false, logs only slow spans.
    PERF_LOG_ALWAYS: bool = False


settings = RuntimeSettings()
