from __future__ import annotations

from threading import Lock
from typing import Callable, Generic, TypeVar

from loguru import logger

from cdlkit.api.settings import Settings
from cdlkit.core.errors import AlreadyConfigured

E = TypeVar("E")


class ConfigurationGate:
    """Single-assignment slot for engine Settings. First writer wins."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._settings: Settings | None = None

    def set(self, settings: Settings) -> None:
        if not isinstance(settings, Settings):
            raise TypeError(f"expected Settings, got {type(settings).__name__}")
        with self._lock:
            if self._settings is not None:
                logger.warning("Engine settings already configured; ignoring new settings")
                raise AlreadyConfigured()
            self._settings = settings
        logger.debug("Engine settings configured: {s}", s=settings.model_dump())

    def get(self) -> Settings | None:
        with self._lock:
            return self._settings

    def is_set(self) -> bool:
        return self.get() is not None

    def snapshot(self) -> Settings:
        """Registered settings, or defaults if configure() was never called."""
        return self.get() or Settings()


class LazyEngine(Generic[E]):
    """Builds the engine once, on first use, from the gate's settings at that moment.

    Configuring after the first get() has no effect on the built engine.
    """

    def __init__(self, factory: Callable[[Settings], E], gate: ConfigurationGate) -> None:
        self._factory = factory
        self._gate = gate
        self._lock = Lock()
        self._engine: E | None = None

    def get(self) -> E:
        engine = self._engine
        if engine is not None:
            return engine
        with self._lock:
            if self._engine is None:
                self._engine = self._factory(self._gate.snapshot())
            return self._engine

    @property
    def built(self) -> bool:
        return self._engine is not None
