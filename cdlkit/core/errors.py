from __future__ import annotations


class CdlError(Exception):
    """Base class for every error raised by cdlkit."""


class InvalidCandle(CdlError, ValueError):
    """Candle prices violate `low <= open, close <= high`."""

    def __init__(self, reason: str) -> None:
        self.reason = str(reason)
        super().__init__(f"Invalid Candle: {self.reason}")


class AlreadyConfigured(CdlError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("Already Configured")


class CalculationError(CdlError, RuntimeError):
    """The analytics engine reported a non-success status."""

    def __init__(self, detail: str) -> None:
        self.detail = str(detail)
        super().__init__(f"Calculation error: {self.detail}")
