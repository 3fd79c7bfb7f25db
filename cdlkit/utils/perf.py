"""Timing spans for analysis calls.

Spans are logged through loguru: at DEBUG when PERF_LOG_ALWAYS is set, at
WARNING once a call takes PERF_LOG_SLOW_MS or longer, otherwise not at all.
"""

from __future__ import annotations

import functools
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sized, TypeVar

from loguru import logger

from cdlkit.core.settings import settings

T = TypeVar("T")


def _report(op: str, ok: bool, dt_ms: float, tags: dict[str, Any]) -> None:
    slow = dt_ms >= float(settings.PERF_LOG_SLOW_MS)
    if not (slow or settings.PERF_LOG_ALWAYS):
        return
    logger.log(
        "WARNING" if slow else "DEBUG",
        "PERF {op} {status}: {ms:.1f}ms tags={tags}",
        op=op,
        status="ok" if ok else "err",
        ms=dt_ms,
        tags={k: v for k, v in tags.items() if v is not None},
    )


@contextmanager
def perf_span(op: str, **tags: Any) -> Iterator[None]:
    """Time the enclosed block and report it under `op`."""
    if not settings.PERF_LOG_ENABLED:
        yield
        return

    t0 = time.perf_counter()
    ok = True
    try:
        yield
    except Exception:
        ok = False
        raise
    finally:
        _report(op, ok, (time.perf_counter() - t0) * 1000.0, tags)


def timed_analysis(op: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorate an `(self, pattern, candles)` method with a span tagged by both.

    The span carries the pattern's value and the number of candles, so a
    slow-call warning says which pattern was slow and on how much data.
    """

    def deco(fn: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(fn)
        def wrapped(self: Any, pattern: Any, candles: Sized, *args: Any, **kwargs: Any) -> T:
            with perf_span(op, pattern=getattr(pattern, "value", pattern), n=len(candles)):
                return fn(self, pattern, candles, *args, **kwargs)

        return wrapped

    return deco
