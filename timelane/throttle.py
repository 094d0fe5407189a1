# timelane/throttle.py
from __future__ import annotations

import time
from typing import Any, Callable, Optional, Tuple


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class Throttle:
    """Rate-limit calls to `func` to one per `limit_ms`.

    The first call runs immediately. Calls inside the window are held (only the
    latest is kept) and run by the next call after the window, or by `flush()`.
    Hosts without timers call `flush()` when the gesture ends so the final state
    matches what every event would have produced.
    """

    def __init__(self, func: Callable[..., Any], limit_ms: float, clock: Optional[Callable[[], float]] = None) -> None:
        self._func = func
        self._limit_ms = float(limit_ms)
        self._clock = clock or monotonic_ms
        self._last_ran: Optional[float] = None
        self._pending: Optional[Tuple[Any, ...]] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any) -> Any:
        now = self._clock()
        if self._last_ran is None or now - self._last_ran >= self._limit_ms:
            self._pending = None
            self._last_ran = now
            return self._func(*args)
        self._pending = args
        return None

    def flush(self) -> Any:
        if self._pending is None:
            return None
        args = self._pending
        self._pending = None
        self._last_ran = self._clock()
        return self._func(*args)

    def cancel(self) -> None:
        self._pending = None


__all__ = ["Throttle", "monotonic_ms"]
