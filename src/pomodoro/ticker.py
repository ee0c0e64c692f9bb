"""One-second tick source backed by a daemon thread per arming."""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Callable, Optional, Protocol

from .constants import TICK_INTERVAL_SECONDS

TickCallback = Callable[[int], None]


class TickSource(Protocol):
    """Control surface the engine holds over its tick collaborator."""

    def arm(self, callback: TickCallback) -> Optional[int]: ...

    def disarm(self) -> None: ...


class Ticker:
    """Invokes a callback once per interval while armed.

    Every arming gets a new number, which is returned by `arm` and passed to
    each callback from that arming. A tick still in flight from an earlier
    arming carries the old number, so the receiver can drop it.

    The next tick is scheduled only after the previous callback returned.
    Bound-method callbacks are held through ``weakref.WeakMethod``; once their
    owner is collected the thread exits on the following tick.
    """

    def __init__(
        self,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        self._interval_seconds = float(interval_seconds)
        self._logger = logger or logging.getLogger("ticker")
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._generation = 0

    @property
    def is_armed(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def arm(self, callback: TickCallback) -> int:
        with self._lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                return self._generation

            # Each arming owns its stop event; a thread from a previous arming
            # sees its own event set and exits without touching this one.
            self._generation += 1
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run,
                args=(_callback_ref(callback), stop_event, self._generation),
                daemon=True,
                name="pomodoro-ticker",
            )
            self._thread.start()
            return self._generation

    def disarm(self) -> None:
        # Never joins: disarm is called from inside the tick callback when a
        # session completes.
        with self._lock:
            if self._stop_event is not None:
                self._stop_event.set()
            self._stop_event = None
            self._thread = None

    def _run(
        self,
        callback_ref: Callable[[], Optional[TickCallback]],
        stop_event: threading.Event,
        generation: int,
    ) -> None:
        while not stop_event.wait(self._interval_seconds):
            callback = callback_ref()
            if callback is None:
                self._logger.debug("Tick target was collected; stopping ticker")
                stop_event.set()
                return
            try:
                callback(generation)
            except Exception as error:
                self._logger.error("Tick callback failed: %s", error, exc_info=True)
            finally:
                del callback


def _callback_ref(callback: TickCallback) -> Callable[[], Optional[TickCallback]]:
    if hasattr(callback, "__self__") and hasattr(callback, "__func__"):
        return weakref.WeakMethod(callback)  # type: ignore[arg-type]
    return lambda: callback
