"""Thread-safe in-memory pomodoro work/break state machine."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Literal, Optional, Protocol

from .constants import (
    ACTION_COMPLETED,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SKIP,
    ACTION_START,
    ACTION_TICK,
    DEFAULT_LONG_BREAK_INTERVAL,
    FOCUS_LABEL,
    REASON_ALREADY_RUNNING,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_SKIPPED,
    REASON_STARTED,
    SESSION_DURATIONS,
    SESSION_LONG_BREAK,
    SESSION_NAMES,
    SESSION_SHORT_BREAK,
    SESSION_WORK,
)
from .ticker import TickSource

SessionType = Literal["work", "short_break", "long_break"]
PomodoroAction = Literal["start", "pause", "reset", "skip"]


def nominal_duration(session: SessionType) -> int:
    """Return the fixed length of a session in seconds."""
    return SESSION_DURATIONS[session]


def format_time(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS` with unbounded minutes."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def progress_fraction(remaining_seconds: int, total_seconds: int) -> float:
    if total_seconds <= 0:
        return 0.0
    return (total_seconds - remaining_seconds) / total_seconds


def display_label(session: SessionType) -> str:
    if session == SESSION_WORK:
        return FOCUS_LABEL
    return SESSION_NAMES[session]


@dataclass(frozen=True)
class EngineSnapshot:
    """Immutable engine state exposed to the presentation layer."""
    current_session: SessionType
    remaining_seconds: int
    total_seconds: int
    is_running: bool
    completed_work_sessions: int

    @property
    def formatted_time(self) -> str:
        return format_time(self.remaining_seconds)

    @property
    def progress(self) -> float:
        return progress_fraction(self.remaining_seconds, self.total_seconds)

    @property
    def label(self) -> str:
        return display_label(self.current_session)


@dataclass(frozen=True)
class PomodoroActionResult:
    """Result envelope returned after applying an engine command."""
    action: PomodoroAction
    accepted: bool
    reason: str
    snapshot: EngineSnapshot


@dataclass(frozen=True)
class EngineUpdate:
    """State-change notification delivered to engine subscribers."""
    action: str
    snapshot: EngineSnapshot


@dataclass(frozen=True)
class SessionCompleted:
    """Emitted once per finished session, after the engine moved on."""
    finished_session: SessionType
    next_session: SessionType
    completed_work_sessions: int


class Notifier(Protocol):
    def notify(self, event: SessionCompleted) -> None: ...


EngineListener = Callable[[EngineUpdate], None]


class PomodoroEngine:
    """Owns the countdown, the session cycle, and the tick source.

    All mutations happen under one lock. Subscribers and notifiers are called
    after the lock is released, and their failures never reach engine state.
    """

    def __init__(
        self,
        *,
        ticker: Optional[TickSource] = None,
        notifiers: Iterable[Notifier] = (),
        long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL,
        logger: Optional[logging.Logger] = None,
    ):
        if long_break_interval <= 0:
            raise ValueError("long_break_interval must be greater than zero")

        self._ticker = ticker
        self._notifiers: list[Notifier] = list(notifiers)
        self._long_break_interval = int(long_break_interval)
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.Lock()
        self._listeners: list[EngineListener] = []

        self._current_session: SessionType = SESSION_WORK
        self._total_seconds = nominal_duration(SESSION_WORK)
        self._remaining_seconds = self._total_seconds
        self._is_running = False
        self._completed_work_sessions = 0
        # Arming number of the live ticker thread; None while disarmed.
        self._tick_generation: Optional[int] = None

    # ----- Read-only views -----
    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return self._snapshot_locked()

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._is_running

    @property
    def completed_work_sessions(self) -> int:
        with self._lock:
            return self._completed_work_sessions

    def formatted_time(self) -> str:
        return self.snapshot().formatted_time

    def progress_fraction(self) -> float:
        return self.snapshot().progress

    def display_label(self) -> str:
        return self.snapshot().label

    # ----- Observation -----
    def add_notifier(self, notifier: Notifier) -> None:
        with self._lock:
            self._notifiers.append(notifier)

    def subscribe(self, listener: EngineListener) -> Callable[[], None]:
        """Register a state-change listener and return its unsubscribe hook."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ----- Commands -----
    def start(self) -> PomodoroActionResult:
        with self._lock:
            if self._is_running:
                return self._result_locked(ACTION_START, False, REASON_ALREADY_RUNNING)

            self._total_seconds = nominal_duration(self._current_session)
            self._remaining_seconds = min(self._remaining_seconds, self._total_seconds)
            self._is_running = True
            self._arm_locked()
            self._logger.info(
                "Session started: session=%s remaining=%ss",
                self._current_session,
                self._remaining_seconds,
            )
            result = self._result_locked(ACTION_START, True, REASON_STARTED)

        self._publish(EngineUpdate(ACTION_START, result.snapshot))
        return result

    def pause(self) -> PomodoroActionResult:
        with self._lock:
            was_running = self._pause_locked()
            if not was_running:
                return self._result_locked(ACTION_PAUSE, False, REASON_NOT_RUNNING)
            self._logger.info(
                "Session paused: session=%s remaining=%ss",
                self._current_session,
                self._remaining_seconds,
            )
            result = self._result_locked(ACTION_PAUSE, True, REASON_PAUSED)

        self._publish(EngineUpdate(ACTION_PAUSE, result.snapshot))
        return result

    def reset(self) -> PomodoroActionResult:
        with self._lock:
            self._pause_locked()
            self._total_seconds = nominal_duration(self._current_session)
            self._remaining_seconds = self._total_seconds
            self._logger.info("Session reset: session=%s", self._current_session)
            result = self._result_locked(ACTION_RESET, True, REASON_RESET)

        self._publish(EngineUpdate(ACTION_RESET, result.snapshot))
        return result

    def skip(self) -> PomodoroActionResult:
        with self._lock:
            self._pause_locked()
            completed = self._complete_locked()
            result = self._result_locked(ACTION_SKIP, True, REASON_SKIPPED)

        self._deliver(completed)
        self._publish(EngineUpdate(ACTION_SKIP, result.snapshot))
        return result

    # ----- Tick handling -----
    def on_tick(self, generation: Optional[int] = None) -> None:
        """Advance the countdown by one second; inert while paused.

        `generation` is the ticker arming that produced the tick. Ticks from
        an arming that was since disarmed are dropped, even if the engine
        was started again in between. Direct calls pass None.
        """
        completed: Optional[SessionCompleted] = None
        with self._lock:
            # A tick already in flight when pause() ran must not apply.
            if not self._is_running:
                return
            if generation is not None and generation != self._tick_generation:
                return
            if self._remaining_seconds > 0:
                self._remaining_seconds -= 1
                action = ACTION_TICK
            else:
                completed = self._complete_locked()
                action = ACTION_COMPLETED
            snapshot = self._snapshot_locked()

        if completed is not None:
            self._deliver(completed)
        self._publish(EngineUpdate(action, snapshot))

    def arm_ticker(self) -> None:
        """Re-arm the tick source if a session is running."""
        with self._lock:
            if self._is_running:
                self._arm_locked()

    def disarm_ticker(self) -> None:
        with self._lock:
            self._disarm_locked()

    def close(self) -> None:
        """Stop ticking for good; used on application teardown."""
        with self._lock:
            self._pause_locked()

    # ----- Internals -----
    def _pause_locked(self) -> bool:
        was_running = self._is_running
        self._is_running = False
        self._disarm_locked()
        return was_running

    def _arm_locked(self) -> None:
        if self._ticker is not None:
            self._tick_generation = self._ticker.arm(self.on_tick)

    def _disarm_locked(self) -> None:
        self._tick_generation = None
        if self._ticker is not None:
            self._ticker.disarm()

    def _complete_locked(self) -> SessionCompleted:
        self._pause_locked()
        finished = self._current_session

        if finished == SESSION_WORK:
            self._completed_work_sessions += 1
            if self._completed_work_sessions % self._long_break_interval == 0:
                next_session: SessionType = SESSION_LONG_BREAK
            else:
                next_session = SESSION_SHORT_BREAK
        else:
            next_session = SESSION_WORK

        self._current_session = next_session
        self._total_seconds = nominal_duration(next_session)
        self._remaining_seconds = self._total_seconds
        self._logger.info(
            "Session completed: finished=%s next=%s work_sessions=%d",
            finished,
            next_session,
            self._completed_work_sessions,
        )
        return SessionCompleted(
            finished_session=finished,
            next_session=next_session,
            completed_work_sessions=self._completed_work_sessions,
        )

    def _snapshot_locked(self) -> EngineSnapshot:
        return EngineSnapshot(
            current_session=self._current_session,
            remaining_seconds=self._remaining_seconds,
            total_seconds=self._total_seconds,
            is_running=self._is_running,
            completed_work_sessions=self._completed_work_sessions,
        )

    def _result_locked(
        self,
        action: PomodoroAction,
        accepted: bool,
        reason: str,
    ) -> PomodoroActionResult:
        return PomodoroActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )

    def _deliver(self, event: SessionCompleted) -> None:
        with self._lock:
            notifiers = tuple(self._notifiers)
        for notifier in notifiers:
            try:
                notifier.notify(event)
            except Exception as error:
                self._logger.warning(
                    "Notifier %s failed: %s",
                    type(notifier).__name__,
                    error,
                    exc_info=True,
                )

    def _publish(self, update: EngineUpdate) -> None:
        with self._lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(update)
            except Exception as error:
                self._logger.error("Engine listener failed: %s", error, exc_info=True)
