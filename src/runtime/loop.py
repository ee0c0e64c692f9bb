"""Runtime orchestration loop for UI commands and engine updates."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import Callable, Optional

from contracts.ui_protocol import EVENT_ERROR, STATE_ERROR, STATE_IDLE
from notifications import NotificationService
from pomodoro import PomodoroEngine
from pomodoro.constants import ACTION_SYNC, REASON_STARTUP
from server import UIServer

from .commands import CommandDispatcher
from .messages import sessions_message, status_message
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    engine: PomodoroEngine
    notification_service: Optional[NotificationService]
    ui_server: Optional[UIServer]
    hooks: RuntimeHooks


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    command_queue: Queue[str]
    stop_requested: threading.Event = field(default_factory=threading.Event)
    unsubscribe: Optional[Callable[[], None]] = None


class RuntimeEngine:
    """Main runtime loop that serializes UI commands onto the engine."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._engine = bootstrap.engine

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._tick_processor = TickProcessor(
            TickDependencies(logger=self._logger, ui=self._ui)
        )
        self._dispatcher = CommandDispatcher(
            engine=self._engine,
            ui=self._ui,
            logger=self._logger,
        )
        self._resources = RuntimeResources(command_queue=Queue())

    def submit_command(self, action: str) -> None:
        """Queue a UI command; safe to call from any thread."""
        self._resources.command_queue.put(action)

    def request_stop(self) -> None:
        self._resources.stop_requested.set()

    def run(self) -> int:
        self._engine.add_notifier(self._tick_processor)
        self._resources.unsubscribe = self._engine.subscribe(
            self._tick_processor.handle_update
        )
        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            ui_server.set_command_handler(self.submit_command)

        self._publish_startup_sync()

        try:
            self._bootstrap.hooks.setup_signal_handlers(self.request_stop)
            self._logger.info("Ready! Waiting for commands ...")

            while not self._resources.stop_requested.is_set():
                action, loop_exit = self._poll_command()
                if loop_exit is not None:
                    return loop_exit
                if action is None:
                    continue
                self._dispatcher.dispatch(action)

            self._logger.info("Shutdown requested.")
            return 0

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def _publish_startup_sync(self) -> None:
        snapshot = self._engine.snapshot()
        self._ui.publish_pomodoro_update(
            snapshot,
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )
        self._ui.publish_state(
            STATE_IDLE,
            message=status_message(snapshot),
            sessions=sessions_message(snapshot.completed_work_sessions),
        )

    def _poll_command(self) -> tuple[Optional[str], Optional[int]]:
        try:
            return self._resources.command_queue.get(timeout=0.25), None
        except Empty:
            ui_server = self._bootstrap.ui_server
            if ui_server is not None and not ui_server.is_running:
                self._logger.error("UI server stopped unexpectedly")
                self._ui.publish(
                    EVENT_ERROR,
                    state=STATE_ERROR,
                    message="UI server stopped unexpectedly",
                )
                return None, 1
            return None, None

    def _shutdown(self) -> None:
        if self._resources.unsubscribe is not None:
            self._resources.unsubscribe()
            self._resources.unsubscribe = None

        self._logger.info("Stopping pomodoro engine...")
        self._engine.close()

        notification_service = self._bootstrap.notification_service
        if notification_service is not None:
            self._logger.info("Stopping notification worker...")
            notification_service.close()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
