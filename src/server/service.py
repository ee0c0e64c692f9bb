from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlsplit

import websockets
from websockets.asyncio.server import ServerConnection, broadcast
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_ERROR, EVENT_HELLO, EVENT_STATE_UPDATE, STATE_IDLE

from .config import HEALTHZ_PATH, INDEX_PATH, ROOT_PATH, UIServerConfig
from .events import StickyEventStore, make_event, parse_command

CommandHandler = Callable[[str], None]

_TEXT_PLAIN = "text/plain; charset=utf-8"


class UIServer:
    """Serves the timer page and relays events and commands over one websocket.

    The asyncio loop lives on its own daemon thread. `publish` may be called
    from any thread; commands received from clients are handed to the
    registered handler on the server thread, which must not block.
    """

    def __init__(
        self,
        config: UIServerConfig,
        logger: Optional[logging.Logger] = None,
        on_command: Optional[CommandHandler] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("ui_server")
        self._on_command = on_command
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Event] = None
        self._ready = threading.Event()
        self._failure: Optional[Exception] = None
        self._clients: set[ServerConnection] = set()
        self._sticky_events = StickyEventStore()
        self._pages: dict[str, tuple[bytes, str]] = {
            ROOT_PATH: (Path(config.index_file).read_bytes(), "text/html; charset=utf-8"),
            HEALTHZ_PATH: (b"ok\n", _TEXT_PLAIN),
        }
        self._pages[INDEX_PATH] = self._pages[ROOT_PATH]

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and self._failure is None

    def set_command_handler(self, handler: Optional[CommandHandler]) -> None:
        self._on_command = handler

    def start(self, timeout_seconds: float = 5.0) -> None:
        if self.is_running:
            self._logger.warning("UI server is already running")
            return

        self._failure = None
        self._ready.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="ui-server")
        self._thread.start()

        if not self._ready.wait(timeout_seconds):
            raise RuntimeError(f"UI server did not start within {timeout_seconds:.1f}s")
        if self._failure is not None:
            raise RuntimeError(f"UI server startup failed: {self._failure}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return

        loop, shutdown = self._loop, self._shutdown
        if loop is not None and shutdown is not None:
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(shutdown.set)

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error("UI server thread did not stop within %.1fs", timeout_seconds)
        self._thread = None

    def publish_state(self, state: str, *, message: Optional[str] = None, **payload) -> None:
        if message:
            payload["message"] = message
        self.publish(EVENT_STATE_UPDATE, state=state, **payload)

    def publish(self, event_type: str, **payload) -> None:
        message = make_event(event_type, **payload)
        self._sticky_events.remember(event_type, message)

        loop = self._loop
        if loop is None or not self.is_running:
            return
        # Loop closed between the check and the call: the event stays sticky.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(self._broadcast, message)

    def _broadcast(self, message: str) -> None:
        if self._clients:
            broadcast(self._clients, message, raise_exceptions=False)

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        try:
            loop.run_until_complete(self._serve())
        except Exception as error:
            self._failure = error
            self._logger.error("UI server failed: %s", error, exc_info=True)
        finally:
            self._ready.set()
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()
            self._loop = None
            self._shutdown = None

    async def _serve(self) -> None:
        self._shutdown = asyncio.Event()
        async with websockets.serve(
            self._handle_client,
            host=self._config.host,
            port=self._config.port,
            process_request=self._route,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server listening on %s:%d (websocket: %s)",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            self._ready.set()
            await self._shutdown.wait()
            await asyncio.gather(
                *(client.close(1001, "Server shutting down") for client in tuple(self._clients)),
                return_exceptions=True,
            )

    async def _handle_client(self, websocket: ServerConnection) -> None:
        self._clients.add(websocket)
        self._logger.info("Client connected: %s", websocket.remote_address)
        try:
            await websocket.send(
                make_event(EVENT_HELLO, state=STATE_IDLE, message="UI websocket connected")
            )
            for sticky in self._sticky_events.snapshot():
                await websocket.send(sticky)
            async for message in websocket:
                reply = self._accept_message(message)
                if reply is not None:
                    await websocket.send(reply)
        except websockets.exceptions.ConnectionClosed:
            pass
        finally:
            self._clients.discard(websocket)
            self._logger.info("Client disconnected: %s", websocket.remote_address)

    def _accept_message(self, message: str | bytes) -> Optional[str]:
        """Forward a command to the handler; return an error reply for the sender."""
        action = parse_command(message)
        if action is None:
            self._logger.warning("Ignoring malformed UI message: %r", message)
            return make_event(EVENT_ERROR, message="Malformed command message")

        handler = self._on_command
        if handler is None:
            self._logger.warning("No command handler registered; dropping '%s'", action)
            return None
        try:
            handler(action)
        except Exception as error:
            self._logger.error("Command handler failed: %s", error, exc_info=True)
        return None

    async def _route(self, connection: ServerConnection, request: Request) -> Optional[Response]:
        del connection
        path = urlsplit(request.path).path
        if path == self._config.websocket_path:
            return None

        page = self._pages.get(path)
        if page is not None:
            return _response(200, "OK", *page)

        return _response(404, "Not Found", b"not found\n", _TEXT_PLAIN)


def _response(status_code: int, reason: str, body: bytes, content_type: str) -> Response:
    headers = Headers()
    headers["Content-Type"] = content_type
    headers["Content-Length"] = str(len(body))
    headers["Cache-Control"] = "no-store"
    return Response(status_code, reason, headers, body)
