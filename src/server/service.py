"""Background websocket server: pushes pomodoro events and relays client commands."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

import websockets
from websockets.asyncio.server import ServerConnection
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_ERROR, EVENT_HELLO

from .config import HEALTHZ_PATH, INDEX_PATHS, UIServerConfig
from .events import ClientMessageError, StickyEventStore, make_event, parse_client_message

CommandHandler = Callable[[str], None]

_TEXT_PLAIN = "text/plain; charset=utf-8"
_TEXT_HTML = "text/html; charset=utf-8"


class UIServer:
    """Runs an asyncio websocket server on its own thread.

    `publish` may be called from any thread. Commands received from clients
    are handed to the registered handler on the server thread.
    """

    def __init__(
        self,
        config: UIServerConfig,
        logger: Optional[logging.Logger] = None,
        *,
        on_command: Optional[CommandHandler] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("ui_server")
        self._on_command = on_command
        self._page: Optional[bytes] = (
            Path(config.index_file).read_bytes() if config.index_file else None
        )
        self._replay = StickyEventStore()
        self._clients: set[ServerConnection] = set()

        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Event] = None
        self._ready = threading.Event()
        self._failure: Optional[BaseException] = None

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def websocket_path(self) -> str:
        return self._config.websocket_path

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
        self._thread = threading.Thread(target=self._thread_main, daemon=True, name="ui-server")
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
        self._loop = None
        self._shutdown = None

    def publish(self, event_type: str, **payload: Any) -> None:
        message = make_event(event_type, **payload)
        self._replay.remember(event_type, message)

        loop = self._loop
        if loop is None or not self.is_running:
            return
        try:
            future = asyncio.run_coroutine_threadsafe(self._send_to_all(message), loop)
        except RuntimeError:
            return
        future.add_done_callback(self._log_send_failure)

    def _log_send_failure(self, future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.warning("Broadcast failed: %s", error)

    def _thread_main(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._shutdown = asyncio.Event()
        try:
            loop.run_until_complete(self._serve_until_shutdown())
        except Exception as error:
            self._failure = error
            self._logger.error("UI server failed: %s", error, exc_info=True)
        finally:
            self._ready.set()
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            with contextlib.suppress(Exception):
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()

    async def _serve_until_shutdown(self) -> None:
        async with websockets.serve(
            self._session,
            host=self._config.host,
            port=self._config.port,
            process_request=self._route_http,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server listening on http://%s:%d (websocket: %s)",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            self._ready.set()
            await self._shutdown.wait()
            await self._disconnect_all()

    async def _session(self, websocket: ServerConnection) -> None:
        self._clients.add(websocket)
        peer = websocket.remote_address
        self._logger.info("Client connected: %s", peer)
        try:
            await websocket.send(
                make_event(
                    EVENT_HELLO,
                    message="Pomodoro event stream connected",
                    accepts_commands=self._accepts_commands(),
                )
            )
            for message in self._replay.snapshot():
                await websocket.send(message)
            async for raw in websocket:
                reply = self._receive(raw)
                if reply is not None:
                    await websocket.send(reply)
        except websockets.exceptions.ConnectionClosed:
            pass
        finally:
            self._clients.discard(websocket)
            self._logger.info("Client disconnected: %s", peer)

    def _accepts_commands(self) -> bool:
        return self._config.accept_commands and self._on_command is not None

    def _receive(self, raw: str | bytes) -> Optional[str]:
        """Relay one client message; returns an error event for that client only."""
        # The runtime clears the handler from another thread during shutdown.
        handler = self._on_command
        if not self._config.accept_commands or handler is None:
            return make_event(EVENT_ERROR, message="Commands are disabled.")
        try:
            command = parse_client_message(raw)
        except ClientMessageError as error:
            self._logger.debug("Rejected client message: %s", error)
            return make_event(EVENT_ERROR, message=str(error))

        self._logger.debug("Command from UI: %r", command.text)
        handler(command.text)
        return None

    async def _route_http(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response | None:
        path = urlsplit(request.path).path
        if path == self._config.websocket_path:
            return None
        if path == HEALTHZ_PATH:
            return _plain_response(200, "OK", b"ok\n", _TEXT_PLAIN)
        if path in INDEX_PATHS and self._page is not None:
            return _plain_response(200, "OK", self._page, _TEXT_HTML)
        return _plain_response(404, "Not Found", b"not found\n", _TEXT_PLAIN)

    async def _send_to_all(self, message: str) -> None:
        clients = tuple(self._clients)
        if not clients:
            return
        results = await asyncio.gather(
            *(client.send(message) for client in clients),
            return_exceptions=True,
        )
        for client, result in zip(clients, results):
            if isinstance(result, Exception):
                self._logger.warning("Dropping client %s: %s", client.remote_address, result)
                self._clients.discard(client)

    async def _disconnect_all(self) -> None:
        clients = tuple(self._clients)
        self._clients.clear()
        await asyncio.gather(
            *(client.close(code=1001, reason="Server shutting down") for client in clients),
            return_exceptions=True,
        )


def _plain_response(status: int, reason: str, body: bytes, content_type: str) -> Response:
    headers = Headers()
    headers["Content-Type"] = content_type
    headers["Content-Length"] = str(len(body))
    headers["Cache-Control"] = "no-store"
    return Response(status, reason, headers, body)
