from __future__ import annotations
import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Union

import websockets
from websockets.exceptions import WebSocketException

from core.errors import ConnectionFailure, SendFailure
from core.models import ConnectionState
from util.logging import get_logger

log = get_logger("echo_socket")

Frame = Union[str, bytes]
MessageHandler = Callable[[Frame], None]
StateListener = Callable[[ConnectionState], None]
Opener = Callable[[str], Awaitable[Any]]

class EchoConnection:
    """
    One WebSocket connection to an echo endpoint.

    DISCONNECTED -connect()-> CONNECTING -handshake-> CONNECTED, and back to
    DISCONNECTED on disconnect() or any handshake/receive failure. The socket
    and its receive task are owned here; callers only see state, last_error
    and the frames handed to the registered message handler.
    """

    def __init__(self, url: str, *, opener: Optional[Opener] = None):
        self.url = url
        self._open = opener or websockets.connect
        self._state: ConnectionState = "DISCONNECTED"
        self._ws: Any = None
        self._task: Optional[asyncio.Task] = None
        self._handler: Optional[MessageHandler] = None
        self._listeners: List[StateListener] = []
        self.last_error: Optional[str] = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    def on_message(self, handler: MessageHandler) -> None:
        self._handler = handler

    def on_state_change(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def _set_state(self, state: ConnectionState) -> None:
        if state == self._state:
            return
        self._state = state
        log.info("connection %s (%s)", state.lower(), self.url)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                log.error(f"state listener failed: {e}", exc_info=True)

    def connect(self, url: Optional[str] = None) -> None:
        if self._state in ("CONNECTING", "CONNECTED"):
            return
        if url is not None:
            self.url = url
        self._set_state("CONNECTING")
        self._task = asyncio.get_running_loop().create_task(self._run(), name="echo-receive")

    async def _run(self) -> None:
        try:
            ws = await self._open(self.url)
        except (OSError, WebSocketException, asyncio.TimeoutError) as e:
            self._fail(ConnectionFailure(f"handshake failed: {e}"))
            return
        except Exception as e:
            self._fail(ConnectionFailure(f"handshake failed: {type(e).__name__}: {e}"))
            return
        self._ws = ws
        self.last_error = None
        self._set_state("CONNECTED")

        try:
            while True:
                frame = await ws.recv()
                if self._state != "CONNECTED":
                    break
                if self._handler is None:
                    continue
                try:
                    self._handler(frame)
                except Exception as e:
                    log.error(f"message handler failed: {e}", exc_info=True)
        except (OSError, WebSocketException) as e:
            self._fail(ConnectionFailure(f"receive failed: {e}"))
            await self._close(ws)
        except Exception as e:
            self._fail(ConnectionFailure(f"receive failed: {type(e).__name__}: {e}"))
            await self._close(ws)

    def _fail(self, err: ConnectionFailure) -> None:
        log.error(str(err))
        self.last_error = str(err)
        self._ws = None
        self._task = None
        self._set_state("DISCONNECTED")

    async def send(self, text: str) -> bool:
        ws = self._ws
        if self._state != "CONNECTED" or ws is None:
            log.debug("send skipped, connection %s", self._state.lower())
            return False
        try:
            await ws.send(text)
            return True
        except (OSError, WebSocketException) as e:
            err = SendFailure(f"send failed: {e}")
            log.warning(str(err))
            self.last_error = str(err)
            return False

    async def disconnect(self) -> None:
        ws, task = self._ws, self._task
        self._ws = None
        self._task = None
        self._set_state("DISCONNECTED")
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if ws is not None:
            await self._close(ws)

    async def _close(self, ws: Any) -> None:
        try:
            await ws.close()
        except Exception as e:
            log.warning(f"error closing socket: {e}")
