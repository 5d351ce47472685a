"""Outbound channel for a single WebSocket connection.

Rooms hold ``Connection`` objects, never raw sockets. ``send`` only queues the
frame, and one writer task per connection does the actual socket I/O. A slow
peer therefore never stalls a broadcast to the rest of its room.
"""

import asyncio
import uuid
from typing import Optional

from fastapi import WebSocket

from constants import OUTBOUND_QUEUE_SIZE
from exceptions import DeliveryFailure
from logging_config import get_logger

logger = get_logger(__name__)


class Connection:
    def __init__(self, websocket: WebSocket, maxsize: int = OUTBOUND_QUEUE_SIZE, connection_id: Optional[str] = None):
        self.websocket = websocket
        self.id = connection_id or uuid.uuid4().hex[:12]
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._writer_task: Optional[asyncio.Task] = None
        self._closed = False

    def __repr__(self) -> str:
        return f"<Connection {self.id}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self):
        if self._writer_task is None or self._writer_task.done():
            self._writer_task = asyncio.create_task(self._writer(), name=f"conn-{self.id}-writer")

    def send(self, payload: str):
        """Queue ``payload`` for delivery without waiting on the socket."""
        if self._closed:
            raise DeliveryFailure(f"Connection {self.id} is closed")
        try:
            self.queue.put_nowait(payload)
        except asyncio.QueueFull:
            raise DeliveryFailure(f"Outbound queue full for connection {self.id} ({self.queue.maxsize} pending)")

    async def flush(self):
        await self.queue.join()

    async def close(self):
        if self._closed:
            return
        self._closed = True
        if self._writer_task is not None:
            self._writer_task.cancel()
            try:
                await self._writer_task
            except asyncio.CancelledError:
                pass
        dropped = 0
        while not self.queue.empty():
            self.queue.get_nowait()
            self.queue.task_done()
            dropped += 1
        if dropped:
            logger.debug(f"Dropped {dropped} undelivered frames for closed connection {self.id}")

    async def _writer(self):
        while True:
            payload = await self.queue.get()
            try:
                await self.websocket.send_text(payload)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Outbound send failed for connection {self.id}: {e}")
            finally:
                self.queue.task_done()
