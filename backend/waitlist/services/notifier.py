"""
Realtime notifications over Socket.IO.

Every committed mutation is followed by a payload-free ``queue_updated``
event sent to all connected clients, which then refetch the queue.
"""

from typing import Optional

import socketio
from fastapi import Request

from waitlist.services.queue_service import QueueChanged

QUEUE_UPDATED_EVENT = "queue_updated"


def create_socket_server(cors_origins: Optional[list[str]] = None) -> socketio.AsyncServer:
    """Socket.IO server in ASGI mode with connection logging."""
    origins = cors_origins if cors_origins is not None else ["*"]
    sio = socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins="*" if origins == ["*"] else origins,
    )

    @sio.event
    async def connect(sid, environ):
        print(f"Realtime: client {sid} connected", flush=True)

    @sio.event
    async def disconnect(sid, *args):
        print(f"Realtime: client {sid} disconnected", flush=True)

    return sio


class QueueNotifier:
    """
    Fans out queue changes to connected clients.

    Delivery is best-effort: a failed emit is logged and never fails the
    request that caused it.
    """

    def __init__(self, sio: socketio.AsyncServer):
        self.sio = sio

    async def publish(self, event: QueueChanged) -> None:
        try:
            await self.sio.emit(QUEUE_UPDATED_EVENT)
        except Exception as e:
            print(f"Realtime: failed to broadcast {event.action}: {e}", flush=True)


def get_notifier(request: Request) -> QueueNotifier:
    """Dependency returning the application's notifier."""
    return request.app.state.notifier
