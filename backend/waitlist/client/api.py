"""
Async client for the waitlist API and the live queue it feeds.

``QueueClient`` wraps the HTTP endpoints. ``LiveQueue`` keeps a
``QueueView`` current by refetching the list on start and on every
``queue_updated`` Socket.IO event.
"""

import inspect
from typing import Any, Callable, Optional

import httpx
import socketio

from waitlist.client.view import QueueView
from waitlist.config import get_settings
from waitlist.errors import error_for_status
from waitlist.schemas.queue import PositionResponse, QueueEntryResponse
from waitlist.services.notifier import QUEUE_UPDATED_EVENT

ADMIN_TOKEN_HEADER = "X-Admin-Token"


class QueueClient:
    """
    HTTP client for the waitlist API.

    Error responses are raised as the matching ``QueueError`` subclass.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url
        self.admin_token: Optional[str] = None
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "QueueClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None, admin: bool = False) -> Any:
        headers = {}
        if admin and self.admin_token:
            headers[ADMIN_TOKEN_HEADER] = self.admin_token

        response = await self._http.request(method, path, json=json, headers=headers)
        if response.is_error:
            try:
                message = response.json().get("error") or response.text
            except ValueError:
                message = response.text
            raise error_for_status(response.status_code, message)
        return response.json()

    # Public

    async def list_queue(self) -> list[QueueEntryResponse]:
        data = await self._request("GET", "/api/queue")
        return [QueueEntryResponse.model_validate(item) for item in data]

    async def join(self, name: str, phone: Optional[str] = None) -> QueueEntryResponse:
        data = await self._request("POST", "/api/queue/join", json={"name": name, "phone": phone})
        return QueueEntryResponse.model_validate(data)

    async def position(self, entry_id: int) -> PositionResponse:
        data = await self._request("GET", f"/api/queue/{entry_id}/position")
        return PositionResponse.model_validate(data)

    # Admin

    async def login(self, username: str, password: str) -> str:
        """Log in and keep the token for later admin calls."""
        data = await self._request(
            "POST",
            "/api/admin/login",
            json={"username": username, "password": password},
        )
        self.admin_token = data["token"]
        return self.admin_token

    def logout(self) -> None:
        self.admin_token = None

    async def call(self, entry_id: int) -> None:
        await self._request("POST", "/api/queue/call", json={"id": entry_id}, admin=True)

    async def cancel(self, entry_id: int) -> None:
        await self._request("POST", "/api/queue/cancel", json={"id": entry_id}, admin=True)

    async def clear(self) -> None:
        await self._request("POST", "/api/queue/clear", admin=True)


class LiveQueue:
    """
    A queue view that follows the server.

    The view is only ever replaced by a fresh fetch; joining just records
    which entry belongs to this customer.
    """

    def __init__(
        self,
        client: QueueClient,
        sio: Optional[socketio.AsyncClient] = None,
        on_change: Optional[Callable[[QueueView], Any]] = None,
        timezone: Optional[str] = None,
    ):
        self.client = client
        self.timezone = timezone or get_settings().display_timezone
        self.sio = sio or socketio.AsyncClient()
        self.on_change = on_change
        self.view = QueueView()
        self.sio.on(QUEUE_UPDATED_EVENT, self.refresh)

    async def start(self, url: Optional[str] = None) -> QueueView:
        """Connect to the realtime channel and load the initial list."""
        await self.sio.connect(url or self.client.base_url)
        return await self.refresh()

    async def stop(self) -> None:
        await self.sio.disconnect()

    def render(self) -> str:
        """Current board with join times in the display timezone."""
        return self.view.render(self.timezone)

    async def refresh(self, *args) -> QueueView:
        entries = await self.client.list_queue()
        self.view = self.view.with_entries(entries)
        if self.on_change is not None:
            result = self.on_change(self.view)
            if inspect.isawaitable(result):
                await result
        return self.view

    async def join(self, name: str, phone: Optional[str] = None) -> QueueEntryResponse:
        entry = await self.client.join(name, phone)
        self.view = self.view.for_customer(entry.id)
        return entry
