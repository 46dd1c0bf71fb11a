"""Backend access used by the notification feed."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import httpx

from app.domain.entities import Notification

from .payloads import notification_from_payload


class NotificationGateway(Protocol):
    """Persistence operations the feed performs against the notification store."""

    async def fetch_recent(self, recipient_id: str, *, limit: int) -> Sequence[Notification]:
        ...

    async def mark_as_read(self, recipient_id: str, notification_id: int) -> None:
        ...

    async def mark_all_as_read(self, recipient_id: str) -> int:
        ...


class HttpNotificationGateway:
    """:class:`NotificationGateway` backed by the REST API.

    The recipient is identified by the bearer token configured on ``client``;
    the ``recipient_id`` arguments only guard against using a gateway built for
    another session.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def connect(cls, base_url: str, token: str, *, timeout: float = 10.0) -> "HttpNotificationGateway":
        client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
        )
        return cls(client)

    async def fetch_recent(self, recipient_id: str, *, limit: int) -> list[Notification]:
        response = await self._client.get("/notifications/", params={"limit": limit})
        response.raise_for_status()
        notifications = [notification_from_payload(item) for item in response.json()]
        return [item for item in notifications if item.recipient_id == recipient_id]

    async def mark_as_read(self, recipient_id: str, notification_id: int) -> None:
        response = await self._client.patch(f"/notifications/{notification_id}/read")
        response.raise_for_status()

    async def mark_all_as_read(self, recipient_id: str) -> int:
        response = await self._client.post("/notifications/mark-all-read")
        response.raise_for_status()
        return int(response.json().get("marked_count", 0))

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["HttpNotificationGateway", "NotificationGateway"]
