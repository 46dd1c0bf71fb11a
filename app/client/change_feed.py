"""Realtime insert events exposed as cancelable async iterators."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol
from urllib.parse import urlencode

from websockets import connect
from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidStatus

from app.domain.entities import Notification

from .payloads import notification_from_payload

logger = logging.getLogger(__name__)

_CLOSED = object()


class ChangeSubscription:
    """Lazy, infinite stream of notification inserts for one recipient.

    Iteration only ends after :meth:`close`; callers that stop listening must
    close the subscription so the underlying transport is released.
    """

    def __init__(
        self,
        recipient_id: str,
        *,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.recipient_id = recipient_id
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, notification: Notification) -> None:
        """Enqueue an insert event; ignored once the subscription is closed."""

        if self._closed:
            return
        self._queue.put_nowait(notification)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            await self._on_close()

    def __aiter__(self) -> "ChangeSubscription":
        return self

    async def __anext__(self) -> Notification:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item  # type: ignore[return-value]


class ChangeFeed(Protocol):
    async def subscribe(self, recipient_id: str) -> ChangeSubscription:
        ...


class WebSocketChangeFeed:
    """:class:`ChangeFeed` reading the ``/notifications/ws`` stream.

    Dropped connections are re-established after ``reconnect_delay`` seconds
    until the subscription is closed.
    """

    def __init__(self, base_url: str, token: str, *, reconnect_delay: float = 3.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._reconnect_delay = reconnect_delay

    @property
    def url(self) -> str:
        scheme, sep, rest = self._base_url.partition("://")
        ws_scheme = {"https": "wss", "http": "ws"}.get(scheme, scheme)
        query = urlencode({"token": self._token})
        return f"{ws_scheme}{sep}{rest}/notifications/ws?{query}"

    async def subscribe(self, recipient_id: str) -> ChangeSubscription:
        task: asyncio.Task[None] | None = None

        async def _stop() -> None:
            if task is None or task.done() or task is asyncio.current_task():
                return
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        subscription = ChangeSubscription(recipient_id, on_close=_stop)
        task = asyncio.create_task(self._pump(subscription))
        return subscription

    async def _pump(self, subscription: ChangeSubscription) -> None:
        while not subscription.closed:
            try:
                async with connect(self.url) as websocket:
                    logger.debug("Realtime feed connected for %s", subscription.recipient_id)
                    async for raw in websocket:
                        self._handle_message(subscription, raw)
            except InvalidStatus as exc:
                logger.error("Realtime feed rejected: %s", exc)
                await subscription.close()
                return
            except (
                ConnectionClosed,
                InvalidHandshake,
                OSError,
                TimeoutError,
                asyncio.TimeoutError,
            ) as exc:
                logger.info("Realtime feed disconnected (%s); reconnecting", exc)
            await asyncio.sleep(self._reconnect_delay)

    @staticmethod
    def _handle_message(subscription: ChangeSubscription, raw: str | bytes) -> None:
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug("Ignoring non-JSON realtime frame")
            return
        if not isinstance(message, dict) or message.get("type") != "notification":
            return
        data = message.get("data")
        if not isinstance(data, dict):
            return
        try:
            notification = notification_from_payload(data)
        except (TypeError, ValueError):
            logger.debug("Ignoring malformed notification frame: %r", data)
            return
        if notification.recipient_id != subscription.recipient_id:
            return
        subscription.push(notification)


__all__ = ["ChangeFeed", "ChangeSubscription", "WebSocketChangeFeed"]
