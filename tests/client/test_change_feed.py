"""Tests for realtime subscriptions and wire payload parsing."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

from app.client import ChangeSubscription, WebSocketChangeFeed, notification_from_payload


def _frame(**data) -> str:
    row = {
        "id": 1,
        "recipient_id": "user-1",
        "title": "Booking confirmed",
        "message": "See you soon",
        "link": "/my-bookings",
        "type": "success",
        "is_read": False,
        "created_at": "2024-01-01T12:00:00Z",
    }
    row.update(data)
    return json.dumps({"type": "notification", "data": row})


def test_notification_from_payload_parses_wire_row() -> None:
    notification = notification_from_payload(json.loads(_frame())["data"])

    assert notification.id == 1
    assert notification.type == "success"
    assert notification.created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_url_uses_websocket_scheme_and_token() -> None:
    feed = WebSocketChangeFeed("https://api.booknex.com/", "abc")

    assert feed.url == "wss://api.booknex.com/notifications/ws?token=abc"


def test_subscription_yields_until_closed() -> None:
    async def scenario():
        subscription = ChangeSubscription("user-1")
        WebSocketChangeFeed._handle_message(subscription, _frame(id=1))
        WebSocketChangeFeed._handle_message(subscription, _frame(id=2, recipient_id="user-2"))
        WebSocketChangeFeed._handle_message(subscription, json.dumps({"type": "pong"}))
        WebSocketChangeFeed._handle_message(subscription, "not json")
        WebSocketChangeFeed._handle_message(subscription, _frame(id=3))
        await subscription.close()
        subscription.push(notification_from_payload(json.loads(_frame(id=4))["data"]))
        return [item.id async for item in subscription]

    assert asyncio.run(scenario()) == [1, 3]


def test_close_runs_release_callback_once() -> None:
    released: list[str] = []

    async def _release() -> None:
        released.append("released")

    async def scenario():
        subscription = ChangeSubscription("user-1", on_close=_release)
        await subscription.close()
        await subscription.close()
        return subscription.closed

    assert asyncio.run(scenario()) is True
    assert released == ["released"]
