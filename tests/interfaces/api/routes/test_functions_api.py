"""Tests for the push and cleanup function endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.domain.entities import Booking, PushSubscription
from app.infrastructure.push import DeliveryOutcome, DeliveryResult
from app.infrastructure.repositories import BookingRepository, PushSubscriptionRepository
from app.interfaces.api.dependencies import get_push_sender_factory
from app.interfaces.api.routes import functions as functions_routes


def _subscribe(session, recipient_id: str, endpoint: str) -> None:
    PushSubscriptionRepository(session).upsert(
        PushSubscription(
            id=None,
            recipient_id=recipient_id,
            subscription={"endpoint": endpoint, "keys": {"p256dh": "key", "auth": "secret"}},
        )
    )


class GoneForOneSender:
    def send(self, subscription: PushSubscription, payload: dict) -> DeliveryResult:
        if subscription.endpoint.endswith("/gone"):
            return DeliveryResult(subscription.id, DeliveryOutcome.GONE, 410)
        return DeliveryResult(subscription.id, DeliveryOutcome.DELIVERED, 201)


def test_push_preflight_returns_ok_with_cors_headers(client: TestClient) -> None:
    response = client.options("/functions/push")

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers["access-control-allow-origin"] == "*"
    assert "authorization" in response.headers["access-control-allow-headers"]


def test_push_rejects_body_without_record(client: TestClient) -> None:
    response = client.post("/functions/push", json={})

    assert response.status_code == 400
    assert "error" in response.json()
    assert response.headers["access-control-allow-origin"] == "*"


def test_push_without_subscriptions_is_a_noop(client: TestClient) -> None:
    response = client.post("/functions/push", json={"record": {"recipient_id": "user-1"}})

    assert response.status_code == 200
    assert response.json() == {"message": "No subscriptions"}


def test_push_without_recipient_is_a_noop(client: TestClient) -> None:
    response = client.post("/functions/push", json={"record": {"title": "Hello"}})

    assert response.status_code == 200
    assert response.json() == {"message": "No recipient"}


def test_push_fans_out_and_prunes_gone_endpoints(client: TestClient, db_session) -> None:
    _subscribe(db_session, "user-1", "https://push.example/ok")
    _subscribe(db_session, "user-1", "https://push.example/gone")
    client.app.dependency_overrides[get_push_sender_factory] = lambda: GoneForOneSender

    response = client.post(
        "/functions/push",
        json={"record": {"id": 9, "recipient_id": "user-1", "title": "Hi", "message": "Body"}},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Sent 2 notifications"}
    db_session.expire_all()
    remaining = PushSubscriptionRepository(db_session).list_for_recipient("user-1")
    assert [item.endpoint for item in remaining] == ["https://push.example/ok"]


def test_push_without_vapid_keys_reports_error(client: TestClient, db_session) -> None:
    _subscribe(db_session, "user-1", "https://push.example/ok")

    response = client.post("/functions/push", json={"record": {"recipient_id": "user-1"}})

    assert response.status_code == 400
    assert "VAPID_PRIVATE_KEY" in response.json()["error"]


def test_function_endpoints_require_configured_service_key(client: TestClient, configure) -> None:
    configure(service_role_key="service-secret")

    denied = client.post("/functions/push", json={"record": {"recipient_id": "user-1"}})
    wrong = client.post(
        "/functions/cleanup-bookings", headers={"Authorization": "Bearer nope"}
    )
    allowed = client.post(
        "/functions/push",
        json={"record": {"recipient_id": "user-1"}},
        headers={"Authorization": "Bearer service-secret"},
    )

    assert denied.status_code == 401
    assert wrong.status_code == 401
    assert allowed.status_code == 200


def test_cleanup_preflight_returns_empty_ok(client: TestClient) -> None:
    response = client.options("/functions/cleanup-bookings")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"


def test_cleanup_deletes_expired_bookings(client: TestClient, db_session) -> None:
    repository = BookingRepository(db_session)
    for booking_id, status in (("old", "confirmed"), ("held", "pending")):
        repository.create(
            Booking(
                id=booking_id,
                user_id="customer-1",
                venue_id="venue-1",
                booking_date=date(2023, 6, 1),
                booking_time="9:00 AM",
                amount=Decimal("10.00"),
                status=status,
            )
        )

    first = client.get("/functions/cleanup-bookings")
    second = client.post("/functions/cleanup-bookings")

    assert first.status_code == 200
    assert first.json() == {"success": True, "deleted": 1, "message": "Cleaned up 1 bookings"}
    assert second.json() == {"success": True, "deleted": 0, "message": "Cleaned up 0 bookings"}


def test_cleanup_failure_returns_error_body(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _broken(session):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(functions_routes, "cleanup_expired_bookings", _broken)

    response = client.post("/functions/cleanup-bookings")

    assert response.status_code == 500
    assert response.json() == {"error": "database unavailable"}
