"""Integration tests for push subscription registration."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

SUBSCRIPTION = {
    "endpoint": "https://fcm.googleapis.com/fcm/send/device-1",
    "expirationTime": None,
    "keys": {"p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA", "auth": "tBHItJI5svbpez7KI4CCXg"},
}


def test_vapid_key_unavailable_until_configured(client: TestClient, configure) -> None:
    missing = client.get("/push-subscriptions/vapid-public-key")
    configure(vapid_public_key="public-key", vapid_private_key="private-key")
    configured = client.get("/push-subscriptions/vapid-public-key")

    assert missing.status_code == 503
    assert configured.status_code == 200
    assert configured.json() == {"public_key": "public-key"}


def test_register_is_idempotent_per_endpoint(client: TestClient, auth_headers) -> None:
    first = client.post(
        "/push-subscriptions/",
        json={"subscription": SUBSCRIPTION, "user_agent": "Firefox"},
        headers=auth_headers("user-1"),
    )
    second = client.post(
        "/push-subscriptions/",
        json={"subscription": SUBSCRIPTION},
        headers={**auth_headers("user-2"), "User-Agent": "Chrome"},
    )

    assert first.status_code == 201
    assert first.json()["endpoint"] == SUBSCRIPTION["endpoint"]
    assert first.json()["user_agent"] == "Firefox"
    assert second.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["recipient_id"] == "user-2"
    assert second.json()["user_agent"] == "Chrome"


def test_register_requires_keys(client: TestClient, auth_headers) -> None:
    response = client.post(
        "/push-subscriptions/",
        json={"subscription": {"endpoint": "https://push.example/1", "keys": {"auth": "x"}}},
        headers=auth_headers("user-1"),
    )

    assert response.status_code == 422


def test_unregister_endpoint(client: TestClient, auth_headers) -> None:
    headers = auth_headers("user-1")
    client.post("/push-subscriptions/", json={"subscription": SUBSCRIPTION}, headers=headers)

    foreign = client.delete(
        "/push-subscriptions/",
        params={"endpoint": SUBSCRIPTION["endpoint"]},
        headers=auth_headers("user-2"),
    )
    removed = client.delete(
        "/push-subscriptions/", params={"endpoint": SUBSCRIPTION["endpoint"]}, headers=headers
    )
    again = client.delete(
        "/push-subscriptions/", params={"endpoint": SUBSCRIPTION["endpoint"]}, headers=headers
    )

    assert foreign.status_code == 404
    assert removed.status_code == 204
    assert again.status_code == 404
