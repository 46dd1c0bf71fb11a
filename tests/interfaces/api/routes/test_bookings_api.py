"""Integration tests for the booking endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient


def test_confirming_a_booking_notifies_the_customer(client: TestClient, auth_headers) -> None:
    headers = auth_headers("customer-1")

    response = client.post(
        "/bookings/",
        json={
            "venue_id": "venue-7",
            "booking_date": "2024-03-10",
            "booking_time": "7:30 pm",
            "amount": "40.00",
        },
        headers=headers,
    )

    assert response.status_code == 201, response.text
    booking = response.json()
    assert booking["status"] == "confirmed"
    assert booking["booking_time"] == "7:30 PM"
    assert booking["user_id"] == "customer-1"

    listed = client.get("/bookings/", headers=headers).json()
    assert [item["id"] for item in listed] == [booking["id"]]

    feed = client.get("/notifications/", headers=headers).json()
    assert len(feed) == 1
    assert feed[0]["title"] == "Booking confirmed"
    assert feed[0]["type"] == "success"
    assert feed[0]["link"] == "/my-bookings"


def test_booking_with_invalid_time_is_rejected(client: TestClient, auth_headers) -> None:
    response = client.post(
        "/bookings/",
        json={
            "venue_id": "venue-7",
            "booking_date": "2024-03-10",
            "booking_time": "25:99",
            "amount": "40.00",
        },
        headers=auth_headers("customer-1"),
    )

    assert response.status_code == 400
    assert "Invalid booking time" in response.json()["detail"]
