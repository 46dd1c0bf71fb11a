"""Tests for delivering one notification to every device of its recipient."""

from __future__ import annotations

import threading
from types import SimpleNamespace

import pytest
from pywebpush import WebPushException
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import build_push_payload, fanout_push
from app.domain.entities import PushSubscription
from app.infrastructure import push as push_module
from app.infrastructure.push import (
    DeliveryOutcome,
    DeliveryResult,
    PushConfigurationError,
    WebPushSender,
)
from app.infrastructure.repositories import PushSubscriptionRepository


def _subscribe(session, recipient_id: str, endpoint: str) -> PushSubscription:
    return PushSubscriptionRepository(session).upsert(
        PushSubscription(
            id=None,
            recipient_id=recipient_id,
            subscription={
                "endpoint": endpoint,
                "keys": {"p256dh": "p256dh-key", "auth": "auth-secret"},
            },
        )
    )


class RecordingSender:
    """Sender double answering with a preset outcome per endpoint."""

    def __init__(self, outcomes: dict[str, object] | None = None) -> None:
        self.outcomes = outcomes or {}
        self.calls: list[tuple[str, dict]] = []
        self._lock = threading.Lock()

    def send(self, subscription: PushSubscription, payload: dict) -> DeliveryResult:
        with self._lock:
            self.calls.append((subscription.endpoint, payload))
        outcome = self.outcomes.get(subscription.endpoint, DeliveryOutcome.DELIVERED)
        if isinstance(outcome, Exception):
            raise outcome
        status_code = {DeliveryOutcome.GONE: 410, DeliveryOutcome.FAILED: 500}.get(outcome, 201)
        return DeliveryResult(subscription.id, outcome, status_code)


def test_build_push_payload_applies_defaults() -> None:
    assert build_push_payload({"title": None, "message": None, "link": None}) == {
        "title": "New Notification",
        "body": "",
        "url": "/",
    }
    assert build_push_payload(
        {"title": "Booking confirmed", "message": "See you", "link": "/my-bookings"}
    ) == {"title": "Booking confirmed", "body": "See you", "url": "/my-bookings"}


def test_fanout_without_recipient_is_a_noop(db_session) -> None:
    factory_calls = []

    result = fanout_push(
        db_session,
        {"title": "Hello"},
        sender_factory=lambda: factory_calls.append(1) or RecordingSender(),
    )

    assert result.attempted == 0
    assert result.message == "No recipient"
    assert factory_calls == []


def test_fanout_without_subscriptions_does_not_need_credentials(db_session) -> None:
    def _unconfigured():
        raise PushConfigurationError("missing keys")

    result = fanout_push(db_session, {"recipient_id": "user-1"}, sender_factory=_unconfigured)

    assert result.attempted == 0
    assert result.message == "No subscriptions"


def test_fanout_attempts_every_subscription_once(db_session) -> None:
    for index in range(3):
        _subscribe(db_session, "user-1", f"https://push.example/u1/{index}")
    _subscribe(db_session, "user-2", "https://push.example/u2/0")
    sender = RecordingSender()

    result = fanout_push(
        db_session,
        {"recipient_id": "user-1", "title": "Hi", "message": "Body", "link": "/x"},
        sender_factory=lambda: sender,
        max_workers=2,
    )

    assert result.attempted == 3
    assert result.message == "Sent 3 notifications"
    assert sorted(endpoint for endpoint, _ in sender.calls) == [
        "https://push.example/u1/0",
        "https://push.example/u1/1",
        "https://push.example/u1/2",
    ]
    assert all(payload == {"title": "Hi", "body": "Body", "url": "/x"} for _, payload in sender.calls)


def test_one_failure_does_not_stop_the_others(db_session) -> None:
    _subscribe(db_session, "user-1", "https://push.example/broken")
    _subscribe(db_session, "user-1", "https://push.example/ok")
    sender = RecordingSender({"https://push.example/broken": RuntimeError("boom")})

    result = fanout_push(db_session, {"recipient_id": "user-1"}, sender_factory=lambda: sender)

    assert result.attempted == 2
    outcomes = sorted(item.outcome.value for item in result.results)
    assert outcomes == ["delivered", "failed"]
    assert result.pruned == 0


def test_gone_subscriptions_are_pruned(db_session) -> None:
    _subscribe(db_session, "user-1", "https://push.example/gone")
    _subscribe(db_session, "user-1", "https://push.example/flaky")
    _subscribe(db_session, "user-1", "https://push.example/ok")
    sender = RecordingSender(
        {
            "https://push.example/gone": DeliveryOutcome.GONE,
            "https://push.example/flaky": DeliveryOutcome.FAILED,
        }
    )

    result = fanout_push(db_session, {"recipient_id": "user-1"}, sender_factory=lambda: sender)

    assert result.attempted == 3
    assert result.pruned == 1
    remaining = PushSubscriptionRepository(db_session).list_for_recipient("user-1")
    assert sorted(item.endpoint for item in remaining) == [
        "https://push.example/flaky",
        "https://push.example/ok",
    ]


def test_web_push_sender_requires_private_key() -> None:
    with pytest.raises(PushConfigurationError):
        WebPushSender(vapid_private_key=None, vapid_subject="mailto:admin@booknex.com")


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [(404, DeliveryOutcome.GONE), (410, DeliveryOutcome.GONE), (500, DeliveryOutcome.FAILED)],
)
def test_web_push_sender_maps_push_service_errors(
    monkeypatch: pytest.MonkeyPatch, status_code: int, expected: DeliveryOutcome
) -> None:
    response = SimpleNamespace(status_code=status_code, text='{"reason": "expired"}')

    def _fail(**kwargs):
        raise WebPushException("Push failed", response=response)

    monkeypatch.setattr(push_module, "webpush", _fail)
    sender = WebPushSender(vapid_private_key="private", vapid_subject="mailto:admin@booknex.com")
    subscription = PushSubscription(
        id=7,
        recipient_id="user-1",
        subscription={"endpoint": "https://push.example/7", "keys": {}},
    )

    result = sender.send(subscription, {"title": "Hi"})

    assert result.outcome is expected
    assert result.status_code == status_code
    assert result.detail == "expired"


def test_web_push_sender_signs_with_configured_subject(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def _ok(**kwargs):
        captured.update(kwargs)
        return SimpleNamespace(status_code=201)

    monkeypatch.setattr(push_module, "webpush", _ok)
    sender = WebPushSender(
        vapid_private_key="private", vapid_subject="mailto:ops@booknex.com", ttl=60
    )
    subscription = PushSubscription(
        id=1, recipient_id="user-1", subscription={"endpoint": "https://push.example/1"}
    )

    result = sender.send(subscription, {"title": "Hi", "body": "", "url": "/"})

    assert result.outcome is DeliveryOutcome.DELIVERED
    assert captured["vapid_claims"] == {"sub": "mailto:ops@booknex.com"}
    assert captured["vapid_private_key"] == "private"
    assert captured["ttl"] == 60
    assert captured["data"] == '{"title": "Hi", "body": "", "url": "/"}'


def test_delete_many_rolls_back_when_commit_fails(
    db_session, monkeypatch: pytest.MonkeyPatch
) -> None:
    subscription = _subscribe(db_session, "user-1", "https://push.example/gone")
    repository = PushSubscriptionRepository(db_session)

    def _fail() -> None:
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(db_session, "commit", _fail)
    with pytest.raises(SQLAlchemyError):
        repository.delete_many([subscription.id])
    monkeypatch.undo()

    remaining = repository.list_for_recipient("user-1")
    assert [item.id for item in remaining] == [subscription.id]
