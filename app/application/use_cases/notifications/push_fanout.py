"""Fan a single notification record out to every push endpoint of its recipient."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy.orm import Session

from app.domain.entities import PushSubscription
from app.infrastructure.push import DeliveryOutcome, DeliveryResult
from app.infrastructure.repositories import PushSubscriptionRepository

logger = logging.getLogger(__name__)

DEFAULT_PUSH_TITLE = "New Notification"
DEFAULT_PUSH_URL = "/"
DEFAULT_MAX_WORKERS = 8


class PushSender(Protocol):
    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> DeliveryResult:
        ...


@dataclass(frozen=True)
class FanoutResult:
    """Summary returned to the caller of a fanout run."""

    attempted: int
    message: str
    pruned: int = 0
    results: tuple[DeliveryResult, ...] = ()


def build_push_payload(record: Mapping[str, Any]) -> dict[str, str]:
    """Return the payload shared by every device of the recipient."""

    return {
        "title": record.get("title") or DEFAULT_PUSH_TITLE,
        "body": record.get("message") or "",
        "url": record.get("link") or DEFAULT_PUSH_URL,
    }


def fanout_push(
    session: Session,
    record: Mapping[str, Any],
    *,
    sender_factory: Callable[[], PushSender],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> FanoutResult:
    """Deliver ``record`` to all push subscriptions registered by its recipient.

    Missing recipients and recipients without subscriptions are successful
    no-ops. Each subscription gets exactly one attempt; attempts run in
    parallel and one failure never prevents the others. Subscriptions the push
    service reports as gone are removed once the whole batch has finished.
    """

    recipient_id = str(record.get("recipient_id") or "").strip()
    if not recipient_id:
        return FanoutResult(attempted=0, message="No recipient")

    repository = PushSubscriptionRepository(session)
    subscriptions = repository.list_for_recipient(recipient_id)
    if not subscriptions:
        return FanoutResult(attempted=0, message="No subscriptions")

    sender = sender_factory()
    payload = build_push_payload(record)
    results = _deliver_all(sender, subscriptions, payload, max_workers=max_workers)

    gone_ids = [result.subscription_id for result in results if result.is_terminal]
    pruned = repository.delete_many(gone_ids) if gone_ids else 0
    if pruned:
        logger.info("Pruned %s stale push subscriptions for %s", pruned, recipient_id)

    delivered = sum(1 for result in results if result.outcome is DeliveryOutcome.DELIVERED)
    logger.info(
        "Push fanout for %s: %s attempted, %s delivered",
        recipient_id,
        len(results),
        delivered,
    )
    return FanoutResult(
        attempted=len(results),
        message=f"Sent {len(results)} notifications",
        pruned=pruned,
        results=tuple(results),
    )


def _deliver_all(
    sender: PushSender,
    subscriptions: Sequence[PushSubscription],
    payload: dict[str, Any],
    *,
    max_workers: int,
) -> list[DeliveryResult]:
    workers = max(1, min(max_workers, len(subscriptions)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="push") as pool:
        return list(
            pool.map(
                lambda subscription: _deliver_one(sender, subscription, payload),
                subscriptions,
            )
        )


def _deliver_one(
    sender: PushSender, subscription: PushSubscription, payload: dict[str, Any]
) -> DeliveryResult:
    try:
        return sender.send(subscription, payload)
    except Exception as exc:
        logger.warning(
            "Unexpected error delivering push to subscription %s: %s",
            subscription.id,
            exc,
            exc_info=True,
        )
        return DeliveryResult(subscription.id, DeliveryOutcome.FAILED, detail=str(exc))


__all__ = [
    "DEFAULT_PUSH_TITLE",
    "DEFAULT_PUSH_URL",
    "FanoutResult",
    "PushSender",
    "build_push_payload",
    "fanout_push",
]
