"""Web Push delivery through the ``pywebpush`` library."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pywebpush import WebPushException, webpush

from app.config import Settings, get_settings
from app.domain.entities import PushSubscription

logger = logging.getLogger(__name__)

# Push services answer 404/410 once an endpoint has been unsubscribed or expired.
TERMINAL_STATUS_CODES = frozenset({404, 410})


class PushConfigurationError(RuntimeError):
    """Raised when VAPID credentials are missing."""


class DeliveryOutcome(str, Enum):
    DELIVERED = "delivered"
    GONE = "gone"
    FAILED = "failed"


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a single push attempt."""

    subscription_id: int | None
    outcome: DeliveryOutcome
    status_code: int | None = None
    detail: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.outcome is DeliveryOutcome.GONE


def _extract_push_error_details(response: Any) -> str | None:
    """Return a human readable description for a push service error response."""

    if response is None:
        return None
    body = getattr(response, "text", None)
    if not body:
        return None
    body = body.strip()
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        return body[:200]
    if isinstance(parsed, dict):
        message = parsed.get("message") or parsed.get("reason") or parsed.get("error")
        if message:
            return str(message)
    return json.dumps(parsed)[:200]


class WebPushSender:
    """Deliver JSON payloads to Web Push subscriptions signed with VAPID."""

    def __init__(
        self,
        *,
        vapid_private_key: str | None,
        vapid_subject: str,
        ttl: int = 86400,
        timeout: float = 10.0,
    ) -> None:
        if not vapid_private_key:
            raise PushConfigurationError(
                "VAPID_PRIVATE_KEY must be configured to deliver push notifications"
            )
        self._vapid_private_key = vapid_private_key
        self._vapid_subject = vapid_subject
        self._ttl = ttl
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "WebPushSender":
        settings = settings or get_settings()
        return cls(
            vapid_private_key=settings.vapid_private_key,
            vapid_subject=settings.vapid_subject,
            ttl=settings.push_ttl_seconds,
        )

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> DeliveryResult:
        """Attempt one delivery; never raises for push service errors."""

        try:
            response = webpush(
                subscription_info=subscription.subscription,
                data=json.dumps(payload),
                vapid_private_key=self._vapid_private_key,
                # pywebpush adds ``aud``/``exp`` to the claims it receives.
                vapid_claims={"sub": self._vapid_subject},
                ttl=self._ttl,
                timeout=self._timeout,
            )
        except WebPushException as exc:
            status_code = getattr(exc.response, "status_code", None)
            detail = _extract_push_error_details(exc.response) or str(exc)
            if status_code in TERMINAL_STATUS_CODES:
                logger.info(
                    "Push endpoint gone for subscription %s (status %s)",
                    subscription.id,
                    status_code,
                )
                return DeliveryResult(
                    subscription.id, DeliveryOutcome.GONE, status_code, detail
                )
            logger.warning(
                "Push delivery failed for subscription %s with status %s: %s",
                subscription.id,
                status_code,
                detail,
            )
            return DeliveryResult(
                subscription.id, DeliveryOutcome.FAILED, status_code, detail
            )

        return DeliveryResult(
            subscription.id,
            DeliveryOutcome.DELIVERED,
            getattr(response, "status_code", None),
        )


__all__ = [
    "DeliveryOutcome",
    "DeliveryResult",
    "PushConfigurationError",
    "TERMINAL_STATUS_CODES",
    "WebPushSender",
]
