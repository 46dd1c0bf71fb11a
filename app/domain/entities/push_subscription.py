"""Domain entity describing a push-delivery endpoint owned by a recipient."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class PushSubscription:
    """Opaque Web Push subscription registered by one of the recipient's devices."""

    id: int | None
    recipient_id: str
    subscription: dict[str, Any] = field(default_factory=dict)
    user_agent: str | None = None
    created_at: datetime | None = None

    @property
    def endpoint(self) -> str | None:
        endpoint = self.subscription.get("endpoint")
        return str(endpoint) if endpoint else None


__all__ = ["PushSubscription"]
