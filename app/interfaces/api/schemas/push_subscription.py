"""Pydantic models for push subscription registration."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PushSubscriptionKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class PushSubscriptionPayload(BaseModel):
    """Subscription object produced by ``PushManager.subscribe`` in the browser."""

    model_config = ConfigDict(populate_by_name=True)

    endpoint: str = Field(..., min_length=1, max_length=500)
    expiration_time: float | None = Field(default=None, alias="expirationTime")
    keys: PushSubscriptionKeys

    def as_subscription_info(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PushSubscriptionCreate(BaseModel):
    subscription: PushSubscriptionPayload
    user_agent: str | None = Field(default=None, max_length=255)


class PushSubscriptionRead(BaseModel):
    id: int
    recipient_id: str
    endpoint: str
    user_agent: str | None = None
    created_at: datetime | None = None


class VapidPublicKeyRead(BaseModel):
    public_key: str


__all__ = [
    "PushSubscriptionCreate",
    "PushSubscriptionKeys",
    "PushSubscriptionPayload",
    "PushSubscriptionRead",
    "VapidPublicKeyRead",
]
