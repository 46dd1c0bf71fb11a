"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

NotificationType = Literal["info", "warning", "success", "broadcast"]


class NotificationCreate(BaseModel):
    """Payload used by administrators to message a recipient."""

    recipient_id: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=120)
    message: str = Field(..., min_length=1)
    link: str | None = Field(default=None, max_length=500)
    type: NotificationType = "info"


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: str
    title: str
    message: str
    link: str | None = None
    type: NotificationType = "info"
    is_read: bool = False
    created_at: datetime


class NotificationReadAck(BaseModel):
    ok: bool = True
    id: int


class NotificationMarkAllResponse(BaseModel):
    ok: bool = True
    marked_count: int


__all__ = [
    "NotificationCreate",
    "NotificationMarkAllResponse",
    "NotificationRead",
    "NotificationReadAck",
    "NotificationType",
]
