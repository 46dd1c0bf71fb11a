"""Request bodies accepted by the function endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NotificationRecord(BaseModel):
    """Row of the notification table as delivered by the insert trigger."""

    model_config = ConfigDict(extra="allow")

    recipient_id: str | None = None
    title: str | None = None
    message: str | None = None
    link: str | None = None


class PushFunctionRequest(BaseModel):
    record: NotificationRecord


__all__ = ["NotificationRecord", "PushFunctionRequest"]
