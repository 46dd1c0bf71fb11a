"""Conversion between wire payloads and domain notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from app.domain.entities import NOTIFICATION_TYPE_INFO, Notification


def _parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def notification_from_payload(data: Mapping[str, Any]) -> Notification:
    """Build a :class:`Notification` from a REST or realtime row payload."""

    raw_id = data.get("id")
    return Notification(
        id=int(raw_id) if raw_id is not None else None,
        recipient_id=str(data.get("recipient_id") or ""),
        title=str(data.get("title") or ""),
        message=str(data.get("message") or ""),
        link=data.get("link") or None,
        type=str(data.get("type") or NOTIFICATION_TYPE_INFO),
        is_read=bool(data.get("is_read", False)),
        created_at=_parse_datetime(data.get("created_at")),
    )


__all__ = ["notification_from_payload"]
