"""Endpoints and websocket handler for the realtime notification feed."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    DEFAULT_FEED_LIMIT,
    list_notifications as list_notifications_uc,
    mark_all_notifications_as_read as mark_all_notifications_as_read_uc,
    mark_notification_as_read as mark_notification_as_read_uc,
    publish_notification as publish_notification_uc,
)
from app.domain.entities import Notification, Principal
from app.infrastructure.database import get_db
from app.infrastructure.notifications import notification_manager
from app.interfaces.api.dependencies import (
    get_current_principal,
    require_admin,
    resolve_principal,
)
from app.interfaces.api.routes_helpers import notification_record, run_push_fanout
from app.interfaces.api.schemas import (
    NotificationCreate,
    NotificationMarkAllResponse,
    NotificationRead,
    NotificationReadAck,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int = Query(DEFAULT_FEED_LIMIT, ge=1, le=100),
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> list[NotificationRead]:
    """Return the most recent notifications for the signed-in recipient."""

    notifications = list_notifications_uc(
        db, principal.id, limit=limit, unread_only=unread_only
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def send_notification(
    notification_in: NotificationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin),
) -> NotificationRead:
    """Send a message to a recipient (admin broadcast)."""

    try:
        notification = publish_notification_uc(
            db,
            recipient_id=notification_in.recipient_id,
            title=notification_in.title,
            message=notification_in.message,
            link=notification_in.link,
            notification_type=notification_in.type,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Admin %s sent notification %s to %s", principal.id, notification.id, notification.recipient_id)
    background_tasks.add_task(run_push_fanout, notification_record(notification))
    return _notification_to_schema(notification)


@router.patch("/{notification_id}/read", response_model=NotificationReadAck)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> NotificationReadAck:
    """Mark a single notification as read."""

    try:
        mark_notification_as_read_uc(db, notification_id, recipient_id=principal.id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NotificationReadAck(id=notification_id)


@router.post("/mark-all-read", response_model=NotificationMarkAllResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> NotificationMarkAllResponse:
    """Mark every unread notification of the recipient as read."""

    updated = mark_all_notifications_as_read_uc(db, recipient_id=principal.id)
    return NotificationMarkAllResponse(marked_count=updated)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notification inserts to the recipient."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        principal = resolve_principal(token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    await notification_manager.connect(principal.id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        notification_manager.disconnect(principal.id, websocket)
    except Exception:
        notification_manager.disconnect(principal.id, websocket)
        raise
