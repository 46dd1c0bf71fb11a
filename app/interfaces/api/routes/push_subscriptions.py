"""Endpoints used by devices to register for push notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.push_subscriptions import (
    register_push_subscription as register_push_subscription_uc,
    unregister_push_subscription as unregister_push_subscription_uc,
)
from app.config import get_settings
from app.domain.entities import Principal, PushSubscription
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_principal
from app.interfaces.api.schemas import (
    PushSubscriptionCreate,
    PushSubscriptionRead,
    VapidPublicKeyRead,
)

router = APIRouter(prefix="/push-subscriptions", tags=["push"])


def _to_read_model(subscription: PushSubscription) -> PushSubscriptionRead:
    return PushSubscriptionRead(
        id=subscription.id or 0,
        recipient_id=subscription.recipient_id,
        endpoint=subscription.endpoint or "",
        user_agent=subscription.user_agent,
        created_at=subscription.created_at,
    )


@router.get("/vapid-public-key", response_model=VapidPublicKeyRead)
def read_vapid_public_key() -> VapidPublicKeyRead:
    """Return the application server key browsers need to subscribe."""

    settings = get_settings()
    if not settings.vapid_public_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Push notifications are not configured",
        )
    return VapidPublicKeyRead(public_key=settings.vapid_public_key)


@router.post("/", response_model=PushSubscriptionRead, status_code=status.HTTP_201_CREATED)
def register_push_subscription(
    subscription_in: PushSubscriptionCreate,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> PushSubscriptionRead:
    """Register (or refresh) the caller's device for push delivery."""

    user_agent = subscription_in.user_agent or request.headers.get("user-agent")
    try:
        subscription = register_push_subscription_uc(
            db,
            recipient_id=principal.id,
            subscription=subscription_in.subscription.as_subscription_info(),
            user_agent=user_agent,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(subscription)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def unregister_push_subscription(
    endpoint: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Response:
    """Stop delivering push notifications to ``endpoint``."""

    try:
        unregister_push_subscription_uc(db, recipient_id=principal.id, endpoint=endpoint)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
