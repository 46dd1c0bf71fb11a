"""HTTP function endpoints invoked by the insert trigger and the scheduler."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session

from app.application.use_cases.bookings import cleanup_expired_bookings
from app.application.use_cases.notifications import fanout_push
from app.application.use_cases.notifications.push_fanout import PushSender
from app.config import get_settings
from app.infrastructure.database import get_db
from app.infrastructure.security import verify_service_key
from app.interfaces.api.dependencies import get_push_sender_factory
from app.interfaces.api.schemas import PushFunctionRequest

router = APIRouter(prefix="/functions", tags=["functions"])
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _json(content: dict[str, Any], status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def _unauthorized() -> JSONResponse:
    return _json({"error": "Invalid service credentials"}, status.HTTP_401_UNAUTHORIZED)


@router.api_route("/push", methods=["POST", "OPTIONS"])
async def push_function(
    request: Request,
    db: Session = Depends(get_db),
    sender_factory: Callable[[], PushSender] = Depends(get_push_sender_factory),
) -> Response:
    """Deliver a newly inserted notification to the recipient's devices."""

    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=CORS_HEADERS)
    if not verify_service_key(_bearer_token(request)):
        return _unauthorized()

    try:
        body = PushFunctionRequest.model_validate(await request.json())
        result = await run_in_threadpool(
            fanout_push,
            db,
            body.record.model_dump(),
            sender_factory=sender_factory,
            max_workers=get_settings().push_max_workers,
        )
    except Exception as exc:
        logger.warning("Push function failed: %s", exc, exc_info=True)
        return _json({"error": str(exc)}, status.HTTP_400_BAD_REQUEST)

    return _json({"message": result.message})


@router.api_route("/cleanup-bookings", methods=_ALL_METHODS)
async def cleanup_bookings_function(
    request: Request,
    db: Session = Depends(get_db),
) -> Response:
    """Delete confirmed/completed bookings whose grace window has elapsed."""

    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
    if not verify_service_key(_bearer_token(request)):
        return _unauthorized()

    try:
        result = await run_in_threadpool(cleanup_expired_bookings, db)
    except Exception as exc:
        logger.error("Error: %s", exc, exc_info=True)
        return _json(
            {"error": str(exc) or "Unknown error"},
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return _json({"success": True, "deleted": result.deleted, "message": result.message})
