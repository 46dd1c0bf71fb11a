"""FastAPI dependency utilities."""

from collections.abc import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.use_cases.notifications.push_fanout import PushSender
from app.domain.entities import ROLE_USER, Principal
from app.infrastructure.push import WebPushSender
from app.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_principal(token: str) -> Principal:
    """Resolve the authenticated recipient for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise _unauthorized()

    role = payload.get("role") or ROLE_USER
    if not isinstance(role, str):
        raise _unauthorized()

    return Principal(id=subject.strip(), role=role)


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    """Return the signed-in recipient from the ``Authorization`` header."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")
    return resolve_principal(credentials.credentials)


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    """Ensure the authenticated principal has administrator privileges."""

    if not principal.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return principal


def get_push_sender_factory() -> Callable[[], PushSender]:
    """Return the factory used to build the push sender for a fanout run."""

    return WebPushSender.from_settings
