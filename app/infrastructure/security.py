"""Security helpers for access and service tokens."""

from datetime import datetime, timedelta, timezone
import hmac

from jose import JWTError, jwt

from app.config import get_settings

_ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def verify_service_key(provided: str | None) -> bool:
    """Return ``True`` when ``provided`` matches the configured service credential.

    Function endpoints are open when no ``SERVICE_ROLE_KEY`` is configured.
    """

    expected = get_settings().service_role_key
    if not expected:
        return True
    if not provided:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())
