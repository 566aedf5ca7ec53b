from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(account_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Generate JWT access token

    Args:
        account_id: Account UUID
        expires_delta: Lifetime override (defaults to JWT_EXPIRE_MINUTES)

    Returns:
        JWT token string (HS256 by default)
    """
    now = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=ApplicationConfig.JWT_EXPIRE_MINUTES)
    payload = {
        "sub": str(account_id),
        "exp": now + lifetime,
        "iat": now,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except JWTError:
        return None

    if "sub" not in payload or "iat" not in payload:
        return None
    return payload
