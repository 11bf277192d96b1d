"""JWT issuance and validation."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from todo_api.config import Settings

ALGORITHM = "HS256"

# Claim names used for the caller's identity
USER_ID_CLAIM = "nameid"
USERNAME_CLAIM = "unique_name"

__all__ = [
    "ALGORITHM",
    "USER_ID_CLAIM",
    "USERNAME_CLAIM",
    "InvalidTokenError",
    "create_access_token",
    "decode_access_token",
]


def create_access_token(
    user_id: int,
    username: str,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """
    Create a signed access token for a verified user.

    Args:
        user_id: User ID
        username: Username
        settings: Application settings (key, issuer, audience, lifetime)
        now: Issuance time, defaults to the current UTC time

    Returns:
        Encoded JWT
    """
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        USER_ID_CLAIM: str(user_id),
        USERNAME_CLAIM: username,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": issued_at,
        "nbf": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_key, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Validate a token and return its claims.

    Signature, issuer, audience and expiry are all checked; any failure
    raises.

    Args:
        token: Encoded JWT
        settings: Application settings

    Returns:
        Validated claims

    Raises:
        InvalidTokenError: If the token fails any check
    """
    return jwt.decode(
        token,
        settings.jwt_key,
        algorithms=[ALGORITHM],
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        leeway=settings.jwt_clock_skew_seconds,
        options={"require": ["exp", "iss", "aud"]},
    )
