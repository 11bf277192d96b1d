"""Caller identity derived from validated token claims."""
import logging
from dataclasses import dataclass
from typing import Any

from todo_api.core.tokens import USER_ID_CLAIM, USERNAME_CLAIM

logger = logging.getLogger(__name__)

ANONYMOUS_USER_ID = 0


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, passed explicitly into every protected handler."""

    user_id: int
    username: str | None = None


def identity_from_claims(claims: dict[str, Any]) -> Identity:
    """
    Build an identity from a validated claims set.

    A missing or unparseable user id claim resolves to user id 0, which no
    stored user has, so ownership-scoped queries return nothing for it.

    Args:
        claims: Claims returned by token validation

    Returns:
        Identity for the caller
    """
    username = claims.get(USERNAME_CLAIM)
    raw_user_id = claims.get(USER_ID_CLAIM)

    try:
        user_id = int(raw_user_id)
    except (TypeError, ValueError):
        logger.warning("Token has no usable user id claim; treating caller as anonymous")
        user_id = ANONYMOUS_USER_ID

    return Identity(user_id=user_id, username=username)
