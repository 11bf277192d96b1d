"""FastAPI dependencies for authentication and database."""
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from todo_api.config import Settings, get_settings
from todo_api.core.identity import Identity, identity_from_claims
from todo_api.core.tokens import InvalidTokenError, decode_access_token
from todo_api.database import get_db

logger = logging.getLogger(__name__)

# HTTP Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Identity:
    """
    Get the caller's identity from a Bearer token.

    Args:
        token: Bearer token from Authorization header
        settings: Application settings

    Returns:
        Identity built from the token's claims

    Raises:
        HTTPException: If the token is missing or fails validation
    """
    if not token:
        raise _unauthorized("Not authenticated")

    try:
        claims = decode_access_token(token.credentials, settings)
    except InvalidTokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise _unauthorized("Invalid authentication credentials")

    return identity_from_claims(claims)


# Type aliases for cleaner dependency injection
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
DatabaseSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
