"""Core application modules."""
from todo_api.core.auth import (
    UsernameTakenError,
    authenticate_user,
    create_user,
    get_user_by_username,
    issue_token,
)
from todo_api.core.identity import Identity, identity_from_claims
from todo_api.core.security import (
    dummy_verify,
    hash_password,
    verify_and_update_password,
    verify_password,
)
from todo_api.core.tokens import InvalidTokenError, create_access_token, decode_access_token

__all__ = [
    # Auth
    "UsernameTakenError",
    "authenticate_user",
    "create_user",
    "get_user_by_username",
    "issue_token",
    # Identity
    "Identity",
    "identity_from_claims",
    # Security
    "hash_password",
    "verify_password",
    "verify_and_update_password",
    "dummy_verify",
    # Tokens
    "InvalidTokenError",
    "create_access_token",
    "decode_access_token",
]
