"""Authentication utilities."""
import logging

from opentelemetry import metrics
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todo_api.config import Settings
from todo_api.core.security import (
    dummy_verify,
    hash_password,
    verify_and_update_password,
)
from todo_api.core.tokens import create_access_token
from todo_api.models import User

logger = logging.getLogger(__name__)

meter = metrics.get_meter(__name__)
login_failures = meter.create_counter(
    "todo_api.auth.login_failures",
    description="Rejected login attempts",
)


class UsernameTakenError(ValueError):
    """Raised when registering a username that already exists."""


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username, ignoring case."""
    stmt = select(User).where(func.lower(User.username) == func.lower(username))
    return db.execute(stmt).scalar_one_or_none()


def create_user(db: Session, username: str | None, password: str | None) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        username: Username
        password: Plaintext password

    Returns:
        Created user object

    Raises:
        ValueError: If username or password is empty
        UsernameTakenError: If the username is already registered
    """
    if _is_blank(username) or _is_blank(password):
        raise ValueError("Username and password required.")

    if get_user_by_username(db, username) is not None:
        raise UsernameTakenError("Username already exists.")

    user = User(username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # A concurrent registration won the race past the pre-check
        db.rollback()
        raise UsernameTakenError("Username already exists.") from e
    db.refresh(user)

    logger.info("Registered user %s", user.username, extra={"user_id": user.id})
    return user


def authenticate_user(db: Session, username: str | None, password: str | None) -> User | None:
    """
    Authenticate a user by username and password.

    Unknown usernames and wrong passwords both return None after similar
    work, so callers cannot tell them apart.

    Args:
        db: Database session
        username: Username
        password: Plaintext password

    Returns:
        User object if authentication successful, None otherwise
    """
    user = get_user_by_username(db, username) if username else None

    if not user:
        dummy_verify()
        login_failures.add(1)
        logger.info("Login rejected for unknown or empty username")
        return None

    matched, new_hash = verify_and_update_password(password or "", user.password_hash)
    if not matched:
        login_failures.add(1)
        logger.info("Login rejected: wrong password", extra={"user_id": user.id})
        return None

    if new_hash:
        user.password_hash = new_hash
        db.commit()
        logger.info("Upgraded password hash", extra={"user_id": user.id})

    return user


def issue_token(user: User, settings: Settings) -> str:
    """Issue an access token for an authenticated user."""
    return create_access_token(user.id, user.username, settings)
