"""Security utilities for password hashing."""

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes the password so bytes past bcrypt's 72-byte limit still count.
# Plain bcrypt hashes and hashes below min_rounds still verify and are re-hashed on login.
pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated=["bcrypt"],
    bcrypt_sha256__min_rounds=12,
)


def hash_password(password: str) -> str:
    """Hash a password using SHA-256 pre-hashed bcrypt.

    The result embeds algorithm, cost and salt, so verification needs nothing
    beyond the stored string.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    A stored value that is not a recognizable hash counts as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def verify_and_update_password(
    plain_password: str, hashed_password: str
) -> tuple[bool, str | None]:
    """
    Verify a password and re-hash it if the stored hash is outdated.

    Args:
        plain_password: Candidate password
        hashed_password: Stored hash

    Returns:
        tuple: (matched, new_hash)
            - matched: whether the password is correct
            - new_hash: replacement hash when the stored one uses deprecated
              parameters, otherwise None
    """
    try:
        return pwd_context.verify_and_update(plain_password, hashed_password)
    except ValueError:
        return False, None


def dummy_verify() -> None:
    """Spend the time of a real verification when there is no user to check."""
    pwd_context.dummy_verify()
