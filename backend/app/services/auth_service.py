"""
Authentication service for password hashing and demo account lookup.
"""
import logging
from functools import lru_cache
from typing import Dict, Optional

from passlib.context import CryptContext

from app.core.config import settings
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

# Configure passlib for password hashing with Argon2
pwd_context = CryptContext(
    schemes=["argon2", "bcrypt"],
    deprecated="auto",
    argon2__memory_cost=65536,  # 64 MB
    argon2__time_cost=3,         # 3 iterations
    argon2__parallelism=4        # 4 threads
)


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2.

    Args:
        password: Plain text password to hash

    Returns:
        Hashed password string

    Example:
        >>> hashed = hash_password("a")
        >>> verify_password("a", hashed)
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Previously hashed password to check against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache(maxsize=1)
def get_user_directory() -> Dict[str, User]:
    """
    Build the demo user directory from settings.

    Passwords are hashed once, on first use. Entries with an unknown role
    are skipped with a warning.

    Returns:
        Mapping of username to User
    """
    directory: Dict[str, User] = {}
    for entry in settings.DEMO_USERS:
        try:
            role = UserRole(entry["role"])
        except (KeyError, ValueError):
            logger.warning(f"Skipping demo user with invalid role: {entry.get('username')}")
            continue

        directory[entry["username"]] = User(
            username=entry["username"],
            password_hash=hash_password(entry["password"]),
            role=role,
        )

    logger.info(f"Loaded {len(directory)} demo users")
    return directory


def authenticate_user(username: str, password: str) -> Optional[User]:
    """
    Check credentials against the demo user directory.

    Args:
        username: Account name
        password: Plain text password

    Returns:
        The matching User, or None if the credentials are wrong
    """
    user = get_user_directory().get(username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
