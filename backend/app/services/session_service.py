"""
Redis-backed session management service.
"""
import json
import logging
import secrets
from typing import Optional, Dict, Any
from datetime import datetime, timezone

import redis
from redis import Redis
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SessionStore:
    """Redis-backed session store for managing user sessions."""

    def __init__(self):
        """Initialize Redis connection."""
        self.redis_client: Redis = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30
        )
        self.session_expiry = settings.SESSION_EXPIRY_SECONDS

    def generate_session_id(self) -> str:
        """
        Generate a cryptographically secure session ID.

        Returns:
            64-character hex string
        """
        return secrets.token_hex(32)

    def create_session(self, username: str, user_data: Dict[str, Any]) -> str:
        """
        Create a new session for a user.

        Args:
            username: Account name of the user
            user_data: Dictionary containing user information to store in session

        Returns:
            Session ID string

        Example:
            >>> session_id = session_store.create_session("admin", {"role": "admin"})
        """
        session_id = self.generate_session_id()
        session_key = f"session:{session_id}"

        session_data = {
            "username": username,
            "created_at": _now(),
            "last_activity": _now(),
            **user_data
        }

        self.redis_client.setex(
            session_key,
            self.session_expiry,
            json.dumps(session_data)
        )

        return session_id

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve session data by session ID.

        Refreshes the session's expiry on every successful lookup.

        Args:
            session_id: Session ID to look up

        Returns:
            Dictionary with session data, or None if session doesn't exist or expired
        """
        session_key = f"session:{session_id}"
        data = self.redis_client.get(session_key)

        if data:
            session_data = json.loads(data)
            session_data["last_activity"] = _now()
            self.redis_client.setex(
                session_key,
                self.session_expiry,
                json.dumps(session_data)
            )
            return session_data

        return None

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session (logout).

        Args:
            session_id: Session ID to delete

        Returns:
            True if session was deleted, False if it didn't exist
        """
        session_key = f"session:{session_id}"
        result = self.redis_client.delete(session_key)
        return result > 0

    def session_exists(self, session_id: str) -> bool:
        """
        Check if a session exists.

        Args:
            session_id: Session ID to check

        Returns:
            True if session exists, False otherwise
        """
        session_key = f"session:{session_id}"
        return self.redis_client.exists(session_key) > 0

    def extend_session(self, session_id: str, additional_seconds: Optional[int] = None) -> bool:
        """
        Extend session expiry time.

        Args:
            session_id: Session ID to extend
            additional_seconds: New time to live (default: reset to full expiry)

        Returns:
            True if session was extended, False if it doesn't exist
        """
        session_key = f"session:{session_id}"

        if not self.session_exists(session_id):
            return False

        expiry = additional_seconds if additional_seconds else self.session_expiry
        self.redis_client.expire(session_key, expiry)
        return True

    def health_check(self) -> bool:
        """
        Check if Redis connection is healthy.

        Returns:
            True if Redis is responding, False otherwise
        """
        try:
            self.redis_client.ping()
            return True
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return False


# Global session store instance
session_store = SessionStore()


def get_session_store() -> SessionStore:
    """
    Dependency function to get the session store.
    """
    return session_store
