"""
User model for authentication and authorization.
"""
from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    """User roles for RBAC."""
    ADMIN = "admin"        # toggles whole malls
    MANAGER = "manager"    # toggles individual stores
    STORE = "store"        # edits its store's details


class User(BaseModel):
    """Account from the demo user directory."""

    username: str
    password_hash: str
    role: UserRole

    def __repr__(self):
        return f"<User {self.username} ({self.role.value})>"
