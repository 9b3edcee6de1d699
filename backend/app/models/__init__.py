"""
Domain models.
"""
from app.models.user import User, UserRole
from app.models.mall import Mall, Store, StoreContact

__all__ = [
    # User models
    "User",
    "UserRole",
    # Mall models
    "Mall",
    "Store",
    "StoreContact",
]
