"""
Services for authentication, session management, and mall operations.
"""
from app.services.auth_service import (
    hash_password,
    verify_password,
    authenticate_user,
    get_user_directory,
)
from app.services.session_service import session_store, SessionStore, get_session_store
from app.services.mall_service import MallService, get_mall_service
from app.services.validation_service import validate_dataset

__all__ = [
    "hash_password",
    "verify_password",
    "authenticate_user",
    "get_user_directory",
    "session_store",
    "SessionStore",
    "get_session_store",
    "MallService",
    "get_mall_service",
    "validate_dataset",
]
