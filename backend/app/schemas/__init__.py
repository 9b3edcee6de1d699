"""
Pydantic schemas for request/response validation.
"""
from app.schemas.user import (
    CurrentUser,
    UserLogin,
    UserLoginResponse,
)
from app.schemas.mall import (
    MallStatus,
    StoreStatus,
    MallToggleResponse,
    StoreToggleResponse,
    StoreContactUpdate,
    StoreUpdate,
    StoreDetail,
    StoreUpdateResponse,
    FlattenedStore,
)

__all__ = [
    # User schemas
    "CurrentUser",
    "UserLogin",
    "UserLoginResponse",
    # Mall schemas
    "MallStatus",
    "StoreStatus",
    "MallToggleResponse",
    "StoreToggleResponse",
    "StoreContactUpdate",
    "StoreUpdate",
    "StoreDetail",
    "StoreUpdateResponse",
    "FlattenedStore",
]
