"""
API v1 router aggregation.
"""
from fastapi import APIRouter

from app.api.v1 import auth, malls, stores

api_router = APIRouter()

# Include all v1 routers
api_router.include_router(auth.router)
api_router.include_router(auth.legacy_router)
api_router.include_router(malls.router, prefix="/malls", tags=["malls"])
api_router.include_router(stores.router, prefix="/stores", tags=["stores"])

__all__ = ["api_router"]
