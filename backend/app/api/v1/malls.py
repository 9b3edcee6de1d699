"""
Mall management API endpoints.
Handles mall listing, mall/store open-close toggles and store detail edits.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.api.v1.auth import get_optional_user
from app.models.mall import Mall
from app.schemas.mall import (
    MallToggleResponse,
    StoreToggleResponse,
    StoreUpdate,
    StoreUpdateResponse,
)
from app.schemas.user import CurrentUser
from app.services.mall_service import MallService, get_mall_service

router = APIRouter()


@router.get("", response_model=List[Mall], response_model_exclude_none=True)
async def list_malls(
    service: MallService = Depends(get_mall_service),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """
    Get all malls with their stores.

    Requires authentication with any role.
    """
    return service.list_malls(current_user)


@router.get("/public", response_model=List[Mall], response_model_exclude_none=True)
async def list_public_malls(service: MallService = Depends(get_mall_service)):
    """
    Get all malls with their stores for the public map (read-only).
    """
    return service.list_public_malls()


@router.patch("/{mall_id}/toggle", response_model=MallToggleResponse)
async def toggle_mall(
    mall_id: int,
    service: MallService = Depends(get_mall_service),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """
    Open or close a whole mall.

    Admin only. Closing a mall closes all of its stores; opening it does not
    reopen them.
    """
    mall = service.toggle_mall(mall_id, current_user)
    action = "opened" if mall["isOpen"] else "closed"
    return {"message": f"Mall {action} successfully", "mall": mall}


@router.patch("/{mall_id}/stores/{store_id}/toggle", response_model=StoreToggleResponse)
async def toggle_store(
    mall_id: int,
    store_id: int,
    service: MallService = Depends(get_mall_service),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """
    Open or close a single store.

    Manager only. A closed store cannot be opened while its mall is closed.
    """
    store = service.toggle_store(mall_id, store_id, current_user)
    action = "opened" if store["isOpen"] else "closed"
    return {"message": f"Store {action} successfully", "store": store}


@router.put("/{mall_id}/stores/{store_id}", response_model=StoreUpdateResponse, response_model_exclude_none=True)
async def update_store(
    mall_id: int,
    store_id: int,
    store_update: StoreUpdate,
    service: MallService = Depends(get_mall_service),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """
    Update store details (name, description, hours, type, contact).

    Store role only. Partial update: empty or missing fields keep their
    current value, unknown fields are ignored.
    """
    store = service.update_store(mall_id, store_id, store_update, current_user)
    return {"message": "Store updated successfully", "store": store}
