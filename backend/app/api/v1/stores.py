"""
Flattened store endpoints for map display.

Coordinates in these responses are synthesized around each mall and change
on every call; use the mall endpoints to target mutations.
"""
from typing import List

from fastapi import APIRouter, Depends, Query

from app.schemas.mall import FlattenedStore
from app.services.mall_service import MallService, get_mall_service

router = APIRouter()


@router.get("", response_model=List[FlattenedStore], response_model_exclude_none=True)
async def list_stores(service: MallService = Depends(get_mall_service)):
    """
    Get every store across all malls with display coordinates.
    """
    return service.list_stores_flattened()


@router.get("/nearby", response_model=List[FlattenedStore], response_model_exclude_none=True)
async def list_nearby_stores(
    lat: float = Query(..., ge=-90, le=90, description="Center latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Center longitude"),
    radius: float = Query(1000, gt=0, description="Search radius in meters"),
    service: MallService = Depends(get_mall_service),
):
    """
    Get stores within a radius (meters) of a point.
    """
    return service.find_nearby_stores(lat, lon, radius)
