"""
Pydantic schemas for mall and store requests and responses.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.mall import Store


class MallStatus(BaseModel):
    """Mall summary returned after a toggle."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    is_open: bool = Field(alias="isOpen")


class StoreStatus(BaseModel):
    """Store summary returned after a toggle."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    is_open: bool = Field(alias="isOpen")
    mall_id: int = Field(alias="mallId")


class MallToggleResponse(BaseModel):
    """Response for the admin mall toggle."""
    message: str
    mall: MallStatus


class StoreToggleResponse(BaseModel):
    """Response for the manager store toggle."""
    message: str
    store: StoreStatus


# Store patch schemas. Unknown keys are dropped, and empty values are
# skipped when applied, so a field cannot be cleared through this schema.
class StoreContactUpdate(BaseModel):
    """Contact fields a store user may change."""
    model_config = ConfigDict(extra="ignore")

    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class StoreUpdate(BaseModel):
    """Schema for updating a store's descriptive fields."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    opening_hours: Optional[str] = None
    type: Optional[str] = None
    contact: Optional[StoreContactUpdate] = None


class StoreDetail(Store):
    """Store record merged with its owning mall's id and name."""
    mall_id: int = Field(alias="mallId")
    mall_name: str = Field(alias="mallName")


class StoreUpdateResponse(BaseModel):
    """Response for the store detail update."""
    message: str = "Store updated successfully"
    store: StoreDetail


class FlattenedStore(Store):
    """Display-oriented store record with synthesized map coordinates."""
    mall_id: int = Field(alias="mallId")
    mall_name: str = Field(alias="mallName")
    latitude: float
    longitude: float
    website: Optional[str] = None
