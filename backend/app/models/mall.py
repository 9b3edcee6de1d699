"""
Mall and Store domain models.

These mirror the persisted JSON document field for field (``isOpen`` and
``opening_hours`` keep their on-disk spelling through aliases). Unknown keys
found in the document are kept so a full rewrite never drops data.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StoreContact(BaseModel):
    """Optional contact block of a store."""

    model_config = ConfigDict(extra="allow")

    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class Store(BaseModel):
    """Retail unit belonging to exactly one mall."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str
    type: str = ""
    opening_hours: str = ""
    is_open: bool = Field(default=True, alias="isOpen")
    description: Optional[str] = None
    contact: Optional[StoreContact] = None

    def __repr__(self):
        return f"<Store {self.id} {self.name}>"


class Mall(BaseModel):
    """Mall with its coordinates, open flag and owned stores."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str
    latitude: float
    longitude: float
    is_open: bool = Field(default=True, alias="isOpen")
    stores: List[Store] = Field(default_factory=list)

    def __repr__(self):
        return f"<Mall {self.id} {self.name}>"

    def to_document(self) -> dict:
        """Serialize using the on-disk field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
