"""
Product and batch option schemas for the public menu and admin dashboard.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

ProductCategory = Literal["bagels", "drinks", "sides"]


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category: ProductCategory
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None
    available: bool = True
    image_url: Optional[str] = None


class ProductUpdate(BaseModel):
    """Partial update; description/image_url set to null are cleared."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category: Optional[ProductCategory] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None
    available: Optional[bool] = None
    image_url: Optional[str] = None


class ProductAvailabilityUpdate(BaseModel):
    available: bool


class ProductResponse(BaseModel):
    id: UUID
    name: str
    category: str
    price: Decimal
    description: Optional[str] = None
    available: bool
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MenuResponse(BaseModel):
    """Available products grouped by category."""
    bagels: List[ProductResponse]
    drinks: List[ProductResponse]
    sides: List[ProductResponse]


class StatusOption(BaseModel):
    value: bool
    label: str


class BulkDeleteRequest(BaseModel):
    product_ids: List[UUID]


class BulkDeleteResponse(BaseModel):
    deleted_count: int
    failed_count: int


class BatchOptionResponse(BaseModel):
    id: UUID
    size: int
    discount: Decimal
    name: str

    model_config = ConfigDict(from_attributes=True)
