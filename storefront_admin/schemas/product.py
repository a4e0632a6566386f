"""
Admin Product Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from decimal import Decimal


class ProductPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = None
    description: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=0, ge=0)
    images: List[str] = []
    thumbnail: Optional[str] = None
    categoryId: Optional[str] = None
    brandId: Optional[str] = None
    isActive: bool = True
    isFeatured: bool = False
    sku: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=50)
    size: Optional[str] = Field(None, max_length=50)
    material: Optional[str] = Field(None, max_length=100)
    availableColors: List[str] = []
    availableSizes: List[str] = []

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Product name cannot be blank')
        return v

    @field_validator('slug', 'description', 'thumbnail', 'categoryId', 'brandId', 'sku', 'color', 'size', 'material')
    @classmethod
    def empty_to_none(cls, v):
        if v is None:
            return None
        return v.strip() or None

    @field_validator('images', 'availableColors', 'availableSizes')
    @classmethod
    def drop_blank_entries(cls, v):
        return [item.strip() for item in v if item and item.strip()]
