"""
Admin Category Schemas
"""
from pydantic import BaseModel, field_validator
from typing import Optional


class CategoryPayload(BaseModel):
    """Create/update body. Updates are full replace, so every field is resent."""
    name: str = ""
    slug: str = ""
    description: Optional[str] = None
    image: Optional[str] = None
    parentId: Optional[str] = None

    @field_validator('name', 'slug')
    @classmethod
    def strip_required(cls, v):
        return (v or "").strip()

    @field_validator('description', 'image', 'parentId')
    @classmethod
    def empty_to_none(cls, v):
        # Empty strings are stored as NULL, never as ""
        if v is None:
            return None
        v = v.strip()
        return v or None
