from pydantic import BaseModel, Field, field_validator
from typing import Optional


class BrandPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = None
    logo: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Brand name cannot be blank')
        return v

    @field_validator('slug', 'logo')
    @classmethod
    def empty_to_none(cls, v):
        if v is None:
            return None
        return v.strip() or None
