"""
New-product form
"""
import logging
import re
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from storefront_admin.admin.client import AdminApiClient, ApiError, ValidationError
from storefront_admin.admin.image_picker import split_value

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/admin/products"


def product_slug(name: str) -> str:
    """Slug rule of the product form: whitespace to hyphens, then keep [a-z0-9-]"""
    slug = re.sub(r"\s+", "-", (name or "").lower().strip())
    return re.sub(r"[^a-z0-9-]", "", slug)


def _toggle(items: List[str], item: str) -> List[str]:
    return [i for i in items if i != item] if item in items else items + [item]


class ProductForm(BaseModel):
    name: str = ""
    slug: str = ""
    description: str = ""
    price: float = 0
    quantity: int = 0
    images: List[str] = []
    thumbnail: str = ""
    category_id: str = ""
    brand_id: str = ""
    is_active: bool = True
    is_featured: bool = False
    sku: str = ""
    color: str = ""
    size: str = ""
    material: str = ""
    available_colors: List[str] = []
    available_sizes: List[str] = []

    def set_name(self, value: str):
        self.name = value
        # A name that yields no slug keeps the previous one
        self.slug = product_slug(value) or self.slug

    def set_images(self, joined: str):
        """Takes the image picker's joined value"""
        self.images = split_value(joined)

    def toggle_color(self, color: str):
        self.available_colors = _toggle(self.available_colors, color)

    def toggle_size(self, size: str):
        self.available_sizes = _toggle(self.available_sizes, size)

    def validate_fields(self):
        if not self.name.strip():
            raise ValidationError("Product name is required")

    def to_payload(self, as_draft: bool = False) -> Dict[str, Any]:
        category_id = self.category_id or None
        # No category, or saved explicitly as draft: inactive
        is_active = False if (as_draft or category_id is None) else self.is_active
        return {
            "name": self.name,
            "slug": self.slug or None,
            "description": self.description or None,
            "price": self.price,
            "quantity": self.quantity,
            "images": list(self.images),
            "thumbnail": self.thumbnail or None,
            "categoryId": category_id,
            "brandId": self.brand_id or None,
            "isActive": is_active,
            "isFeatured": self.is_featured,
            "sku": self.sku or None,
            "color": self.color or None,
            "size": self.size or None,
            "material": self.material or None,
            "availableColors": list(self.available_colors),
            "availableSizes": list(self.available_sizes),
        }


class ProductFormController:
    """Drives the new-product page"""

    def __init__(self, client: AdminApiClient):
        self.client = client
        self.form = ProductForm()
        self.categories: List[Dict[str, Any]] = []
        self.brands: List[Dict[str, Any]] = []
        self.public_images: List[str] = []
        self.error: Optional[str] = None
        self.redirect_to: Optional[str] = None

    def load(self) -> bool:
        """Categories and brands are required; the image listing is optional"""
        try:
            self.categories = self.client.list_categories()
            self.brands = self.client.list_brands()
        except ApiError as e:
            self.error = e.message
            return False

        try:
            self.public_images = self.client.list_images()
        except ApiError as e:
            logger.warning(f"Image listing unavailable: {e.message}")
            self.public_images = []
        return True

    def submit(self, as_draft: bool = False) -> bool:
        self.error = None
        self.redirect_to = None

        try:
            self.form.validate_fields()
        except ValidationError as e:
            self.error = e.message
            return False

        try:
            self.client.create_product(self.form.to_payload(as_draft=as_draft))
        except ApiError as e:
            self.error = e.message
            return False

        self.redirect_to = PRODUCTS_PATH
        return True
