"""
Category create/edit form
"""
import logging
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from storefront_admin.admin.client import AdminApiClient, ApiError, NotFoundError, ValidationError
from storefront_admin.utils.slug import slugify

logger = logging.getLogger(__name__)

CATEGORIES_PATH = "/admin/categories"


def parent_candidates(categories: List[Dict[str, Any]], editing_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Categories that may be chosen as parent: root categories other than the one being edited"""
    return [
        c for c in categories
        if not c.get("parentId") and c.get("id") != editing_id
    ]


class CategoryForm(BaseModel):
    name: str = ""
    slug: str = ""
    description: str = ""
    image: str = ""
    parent_id: str = ""
    # Off by default: every name change re-derives the slug, even after a manual edit
    protect_manual_slug: bool = False
    slug_edited: bool = False

    @classmethod
    def from_category(cls, category: Dict[str, Any], protect_manual_slug: bool = False) -> "CategoryForm":
        return cls(
            name=category.get("name") or "",
            slug=category.get("slug") or "",
            description=category.get("description") or "",
            image=category.get("image") or "",
            parent_id=category.get("parentId") or "",
            protect_manual_slug=protect_manual_slug,
        )

    def set_name(self, value: str):
        self.name = value
        if not (self.protect_manual_slug and self.slug_edited):
            self.slug = slugify(value)

    def set_slug(self, value: str):
        self.slug = value
        # Clearing the slug hands it back to the name
        self.slug_edited = bool(value)

    def validate_fields(self):
        if not self.name.strip() or not self.slug.strip():
            raise ValidationError("Name and slug are required")

    def to_payload(self) -> Dict[str, Any]:
        """Request body; empty optional fields are sent as null"""
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description or None,
            "image": self.image or None,
            "parentId": self.parent_id or None,
        }


class CategoryFormController:
    """Drives the new-category and edit-category pages"""

    def __init__(self, client: AdminApiClient, protect_manual_slug: bool = False):
        self.client = client
        self.protect_manual_slug = protect_manual_slug
        self.form = CategoryForm(protect_manual_slug=protect_manual_slug)
        self.category: Optional[Dict[str, Any]] = None
        self.parent_options: List[Dict[str, Any]] = []
        self.editing = False
        self.not_found = False
        self.error: Optional[str] = None
        self.redirect_to: Optional[str] = None

    @property
    def state(self) -> str:
        if self.not_found:
            return "not_found"
        if self.error:
            return "error"
        return "ready"

    def load_for_create(self):
        try:
            categories = self.client.list_categories()
        except ApiError as e:
            # The form still works without parent options
            logger.warning(f"Could not load parent categories: {e.message}")
            categories = []
        self.parent_options = parent_candidates(categories)

    def load_for_edit(self, slug: str) -> bool:
        """Find the category by slug, then fetch its full record by id"""
        self.editing = True
        try:
            categories = self.client.list_categories()
            found = next((c for c in categories if c.get("slug") == slug), None)
            if found is None:
                raise NotFoundError("Category not found", 404)
            self.category = self.client.get_category(found["id"])
        except NotFoundError as e:
            self.not_found = True
            self.error = e.message
            return False
        except ApiError as e:
            self.error = e.message
            return False

        self.parent_options = parent_candidates(categories, editing_id=self.category["id"])
        self.form = CategoryForm.from_category(self.category, protect_manual_slug=self.protect_manual_slug)
        return True

    def submit(self) -> bool:
        """Create or update; on failure the form keeps its input and error holds the message"""
        self.error = None
        self.redirect_to = None

        if self.editing and self.category is None:
            self.error = "Category not found"
            return False

        try:
            self.form.validate_fields()
        except ValidationError as e:
            self.error = e.message
            return False

        payload = self.form.to_payload()
        try:
            if self.editing:
                self.client.update_category(self.category["id"], payload)
            else:
                self.client.create_category(payload)
        except ApiError as e:
            self.error = e.message
            return False

        self.redirect_to = CATEGORIES_PATH
        return True
