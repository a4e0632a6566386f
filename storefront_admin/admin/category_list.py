"""
Category listing with two-level grouping and the delete confirmation flow
"""
import logging
from typing import Any, Dict, List, NamedTuple, Optional
from storefront_admin.admin.client import AdminApiClient, ApiError
from storefront_admin.utils.category_rules import can_delete, delete_blockers

logger = logging.getLogger(__name__)


class CategoryNode(NamedTuple):
    category: Dict[str, Any]
    children: List[Dict[str, Any]]


def build_tree(categories: List[Dict[str, Any]]) -> List[CategoryNode]:
    """
    Partition a flat category list into roots and their direct children

    One pass over the list with a parentId index. Categories nested deeper
    than one level are not attached to any root.
    """
    roots = []
    children_by_parent: Dict[str, List[Dict[str, Any]]] = {}
    for category in categories:
        parent_id = category.get("parentId")
        if parent_id:
            children_by_parent.setdefault(parent_id, []).append(category)
        else:
            roots.append(category)
    return [CategoryNode(root, children_by_parent.get(root["id"], [])) for root in roots]


def product_count(category: Dict[str, Any]) -> int:
    return (category.get("_count") or {}).get("products", 0)


def blockers_for(category: Dict[str, Any]) -> List[str]:
    """Reasons the delete action is disabled for this category"""
    return delete_blockers(product_count(category), len(category.get("children") or []))


class CategoryListController:
    """Drives the categories page"""

    def __init__(self, client: AdminApiClient):
        self.client = client
        self.categories: List[Dict[str, Any]] = []
        self.loaded = False
        self.error: Optional[str] = None
        self.pending_delete: Optional[str] = None

    def load(self) -> bool:
        try:
            self.categories = self.client.list_categories()
        except ApiError as e:
            self.error = e.message
            return False
        finally:
            self.loaded = True
        self.error = None
        return True

    @property
    def tree(self) -> List[CategoryNode]:
        return build_tree(self.categories)

    def find(self, category_id: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.categories if c.get("id") == category_id), None)

    def request_delete(self, category_id: str) -> bool:
        """Open the confirmation step; refused while the delete action is disabled"""
        category = self.find(category_id)
        if category is None or not can_delete(product_count(category), len(category.get("children") or [])):
            return False
        self.pending_delete = category_id
        return True

    def cancel_delete(self):
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        if self.pending_delete is None:
            return False

        category_id = self.pending_delete
        try:
            self.client.delete_category(category_id)
        except ApiError as e:
            logger.error(f"Error deleting category {category_id}: {e.message}")
            self.error = e.message
            self.pending_delete = None
            return False

        self.categories = [c for c in self.categories if c.get("id") != category_id]
        # Parents must stop counting the deleted child
        for category in self.categories:
            children = category.get("children")
            if children:
                category["children"] = [child for child in children if child.get("id") != category_id]

        self.pending_delete = None
        return True
