"""
Deletion-safety rules shared by the Category API and the list controller
"""
from typing import List

BLOCKED_BY_PRODUCTS = "Cannot delete category with products."
BLOCKED_BY_SUBCATEGORIES = "Cannot delete category with subcategories."


def delete_blockers(product_count: int, children_count: int) -> List[str]:
    """Every reason that currently prevents deleting a category.

    Both conditions are reported when both apply; an empty list means the
    category can be deleted.
    """
    reasons = []
    if product_count > 0:
        reasons.append(BLOCKED_BY_PRODUCTS)
    if children_count > 0:
        reasons.append(BLOCKED_BY_SUBCATEGORIES)
    return reasons


def can_delete(product_count: int, children_count: int) -> bool:
    return not delete_blockers(product_count, children_count)
