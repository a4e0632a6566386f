from storefront_admin.models.user import User
from storefront_admin.models.category import Category
from storefront_admin.models.brand import Brand
from storefront_admin.models.product import Product
from storefront_admin.models.order import Order, OrderItem, OrderStatus
from storefront_admin.models.admin_activity_log import AdminActivityLog

__all__ = [
    "User",
    "Category",
    "Brand",
    "Product",
    "Order",
    "OrderItem",
    "OrderStatus",
    "AdminActivityLog"
]
