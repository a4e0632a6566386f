"""
Dashboard page
"""
from typing import Any, Dict, List, NamedTuple, Optional
from storefront_admin.admin.client import AdminApiClient, ApiError


class StatCard(NamedTuple):
    name: str
    value: str
    href: str


def format_money(amount) -> str:
    return f"RM {float(amount or 0):,.2f}"


class DashboardController:

    def __init__(self, client: AdminApiClient):
        self.client = client
        self.stats: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None

    def load(self) -> bool:
        """Fetch the stats; call again to retry after an error"""
        self.error = None
        try:
            self.stats = self.client.get_dashboard()
        except ApiError as e:
            self.error = e.message
            return False
        return True

    @property
    def stat_cards(self) -> List[StatCard]:
        stats = self.stats or {}
        return [
            StatCard("Total Products", str(stats.get("totalProducts") or 0), "/admin/products"),
            StatCard("Total Orders", str(stats.get("totalOrders") or 0), "/admin/orders"),
            StatCard("Total Users", str(stats.get("totalUsers") or 0), "/admin/users"),
            StatCard("Total Revenue", format_money(stats.get("totalRevenue")), "/admin/orders"),
        ]

    @property
    def low_stock_warning(self) -> Optional[str]:
        count = (self.stats or {}).get("lowStockProducts") or 0
        if count > 0:
            return f"{count} products are running low on stock."
        return None

    @property
    def recent_orders(self) -> List[Dict[str, Any]]:
        return ((self.stats or {}).get("recentOrders") or [])[:5]

    @property
    def top_products(self) -> List[Dict[str, Any]]:
        return ((self.stats or {}).get("topProducts") or [])[:5]
