"""
Route-level layout decisions

One ordered table decides, per page path, which chrome wraps the page and
whether the visitor has to be sent elsewhere first. The first row whose
prefix matches on a path-segment boundary wins.
"""
import enum
from typing import List, NamedTuple, Optional
from urllib.parse import quote
from storefront_admin.config import settings

ADMIN_LANDING_PATH = "/admin/products"


class Layout(str, enum.Enum):
    SITE = "site"    # banner, navbar and footer around the page
    ADMIN = "admin"  # admin top navigation only


class RouteRule(NamedTuple):
    prefix: str
    layout: Layout
    requires_admin: bool = False
    redirect_to: Optional[str] = None
    exact: bool = False

    def matches(self, path: str) -> bool:
        if self.exact:
            return path == self.prefix
        if self.prefix == "/":
            return True
        return path == self.prefix or path.startswith(self.prefix + "/")


class RouteDecision(NamedTuple):
    layout: Layout
    redirect: Optional[str] = None


class NavItem(NamedTuple):
    name: str
    href: str
    active: bool = False


ROUTE_TABLE: List[RouteRule] = [
    RouteRule("/admin", Layout.ADMIN, requires_admin=True, redirect_to=ADMIN_LANDING_PATH, exact=True),
    RouteRule("/admin", Layout.ADMIN, requires_admin=True),
    RouteRule("/", Layout.SITE),
]

ADMIN_NAVIGATION: List[NavItem] = [
    NavItem("Dashboard", "/admin"),
    NavItem("Products", "/admin/products"),
    NavItem("Categories", "/admin/categories"),
    NavItem("Orders", "/admin/orders"),
    NavItem("Users", "/admin/users"),
    NavItem("Analytics", "/admin/analytics"),
]


def clean_path(path: str) -> str:
    """Drop query string, fragment and trailing slash"""
    path = (path or "/").split("?", 1)[0].split("#", 1)[0].strip() or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def match_rule(path: str) -> RouteRule:
    path = clean_path(path)
    for rule in ROUTE_TABLE:
        if rule.matches(path):
            return rule
    # ROUTE_TABLE ends with a catch-all row
    raise LookupError(f"No route rule for {path}")


def resolve_route(path: str, user=None) -> RouteDecision:
    """
    Layout for a page path and, when needed, where to redirect instead

    Admin routes redirect anonymous visitors to sign-in (returning to the
    requested page afterwards) and signed-in users without the admin flag to
    the storefront home page.
    """
    rule = match_rule(path)

    if rule.requires_admin:
        if user is None:
            return_url = quote(clean_path(path), safe="")
            return RouteDecision(rule.layout, f"{settings.SIGN_IN_PATH}?redirect={return_url}")
        if not getattr(user, "is_admin", False):
            return RouteDecision(rule.layout, "/")

    return RouteDecision(rule.layout, rule.redirect_to)


def navigation_for(path: str) -> List[NavItem]:
    """Admin navigation with the entry for the current page flagged"""
    path = clean_path(path)
    return [item._replace(active=item.href == path) for item in ADMIN_NAVIGATION]
