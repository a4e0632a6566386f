"""
Route Layout Endpoint
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
from storefront_admin.admin.layout import Layout, resolve_route, navigation_for
from storefront_admin.api.admin_deps import get_optional_user
from storefront_admin.models.user import User

router = APIRouter()


@router.get("")
async def get_route_layout(
    path: str = Query(..., min_length=1),
    user: Optional[User] = Depends(get_optional_user)
):
    """Which chrome to render for a page path, and where to send the user instead if anywhere"""
    decision = resolve_route(path, user)

    navigation = []
    if decision.layout == Layout.ADMIN and decision.redirect is None:
        navigation = [item._asdict() for item in navigation_for(path)]

    return {
        "layout": decision.layout.value,
        "redirect": decision.redirect,
        "navigation": navigation
    }
