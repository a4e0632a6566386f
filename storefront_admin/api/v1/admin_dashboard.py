"""
Admin Dashboard Endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func, desc
from storefront_admin.database import get_db
from storefront_admin.models.order import Order, OrderItem, OrderStatus
from storefront_admin.models.product import Product
from storefront_admin.models.user import User
from storefront_admin.config import settings

router = APIRouter()


@router.get("")
async def get_dashboard_stats(db: Session = Depends(get_db)):
    """Aggregate store statistics for the dashboard"""
    total_products = db.query(func.count(Product.id)).scalar() or 0
    total_orders = db.query(func.count(Order.id)).scalar() or 0
    total_users = db.query(func.count(User.id)).scalar() or 0

    total_revenue = db.query(func.coalesce(func.sum(Order.total), 0)).filter(
        Order.status != OrderStatus.CANCELLED
    ).scalar() or 0

    low_stock_products = db.query(func.count(Product.id)).filter(
        Product.is_active == True,
        Product.quantity <= settings.LOW_STOCK_THRESHOLD
    ).scalar() or 0

    recent_orders = db.query(Order).order_by(Order.created_at.desc()).limit(5).all()

    sold = func.sum(OrderItem.quantity).label("sold_count")
    top_products = db.query(Product, sold)\
        .join(OrderItem, OrderItem.product_id == Product.id)\
        .group_by(Product.id)\
        .order_by(desc("sold_count"), Product.name)\
        .limit(5)\
        .all()

    return {
        "stats": {
            "totalProducts": total_products,
            "totalOrders": total_orders,
            "totalUsers": total_users,
            "totalRevenue": round(float(total_revenue), 2),
            "lowStockProducts": low_stock_products,
            "recentOrders": [
                {
                    "id": o.id,
                    "orderNumber": o.order_number,
                    "createdAt": o.created_at.isoformat() if o.created_at else None,
                    "total": float(o.total),
                    "status": o.status.value
                }
                for o in recent_orders
            ],
            "topProducts": [
                {
                    "id": p.id,
                    "name": p.name,
                    "price": float(p.price),
                    "soldCount": int(count or 0)
                }
                for p, count in top_products
            ]
        }
    }
