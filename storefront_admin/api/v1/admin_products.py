"""
Admin Product Management Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request, Response
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_
from typing import Optional
import logging
from storefront_admin.database import get_db
from storefront_admin.schemas.product import ProductPayload
from storefront_admin.models.product import Product
from storefront_admin.models.category import Category
from storefront_admin.models.brand import Brand
from storefront_admin.models.user import User
from storefront_admin.api.admin_deps import require_admin
from storefront_admin.utils.admin_activity import log_admin_activity
from storefront_admin.utils.slug import generate_slug, make_unique_slug

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_product(p: Product) -> dict:
    data = {
        "id": p.id,
        "name": p.name,
        "slug": p.slug,
        "description": p.description,
        "price": float(p.price) if p.price is not None else 0.0,
        "quantity": p.quantity,
        "images": p.images or [],
        "thumbnail": p.thumbnail,
        "categoryId": p.category_id,
        "brandId": p.brand_id,
        "isActive": p.is_active,
        "isFeatured": p.is_featured,
        "sku": p.sku,
        "color": p.color,
        "size": p.size,
        "material": p.material,
        "availableColors": p.available_colors or [],
        "availableSizes": p.available_sizes or [],
        "createdAt": p.created_at.isoformat() if p.created_at else None,
        "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
        "category": None,
        "brand": None
    }
    if p.category:
        data["category"] = {"id": p.category.id, "name": p.category.name, "slug": p.category.slug}
    if p.brand:
        data["brand"] = {"id": p.brand.id, "name": p.brand.name}
    return data


def get_product_or_404(db: Session, product_id: str) -> Product:
    product = db.query(Product)\
        .options(joinedload(Product.category), joinedload(Product.brand))\
        .filter(Product.id == product_id)\
        .first()
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


def apply_payload(db: Session, product: Product, payload: ProductPayload):
    """Validate references and copy a full-replace body onto the product"""
    if payload.categoryId and not db.query(Category.id).filter(Category.id == payload.categoryId).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category not found")
    if payload.brandId and not db.query(Brand.id).filter(Brand.id == payload.brandId).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Brand not found")

    slug_query = db.query(Product.slug)
    if product.id:
        slug_query = slug_query.filter(Product.id != product.id)
    existing_slugs = [row.slug for row in slug_query.all()]

    if payload.slug:
        slug = generate_slug(payload.slug)
        if slug in existing_slugs:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A product with this slug already exists")
    else:
        slug = make_unique_slug(generate_slug(payload.name), existing_slugs)
    if not slug:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not derive a slug from the product name")

    product.name = payload.name
    product.slug = slug
    product.description = payload.description
    product.price = payload.price
    product.quantity = payload.quantity
    product.images = payload.images
    product.thumbnail = payload.thumbnail or (payload.images[0] if payload.images else None)
    product.category_id = payload.categoryId
    product.brand_id = payload.brandId
    # Products without a category are drafts
    product.is_active = payload.isActive and payload.categoryId is not None
    product.is_featured = payload.isFeatured
    product.sku = payload.sku
    product.color = payload.color
    product.size = payload.size
    product.material = payload.material
    product.available_colors = payload.availableColors
    product.available_sizes = payload.availableSizes


@router.get("")
async def list_products(
    search: Optional[str] = None,
    categoryId: Optional[str] = None,
    brandId: Optional[str] = None,
    status_filter: Optional[str] = Query("all", alias="status", pattern="^(active|draft|all)$"),
    db: Session = Depends(get_db)
):
    """List products with optional filters"""
    query = db.query(Product).options(joinedload(Product.category), joinedload(Product.brand))

    if search:
        query = query.filter(
            or_(
                Product.name.ilike(f"%{search}%"),
                Product.slug.ilike(f"%{search}%"),
                Product.sku.ilike(f"%{search}%")
            )
        )
    if categoryId:
        query = query.filter(Product.category_id == categoryId)
    if brandId:
        query = query.filter(Product.brand_id == brandId)

    if status_filter == "active":
        query = query.filter(Product.is_active == True)
    elif status_filter == "draft":
        query = query.filter(Product.is_active == False)

    products = query.order_by(Product.created_at.desc()).all()
    return {"products": [serialize_product(p) for p in products]}


@router.get("/{product_id}")
async def get_product(product_id: str, db: Session = Depends(get_db)):
    """Get product details"""
    return {"product": serialize_product(get_product_or_404(db, product_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductPayload,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a product; products without a category are saved as drafts"""
    product = Product()
    apply_payload(db, product, payload)
    db.add(product)
    db.commit()
    db.refresh(product)

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="product_created",
        entity_type="product",
        entity_id=product.id,
        details={"name": product.name, "slug": product.slug, "isActive": product.is_active},
        request=request
    )

    return {"product": serialize_product(product)}


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: ProductPayload,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Replace every editable field of a product"""
    product = get_product_or_404(db, product_id)
    apply_payload(db, product, payload)
    db.commit()
    db.refresh(product)

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="product_updated",
        entity_type="product",
        entity_id=product.id,
        details={"name": product.name, "isActive": product.is_active},
        request=request
    )

    return {"product": serialize_product(product)}


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a product"""
    product = get_product_or_404(db, product_id)
    product_name = product.name
    db.delete(product)
    db.commit()

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="product_deleted",
        entity_type="product",
        entity_id=product_id,
        details={"name": product_name},
        request=request
    )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
