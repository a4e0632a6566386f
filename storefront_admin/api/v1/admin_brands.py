"""
Admin Brands Management Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from sqlalchemy.orm import Session
from sqlalchemy import func
import logging
from storefront_admin.database import get_db
from storefront_admin.schemas.brand import BrandPayload
from storefront_admin.models.brand import Brand
from storefront_admin.models.product import Product
from storefront_admin.models.user import User
from storefront_admin.api.admin_deps import require_admin
from storefront_admin.utils.admin_activity import log_admin_activity
from storefront_admin.utils.slug import generate_slug, make_unique_slug

router = APIRouter()
logger = logging.getLogger(__name__)


def serialize_brand(brand: Brand, product_count: int = 0) -> dict:
    return {
        "id": brand.id,
        "name": brand.name,
        "slug": brand.slug,
        "logo": brand.logo,
        "createdAt": brand.created_at.isoformat() if brand.created_at else None,
        "_count": {"products": product_count}
    }


def get_brand_or_404(db: Session, brand_id: str) -> Brand:
    brand = db.query(Brand).filter(Brand.id == brand_id).first()
    if not brand:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found")
    return brand


def resolve_brand_slug(db: Session, payload: BrandPayload, brand_id: str = None) -> str:
    """Explicit slugs must be free; derived slugs are made unique"""
    query = db.query(Brand.slug)
    if brand_id:
        query = query.filter(Brand.id != brand_id)
    existing_slugs = [row.slug for row in query.all()]

    if payload.slug:
        slug = generate_slug(payload.slug)
        if not slug:
            raise HTTPException(status_code=400, detail="Slug must contain at least one letter or digit")
        if slug in existing_slugs:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A brand with this slug already exists")
        return slug

    slug = generate_slug(payload.name)
    if not slug:
        raise HTTPException(status_code=400, detail="Could not derive a slug from the brand name")
    return make_unique_slug(slug, existing_slugs)


@router.get("")
async def list_brands(db: Session = Depends(get_db)):
    """List all brands with product counts"""
    brands = db.query(Brand).order_by(Brand.name).all()
    counts = dict(
        db.query(Product.brand_id, func.count(Product.id))
        .filter(Product.brand_id.isnot(None))
        .group_by(Product.brand_id)
        .all()
    )
    return {"brands": [serialize_brand(b, counts.get(b.id, 0)) for b in brands]}


@router.get("/{brand_id}")
async def get_brand(brand_id: str, db: Session = Depends(get_db)):
    brand = get_brand_or_404(db, brand_id)
    product_count = db.query(func.count(Product.id)).filter(Product.brand_id == brand.id).scalar() or 0
    return {"brand": serialize_brand(brand, product_count)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_brand(
    payload: BrandPayload,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a new brand"""
    brand = Brand(
        name=payload.name,
        slug=resolve_brand_slug(db, payload),
        logo=payload.logo
    )
    db.add(brand)
    db.commit()
    db.refresh(brand)

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="brand_created",
        entity_type="brand",
        entity_id=brand.id,
        details={"name": brand.name},
        request=request
    )

    return {"brand": serialize_brand(brand)}


@router.put("/{brand_id}")
async def update_brand(
    brand_id: str,
    payload: BrandPayload,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update a brand"""
    brand = get_brand_or_404(db, brand_id)
    brand.name = payload.name
    brand.slug = resolve_brand_slug(db, payload, brand.id)
    brand.logo = payload.logo
    db.commit()
    db.refresh(brand)

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="brand_updated",
        entity_type="brand",
        entity_id=brand.id,
        details=payload.model_dump(),
        request=request
    )

    product_count = db.query(func.count(Product.id)).filter(Product.brand_id == brand.id).scalar() or 0
    return {"brand": serialize_brand(brand, product_count)}


@router.delete("/{brand_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_brand(
    brand_id: str,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a brand that no product references"""
    brand = get_brand_or_404(db, brand_id)

    product_count = db.query(func.count(Product.id)).filter(Product.brand_id == brand.id).scalar() or 0
    if product_count > 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete brand with products. Please remove or reassign products first."
        )

    brand_name = brand.name
    db.delete(brand)
    db.commit()

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="brand_deleted",
        entity_type="brand",
        entity_id=brand_id,
        details={"name": brand_name},
        request=request
    )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
