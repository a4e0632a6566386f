"""
Admin Categories Management Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Dict, Iterable, List, Optional
import logging
from storefront_admin.database import get_db
from storefront_admin.schemas.category import CategoryPayload
from storefront_admin.models.category import Category
from storefront_admin.models.product import Product
from storefront_admin.models.user import User
from storefront_admin.api.admin_deps import require_admin
from storefront_admin.utils.admin_activity import log_admin_activity
from storefront_admin.utils.category_rules import delete_blockers
from storefront_admin.utils.slug import slugify

router = APIRouter()
logger = logging.getLogger(__name__)


def get_product_counts(db: Session, category_ids: Iterable[str]) -> Dict[str, int]:
    """Direct product count per category id, in one grouped query"""
    ids = list(category_ids)
    if not ids:
        return {}
    rows = db.query(Product.category_id, func.count(Product.id)).filter(
        Product.category_id.in_(ids)
    ).group_by(Product.category_id).all()
    return {category_id: count for category_id, count in rows}


def serialize_category(category: Category, counts: Dict[str, int], children: List[Category]) -> dict:
    """Category with parent summary, direct children and product counts"""
    parent = category.parent
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "image": category.image,
        "parentId": category.parent_id,
        "createdAt": category.created_at.isoformat() if category.created_at else None,
        "updatedAt": category.updated_at.isoformat() if category.updated_at else None,
        "parent": {"id": parent.id, "name": parent.name, "slug": parent.slug} if parent else None,
        "children": [
            {
                "id": c.id,
                "name": c.name,
                "slug": c.slug,
                "description": c.description,
                "image": c.image,
                "_count": {"products": counts.get(c.id, 0)}
            }
            for c in children
        ],
        "_count": {"products": counts.get(category.id, 0)}
    }


def get_category_or_404(db: Session, category_id: str) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


def validate_payload(
    db: Session,
    payload: CategoryPayload,
    category: Optional[Category] = None
) -> str:
    """Check a create/update body against the store; returns the normalised slug"""
    if not payload.name or not payload.slug:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name and slug are required")

    slug = slugify(payload.slug)
    if not slug:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Slug must contain at least one letter or digit"
        )

    query = db.query(Category).filter(Category.slug == slug)
    if category is not None:
        query = query.filter(Category.id != category.id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A category with this slug already exists"
        )

    if payload.parentId:
        if category is not None and payload.parentId == category.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category cannot be its own parent"
            )

        parent = db.query(Category).filter(Category.id == payload.parentId).first()
        if not parent:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Parent category not found"
            )

        # Hierarchy is kept at two levels
        if parent.parent_id is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Parent category must be a top-level category"
            )
        if category is not None and category.children:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category with subcategories cannot become a subcategory"
            )

    return slug


@router.get("")
async def list_categories(db: Session = Depends(get_db)):
    """List every category (flat) with parent, children and product counts"""
    categories = db.query(Category).order_by(Category.name).all()

    children_by_parent: Dict[str, List[Category]] = {}
    for category in categories:
        if category.parent_id:
            children_by_parent.setdefault(category.parent_id, []).append(category)

    counts = get_product_counts(db, (c.id for c in categories))

    return {
        "categories": [
            serialize_category(c, counts, children_by_parent.get(c.id, []))
            for c in categories
        ]
    }


@router.get("/{category_id}")
async def get_category(category_id: str, db: Session = Depends(get_db)):
    """Get category details"""
    category = get_category_or_404(db, category_id)
    children = list(category.children)
    counts = get_product_counts(db, [category.id] + [c.id for c in children])
    return {"category": serialize_category(category, counts, children)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryPayload,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a new category or subcategory"""
    slug = validate_payload(db, payload)

    category = Category(
        name=payload.name,
        slug=slug,
        description=payload.description,
        image=payload.image,
        parent_id=payload.parentId
    )
    db.add(category)
    db.commit()
    db.refresh(category)

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="category_created",
        entity_type="category",
        entity_id=category.id,
        details={"name": category.name, "slug": category.slug},
        request=request
    )

    return {"category": serialize_category(category, {}, [])}


@router.put("/{category_id}")
async def update_category(
    category_id: str,
    payload: CategoryPayload,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Replace every editable field of a category"""
    category = get_category_or_404(db, category_id)
    slug = validate_payload(db, payload, category)

    category.name = payload.name
    category.slug = slug
    category.description = payload.description
    category.image = payload.image
    category.parent_id = payload.parentId

    db.commit()
    db.refresh(category)

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="category_updated",
        entity_type="category",
        entity_id=category.id,
        details=payload.model_dump(),
        request=request
    )

    children = list(category.children)
    counts = get_product_counts(db, [category.id] + [c.id for c in children])
    return {"category": serialize_category(category, counts, children)}


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    request: Request,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a category that has neither products nor subcategories"""
    category = get_category_or_404(db, category_id)

    children_count = db.query(func.count(Category.id)).filter(
        Category.parent_id == category.id
    ).scalar() or 0
    product_count = get_product_counts(db, [category.id]).get(category.id, 0)

    reasons = delete_blockers(product_count, children_count)
    if reasons:
        logger.info(f"Refused to delete category {category.id}: {' '.join(reasons)}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=" ".join(reasons))

    category_name = category.name
    db.delete(category)
    db.commit()

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="category_deleted",
        entity_type="category",
        entity_id=category_id,
        details={"name": category_name},
        request=request
    )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
