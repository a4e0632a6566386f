from sqlalchemy import Column, String, Integer, Numeric, Boolean, Text, DateTime, ForeignKey, JSON, CheckConstraint
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
from storefront_admin.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    quantity = Column(Integer, default=0, nullable=False)
    images = Column(JSON, nullable=True)  # Ordered list of image paths
    thumbnail = Column(String(500), nullable=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True, index=True)
    brand_id = Column(String(36), ForeignKey("brands.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)  # False = draft
    is_featured = Column(Boolean, default=False, nullable=False)
    sku = Column(String(100), nullable=True)
    color = Column(String(50), nullable=True)
    size = Column(String(50), nullable=True)
    material = Column(String(100), nullable=True)
    available_colors = Column(JSON, nullable=True)
    available_sizes = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        CheckConstraint('quantity >= 0', name='check_quantity_non_negative'),
    )

    # Relationships
    category = relationship("Category", back_populates="products")
    brand = relationship("Brand", back_populates="products")
    order_items = relationship("OrderItem", back_populates="product")
