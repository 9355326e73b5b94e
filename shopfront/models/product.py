"""
Menu models: products and bagel batch options.
"""
import uuid
from sqlalchemy import Column, String, Text, Integer, Boolean, Numeric, DateTime, Uuid

from shopfront.db.base import Base
from shopfront.models.availability import utcnow


PRODUCT_CATEGORIES = ("bagels", "drinks", "sides")


class Product(Base):
    """Something on the menu."""
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    category = Column(String(20), nullable=False, index=True)  # bagels, drinks, sides
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    available = Column(Boolean, default=True, nullable=False)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class BatchOption(Base):
    """Discounted bagel bundle (4-Pack, Half Dozen, Dozen)."""
    __tablename__ = "batch_options"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    size = Column(Integer, nullable=False)
    discount = Column(Numeric(5, 2), nullable=False)  # percentage
    name = Column(String(50), nullable=False)
