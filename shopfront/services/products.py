"""
Product catalogue management for the menu and admin dashboard.
"""
import logging
from typing import Dict, Iterable, List, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopfront.core.exceptions import NotFoundError, ValidationError
from shopfront.models.product import PRODUCT_CATEGORIES, BatchOption, Product

logger = logging.getLogger(__name__)

STATUS_OPTIONS = [
    {"value": True, "label": "Available"},
    {"value": False, "label": "Unavailable"},
]


class ProductService:

    def __init__(self, db: Session):
        self.db = db

    def menu_by_category(self) -> Dict[str, List[Product]]:
        """Available products grouped as {bagels, drinks, sides}."""
        stmt = select(Product).where(Product.available.is_(True)).order_by(Product.name.asc())
        menu: Dict[str, List[Product]] = {category: [] for category in PRODUCT_CATEGORIES}
        for product in self.db.execute(stmt).scalars():
            menu.setdefault(product.category, []).append(product)
        return menu

    def list_products(self) -> List[Product]:
        """Every product, available or not, sorted by name."""
        stmt = select(Product).order_by(Product.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def categories_in_use(self) -> List[str]:
        stmt = select(Product.category).distinct().order_by(Product.category.asc())
        return list(self.db.execute(stmt).scalars().all())

    def list_batch_options(self) -> List[BatchOption]:
        stmt = select(BatchOption).order_by(BatchOption.size.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: UUID) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, **fields) -> Product:
        product = Product(**fields)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        logger.info("Created product %s (%r)", product.id, product.name)
        return product

    def update_product(self, product_id: UUID, **changes) -> Product:
        """
        Patch a product with only the fields that were sent.

        An empty or null description/image_url clears it; null for any
        other field is ignored.
        """
        product = self.get_product(product_id)

        updates = {}
        for key, value in changes.items():
            if key in ("description", "image_url"):
                updates[key] = value or None
            elif value is not None:
                updates[key] = value

        if not updates:
            raise ValidationError("No updates provided")

        for field, value in updates.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    def set_availability(self, product_id: UUID, available: bool) -> Product:
        product = self.get_product(product_id)
        product.available = available
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: UUID) -> None:
        product = self.get_product(product_id)
        self.db.delete(product)
        self.db.commit()
        logger.info("Deleted product %s", product_id)

    def bulk_delete(self, product_ids: Iterable[UUID]) -> Tuple[int, int]:
        """Delete what exists; returns (deleted_count, failed_count)."""
        deleted = failed = 0
        for product_id in dict.fromkeys(product_ids):
            product = self.db.get(Product, product_id)
            if product is None:
                failed += 1
                continue
            self.db.delete(product)
            deleted += 1

        self.db.commit()
        logger.info("Bulk delete removed %d product(s), %d not found", deleted, failed)
        return deleted, failed
