"""
Products router for the public menu and admin product management.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from shopfront.core.deps import get_current_admin
from shopfront.db.session import get_db
from shopfront.models.admin import Admin
from shopfront.schemas.menu import (
    BatchOptionResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
    MenuResponse,
    ProductAvailabilityUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    StatusOption,
)
from shopfront.services.products import STATUS_OPTIONS, ProductService

router = APIRouter(tags=["products"])


# ============ Public ============

@router.get("/products/menu", response_model=MenuResponse)
def get_menu(db: Session = Depends(get_db)):
    """Available products grouped by category."""
    menu = ProductService(db).menu_by_category()
    return MenuResponse(
        bagels=[ProductResponse.model_validate(p) for p in menu["bagels"]],
        drinks=[ProductResponse.model_validate(p) for p in menu["drinks"]],
        sides=[ProductResponse.model_validate(p) for p in menu["sides"]],
    )


@router.get("/batch-options", response_model=List[BatchOptionResponse])
def list_batch_options(db: Session = Depends(get_db)):
    """Bagel bundle sizes and their discounts."""
    return ProductService(db).list_batch_options()


# ============ Admin ============

@router.get("/products", response_model=List[ProductResponse])
def list_products(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """All products including unavailable ones, sorted by name."""
    return ProductService(db).list_products()


@router.get("/products/categories", response_model=List[str])
def list_categories(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Categories that currently have at least one product."""
    return ProductService(db).categories_in_use()


@router.get("/products/statuses", response_model=List[StatusOption])
def list_statuses(current_admin: Admin = Depends(get_current_admin)):
    return STATUS_OPTIONS


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return ProductService(db).create_product(**payload.model_dump())


@router.patch("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    Update a product's properties.

    Only fields present in the body are considered; sending description or
    image_url as null or "" clears them.
    """
    return ProductService(db).update_product(product_id, **payload.model_dump(exclude_unset=True))


@router.put("/products/{product_id}/availability", response_model=ProductResponse)
def update_product_availability(
    product_id: UUID,
    payload: ProductAvailabilityUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return ProductService(db).set_availability(product_id, payload.available)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    ProductService(db).delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/products/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete_products(
    payload: BulkDeleteRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Delete several products; ids that do not exist are counted as failed."""
    deleted, failed = ProductService(db).bulk_delete(payload.product_ids)
    return BulkDeleteResponse(deleted_count=deleted, failed_count=failed)
