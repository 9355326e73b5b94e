"""
Admin account management. Only admins can see or change the admin list.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from shopfront.core.deps import get_current_admin
from shopfront.core.exceptions import ConflictError, NotFoundError, ValidationError
from shopfront.core.security import hash_password
from shopfront.db.session import get_db
from shopfront.models.admin import Admin
from shopfront.schemas.auth import AdminCreate, AdminResponse

router = APIRouter(prefix="/admins", tags=["admins"])


@router.get("", response_model=List[AdminResponse])
def list_admins(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return db.query(Admin).order_by(Admin.created_at.asc()).all()


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
def create_admin(
    admin_data: AdminCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Grant dashboard access to a new email address."""
    if db.query(Admin).filter(Admin.email == admin_data.email).first():
        raise ConflictError("User is already an admin")

    admin = Admin(
        email=admin_data.email,
        hashed_password=hash_password(admin_data.password),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@router.delete("/{admin_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_admin(
    admin_id: UUID,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Revoke an admin's access. Admins cannot remove themselves."""
    if admin_id == current_admin.id:
        raise ValidationError("Cannot remove yourself as admin")

    admin = db.get(Admin, admin_id)
    if admin is None:
        raise NotFoundError("Admin not found")

    db.delete(admin)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
