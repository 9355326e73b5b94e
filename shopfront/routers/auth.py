"""
Authentication router with first-run setup, login, logout and refresh endpoints.
"""
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from shopfront.core.deps import bearer_scheme, get_current_admin
from shopfront.core.exceptions import ConflictError
from shopfront.core.security import (
    REFRESH_TOKEN_TYPE,
    blacklist_token,
    cleanup_expired_tokens,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    is_token_blacklisted,
    verify_password,
)
from shopfront.db.session import get_db
from shopfront.models.admin import Admin
from shopfront.schemas.auth import AdminCreate, AdminLogin, AdminResponse, Token, TokenRefresh

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_tokens(admin: Admin) -> Token:
    return Token(
        access_token=create_access_token(subject=str(admin.id)),
        refresh_token=create_refresh_token(subject=str(admin.id)),
    )


@router.post("/setup-admin", response_model=Token, status_code=status.HTTP_201_CREATED)
def setup_admin(admin_data: AdminCreate, db: Session = Depends(get_db)) -> Token:
    """
    Create the very first admin account.

    Only works while no admin exists; afterwards admins are added by other
    admins through /api/admins.
    """
    if db.query(Admin).first() is not None:
        raise ConflictError("An admin already exists. Ask an existing admin for access.")

    admin = Admin(
        email=admin_data.email,
        hashed_password=hash_password(admin_data.password),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    return _issue_tokens(admin)


@router.post("/login", response_model=Token)
def login(credentials: AdminLogin, db: Session = Depends(get_db)) -> Token:
    """
    Authenticate an admin and return tokens.
    """
    admin = db.query(Admin).filter(Admin.email == credentials.email).first()
    if not admin or not verify_password(credentials.password, admin.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return _issue_tokens(admin)


@router.post("/refresh", response_model=Token)
def refresh(token_data: TokenRefresh, db: Session = Depends(get_db)) -> Token:
    """
    Exchange a refresh token for a new access and refresh token.

    The old refresh token is blacklisted, so each one works once. Blacklist
    entries past their expiry are pruned on the way out.
    """
    old_token = token_data.refresh_token
    payload = decode_token(old_token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    if payload.get("type") != REFRESH_TOKEN_TYPE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    if is_token_blacklisted(old_token, db):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token has already been used. Please log in again.",
        )

    admin = db.query(Admin).filter(Admin.id == _parse_subject(payload)).first()
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin not found",
        )

    blacklist_token(old_token, datetime.fromtimestamp(payload["exp"], tz=timezone.utc), db)
    cleanup_expired_tokens(db)

    return _issue_tokens(admin)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> dict:
    """
    Revoke the access token used for this request.
    Client should discard its refresh token too. Expired blacklist entries
    are pruned here as well.
    """
    payload = decode_token(credentials.credentials)
    blacklist_token(
        credentials.credentials,
        datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        db,
    )
    cleanup_expired_tokens(db)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=AdminResponse)
def get_me(current_admin: Admin = Depends(get_current_admin)) -> Admin:
    """
    Get the current admin's profile.
    """
    return current_admin


def _parse_subject(payload: dict) -> UUID:
    try:
        return UUID(str(payload.get("sub", "")))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )
