"""
FastAPI dependencies shared by the routers.
"""
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from shopfront.core.security import ACCESS_TOKEN_TYPE, decode_token, is_token_blacklisted
from shopfront.db.session import get_db
from shopfront.models.admin import Admin

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Admin:
    """
    Resolve the bearer access token to an admin.

    Raises 401 for a missing, invalid, revoked or non-access token and for
    tokens whose admin has since been removed.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    token = credentials.credentials
    payload = decode_token(token)
    if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _unauthorized("Invalid or expired access token")

    if is_token_blacklisted(token, db):
        raise _unauthorized("Token has been revoked")

    try:
        admin_id = UUID(str(payload.get("sub", "")))
    except ValueError:
        raise _unauthorized("Invalid token payload")

    admin = db.get(Admin, admin_id)
    if admin is None:
        raise _unauthorized("Admin not found")
    return admin
