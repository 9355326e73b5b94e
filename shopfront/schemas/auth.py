"""
Auth-related Pydantic schemas for request/response validation.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AdminLogin(BaseModel):
    """Schema for admin login request."""
    email: EmailStr
    password: str


class AdminCreate(BaseModel):
    """Schema for creating an admin (also used by first-run setup)."""
    email: EmailStr
    password: str = Field(min_length=8)


class Token(BaseModel):
    """Schema for token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    """Schema for token refresh request."""
    refresh_token: str


class AdminResponse(BaseModel):
    """Schema for admin response (without password)."""
    id: UUID
    email: str
    role: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
