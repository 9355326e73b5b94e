"""
Password hashing and JWT handling for admin sessions.
"""
from datetime import datetime, timedelta, timezone
from typing import Any
import hashlib
import uuid

import bcrypt
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from shopfront.core.config import get_settings
from shopfront.models.token_blacklist import TokenBlacklist

settings = get_settings()

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_token(token: str) -> str:
    """SHA-256 of a token; only the digest is ever stored."""
    return hashlib.sha256(token.encode()).hexdigest()


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def _create_token(subject: str | Any, token_type: str, expires_delta: timedelta) -> str:
    to_encode = {
        "sub": str(subject),
        "exp": datetime.now(timezone.utc) + expires_delta,
        "type": token_type,
        # Distinct per token; the blacklist is keyed on the token hash
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token for an admin id."""
    return _create_token(
        subject,
        ACCESS_TOKEN_TYPE,
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """Create a JWT refresh token for an admin id."""
    return _create_token(
        subject,
        REFRESH_TOKEN_TYPE,
        expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token. Returns payload or None if invalid."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def is_token_blacklisted(token: str, db: Session) -> bool:
    """True if the token was already used or revoked."""
    return db.get(TokenBlacklist, hash_token(token)) is not None


def blacklist_token(token: str, expires_at: datetime, db: Session) -> None:
    """
    Add a token to the blacklist.

    Args:
        token: The JWT token string to blacklist
        expires_at: When the token expires (for cleanup)
        db: Database session
    """
    token_hash_value = hash_token(token)
    if db.get(TokenBlacklist, token_hash_value) is None:
        db.add(TokenBlacklist(token_hash=token_hash_value, expires_at=expires_at))
        db.commit()


def cleanup_expired_tokens(db: Session) -> int:
    """
    Remove expired tokens from the blacklist.

    Returns:
        Number of tokens removed
    """
    now = datetime.now(timezone.utc)
    result = db.query(TokenBlacklist).filter(
        TokenBlacklist.expires_at < now
    ).delete(synchronize_session=False)

    db.commit()
    return result
