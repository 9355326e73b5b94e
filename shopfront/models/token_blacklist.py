"""
Token blacklist model for handling token revocation.

When refresh tokens are used, the old token is blacklisted to prevent reuse.
"""
from sqlalchemy import Column, String, DateTime, Index

from shopfront.db.base import Base
from shopfront.models.availability import utcnow


class TokenBlacklist(Base):
    """
    Store revoked/blacklisted JWT tokens.

    Tokens are added here when:
    - A refresh token is used (old token blacklisted, new one issued)
    - An admin explicitly logs out
    """
    __tablename__ = "token_blacklist"

    # SHA-256 of the token string
    token_hash = Column(String(64), primary_key=True)

    blacklisted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # When the token expires (for cleanup - we can delete expired blacklisted tokens)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_token_blacklist_expires', 'expires_at'),
    )
