import uuid
from sqlalchemy import Column, String, DateTime, Uuid

from shopfront.db.base import Base
from shopfront.models.availability import utcnow


class Admin(Base):
    """A user allowed into the admin dashboard."""
    __tablename__ = "admins"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="admin")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
