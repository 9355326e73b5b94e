"""
Schedule and date override models.

Schedule: named weekly opening hours; at most one is active at a time.
DateOverride: a single-date exception (holiday, closure, special hours).
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, JSON, Uuid, Index, text

from shopfront.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Schedule(Base):
    """
    A named set of weekly hours.

    weekly_hours holds exactly 7 day entries inline, e.g.
    {"day_of_week": 1, "is_open": true, "open_time": "07:00", "close_time": "15:00"}
    with 0=Sunday.
    """
    __tablename__ = "schedules"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    weekly_hours = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        # Only one row may carry is_active = true
        Index(
            'uq_schedules_single_active',
            'is_active',
            unique=True,
            postgresql_where=text('is_active'),
            sqlite_where=text('is_active'),
        ),
    )


class DateOverride(Base):
    """
    Exception to the active schedule for one calendar date.

    open_time/close_time are both null when an open override should use
    the regular hours for that weekday.
    """
    __tablename__ = "date_overrides"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date = Column(String(10), nullable=False, index=True)  # "2024-12-25"
    name = Column(String(100), nullable=False)  # "Christmas Day", "Black Friday"
    is_open = Column(Boolean, default=False, nullable=False)
    open_time = Column(String(5), nullable=True)  # "09:00"
    close_time = Column(String(5), nullable=True)  # "17:00"
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
