"""
Date override management (holidays, closures, special hours).
"""
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopfront.core.exceptions import NotFoundError, ValidationError
from shopfront.core.time_range import validate_date, validate_time, validate_time_range
from shopfront.models.availability import DateOverride
from shopfront.services.schedules import clean_name, raise_for

logger = logging.getLogger(__name__)


def check_override_fields(
    override_date: str,
    is_open: bool,
    open_time: Optional[str],
    close_time: Optional[str],
) -> None:
    """Validate a complete override record before it is written."""
    raise_for(validate_date(override_date))

    if open_time is not None:
        raise_for(validate_time(open_time, field="open_time"))
    if close_time is not None:
        raise_for(validate_time(close_time, field="close_time"))

    if is_open:
        # Both times (special hours) or neither (regular hours); never half a window
        if open_time is None and close_time is not None:
            raise ValidationError("Opening time is required when a closing time is set", field="open_time")
        if close_time is None and open_time is not None:
            raise ValidationError("Closing time is required when an opening time is set", field="close_time")
        if open_time is not None:
            raise_for(validate_time_range(open_time, close_time))


class DateOverrideService:
    """CRUD over date overrides. Dates are not unique; see availability.override_for_date."""

    def __init__(self, db: Session):
        self.db = db

    def list_overrides(self) -> List[DateOverride]:
        """All overrides by date, earliest first."""
        stmt = select(DateOverride).order_by(
            DateOverride.date.asc(), DateOverride.created_at.asc(), DateOverride.id.asc()
        )
        return list(self.db.execute(stmt).scalars().all())

    def overrides_between(self, start: date, end: date) -> List[DateOverride]:
        """Overrides with start <= date <= end, earliest first."""
        stmt = (
            select(DateOverride)
            .where(DateOverride.date >= start.isoformat(), DateOverride.date <= end.isoformat())
            .order_by(DateOverride.date.asc(), DateOverride.created_at.asc(), DateOverride.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_override(self, override_id: UUID) -> DateOverride:
        override = self.db.get(DateOverride, override_id)
        if override is None:
            raise NotFoundError("Date override not found")
        return override

    def create_override(
        self,
        override_date: str,
        name: str,
        is_open: bool,
        open_time: Optional[str] = None,
        close_time: Optional[str] = None,
    ) -> DateOverride:
        name = clean_name(name)
        check_override_fields(override_date, is_open, open_time, close_time)

        override = DateOverride(
            date=override_date,
            name=name,
            is_open=bool(is_open),
            open_time=open_time,
            close_time=close_time,
        )
        self.db.add(override)
        self.db.commit()
        self.db.refresh(override)

        logger.info("Created date override %s for %s (open=%s)", override.id, override.date, override.is_open)
        return override

    def update_override(self, override_id: UUID, **changes) -> DateOverride:
        """
        Patch any of date, name, is_open, open_time, close_time.

        Only keys present in `changes` are touched; passing open_time=None
        clears the time. The merged record is revalidated as a whole.
        """
        override = self.get_override(override_id)

        unknown = set(changes) - {"date", "name", "is_open", "open_time", "close_time"}
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No updates provided")

        merged_date = changes.get("date", override.date)
        merged_name = clean_name(changes["name"]) if "name" in changes else override.name
        merged_open = changes.get("is_open", override.is_open)
        if merged_open is None:
            raise ValidationError("is_open cannot be null", field="is_open")
        open_time = changes.get("open_time", override.open_time)
        close_time = changes.get("close_time", override.close_time)

        check_override_fields(merged_date, merged_open, open_time, close_time)

        override.date = merged_date
        override.name = merged_name
        override.is_open = merged_open
        override.open_time = open_time
        override.close_time = close_time
        self.db.commit()
        self.db.refresh(override)

        logger.info("Updated date override %s", override.id)
        return override

    def delete_override(self, override_id: UUID) -> None:
        override = self.get_override(override_id)
        self.db.delete(override)
        self.db.commit()
        logger.info("Deleted date override %s", override_id)
