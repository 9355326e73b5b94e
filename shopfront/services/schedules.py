"""
Weekly schedule management.

Keeps the collection-wide rule that at most one schedule is active. Every
activation runs inside the same transaction as the write that triggers it:
all schedule rows are locked, the other active rows are switched off with a
single UPDATE, and only then is the target switched on. The partial unique
index on `schedules.is_active` turns any race that slips past the locks
into an IntegrityError, surfaced as ConflictError after rollback.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopfront.core.exceptions import ConflictError, NotFoundError, ValidationError
from shopfront.core.time_range import (
    ValidationResult,
    day_fields,
    validate_day_schedule,
    validate_weekly_hours,
)
from shopfront.models.availability import Schedule

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
DEFAULT_OPEN_TIME = "09:00"
DEFAULT_CLOSE_TIME = "17:00"


def clean_name(name: Any, max_length: int = MAX_NAME_LENGTH) -> str:
    """Trim a display name, rejecting blanks and overlong values."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required", field="name")
    name = name.strip()
    if len(name) > max_length:
        raise ValidationError(f"Name must be at most {max_length} characters", field="name")
    return name


def raise_for(result: ValidationResult) -> None:
    """Turn a failed validation result into a ValidationError."""
    if not result.ok:
        raise ValidationError(result.message, field=result.field, day_of_week=result.day_of_week)


def as_day_dict(day: Any) -> Dict[str, Any]:
    """
    Normalize a day entry (schema object or mapping) for storage.

    Missing (None) times fall back to 09:00-17:00 so every stored day
    carries a window the admin editor can show, even when the day is
    closed. Any other value, "" included, is kept for validation to judge.
    """
    day_of_week, is_open, open_time, close_time = day_fields(day)
    return {
        "day_of_week": day_of_week,
        "is_open": is_open,
        "open_time": DEFAULT_OPEN_TIME if open_time is None else open_time,
        "close_time": DEFAULT_CLOSE_TIME if close_time is None else close_time,
    }


class ScheduleService:
    """CRUD over schedules plus the single-active-schedule rule."""

    def __init__(self, db: Session):
        self.db = db

    def list_schedules(self) -> List[Schedule]:
        """All schedules, newest first."""
        stmt = select(Schedule).order_by(Schedule.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_schedule(self, schedule_id: UUID) -> Schedule:
        schedule = self.db.get(Schedule, schedule_id)
        if schedule is None:
            raise NotFoundError("Schedule not found")
        return schedule

    def get_active_schedule(self) -> Optional[Schedule]:
        stmt = select(Schedule).where(Schedule.is_active.is_(True)).limit(1)
        return self.db.execute(stmt).scalars().first()

    def create_schedule(self, name: str, is_active: bool, weekly_hours: Iterable[Any]) -> Schedule:
        """
        Create a schedule from a full week of hours.

        If is_active is set, any currently active schedule is deactivated in
        the same transaction.
        """
        name = clean_name(name)
        days = [as_day_dict(day) for day in (weekly_hours or [])]
        raise_for(validate_weekly_hours(days))

        if is_active:
            self._deactivate_others()

        schedule = Schedule(
            name=name,
            is_active=bool(is_active),
            weekly_hours=sorted(days, key=lambda d: d["day_of_week"]),
        )
        self.db.add(schedule)
        self._commit()
        self.db.refresh(schedule)

        logger.info("Created schedule %s (%r, active=%s)", schedule.id, schedule.name, schedule.is_active)
        return schedule

    def update_schedule(
        self,
        schedule_id: UUID,
        name: Optional[str] = None,
        is_active: Optional[bool] = None,
        weekly_hours: Optional[Iterable[Any]] = None,
    ) -> Schedule:
        """
        Patch name, active flag and/or some days of a schedule.

        Supplied days replace the stored entry for the same day_of_week; the
        merged week must still be a valid 7-day set.
        """
        schedule = self.get_schedule(schedule_id)

        if name is None and is_active is None and weekly_hours is None:
            raise ValidationError("No updates provided")

        new_name = clean_name(name) if name is not None else None
        new_hours = self._merge_weekly_hours(schedule, weekly_hours) if weekly_hours is not None else None

        if is_active:
            self._deactivate_others(keep_id=schedule.id)

        if new_name is not None:
            schedule.name = new_name
        if new_hours is not None:
            schedule.weekly_hours = new_hours
        if is_active is not None:
            schedule.is_active = is_active

        self._commit()
        self.db.refresh(schedule)

        logger.info("Updated schedule %s (active=%s)", schedule.id, schedule.is_active)
        return schedule

    def toggle_active(self, schedule_id: UUID, is_active: bool) -> Schedule:
        """Flip only the active flag; activating switches every other schedule off."""
        return self.update_schedule(schedule_id, is_active=is_active)

    def delete_schedule(self, schedule_id: UUID) -> None:
        """Delete a schedule, including the active one."""
        schedule = self.get_schedule(schedule_id)
        was_active = schedule.is_active

        self.db.delete(schedule)
        self._commit()

        if was_active:
            logger.info("Deleted active schedule %s; no schedule is active now", schedule_id)
        else:
            logger.info("Deleted schedule %s", schedule_id)

    def _merge_weekly_hours(self, schedule: Schedule, weekly_hours: Iterable[Any]) -> List[Dict[str, Any]]:
        by_day = {day["day_of_week"]: dict(day) for day in schedule.weekly_hours}
        touched = set()

        for day in weekly_hours:
            entry = as_day_dict(day)
            raise_for(validate_day_schedule(
                entry["day_of_week"], entry["is_open"], entry["open_time"], entry["close_time"]
            ))
            if entry["day_of_week"] in touched:
                raise ValidationError(
                    f"Day {entry['day_of_week']} appears more than once in weekly hours",
                    field="weekly_hours",
                    day_of_week=entry["day_of_week"],
                )
            touched.add(entry["day_of_week"])
            by_day[entry["day_of_week"]] = entry

        merged = [by_day[d] for d in sorted(by_day)]
        raise_for(validate_weekly_hours(merged))
        return merged

    def _deactivate_others(self, keep_id: Optional[UUID] = None) -> None:
        # Lock every schedule row so concurrent activations serialize here
        self.db.execute(select(Schedule.id).with_for_update()).all()

        stmt = update(Schedule).where(Schedule.is_active.is_(True))
        if keep_id is not None:
            stmt = stmt.where(Schedule.id != keep_id)
        result = self.db.execute(stmt.values(is_active=False))

        if result.rowcount:
            logger.info("Deactivated %d schedule(s) before activation", result.rowcount)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Schedule write rejected by the single-active constraint: %s", exc.orig)
            raise ConflictError(
                "Another schedule was activated at the same time. Please retry."
            ) from exc
