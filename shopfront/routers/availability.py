"""
Business hours router.

Provides endpoints for:
- Public: current business hours view and open/closed status
- Admin: managing weekly schedules and date overrides
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from shopfront.core.config import get_settings
from shopfront.core.deps import get_current_admin
from shopfront.db.session import get_db
from shopfront.models.admin import Admin
from shopfront.schemas.availability import (
    BusinessHoursResponse,
    DateOverrideCreate,
    DateOverrideResponse,
    DateOverrideUpdate,
    OpenStatusResponse,
    ScheduleActiveUpdate,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleUpdate,
)
from shopfront.services.availability import get_current_business_hours_view, is_open_now, to_local
from shopfront.services.date_overrides import DateOverrideService
from shopfront.services.schedules import ScheduleService

router = APIRouter(tags=["business-hours"])


def get_now() -> datetime:
    """Current instant; overridden in tests to pin the clock."""
    return datetime.now(timezone.utc)


def _upcoming_overrides(db: Session, now: datetime):
    settings = get_settings()
    today = to_local(now, settings.BUSINESS_TIMEZONE).date()
    return DateOverrideService(db).overrides_between(
        today, today + timedelta(days=settings.OVERRIDE_WINDOW_DAYS)
    )


# ============ Public queries ============

@router.get("/business-hours", response_model=Optional[BusinessHoursResponse])
def get_business_hours(
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Active schedule plus today's override and those in the coming week.

    Returns null when no schedule is active.
    """
    active = ScheduleService(db).get_active_schedule()
    if active is None:
        return None
    return get_current_business_hours_view(now, active, _upcoming_overrides(db, now))


@router.get("/business-hours/is-open", response_model=OpenStatusResponse)
def get_open_status(
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Whether the shop is open right now."""
    active = ScheduleService(db).get_active_schedule()
    if active is None:
        return OpenStatusResponse(is_open=False)
    return OpenStatusResponse(is_open=is_open_now(now, active, _upcoming_overrides(db, now)))


# ============ Schedules ============

@router.get("/schedules", response_model=List[ScheduleResponse])
def list_schedules(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """All schedules, newest first."""
    return ScheduleService(db).list_schedules()


@router.post("/schedules", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_schedule(
    payload: ScheduleCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    Create a schedule from all 7 days.

    Creating it active deactivates whichever schedule was active.
    """
    return ScheduleService(db).create_schedule(
        name=payload.name,
        is_active=payload.is_active,
        weekly_hours=payload.weekly_hours,
    )


@router.patch("/schedules/{schedule_id}", response_model=ScheduleResponse)
def update_schedule(
    schedule_id: UUID,
    payload: ScheduleUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Patch name, active flag and/or individual days."""
    return ScheduleService(db).update_schedule(
        schedule_id,
        name=payload.name,
        is_active=payload.is_active,
        weekly_hours=payload.weekly_hours,
    )


@router.post("/schedules/{schedule_id}/active", status_code=status.HTTP_204_NO_CONTENT)
def toggle_schedule_active(
    schedule_id: UUID,
    payload: ScheduleActiveUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Activate or deactivate a schedule."""
    ScheduleService(db).toggle_active(schedule_id, payload.is_active)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/schedules/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule(
    schedule_id: UUID,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Delete a schedule. Deleting the active one leaves the shop closed."""
    ScheduleService(db).delete_schedule(schedule_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============ Date overrides ============

@router.get("/date-overrides", response_model=List[DateOverrideResponse])
def list_date_overrides(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """All overrides, earliest date first."""
    return DateOverrideService(db).list_overrides()


@router.post("/date-overrides", response_model=DateOverrideResponse, status_code=status.HTTP_201_CREATED)
def create_date_override(
    payload: DateOverrideCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    Create a date override.

    Use for holidays, special hours, or closures.
    """
    return DateOverrideService(db).create_override(
        override_date=payload.date,
        name=payload.name,
        is_open=payload.is_open,
        open_time=payload.open_time,
        close_time=payload.close_time,
    )


@router.patch("/date-overrides/{override_id}", response_model=DateOverrideResponse)
def update_date_override(
    override_id: UUID,
    payload: DateOverrideUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Patch the fields that were sent; null open/close times clear them."""
    return DateOverrideService(db).update_override(
        override_id, **payload.model_dump(exclude_unset=True)
    )


@router.delete("/date-overrides/{override_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_date_override(
    override_id: UUID,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Delete a date override."""
    DateOverrideService(db).delete_override(override_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
