"""
Schedule, date override and business-hours schemas.

Request models only check shape; time formats, ranges and the 7-day rule
are enforced by the services so failures come back as validation errors
naming the offending field or day.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class DaySchedule(BaseModel):
    """Hours for one day of the week (0=Sunday, 6=Saturday)."""
    day_of_week: int
    is_open: bool
    open_time: Optional[str] = None  # "HH:MM"
    close_time: Optional[str] = None


class ScheduleCreate(BaseModel):
    name: str
    is_active: bool = False
    weekly_hours: List[DaySchedule]


class ScheduleUpdate(BaseModel):
    """Partial update; weekly_hours may list only the days being changed."""
    name: Optional[str] = None
    is_active: Optional[bool] = None
    weekly_hours: Optional[List[DaySchedule]] = None


class ScheduleActiveUpdate(BaseModel):
    is_active: bool


class ScheduleResponse(BaseModel):
    id: UUID
    name: str
    is_active: bool
    weekly_hours: List[DaySchedule]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class DateOverrideCreate(BaseModel):
    date: str  # "YYYY-MM-DD"
    name: str
    is_open: bool = False
    open_time: Optional[str] = None
    close_time: Optional[str] = None


class DateOverrideUpdate(BaseModel):
    date: Optional[str] = None
    name: Optional[str] = None
    is_open: Optional[bool] = None
    open_time: Optional[str] = None
    close_time: Optional[str] = None


class DateOverrideResponse(BaseModel):
    id: UUID
    date: str
    name: str
    is_open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BusinessHoursResponse(BaseModel):
    """What the public display renders: regular hours plus upcoming exceptions."""
    schedule: ScheduleResponse
    today_override: Optional[DateOverrideResponse] = None
    week_overrides: List[DateOverrideResponse]


class OpenStatusResponse(BaseModel):
    is_open: bool
