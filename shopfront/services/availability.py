"""
Business-hours resolution.

Pure functions of (now, active schedule, overrides): nothing here touches
the database, so the public endpoints can call them on whatever the
services loaded and tests can call them on plain schema objects.

Precedence for a given instant:
1. No active schedule -> closed.
2. An override for today wins: closed means closed, an open override with
   both times is checked against its own window, an open override without
   times defers to the regular hours for today.
3. Otherwise today's entry in the active schedule decides.

Windows are half-open: open_time inclusive, close_time exclusive. Windows
that cross midnight are not supported.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional

import pytz

from shopfront.core.config import get_settings
from shopfront.core.time_range import validate_time_range
from shopfront.schemas.availability import (
    BusinessHoursResponse,
    DateOverrideResponse,
    ScheduleResponse,
)


def to_local(now: datetime, tz_name: Optional[str] = None) -> datetime:
    """
    Express `now` in the shop's time zone.

    Naive datetimes are taken to be local already.
    """
    if now.tzinfo is None:
        return now
    tz = pytz.timezone(tz_name or get_settings().BUSINESS_TIMEZONE)
    return now.astimezone(tz)


def sunday_first_weekday(moment: datetime) -> int:
    """Day of week with 0=Sunday ... 6=Saturday."""
    return (moment.weekday() + 1) % 7


def is_within(current_time: str, open_time: Optional[str], close_time: Optional[str]) -> bool:
    """Half-open check open_time <= current_time < close_time; malformed windows are closed."""
    if not validate_time_range(open_time, close_time).ok:
        return False
    return open_time <= current_time < close_time


def _created_key(record: Any):
    created = getattr(record, "created_at", None)
    if created is None:
        created = datetime.min
    elif created.tzinfo is not None:
        created = created.astimezone(timezone.utc).replace(tzinfo=None)
    return created, str(getattr(record, "id", ""))


def override_for_date(overrides: Iterable[Any], day: str) -> Optional[Any]:
    """
    The override that applies to `day` ("YYYY-MM-DD"), if any.

    Dates are not unique; among duplicates the earliest created wins, then
    the smallest id.
    """
    matches = [o for o in overrides if o.date == day]
    if not matches:
        return None
    return min(matches, key=_created_key)


def _day_entry(schedule: Any, day_of_week: int) -> Optional[Any]:
    for day in schedule.weekly_hours or []:
        value = day.get("day_of_week") if isinstance(day, dict) else day.day_of_week
        if value == day_of_week:
            return day
    return None


def _field(entry: Any, name: str) -> Any:
    return entry.get(name) if isinstance(entry, dict) else getattr(entry, name, None)


def is_open_now(
    now: datetime,
    active_schedule: Optional[Any],
    overrides: Iterable[Any],
    tz_name: Optional[str] = None,
) -> bool:
    """Whether the shop is open at `now`."""
    if active_schedule is None:
        return False

    local = to_local(now, tz_name)
    today = local.date().isoformat()
    current_time = local.strftime("%H:%M")

    override = override_for_date(overrides, today)
    if override is not None:
        if not override.is_open:
            return False
        if override.open_time is not None and override.close_time is not None:
            return is_within(current_time, override.open_time, override.close_time)
        # Open override without its own window: regular hours decide

    entry = _day_entry(active_schedule, sunday_first_weekday(local))
    if entry is None or not _field(entry, "is_open"):
        return False

    open_time = _field(entry, "open_time")
    close_time = _field(entry, "close_time")
    if open_time is None or close_time is None:
        return True
    return is_within(current_time, open_time, close_time)


def get_current_business_hours_view(
    now: datetime,
    active_schedule: Optional[Any],
    overrides: Iterable[Any],
    tz_name: Optional[str] = None,
    window_days: Optional[int] = None,
) -> Optional[BusinessHoursResponse]:
    """
    Regular hours plus the override for today and those in the coming week.

    Returns None without an active schedule. The week window starts today
    and spans `window_days` days (7 by default).
    """
    if active_schedule is None:
        return None

    if window_days is None:
        window_days = get_settings().OVERRIDE_WINDOW_DAYS

    overrides = list(overrides)
    local_today = to_local(now, tz_name).date()
    today = local_today.isoformat()
    window_end = (local_today + timedelta(days=window_days)).isoformat()

    today_override = override_for_date(overrides, today)
    week_overrides: List[Any] = sorted(
        (o for o in overrides if today <= o.date < window_end),
        key=lambda o: (o.date, _created_key(o)),
    )

    return BusinessHoursResponse(
        schedule=ScheduleResponse.model_validate(active_schedule),
        today_override=DateOverrideResponse.model_validate(today_override) if today_override else None,
        week_overrides=[DateOverrideResponse.model_validate(o) for o in week_overrides],
    )
