"""
Validation of time-of-day strings, opening windows and weekly hours.

Every function here is pure and total: malformed input produces a failed
`ValidationResult`, never an exception, so callers can compose day-level
checks into week-level checks and decide themselves when to raise.

Times are zero-padded 24-hour "HH:MM" strings. For that format plain string
comparison is also chronological comparison, which the resolver relies on.
"""
import re
from datetime import date
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from pydantic import BaseModel


TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DAYS_PER_WEEK = 7


class ErrorKind(str, Enum):
    """Why a value failed validation."""
    INVALID_FORMAT = "invalid_format"
    RANGE_ORDER = "range_order"
    INVALID_DAY = "invalid_day"
    DAY_COUNT = "day_count"
    DUPLICATE_DAY = "duplicate_day"


class ValidationResult(BaseModel):
    """Tagged success/failure value returned by every validator."""
    ok: bool
    kind: Optional[ErrorKind] = None
    field: Optional[str] = None
    day_of_week: Optional[int] = None
    message: Optional[str] = None
    value: Any = None

    @classmethod
    def success(cls, value: Any = None) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        field: Optional[str] = None,
        day_of_week: Optional[int] = None,
    ) -> "ValidationResult":
        return cls(ok=False, kind=kind, message=message, field=field, day_of_week=day_of_week)


def validate_time(value: Any, field: str = "time") -> ValidationResult:
    """Check that `value` is a zero-padded "HH:MM" between 00:00 and 23:59."""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        return ValidationResult.failure(
            ErrorKind.INVALID_FORMAT,
            f"Invalid time format: {value!r}. Expected HH:MM between 00:00 and 23:59.",
            field=field,
        )
    return ValidationResult.success(value)


def validate_time_range(open_time: Any, close_time: Any) -> ValidationResult:
    """
    Check an (open, close) pair.

    Fails with INVALID_FORMAT if either side is malformed, with RANGE_ORDER
    if open is not strictly before close. On success `value` is the pair.
    """
    open_result = validate_time(open_time, field="open_time")
    if not open_result.ok:
        return open_result

    close_result = validate_time(close_time, field="close_time")
    if not close_result.ok:
        return close_result

    if open_time >= close_time:
        return ValidationResult.failure(
            ErrorKind.RANGE_ORDER,
            "Opening time must be before closing time",
            field="close_time",
        )

    return ValidationResult.success((open_time, close_time))


def validate_day_schedule(
    day_of_week: Any,
    is_open: bool,
    open_time: Optional[str] = None,
    close_time: Optional[str] = None,
) -> ValidationResult:
    """Validate one weekday entry; failures carry the offending day."""
    if isinstance(day_of_week, bool) or not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
        return ValidationResult.failure(
            ErrorKind.INVALID_DAY,
            f"Invalid day of week: {day_of_week!r}. Expected 0 (Sunday) to 6 (Saturday).",
            field="day_of_week",
        )

    for field, value in (("open_time", open_time), ("close_time", close_time)):
        if value is not None:
            result = validate_time(value, field=field)
            if not result.ok:
                return _for_day(result, day_of_week)

    if is_open and open_time is not None and close_time is not None:
        result = validate_time_range(open_time, close_time)
        if not result.ok:
            return ValidationResult.failure(
                result.kind,
                f"For day {day_of_week}, opening time must be before closing time",
                field=result.field,
                day_of_week=day_of_week,
            )

    return ValidationResult.success()


def validate_weekly_hours(days: Iterable[Any]) -> ValidationResult:
    """
    Validate a full week of day entries.

    Entries may be mappings or objects exposing day_of_week, is_open,
    open_time and close_time. The week must cover each day exactly once.
    """
    days = list(days) if days is not None else []
    if len(days) != DAYS_PER_WEEK:
        return ValidationResult.failure(
            ErrorKind.DAY_COUNT,
            "weekly hours must contain exactly 7 days",
            field="weekly_hours",
        )

    seen = set()
    for day in days:
        day_of_week, is_open, open_time, close_time = day_fields(day)
        result = validate_day_schedule(day_of_week, is_open, open_time, close_time)
        if not result.ok:
            return result
        if day_of_week in seen:
            return ValidationResult.failure(
                ErrorKind.DUPLICATE_DAY,
                f"Day {day_of_week} appears more than once in weekly hours",
                field="weekly_hours",
                day_of_week=day_of_week,
            )
        seen.add(day_of_week)

    return ValidationResult.success()


def validate_date(value: Any, field: str = "date") -> ValidationResult:
    """Check that `value` is a real calendar date written as YYYY-MM-DD."""
    if isinstance(value, str) and DATE_PATTERN.match(value):
        try:
            return ValidationResult.success(date.fromisoformat(value))
        except ValueError:
            pass
    return ValidationResult.failure(
        ErrorKind.INVALID_FORMAT,
        f"Invalid date: {value!r}. Expected YYYY-MM-DD.",
        field=field,
    )


def _for_day(result: ValidationResult, day_of_week: int) -> ValidationResult:
    return result.model_copy(
        update={"day_of_week": day_of_week, "message": f"For day {day_of_week}: {result.message}"}
    )


def day_fields(day: Any) -> Tuple[Any, bool, Optional[str], Optional[str]]:
    """(day_of_week, is_open, open_time, close_time) from a mapping or object; missing fields read as None."""
    if isinstance(day, dict):
        get = day.get
    else:
        def get(name):
            return getattr(day, name, None)
    return get("day_of_week"), bool(get("is_open")), get("open_time"), get("close_time")
