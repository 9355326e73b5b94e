"""
Tests for business-hours resolution (no database involved).
"""
import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from shopfront.schemas.availability import DateOverrideResponse, ScheduleResponse
from shopfront.services.availability import (
    get_current_business_hours_view,
    is_open_now,
    override_for_date,
    sunday_first_weekday,
)

# 2025-01-06 is a Monday
MONDAY = date(2025, 1, 6)


def at(hour: int, minute: int = 0, day: date = MONDAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


@pytest.fixture
def schedule(make_week):
    """Active schedule: Monday 07:00-15:00, Sunday closed."""
    return ScheduleResponse(
        id=uuid.uuid4(),
        name="Regular Business Hours",
        is_active=True,
        weekly_hours=make_week({0: None}),
    )


def override(day, is_open=False, open_time=None, close_time=None, name="Holiday", created_at=None):
    return DateOverrideResponse(
        id=uuid.uuid4(),
        date=day.isoformat() if isinstance(day, date) else day,
        name=name,
        is_open=is_open,
        open_time=open_time,
        close_time=close_time,
        created_at=created_at,
    )


class TestIsOpenNow:
    """Open/closed decision for a single instant."""

    def test_open_inside_regular_hours(self, schedule):
        assert is_open_now(at(10), schedule, []) is True

    def test_closing_time_is_exclusive(self, schedule):
        assert is_open_now(at(15), schedule, []) is False

    def test_opening_time_is_inclusive(self, schedule):
        assert is_open_now(at(7), schedule, []) is True

    def test_before_opening(self, schedule):
        assert is_open_now(at(6, 59), schedule, []) is False

    def test_last_minute_before_close(self, schedule):
        assert is_open_now(at(14, 59), schedule, []) is True

    def test_closed_weekday(self, schedule):
        sunday = MONDAY - timedelta(days=1)
        assert is_open_now(at(10, day=sunday), schedule, []) is False

    def test_no_active_schedule_is_closed(self):
        overrides = [override(MONDAY, is_open=True, open_time="00:00", close_time="23:59")]
        assert is_open_now(at(10), None, overrides) is False

    def test_closed_override_wins(self, schedule):
        assert is_open_now(at(10), schedule, [override(MONDAY, is_open=False)]) is False

    def test_override_window_replaces_regular_hours(self, schedule):
        special = [override(MONDAY, is_open=True, open_time="16:00", close_time="20:00")]
        assert is_open_now(at(10), schedule, special) is False
        assert is_open_now(at(17), schedule, special) is True
        assert is_open_now(at(20), schedule, special) is False

    def test_open_override_without_times_uses_regular_hours(self, schedule):
        open_day = [override(MONDAY, is_open=True)]
        assert is_open_now(at(10), schedule, open_day) is True
        assert is_open_now(at(16), schedule, open_day) is False

    def test_open_override_without_times_on_closed_weekday(self, schedule):
        sunday = MONDAY - timedelta(days=1)
        assert is_open_now(at(10, day=sunday), schedule, [override(sunday, is_open=True)]) is False

    def test_override_for_other_date_ignored(self, schedule):
        tomorrow = MONDAY + timedelta(days=1)
        assert is_open_now(at(10), schedule, [override(tomorrow, is_open=False)]) is True

    def test_open_day_without_times_is_open_all_day(self):
        schedule = ScheduleResponse(
            id=uuid.uuid4(),
            name="Always",
            is_active=True,
            weekly_hours=[{"day_of_week": d, "is_open": True} for d in range(7)],
        )
        assert is_open_now(at(3), schedule, []) is True

    def test_malformed_stored_hours_degrade_to_closed(self):
        schedule = ScheduleResponse(
            id=uuid.uuid4(),
            name="Broken",
            is_active=True,
            weekly_hours=[
                {"day_of_week": d, "is_open": True, "open_time": "late", "close_time": "15:00"}
                for d in range(7)
            ],
        )
        assert is_open_now(at(10), schedule, []) is False

    def test_missing_weekday_entry_is_closed(self, make_week):
        schedule = ScheduleResponse(
            id=uuid.uuid4(), name="Partial", is_active=True, weekly_hours=make_week()[2:]
        )
        assert is_open_now(at(10), schedule, []) is False

    def test_aware_datetime_converted_to_shop_zone(self, schedule):
        # 14:30 UTC is 09:30 in New York (EST) on a Monday
        now = datetime(2025, 1, 6, 14, 30, tzinfo=timezone.utc)
        assert is_open_now(now, schedule, [], tz_name="America/New_York") is True
        # 21:00 UTC is 16:00 in New York, after closing
        later = datetime(2025, 1, 6, 21, 0, tzinfo=timezone.utc)
        assert is_open_now(later, schedule, [], tz_name="America/New_York") is False

    def test_zone_conversion_can_change_the_date(self, schedule):
        # 03:00 UTC Monday is still Sunday evening in New York; Sunday is closed
        now = datetime(2025, 1, 6, 3, 0, tzinfo=timezone.utc)
        assert is_open_now(now, schedule, [], tz_name="America/New_York") is False


class TestOverrideForDate:

    def test_earliest_created_wins_among_duplicates(self):
        first = override(MONDAY, is_open=False, created_at=datetime(2025, 1, 1, 9, 0))
        second = override(MONDAY, is_open=True, created_at=datetime(2025, 1, 2, 9, 0))
        assert override_for_date([second, first], MONDAY.isoformat()) is first

    def test_mixed_naive_and_aware_timestamps(self):
        aware = override(MONDAY, created_at=datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc))
        naive = override(MONDAY, created_at=datetime(2025, 1, 1, 8, 0))
        assert override_for_date([aware, naive], MONDAY.isoformat()) is naive

    def test_none_when_no_match(self):
        assert override_for_date([override(MONDAY)], "2025-01-07") is None

    def test_duplicate_closed_first_keeps_shop_closed(self, schedule):
        closed = override(MONDAY, is_open=False, created_at=datetime(2025, 1, 1))
        reopened = override(MONDAY, is_open=True, created_at=datetime(2025, 1, 2))
        assert is_open_now(at(10), schedule, [reopened, closed]) is False


class TestBusinessHoursView:

    def test_none_without_active_schedule(self):
        assert get_current_business_hours_view(at(10), None, [override(MONDAY)]) is None

    def test_week_window_and_ordering(self, schedule):
        overrides = [
            override(MONDAY + timedelta(days=10), name="Far"),
            override(MONDAY + timedelta(days=2), name="Soon"),
            override(MONDAY, name="Today"),
        ]
        view = get_current_business_hours_view(at(10), schedule, overrides, window_days=7)

        assert view.schedule.id == schedule.id
        assert view.today_override.name == "Today"
        assert [o.name for o in view.week_overrides] == ["Today", "Soon"]

    def test_window_excludes_day_seven_and_past(self, schedule):
        overrides = [
            override(MONDAY - timedelta(days=1), name="Yesterday"),
            override(MONDAY + timedelta(days=6), name="Last"),
            override(MONDAY + timedelta(days=7), name="Next week"),
        ]
        view = get_current_business_hours_view(at(10), schedule, overrides, window_days=7)

        assert view.today_override is None
        assert [o.name for o in view.week_overrides] == ["Last"]

    def test_view_accepts_weekly_hours_as_dicts(self, make_week):
        class Stored:
            id = uuid.uuid4()
            name = "From the database"
            is_active = True
            weekly_hours = make_week()
            created_at = None
            updated_at = None

        view = get_current_business_hours_view(at(10), Stored(), [], window_days=7)
        assert len(view.schedule.weekly_hours) == 7
        assert view.week_overrides == []


def test_sunday_first_weekday():
    assert sunday_first_weekday(at(10, day=MONDAY - timedelta(days=1))) == 0
    assert sunday_first_weekday(at(10)) == 1
    assert sunday_first_weekday(at(10, day=MONDAY + timedelta(days=5))) == 6
