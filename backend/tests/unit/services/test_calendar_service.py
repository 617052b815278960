from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from boundary.services import CalendarService
from boundary.services._shared.base import ServiceContext
from boundary.services._shared.errors import DomainValidationError, NotFoundError
from tests.factories.calendar import CalendarEventFactory

START = datetime(2030, 5, 14, 9, tzinfo=timezone.utc)


def _data(**overrides):
    data = {
        "title": "Standup",
        "start_time": START,
        "end_time": START + timedelta(minutes=15),
        "category": "work",
        "attendees": [],
    }
    data.update(overrides)
    return data


class TestCalendarService:
    @pytest.fixture()
    def service(self) -> CalendarService:
        return CalendarService(ctx=ServiceContext(actor_id="user-1"))

    def test_create_flattens_nested_values(self, service):
        event = service.create_event(
            _data(
                recurrence_pattern={"type": "weekly", "interval": 2, "end_date": None},
                reminder={"type": "email", "minutes_before": 10},
                attendees=[{"name": "Kim", "email": None, "user_id": None, "status": "accepted"}],
            )
        )

        assert event.created_by == "user-1"
        assert (event.recurrence_type, event.recurrence_interval) == ("weekly", 2)
        assert (event.reminder_type, event.reminder_minutes_before) == ("email", 10)
        assert [(a.name, a.status) for a in event.attendees] == [("Kim", "accepted")]

    @pytest.mark.parametrize("minutes", [0, -30])
    def test_create_requires_end_after_start(self, service, minutes):
        with pytest.raises(DomainValidationError) as excinfo:
            service.create_event(_data(end_time=START + timedelta(minutes=minutes)))

        assert "endTime" in excinfo.value.errors

    def test_update_checks_against_stored_values(self, service):
        event = CalendarEventFactory(start_time=START, end_time=START + timedelta(hours=1))

        with pytest.raises(DomainValidationError):
            service.update_event(event.id, {"start_time": START + timedelta(hours=2)})

    def test_update_clears_reminder(self, service):
        event = service.create_event(_data(reminder={"type": "sms", "minutes_before": 5}))

        updated = service.update_event(event.id, {"reminder": None})

        assert updated.reminder_type is None
        assert updated.reminder_minutes_before is None

    def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.delete_event(12345)

    def test_list_filters_by_date(self, service):
        CalendarEventFactory(start_time=START, end_time=START + timedelta(hours=1))
        later = CalendarEventFactory(
            start_time=START + timedelta(days=3), end_time=START + timedelta(days=3, hours=1)
        )

        page = service.list_events(page=1, limit=10, date_from=START + timedelta(days=1))

        assert [e.id for e in page.items] == [later.id]

    def test_stats(self, service):
        now = datetime(2030, 5, 14, 12, tzinfo=timezone.utc)
        past = CalendarEventFactory(start_time=datetime(2030, 5, 1, 9, tzinfo=timezone.utc),
                                    end_time=datetime(2030, 5, 1, 10, tzinfo=timezone.utc))
        CalendarEventFactory(start_time=datetime(2030, 5, 18, 9, tzinfo=timezone.utc),
                             end_time=datetime(2030, 5, 18, 10, tzinfo=timezone.utc),
                             is_recurring=True)
        CalendarEventFactory(start_time=datetime(2030, 6, 2, 9, tzinfo=timezone.utc),
                             end_time=datetime(2030, 6, 2, 10, tzinfo=timezone.utc),
                             category="family")

        stats = service.stats(now=now)

        assert past.id is not None
        assert stats["total_events"] == 3
        assert stats["this_month"] == 2
        assert stats["next_week"] == 1
        assert stats["upcoming"] == 2
        assert stats["today_count"] == 0
        assert stats["recurring_count"] == 1
        assert stats["by_category"]["work"] == 2
        assert stats["by_category"]["family"] == 1
