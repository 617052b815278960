from __future__ import annotations

from datetime import datetime, timezone

import pytest
from boundary.repositories.calendar import CalendarEventRepository
from tests.factories.calendar import CalendarEventFactory


def _dt(day: int, hour: int = 9) -> datetime:
    return datetime(2030, 5, day, hour, tzinfo=timezone.utc)


class TestCalendarEventRepository:
    @pytest.fixture()
    def repo(self, session) -> CalendarEventRepository:
        return CalendarEventRepository(session=session)

    @pytest.fixture()
    def events(self):
        return [
            CalendarEventFactory(start_time=_dt(d), end_time=_dt(d, 10), category=c)
            for d, c in ((1, "work"), (2, "family"), (3, "work"))
        ]

    def test_date_bounds_are_inclusive(self, repo, events):
        rows = repo.list(owner_id="user-1", where=repo.filters(date_from=_dt(1), date_to=_dt(2)))

        assert [e.id for e in rows] == [events[0].id, events[1].id]

    def test_search_matches_title_or_description(self, repo):
        by_title = CalendarEventFactory(title="Yoga class", description=None)
        by_description = CalendarEventFactory(title="Morning", description="bring the YOGA mat")
        CalendarEventFactory(title="Lunch", description="sandwiches")

        rows = repo.list(owner_id="user-1", where=repo.filters(search="yoga"))

        assert {e.id for e in rows} == {by_title.id, by_description.id}

    def test_search_percent_sign_is_literal(self, repo):
        sale = CalendarEventFactory(title="50% off sale")
        CalendarEventFactory(title="Lunch")

        rows = repo.list(owner_id="user-1", where=repo.filters(search="%"))

        assert [e.id for e in rows] == [sale.id]

    def test_count_between_is_half_open(self, repo, events):
        assert repo.count_between("user-1", _dt(1), _dt(3)) == 2

    def test_count_by_category_is_zero_filled(self, repo, events):
        counts = repo.count_by_category("user-1")

        assert counts["work"] == 2
        assert counts["family"] == 1
        assert counts["health"] == 0
        assert repo.count_by_category("user-2")["work"] == 0
