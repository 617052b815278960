"""Calendar use cases."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from boundary.core.clock import as_utc, month_start, next_month_start, utcnow
from boundary.models.calendar import CalendarEvent, EventAttendee
from boundary.services._shared.base import BaseService
from boundary.services._shared.dto import ListOut, PageMeta
from boundary.services._shared.errors import DomainValidationError, NotFoundError


def _event_columns(data: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten validated input into column values; only keys present are returned."""
    columns = {
        key: data[key]
        for key in (
            "title",
            "description",
            "start_time",
            "end_time",
            "all_day",
            "location",
            "is_recurring",
            "category",
            "color",
        )
        if key in data
    }
    if "recurrence_pattern" in data:
        pattern = data["recurrence_pattern"] or {}
        columns["recurrence_type"] = pattern.get("type")
        columns["recurrence_interval"] = pattern.get("interval")
        columns["recurrence_end_date"] = pattern.get("end_date")
    if "reminder" in data:
        reminder = data["reminder"] or {}
        columns["reminder_type"] = reminder.get("type")
        columns["reminder_minutes_before"] = reminder.get("minutes_before")
    return columns


def _attendees(items: list[Mapping[str, Any]]) -> list[EventAttendee]:
    return [
        EventAttendee(
            user_id=item.get("user_id"),
            name=item["name"],
            email=item.get("email"),
            status=item.get("status") or "pending",
        )
        for item in items
    ]


def _check_window(start: datetime, end: datetime) -> None:
    if as_utc(end) <= as_utc(start):
        raise DomainValidationError(
            "End time must be after start time",
            {"endTime": ["End time must be after start time."]},
        )


class CalendarService(BaseService):
    """
    Calendar events of the authenticated user.

    Notes
    -----
    Events are looked up by ``(id, created_by)``; another user's event is
    reported as missing rather than forbidden.
    """

    def list_events(
        self,
        *,
        page: int,
        limit: int,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> ListOut[CalendarEvent]:
        """
        Page through the caller's events ordered by start time.

        :returns: Events plus pagination metadata.
        :rtype: ListOut[CalendarEvent]
        """
        owner = self.require_actor()
        with self.ro_uow() as uow:
            repo = uow.calendar_events
            result = repo.paginate(
                self.ensure_pagination(page=page, limit=limit),
                owner_id=owner,
                where=repo.filters(
                    date_from=date_from, date_to=date_to, category=category, search=search
                ),
            )
            return ListOut(
                items=list(result.items),
                meta=PageMeta.build(page=result.page, limit=result.limit, total=result.total),
            )

    def get_event(self, event_id: int) -> CalendarEvent:
        """:raises NotFoundError: When the caller owns no event ``event_id``."""
        owner = self.require_actor()
        with self.ro_uow() as uow:
            event = uow.calendar_events.get(event_id, owner_id=owner)
            if event is None:
                raise NotFoundError("CalendarEvent", event_id)
            return event

    def create_event(self, data: Mapping[str, Any]) -> CalendarEvent:
        """
        Create an event with its attendees in one transaction.

        :raises DomainValidationError: When ``end_time`` is not after ``start_time``.
        """
        owner = self.require_actor()
        _check_window(data["start_time"], data["end_time"])
        with self.rw_uow() as uow:
            event = CalendarEvent(created_by=owner, **_event_columns(data))
            event.attendees = _attendees(data.get("attendees") or [])
            uow.calendar_events.add(event)
        self.log_event("calendar.event_created", resource="calendar_event", resource_id=event.id)
        return event

    def update_event(self, event_id: int, data: Mapping[str, Any]) -> CalendarEvent:
        """
        Apply a partial update; ``attendees`` replaces the whole list when given.

        The start/end rule is checked against the merged values.

        :raises NotFoundError: When the caller owns no event ``event_id``.
        :raises DomainValidationError: When the merged window is empty or inverted.
        """
        owner = self.require_actor()
        with self.rw_uow() as uow:
            repo = uow.calendar_events
            event = repo.get(event_id, owner_id=owner)
            if event is None:
                raise NotFoundError("CalendarEvent", event_id)
            _check_window(
                data.get("start_time", event.start_time), data.get("end_time", event.end_time)
            )
            if "attendees" in data:
                event.attendees = _attendees(data["attendees"] or [])
            repo.assign_updates(event, _event_columns(data))
        self.log_event("calendar.event_updated", resource="calendar_event", resource_id=event_id)
        return event

    def delete_event(self, event_id: int) -> None:
        """:raises NotFoundError: When the caller owns no event ``event_id``."""
        owner = self.require_actor()
        with self.rw_uow() as uow:
            repo = uow.calendar_events
            event = repo.get(event_id, owner_id=owner)
            if event is None:
                raise NotFoundError("CalendarEvent", event_id)
            repo.delete(event)
        self.log_event("calendar.event_deleted", resource="calendar_event", resource_id=event_id)

    def stats(self, *, now: datetime | None = None) -> dict[str, Any]:
        """
        Summary counts for the caller, relative to ``now`` (UTC).

        ``thisMonth`` and ``todayCount`` use calendar boundaries; ``nextWeek``
        is the next seven days from ``now``; ``upcoming`` is every event that
        has not started yet.
        """
        owner = self.require_actor()
        now = as_utc(now or utcnow())
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        with self.ro_uow() as uow:
            repo = uow.calendar_events
            model = repo.model
            return {
                "total_events": repo.count(owner_id=owner),
                "this_month": repo.count_between(owner, month_start(now), next_month_start(now)),
                "next_week": repo.count_between(owner, now, now + timedelta(days=7)),
                "upcoming": repo.count(owner_id=owner, where=[model.start_time >= now]),
                "by_category": repo.count_by_category(owner),
                "recurring_count": repo.count(owner_id=owner, where=[model.is_recurring.is_(True)]),
                "today_count": repo.count_between(owner, today, today + timedelta(days=1)),
            }
