from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute

from boundary.models.calendar import EVENT_CATEGORIES, CalendarEvent
from boundary.repositories.base import BaseRepository


class CalendarEventRepository(BaseRepository[CalendarEvent]):
    """
    Persistence-only repository for :class:`CalendarEvent`.

    Events are private to ``created_by``; every lookup takes the owner id.
    """

    model = CalendarEvent
    owner_attr = "created_by"

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "start_time": self.model.start_time,
            "end_time": self.model.end_time,
            "title": self.model.title,
            "created_at": self.model.created_at,
        }

    def _default_sort(self) -> list[str]:
        return ["start_time"]

    def _updatable_fields(self) -> set[str]:
        return {
            "title",
            "description",
            "start_time",
            "end_time",
            "all_day",
            "location",
            "is_recurring",
            "recurrence_type",
            "recurrence_interval",
            "recurrence_end_date",
            "category",
            "color",
            "reminder_type",
            "reminder_minutes_before",
        }

    # ---------------------------- Filters ----------------------------
    def filters(
        self,
        *,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> list[ColumnElement[bool]]:
        """Build ``WHERE`` clauses for the event listing (start time bounds are inclusive)."""
        clauses: list[ColumnElement[bool]] = []
        if date_from is not None:
            clauses.append(self.model.start_time >= date_from)
        if date_to is not None:
            clauses.append(self.model.start_time <= date_to)
        if category:
            clauses.append(self.model.category == category)
        if search:
            needle = search.lower()
            clauses.append(
                or_(
                    func.lower(self.model.title).contains(needle, autoescape=True),
                    func.lower(self.model.description).contains(needle, autoescape=True),
                )
            )
        return clauses

    # ---------------------------- Aggregates ----------------------------
    def count_between(self, owner_id: str, start: datetime, end: datetime) -> int:
        """Count events starting in ``[start, end)``."""
        return self.count(
            owner_id=owner_id,
            where=[self.model.start_time >= start, self.model.start_time < end],
        )

    def count_by_category(self, owner_id: str) -> dict[str, int]:
        """Return a count for every category, zero-filled."""
        stmt = (
            select(self.model.category, func.count())
            .where(self.model.created_by == owner_id)
            .group_by(self.model.category)
        )
        counts = {name: 0 for name in EVENT_CATEGORIES}
        for category, total in self.session.execute(stmt).all():
            counts[category] = int(total)
        return counts
