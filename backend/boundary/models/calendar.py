"""Calendar events and their attendees."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boundary.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

EVENT_CATEGORIES = ("personal", "work", "family", "social", "health", "other")
RECURRENCE_TYPES = ("daily", "weekly", "monthly", "yearly")
REMINDER_TYPES = ("notification", "email", "sms")
ATTENDEE_STATUSES = ("pending", "accepted", "declined")

EventCategory = Enum(*EVENT_CATEGORIES, name="event_category")
RecurrenceType = Enum(*RECURRENCE_TYPES, name="event_recurrence_type")
ReminderType = Enum(*REMINDER_TYPES, name="event_reminder_type")
AttendeeStatus = Enum(*ATTENDEE_STATUSES, name="attendee_status")


class CalendarEvent(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    A user's calendar entry.

    ``end_time`` must be later than ``start_time``; the calendar service checks
    it on create and against the merged values on update.
    """

    __tablename__ = "calendar_events"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    all_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    location: Mapped[str | None] = mapped_column(String(200))

    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurrence_type: Mapped[str | None] = mapped_column(RecurrenceType)
    recurrence_interval: Mapped[int | None] = mapped_column(Integer)
    recurrence_end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    category: Mapped[str] = mapped_column(EventCategory, nullable=False)
    color: Mapped[str | None] = mapped_column(String(7))
    reminder_type: Mapped[str | None] = mapped_column(ReminderType)
    reminder_minutes_before: Mapped[int | None] = mapped_column(Integer)

    created_by: Mapped[str] = mapped_column(String(64), nullable=False)

    attendees: Mapped[list[EventAttendee]] = relationship(
        "EventAttendee",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="EventAttendee.id",
    )

    __table_args__ = (
        Index("ix_calendar_events_owner_start", "created_by", "start_time"),
    )


class EventAttendee(PKMixin, ReprMixin, db.Model):
    """Person invited to a :class:`CalendarEvent`."""

    __tablename__ = "event_attendees"

    event_id: Mapped[int] = mapped_column(
        ForeignKey("calendar_events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str | None] = mapped_column(String(64))
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254))
    status: Mapped[str] = mapped_column(AttendeeStatus, nullable=False, default="pending")

    event: Mapped[CalendarEvent] = relationship("CalendarEvent", back_populates="attendees")
