"""Calendar event schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import fields, validate

from boundary.models.calendar import (
    ATTENDEE_STATUSES,
    EVENT_CATEGORIES,
    RECURRENCE_TYPES,
    REMINDER_TYPES,
)
from boundary.schemas.common import (
    BaseSchema,
    PaginationQuerySchema,
    TrimmedString,
    UpdateSchema,
    UTCDateTime,
    hex_color,
)


class RecurrencePatternSchema(BaseSchema):
    type = fields.String(required=True, validate=validate.OneOf(RECURRENCE_TYPES))
    interval = fields.Integer(load_default=1, validate=validate.Range(min=1))
    end_date = UTCDateTime(load_default=None, allow_none=True)


class ReminderSchema(BaseSchema):
    type = fields.String(required=True, validate=validate.OneOf(REMINDER_TYPES))
    minutes_before = fields.Integer(required=True, validate=validate.Range(min=0))


class AttendeeSchema(BaseSchema):
    user_id = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=64))
    name = TrimmedString(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(load_default=None, allow_none=True)
    status = fields.String(load_default="pending", validate=validate.OneOf(ATTENDEE_STATUSES))


class CalendarEventCreateSchema(BaseSchema):
    """Body of ``POST /calendar/create``."""

    title = TrimmedString(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(allow_none=True, validate=validate.Length(max=500))
    start_time = UTCDateTime(required=True)
    end_time = UTCDateTime(required=True)
    all_day = fields.Boolean(load_default=False)
    location = fields.String(allow_none=True, validate=validate.Length(max=200))
    is_recurring = fields.Boolean(load_default=False)
    recurrence_pattern = fields.Nested(RecurrencePatternSchema, allow_none=True)
    category = fields.String(required=True, validate=validate.OneOf(EVENT_CATEGORIES))
    color = hex_color(allow_none=True)
    reminder = fields.Nested(ReminderSchema, allow_none=True)
    attendees = fields.List(fields.Nested(AttendeeSchema), load_default=list)


class CalendarEventUpdateSchema(UpdateSchema, CalendarEventCreateSchema):
    """Body of ``PUT /calendar/events/<id>``: any subset of the create fields."""


class CalendarEventQuerySchema(PaginationQuerySchema):
    """Query of ``GET /calendar/events``."""

    date_from = UTCDateTime(load_default=None)
    date_to = UTCDateTime(load_default=None)
    category = fields.String(load_default=None, validate=validate.OneOf(EVENT_CATEGORIES))
    search = fields.String(load_default=None, validate=validate.Length(max=100))


class CalendarEventSchema(BaseSchema):
    """Representation of a calendar event."""

    id = fields.Integer(dump_only=True)
    title = fields.String()
    description = fields.String(allow_none=True)
    start_time = UTCDateTime()
    end_time = UTCDateTime()
    all_day = fields.Boolean()
    location = fields.String(allow_none=True)
    is_recurring = fields.Boolean()
    recurrence_pattern = fields.Method("dump_recurrence")
    category = fields.String()
    color = fields.String(allow_none=True)
    reminder = fields.Method("dump_reminder")
    attendees = fields.List(fields.Nested(AttendeeSchema))
    created_by = fields.String()
    created_at = UTCDateTime()
    updated_at = UTCDateTime()

    def dump_recurrence(self, event: Any) -> dict[str, Any] | None:
        if not event.recurrence_type:
            return None
        return RecurrencePatternSchema().dump(
            {
                "type": event.recurrence_type,
                "interval": event.recurrence_interval or 1,
                "end_date": event.recurrence_end_date,
            }
        )

    def dump_reminder(self, event: Any) -> dict[str, Any] | None:
        if not event.reminder_type:
            return None
        return ReminderSchema().dump(
            {"type": event.reminder_type, "minutes_before": event.reminder_minutes_before or 0}
        )


class CalendarStatsSchema(BaseSchema):
    total_events = fields.Integer()
    this_month = fields.Integer()
    next_week = fields.Integer()
    upcoming = fields.Integer()
    by_category = fields.Dict(keys=fields.String(), values=fields.Integer())
    recurring_count = fields.Integer()
    today_count = fields.Integer()
