"""Calendar endpoints."""

from __future__ import annotations

from typing import Any

from flask import Blueprint

from boundary.api.deps import (
    data_response,
    idempotent,
    no_content,
    page_response,
    require_auth,
    service_for,
    timing,
)
from boundary.api.validation import validate_request
from boundary.schemas import (
    CalendarEventCreateSchema,
    CalendarEventQuerySchema,
    CalendarEventSchema,
    CalendarEventUpdateSchema,
    CalendarStatsSchema,
    IdPathSchema,
)
from boundary.services import CalendarService

bp = Blueprint("calendar", __name__)

event_schema = CalendarEventSchema()
event_list_schema = CalendarEventSchema(many=True)
stats_schema = CalendarStatsSchema()


@bp.get("/events")
@require_auth
@timing
@validate_request(query=CalendarEventQuerySchema)
def list_events(query: dict[str, Any]):
    """Return the caller's events ordered by start time."""
    page = service_for(CalendarService).list_events(**query)
    return page_response(page, event_list_schema.dump)


@bp.post("/create")
@require_auth
@idempotent
@timing
@validate_request(body=CalendarEventCreateSchema)
def create_event(body: dict[str, Any]):
    event = service_for(CalendarService).create_event(body)
    return data_response(event_schema.dump(event), status=201)


@bp.get("/events/<id>")
@require_auth
@timing
@validate_request(path=IdPathSchema)
def get_event(path: dict[str, Any]):
    event = service_for(CalendarService).get_event(path["id"])
    return data_response(event_schema.dump(event))


@bp.put("/events/<id>")
@require_auth
@timing
@validate_request(path=IdPathSchema, body=CalendarEventUpdateSchema)
def update_event(path: dict[str, Any], body: dict[str, Any]):
    """Partial update; omitted fields keep their stored values."""
    event = service_for(CalendarService).update_event(path["id"], body)
    return data_response(event_schema.dump(event))


@bp.delete("/events/<id>")
@require_auth
@timing
@validate_request(path=IdPathSchema)
def delete_event(path: dict[str, Any]):
    service_for(CalendarService).delete_event(path["id"])
    return no_content()


@bp.get("/stats")
@require_auth
@timing
def calendar_stats():
    return data_response(stats_schema.dump(service_for(CalendarService).stats()))
