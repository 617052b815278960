"""Circle type endpoints (public, read-only)."""

from __future__ import annotations

from typing import Any

from flask import Blueprint

from boundary.api.deps import data_response, public_service_for, timing
from boundary.api.validation import validate_request
from boundary.schemas import CircleTypeSchema, IdPathSchema
from boundary.services import CircleTypeService

bp = Blueprint("circle_types", __name__)

circle_type_schema = CircleTypeSchema()
circle_type_list_schema = CircleTypeSchema(many=True)


@bp.get("")
@bp.get("/")
@timing
def list_circle_types():
    """Return every circle type ordered by name."""
    rows = public_service_for(CircleTypeService).list_circle_types()
    return data_response(circle_type_list_schema.dump(rows))


@bp.get("/<id>")
@timing
@validate_request(path=IdPathSchema)
def get_circle_type(path: dict[str, Any]):
    row = public_service_for(CircleTypeService).get_circle_type(path["id"])
    return data_response(circle_type_schema.dump(row))
