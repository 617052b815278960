"""Common marshmallow building blocks shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, validate

from boundary.core.clock import as_utc

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def camelcase(name: str) -> str:
    """``start_time`` -> ``startTime``."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class BaseSchema(Schema):
    """
    Base schema for the mobile wire format.

    Attributes stay snake_case in Python; every field is exposed to clients
    under its camelCase name, for both input and output. Validation errors are
    therefore keyed by the camelCase name the client sent.
    """

    class Meta:
        ordered = True

    def on_bind_field(self, field_name: str, field_obj: fields.Field) -> None:
        field_obj.data_key = camelcase(field_obj.data_key or field_name)


class QuerySchema(BaseSchema):
    """Query-string schema: undeclared parameters are dropped, never passed on."""

    class Meta:
        ordered = True
        unknown = EXCLUDE


class UpdateSchema(BaseSchema):
    """
    Partial variant of a create schema.

    Subclass together with the create schema: every top-level field becomes
    optional and defaults are not applied, while nested objects keep their own
    required fields.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if self.partial is None:
            self.partial = tuple(self.load_fields)


class UTCDateTime(fields.DateTime):
    """ISO-8601 datetime normalized to aware UTC on load and dump."""

    def _deserialize(self, value, attr, data, **kwargs):
        return as_utc(super()._deserialize(value, attr, data, **kwargs))

    def _serialize(self, value, attr, obj, **kwargs):
        if value is not None:
            value = as_utc(value)
        return super()._serialize(value, attr, obj, **kwargs)


class TrimmedString(fields.String):
    """String with surrounding whitespace stripped before validation."""

    def _deserialize(self, value, attr, data, **kwargs):
        return super()._deserialize(value, attr, data, **kwargs).strip()


class PaginationQuerySchema(QuerySchema):
    """``page`` (>= 1) and ``limit`` (1..100) with list defaults."""

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(
        load_default=DEFAULT_LIMIT, validate=validate.Range(min=1, max=MAX_LIMIT)
    )


class IdPathSchema(BaseSchema):
    """Path parameters of single-record routes: ``id`` must be a positive integer."""

    id = fields.Integer(required=True, validate=validate.Range(min=1))


def tag_list(**kwargs: Any) -> fields.List:
    """List of short, non-empty tags."""
    return fields.List(fields.String(validate=validate.Length(min=1, max=30)), **kwargs)


def hex_color(**kwargs: Any) -> fields.String:
    return fields.String(
        validate=validate.Regexp(r"^#[0-9A-Fa-f]{6}$", error="Must be a #RRGGBB color."),
        **kwargs,
    )
