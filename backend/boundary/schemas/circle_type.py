"""Circle type representation."""

from __future__ import annotations

from marshmallow import fields

from boundary.schemas.common import BaseSchema, UTCDateTime


class CircleTypeSchema(BaseSchema):
    """Read-only view of a seeded circle type.

    Circle types are never deactivated or edited, so ``isActive`` is always
    true and ``updatedAt`` mirrors ``createdAt``.
    """

    id = fields.Integer()
    name = fields.String()
    display_name = fields.String(allow_none=True)
    description = fields.String(allow_none=True)
    icon = fields.String(allow_none=True)
    color = fields.String(allow_none=True)
    default_settings = fields.Dict(allow_none=True)
    is_system = fields.Boolean()
    is_active = fields.Function(lambda _obj: True)
    created_at = UTCDateTime(dump_only=True)
    updated_at = UTCDateTime(attribute="created_at", dump_only=True)
