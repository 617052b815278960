"""Circle type lookups."""

from __future__ import annotations

from boundary.models.circle_type import CircleType
from boundary.services._shared.base import BaseService
from boundary.services._shared.errors import NotFoundError


class CircleTypeService(BaseService):
    """Read-only access to the seeded circle types; no actor is required."""

    def list_circle_types(self) -> list[CircleType]:
        with self.ro_uow() as uow:
            return uow.circle_types.list()

    def get_circle_type(self, circle_type_id: int) -> CircleType:
        """:raises NotFoundError: When no circle type has this id."""
        with self.ro_uow() as uow:
            row = uow.circle_types.get(circle_type_id)
            if row is None:
                raise NotFoundError("CircleType", circle_type_id)
            return row
