from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute

from boundary.models.circle_type import CircleType
from boundary.repositories.base import BaseRepository


class CircleTypeRepository(BaseRepository[CircleType]):
    """Read access to seeded circle types, plus the upsert used by the seed command."""

    model = CircleType

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {"name": self.model.name, "created_at": self.model.created_at}

    def _default_sort(self) -> list[str]:
        return ["name"]

    def _updatable_fields(self) -> set[str]:
        return {"display_name", "description", "icon", "color", "default_settings", "is_system"}

    def get_by_name(self, name: str) -> CircleType | None:
        stmt = select(self.model).where(self.model.name == name)
        return self.session.execute(stmt).scalars().first()

    def upsert(self, name: str, **fields: Any) -> tuple[CircleType, bool]:
        """
        Insert the circle type ``name`` or refresh its attributes.

        :returns: ``(row, created)``.
        :rtype: tuple[CircleType, bool]
        """
        row = self.get_by_name(name)
        if row is None:
            return self.add(CircleType(name=name, **fields)), True
        self.assign_updates(row, fields)
        return row, False
