"""Repository package exposing persistence-layer access for every resource."""

from __future__ import annotations

from boundary.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from boundary.repositories.calendar import CalendarEventRepository
from boundary.repositories.circle_type import CircleTypeRepository
from boundary.repositories.expense import ExpenseRepository
from boundary.repositories.gallery import AlbumRepository, PhotoRepository, PhotoShareRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "apply_sorting",
    "paginate_select",
    # Resources
    "AlbumRepository",
    "CalendarEventRepository",
    "CircleTypeRepository",
    "ExpenseRepository",
    "PhotoRepository",
    "PhotoShareRepository",
]
