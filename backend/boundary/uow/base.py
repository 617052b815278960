"""
Abstract Unit of Work contract shared by the read-write and read-only variants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boundary.repositories import (
        AlbumRepository,
        CalendarEventRepository,
        CircleTypeRepository,
        ExpenseRepository,
        PhotoRepository,
        PhotoShareRepository,
    )


class UnitOfWork(ABC):
    """
    Transactional boundary for one use case.

    Repositories exposed by a concrete unit of work share its session, so every
    write in the ``with`` block commits together or not at all.
    """

    calendar_events: CalendarEventRepository
    circle_types: CircleTypeRepository
    expenses: ExpenseRepository
    albums: AlbumRepository
    photos: PhotoRepository
    photo_shares: PhotoShareRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
