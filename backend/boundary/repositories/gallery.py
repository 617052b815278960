from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, String, cast, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute

from boundary.models.gallery import Album, Photo, PhotoShare
from boundary.repositories.base import BaseRepository


class AlbumRepository(BaseRepository[Album]):
    """Albums owned by ``created_by``."""

    model = Album
    owner_attr = "created_by"

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {"name": self.model.name, "created_at": self.model.created_at}

    def _default_sort(self) -> list[str]:
        return ["-created_at"]

    def photo_counts(self, album_ids: list[int]) -> dict[int, int]:
        """Number of photos per album id (missing ids count zero)."""
        if not album_ids:
            return {}
        stmt = (
            select(Photo.album_id, func.count())
            .where(Photo.album_id.in_(album_ids))
            .group_by(Photo.album_id)
        )
        counts = dict.fromkeys(album_ids, 0)
        for album_id, total in self.session.execute(stmt).all():
            counts[album_id] = int(total)
        return counts


class PhotoRepository(BaseRepository[Photo]):
    """
    Persistence-only repository for :class:`Photo`.

    Photos are private to ``uploaded_by``. Videos are rows whose mime type
    starts with ``video/``.
    """

    model = Photo
    owner_attr = "uploaded_by"

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "uploaded_at": self.model.uploaded_at,
            "size": self.model.size,
            "original_name": self.model.original_name,
        }

    def _default_sort(self) -> list[str]:
        return ["-uploaded_at"]

    def _updatable_fields(self) -> set[str]:
        return {"is_favorite", "album_id", "tags", "thumbnail_url", "extra"}

    def filters(
        self,
        *,
        media_type: str = "all",
        search: str | None = None,
        album_id: int | None = None,
    ) -> list[ColumnElement[bool]]:
        """Build ``WHERE`` clauses for the gallery listing.

        ``media_type`` is one of ``all``, ``photos``, ``videos`` or ``favorites``.
        """
        clauses: list[ColumnElement[bool]] = []
        if media_type == "photos":
            clauses.append(self.model.mime_type.like("image/%"))
        elif media_type == "videos":
            clauses.append(self.model.mime_type.like("video/%"))
        elif media_type == "favorites":
            clauses.append(self.model.is_favorite.is_(True))
        if album_id is not None:
            clauses.append(self.model.album_id == album_id)
        if search:
            needle = search.lower()
            clauses.append(
                or_(
                    func.lower(self.model.original_name).contains(needle, autoescape=True),
                    func.lower(cast(self.model.tags, String)).contains(needle, autoescape=True),
                )
            )
        return clauses

    def total_size(self, owner_id: str) -> int:
        stmt = select(func.coalesce(func.sum(self.model.size), 0)).where(
            self.model.uploaded_by == owner_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def count_since(self, owner_id: str, since: datetime) -> int:
        return self.count(owner_id=owner_id, where=[self.model.uploaded_at >= since])


class PhotoShareRepository(BaseRepository[PhotoShare]):
    """Share links; owner scoping happens through the photo they point at."""

    model = PhotoShare
    owner_attr = "created_by"
