"""Gallery: albums, uploaded photos/videos and public share links."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boundary.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin, TimestampMixin


class Album(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Named collection of photos owned by one user."""

    __tablename__ = "albums"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    cover_image: Mapped[str | None] = mapped_column(String(500))
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    photos: Mapped[list[Photo]] = relationship(
        "Photo", back_populates="album", passive_deletes=True, lazy="raise_on_sql"
    )


class Photo(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Uploaded image or video.

    The file itself lives in upload storage; ``filename`` is the stored name and
    ``url`` the public path clients fetch it from.
    """

    __tablename__ = "photos"

    filename: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(500))
    width: Mapped[int | None] = mapped_column(Integer)
    height: Mapped[int | None] = mapped_column(Integer)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    album_id: Mapped[int | None] = mapped_column(
        ForeignKey("albums.id", ondelete="SET NULL"), index=True
    )
    uploaded_by: Mapped[str] = mapped_column(String(64), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    # "metadata" is reserved on declarative classes.
    extra: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON)

    album: Mapped[Album | None] = relationship("Album", back_populates="photos")

    __table_args__ = (Index("ix_photos_owner_uploaded", "uploaded_by", "uploaded_at"),)

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")


class PhotoShare(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """Time-limited public link to a photo."""

    __tablename__ = "photo_shares"

    photo_id: Mapped[int] = mapped_column(
        ForeignKey("photos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
