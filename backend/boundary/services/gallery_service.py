"""Gallery use cases: uploads, albums, favorites, share links and statistics."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Protocol

from werkzeug.datastructures import FileStorage

from boundary.core.clock import utcnow
from boundary.models.gallery import Album, Photo, PhotoShare
from boundary.services._shared.base import BaseService
from boundary.services._shared.dto import ListOut, PageMeta
from boundary.services._shared.errors import NotFoundError, ServiceError

if TYPE_CHECKING:
    from boundary.infra.storage import StoredFile

log = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=7)


class PhotoStorage(Protocol):
    def save(self, upload: FileStorage) -> StoredFile: ...
    def delete(self, filename: str) -> None: ...


class GalleryService(BaseService):
    """
    Photos, videos and albums of the authenticated user.

    Parameters
    ----------
    storage:
        Where uploaded bytes go; the record and the file are kept in step.
    share_base_url:
        Prefix of public share links.
    share_ttl_days:
        Lifetime of a share link when the client does not pick one.
    storage_limit:
        Per-user quota reported by :meth:`stats`, in bytes.
    """

    def __init__(
        self,
        *,
        storage: PhotoStorage,
        share_base_url: str,
        share_ttl_days: int = 7,
        storage_limit: int = 10 * 1024**3,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.storage = storage
        self.share_base_url = share_base_url.rstrip("/")
        self.share_ttl_days = share_ttl_days
        self.storage_limit = storage_limit

    # ------------------------------------------------------------------ #
    # Photos
    # ------------------------------------------------------------------ #

    def list_photos(
        self,
        *,
        page: int,
        limit: int,
        media_type: str = "all",
        search: str | None = None,
        album_id: int | None = None,
    ) -> ListOut[Photo]:
        """Page through the caller's uploads, newest first."""
        owner = self.require_actor()
        with self.ro_uow() as uow:
            repo = uow.photos
            result = repo.paginate(
                self.ensure_pagination(page=page, limit=limit),
                owner_id=owner,
                where=repo.filters(media_type=media_type, search=search, album_id=album_id),
            )
            return ListOut(
                items=list(result.items),
                meta=PageMeta.build(page=result.page, limit=result.limit, total=result.total),
            )

    def upload_photo(
        self,
        upload: FileStorage,
        *,
        album_id: int | None = None,
        tags: Sequence[str] = (),
        width: int | None = None,
        height: int | None = None,
    ) -> Photo:
        """
        Store ``upload`` and create its record atomically.

        A storage failure rolls the record back; a database failure removes the
        stored file again.

        :raises NotFoundError: When ``album_id`` is not one of the caller's albums.
        :raises StorageError: When the file cannot be written.
        """
        owner = self.require_actor()
        stored: StoredFile | None = None
        try:
            with self.rw_uow() as uow:
                if album_id is not None and uow.albums.get(album_id, owner_id=owner) is None:
                    raise NotFoundError("Album", album_id)
                stored = self.storage.save(upload)
                photo = Photo(
                    filename=stored.filename,
                    original_name=upload.filename or stored.filename,
                    mime_type=upload.mimetype,
                    size=stored.size,
                    url=stored.url,
                    width=width,
                    height=height,
                    album_id=album_id,
                    uploaded_by=owner,
                    tags=list(tags),
                    extra={"contentLength": stored.size},
                )
                uow.photos.add(photo)
        except Exception:
            if stored is not None:
                self._discard(stored.filename)
            raise
        self.log_event("gallery.photo_uploaded", resource="photo", resource_id=photo.id)
        return photo

    def delete_photo(self, photo_id: int) -> None:
        """
        Delete the record, then its file.

        :raises NotFoundError: When the caller owns no photo ``photo_id``.
        """
        owner = self.require_actor()
        with self.rw_uow() as uow:
            repo = uow.photos
            photo = repo.get(photo_id, owner_id=owner)
            if photo is None:
                raise NotFoundError("Photo", photo_id)
            filename = photo.filename
            repo.delete(photo)
        self._discard(filename)
        self.log_event("gallery.photo_deleted", resource="photo", resource_id=photo_id)

    def set_favorite(self, photo_id: int, is_favorite: bool | None = None) -> Photo:
        """Set the favorite flag, or flip it when ``is_favorite`` is ``None``."""
        owner = self.require_actor()
        with self.rw_uow() as uow:
            repo = uow.photos
            photo = repo.get(photo_id, owner_id=owner)
            if photo is None:
                raise NotFoundError("Photo", photo_id)
            value = (not photo.is_favorite) if is_favorite is None else is_favorite
            repo.assign_updates(photo, {"is_favorite": value})
        return photo

    def share_photo(self, photo_id: int, expires_at: datetime | None = None) -> dict[str, Any]:
        """
        Create a public share link.

        :returns: ``share_url``, ``expires_at`` and ``share_id``.
        :raises NotFoundError: When the caller owns no photo ``photo_id``.
        """
        owner = self.require_actor()
        expires_at = expires_at or utcnow() + timedelta(days=self.share_ttl_days)
        with self.rw_uow() as uow:
            if uow.photos.get(photo_id, owner_id=owner) is None:
                raise NotFoundError("Photo", photo_id)
            share = PhotoShare(
                photo_id=photo_id,
                token=secrets.token_urlsafe(16),
                expires_at=expires_at,
                created_by=owner,
            )
            uow.photo_shares.add(share)
        self.log_event("gallery.photo_shared", resource="photo", resource_id=photo_id)
        return {
            "share_url": f"{self.share_base_url}/{share.token}",
            "expires_at": expires_at,
            "share_id": f"share-{photo_id}-{share.id}",
        }

    # ------------------------------------------------------------------ #
    # Albums
    # ------------------------------------------------------------------ #

    def list_albums(self) -> list[Album]:
        """The caller's albums, newest first, each with ``photo_count`` attached."""
        owner = self.require_actor()
        with self.ro_uow() as uow:
            albums = uow.albums.list(owner_id=owner)
            counts = uow.albums.photo_counts([album.id for album in albums])
        for album in albums:
            album.photo_count = counts.get(album.id, 0)
        return albums

    def create_album(
        self, *, name: str, description: str | None = None, is_public: bool = False
    ) -> Album:
        owner = self.require_actor()
        with self.rw_uow() as uow:
            album = uow.albums.add(
                Album(name=name, description=description, is_public=is_public, created_by=owner)
            )
        album.photo_count = 0
        self.log_event("gallery.album_created", resource="album", resource_id=album.id)
        return album

    # ------------------------------------------------------------------ #
    # Statistics
    # ------------------------------------------------------------------ #

    def stats(self, *, now: datetime | None = None) -> dict[str, Any]:
        owner = self.require_actor()
        now = now or utcnow()
        with self.ro_uow() as uow:
            photos = uow.photos
            used = photos.total_size(owner)
            summary = {
                "total_photos": photos.count(
                    owner_id=owner, where=photos.filters(media_type="photos")
                ),
                "total_videos": photos.count(
                    owner_id=owner, where=photos.filters(media_type="videos")
                ),
                "total_size": used,
                "album_count": uow.albums.count(owner_id=owner),
                "favorite_count": photos.count(
                    owner_id=owner, where=photos.filters(media_type="favorites")
                ),
                "recent_count": photos.count_since(owner, now - RECENT_WINDOW),
            }
        summary["storage_used"] = used
        summary["storage_limit"] = self.storage_limit
        summary["storage_percentage"] = (
            round(used * 100 / self.storage_limit, 2) if self.storage_limit else 0.0
        )
        return summary

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _discard(self, filename: str) -> None:
        # The record is already gone (or never committed); a leftover file is
        # logged for cleanup rather than failing the request.
        try:
            self.storage.delete(filename)
        except ServiceError:
            log.error(
                "gallery.file_cleanup_failed",
                extra={"resource": "photo", "actor_id": self.ctx.actor_id},
                exc_info=True,
            )
