"""Gallery endpoints: photos, albums, favorites, share links and statistics."""

from __future__ import annotations

from typing import Any

from flask import Blueprint

from boundary.api.deps import (
    data_response,
    gallery_service,
    idempotent,
    no_content,
    page_response,
    require_auth,
    timing,
)
from boundary.api.validation import validate_request
from boundary.schemas import (
    AlbumCreateSchema,
    AlbumSchema,
    FavoriteSchema,
    GalleryStatsSchema,
    IdPathSchema,
    PhotoQuerySchema,
    PhotoSchema,
    PhotoUploadFilesSchema,
    PhotoUploadFormSchema,
    ShareCreateSchema,
    ShareSchema,
)

bp = Blueprint("gallery", __name__)

photo_schema = PhotoSchema()
photo_list_schema = PhotoSchema(many=True)
album_schema = AlbumSchema()
album_list_schema = AlbumSchema(many=True)
share_schema = ShareSchema()
stats_schema = GalleryStatsSchema()


@bp.get("/personal/photos")
@require_auth
@timing
@validate_request(query=PhotoQuerySchema)
def list_photos(query: dict[str, Any]):
    page = gallery_service().list_photos(**query)
    return page_response(page, photo_list_schema.dump)


@bp.post("/photos/upload")
@require_auth
@idempotent
@timing
@validate_request(body=PhotoUploadFormSchema, files=PhotoUploadFilesSchema)
def upload_photo(body: dict[str, Any], files: dict[str, Any]):
    """Store a multipart ``file`` (image or video) and create its record."""
    photo = gallery_service().upload_photo(files["file"], **body)
    return data_response(photo_schema.dump(photo), status=201)


@bp.delete("/photos/<id>")
@require_auth
@timing
@validate_request(path=IdPathSchema)
def delete_photo(path: dict[str, Any]):
    gallery_service().delete_photo(path["id"])
    return no_content()


@bp.post("/photos/<id>/favorite")
@require_auth
@timing
@validate_request(path=IdPathSchema, body=FavoriteSchema)
def favorite_photo(path: dict[str, Any], body: dict[str, Any]):
    """Set ``isFavorite``, or toggle it when the body omits the flag."""
    photo = gallery_service().set_favorite(path["id"], body["is_favorite"])
    return data_response(photo_schema.dump(photo))


@bp.post("/photos/<id>/share")
@require_auth
@timing
@validate_request(path=IdPathSchema, body=ShareCreateSchema)
def share_photo(path: dict[str, Any], body: dict[str, Any]):
    share = gallery_service().share_photo(path["id"], body["expires_at"])
    return data_response(share_schema.dump(share))


@bp.get("/albums")
@require_auth
@timing
def list_albums():
    return data_response(album_list_schema.dump(gallery_service().list_albums()))


@bp.post("/albums")
@require_auth
@idempotent
@timing
@validate_request(body=AlbumCreateSchema)
def create_album(body: dict[str, Any]):
    album = gallery_service().create_album(**body)
    return data_response(album_schema.dump(album), status=201)


@bp.get("/stats")
@require_auth
@timing
def gallery_stats():
    return data_response(stats_schema.dump(gallery_service().stats()))
