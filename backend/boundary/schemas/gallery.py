"""Gallery schemas: listing, uploads, albums, favorites and share links."""

from __future__ import annotations

from typing import Any

from marshmallow import ValidationError, fields, post_load, validate
from werkzeug.datastructures import FileStorage

from boundary.core.clock import utcnow
from boundary.schemas.common import BaseSchema, PaginationQuerySchema, TrimmedString, UTCDateTime

MEDIA_TYPES = ("all", "photos", "videos", "favorites")
ACCEPTED_MIME_PREFIXES = ("image/", "video/")


class UploadedFile(fields.Field):
    """Multipart file part; only images and videos are accepted."""

    default_error_messages = {
        "invalid": "Not a valid file upload.",
        "empty": "No file selected.",
        "mime": "Only image and video files are allowed.",
    }

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, FileStorage):
            raise self.make_error("invalid")
        if not value.filename:
            raise self.make_error("empty")
        if not (value.mimetype or "").startswith(ACCEPTED_MIME_PREFIXES):
            raise self.make_error("mime")
        return value


def _in_future(value) -> None:
    if value <= utcnow():
        raise ValidationError("Must be in the future.")


class PhotoQuerySchema(PaginationQuerySchema):
    """Query of ``GET /gallery/personal/photos``."""

    media_type = fields.String(
        data_key="type", load_default="all", validate=validate.OneOf(MEDIA_TYPES)
    )
    search = fields.String(load_default=None, validate=validate.Length(max=100))
    album_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class PhotoUploadFilesSchema(BaseSchema):
    file = UploadedFile(required=True)


class PhotoUploadFormSchema(BaseSchema):
    """Form fields sent alongside the uploaded file."""

    album_id = fields.Integer(load_default=None, validate=validate.Range(min=1))
    tags = fields.String(load_default="", validate=validate.Length(max=500))
    width = fields.Integer(load_default=None, validate=validate.Range(min=1))
    height = fields.Integer(load_default=None, validate=validate.Range(min=1))

    @post_load
    def split_tags(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.get("tags") or ""
        data["tags"] = [tag.strip() for tag in raw.split(",") if tag.strip()]
        return data


class AlbumCreateSchema(BaseSchema):
    """Body of ``POST /gallery/albums``."""

    name = TrimmedString(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(allow_none=True, validate=validate.Length(max=500))
    is_public = fields.Boolean(load_default=False)


class FavoriteSchema(BaseSchema):
    """Body of ``POST /gallery/photos/<id>/favorite``; an absent flag toggles."""

    is_favorite = fields.Boolean(load_default=None)


class ShareCreateSchema(BaseSchema):
    """Body of ``POST /gallery/photos/<id>/share``."""

    expires_at = UTCDateTime(load_default=None, validate=_in_future)


class PhotoSchema(BaseSchema):
    """Representation of an uploaded photo or video."""

    id = fields.Integer()
    filename = fields.String()
    original_name = fields.String()
    mime_type = fields.String()
    size = fields.Integer()
    url = fields.String()
    thumbnail_url = fields.String(allow_none=True)
    width = fields.Integer(allow_none=True)
    height = fields.Integer(allow_none=True)
    is_favorite = fields.Boolean()
    album_id = fields.Integer(allow_none=True)
    uploaded_by = fields.String()
    uploaded_at = UTCDateTime()
    tags = fields.List(fields.String())
    metadata = fields.Dict(attribute="extra", allow_none=True)


class AlbumSchema(BaseSchema):
    """Representation of an album; ``photoCount`` is attached by the service."""

    id = fields.Integer()
    name = fields.String()
    description = fields.String(allow_none=True)
    cover_image = fields.String(allow_none=True)
    is_public = fields.Boolean()
    created_by = fields.String()
    photo_count = fields.Integer()
    created_at = UTCDateTime()
    updated_at = UTCDateTime()


class ShareSchema(BaseSchema):
    share_url = fields.String()
    expires_at = UTCDateTime()
    share_id = fields.String()


class GalleryStatsSchema(BaseSchema):
    total_photos = fields.Integer()
    total_videos = fields.Integer()
    total_size = fields.Integer()
    album_count = fields.Integer()
    favorite_count = fields.Integer()
    recent_count = fields.Integer()
    storage_used = fields.Integer()
    storage_limit = fields.Integer()
    storage_percentage = fields.Float()
