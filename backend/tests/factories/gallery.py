"""Factory Boy definitions for albums and photos."""

from __future__ import annotations

from datetime import datetime, timezone

from boundary.models.gallery import Album, Photo

import factory
from tests.factories import BaseFactory


class AlbumFactory(BaseFactory):
    class Meta:
        model = Album

    id = None
    name = factory.Sequence(lambda n: f"Album {n}")
    description = factory.Faker("sentence", nb_words=6)
    is_public = False
    created_by = "user-1"


class PhotoFactory(BaseFactory):
    """Build persisted :class:`boundary.models.gallery.Photo` (no file on disk)."""

    class Meta:
        model = Photo

    id = None
    filename = factory.Sequence(lambda n: f"stored-{n}.jpg")
    original_name = factory.Sequence(lambda n: f"IMG_{n:04d}.jpg")
    mime_type = "image/jpeg"
    size = 100
    url = factory.LazyAttribute(lambda o: f"/uploads/images/{o.filename}")
    is_favorite = False
    uploaded_by = "user-1"
    uploaded_at = factory.LazyFunction(lambda: datetime.now(timezone.utc))
    tags = factory.LazyFunction(list)
    extra = None

