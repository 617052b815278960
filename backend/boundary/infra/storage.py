"""Local filesystem storage for gallery uploads."""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from boundary.services._shared.errors import StorageError

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredFile:
    """Result of a successful save.

    :param filename: Unique stored name (inside the upload folder).
    :param url: Public URL of the file.
    :param size: Bytes written.
    """

    filename: str
    url: str
    size: int


class LocalFileStorage:
    """
    Save uploads under ``root`` with collision-free names.

    Stored names keep the sanitized extension of the client filename and
    prefix it with a random UUID so two uploads never overwrite each other.
    """

    def __init__(self, root: str | os.PathLike[str], url_prefix: str) -> None:
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    @classmethod
    def from_config(cls) -> LocalFileStorage:
        cfg = current_app.config
        return cls(cfg["UPLOAD_FOLDER"], cfg["UPLOAD_URL_PREFIX"])

    def _stored_name(self, original: str) -> str:
        safe = secure_filename(original) or "upload"
        suffix = Path(safe).suffix.lower()
        return f"{uuid.uuid4().hex}{suffix}"

    def save(self, upload: FileStorage) -> StoredFile:
        """
        Write ``upload`` to disk.

        :raises StorageError: When the folder cannot be created or written to.
        """
        filename = self._stored_name(upload.filename or "")
        target = self.root / filename
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            upload.save(target)
            size = target.stat().st_size
        except OSError as exc:
            log.error("storage.save_failed", extra={"resource": "photo"}, exc_info=True)
            raise StorageError() from exc
        return StoredFile(filename=filename, url=f"{self.url_prefix}/{filename}", size=size)

    def delete(self, filename: str) -> None:
        """
        Remove a stored file; a file that is already gone is not an error.

        :raises StorageError: On any other filesystem failure.
        """
        try:
            (self.root / filename).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError() from exc
