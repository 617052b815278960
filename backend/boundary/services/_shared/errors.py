"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. They are the stable contract between repositories, storage adapters and
application services. Translation to RFC 7807 responses happens in
:func:`boundary.services._shared.base.translate_exception`, which the error
handlers in :mod:`boundary.core.errors` call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be raised from repositories, storage adapters or services.
    """


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an identifier does not resolve to a record.

    :param entity: Entity name (e.g. ``"CalendarEvent"``).
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class DomainValidationError(ServiceError):
    """
    Raised when validated input breaks a cross-field rule of the domain.

    Field-level rules belong to the request schemas; this covers the rules
    that need more than one field or the stored record (e.g. an event's end
    before its start once a partial update is merged).

    :param message: Summary for clients.
    :type message: str
    :param errors: Field name -> messages, in the same shape as marshmallow.
    :type errors: dict[str, list[str]]
    """

    message: str
    errors: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class PersistenceError(ServiceError):
    """Raised when the persistence client cannot read or write."""

    def __init__(self, message: str = "Persistence layer unavailable") -> None:
        super().__init__(message)


class StorageError(ServiceError):
    """Raised when uploaded files cannot be stored or removed."""

    def __init__(self, message: str = "File storage failed") -> None:
        super().__init__(message)
