"""Service base class, request context and error translation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from boundary.core import errors as api_errors
from boundary.repositories.base import Pagination
from boundary.services._shared.errors import (
    DomainValidationError,
    NotFoundError,
    PersistenceError,
    ServiceError,
    StorageError,
)
from boundary.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], SQLAlchemyUnitOfWork]
ReadOnlyUnitOfWorkFactory = Callable[[], SQLAlchemyReadOnlyUnitOfWork]


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated user identifier (JWT ``sub``).
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: str | None = None
    request_id: str | None = None


def translate_exception(exc: ServiceError) -> api_errors.APIError:
    """
    Map a service-level error to an API-level (HTTP) error.

    :param exc: Exception raised within a service.
    :type exc: ServiceError
    :returns: Translated error ready to be rendered as a problem document.
    :rtype: boundary.core.errors.APIError
    """
    if isinstance(exc, NotFoundError):
        return api_errors.NotFound(str(exc))
    if isinstance(exc, DomainValidationError):
        return api_errors.Unprocessable(
            str(exc), details={"errors": exc.errors} if exc.errors else None
        )
    if isinstance(exc, PersistenceError):
        return api_errors.ServiceUnavailable(str(exc))
    if isinstance(exc, StorageError):
        # Never echo storage paths or OS messages back to clients.
        return api_errors.APIError(
            "Unexpected error",
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
        )
    return api_errors.APIError(str(exc), status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide read-only and read-write units of work.
    * Keep services orchestration-only: no Flask request, no response shapes.

    Notes
    -----
    The unit of work factories are injectable so services can be exercised
    against any session; by default they bind to the shared Flask-SQLAlchemy
    session.
    """

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        uow_factory: UnitOfWorkFactory | None = None,
        ro_uow_factory: ReadOnlyUnitOfWorkFactory | None = None,
    ) -> None:
        self.ctx = ctx or ServiceContext()
        self._uow_factory = uow_factory or SQLAlchemyUnitOfWork
        self._ro_uow_factory = ro_uow_factory or SQLAlchemyReadOnlyUnitOfWork

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work (commit on success, rollback on error)."""
        return self._uow_factory()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work (always rolled back)."""
        return self._ro_uow_factory()

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size.
        :param sort: Sort tokens like ``["-created_at", "name"]``.
        :returns: Pagination instance.
        :rtype: Pagination
        """
        page = max(1, int(page))
        limit = max(1, int(limit))
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    def require_actor(self) -> str:
        """Return the authenticated actor id or fail closed."""
        if not self.ctx.actor_id:
            raise ServiceError("An authenticated user is required.")
        return self.ctx.actor_id

    def log_event(self, event: str, **extra: Any) -> None:
        """Emit a structured use-case log line tagged with the actor."""
        log.info(event, extra={"actor_id": self.ctx.actor_id, **extra})
