"""
SQLAlchemy implementations of the Unit of Work for Flask.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event, text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from boundary.core.extensions import db
from boundary.repositories import (
    AlbumRepository,
    CalendarEventRepository,
    CircleTypeRepository,
    ExpenseRepository,
    PhotoRepository,
    PhotoShareRepository,
)
from boundary.uow.base import UnitOfWork

log = logging.getLogger(__name__)


def _unavailable() -> Exception:
    # Imported late: boundary.services loads the services, which import this module.
    from boundary.services._shared.errors import PersistenceError

    return PersistenceError()


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share one SQLAlchemy session."""

    def __init__(self, *, session: Session | None = None) -> None:
        self.session: Session = session if session is not None else db.session
        self.calendar_events = CalendarEventRepository(session=self.session)
        self.circle_types = CircleTypeRepository(session=self.session)
        self.expenses = ExpenseRepository(session=self.session)
        self.albums = AlbumRepository(session=self.session)
        self.photos = PhotoRepository(session=self.session)
        self.photo_shares = PhotoShareRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write UoW: commit when the block exits cleanly, roll back otherwise.

    Driver-level connectivity failures are surfaced as
    :class:`~boundary.services._shared.errors.PersistenceError` so the API
    answers with a generic 503 instead of leaking driver messages.
    """

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            if isinstance(exc, OperationalError):
                raise _unavailable() from exc
            return
        try:
            self.commit()
        except OperationalError as err:
            self.rollback()
            raise _unavailable() from err
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only UoW over the shared session.

    * Owns a fresh transaction when none is active and ends it on exit by
      closing the session, which rolls back and detaches the loaded rows so
      callers can still serialize them. When a transaction is already open
      (e.g. data staged by an earlier step) it attaches and leaves it alone.
    * Blocks ORM flushes carrying new/dirty/deleted objects.
    * On PostgreSQL, marks owned transactions ``READ ONLY``.
    * ``commit()`` is refused.
    """

    def __init__(self, *, session: Session | None = None, enforce_db_readonly: bool = True) -> None:
        super().__init__(session=session)
        self.enforce_db_readonly = enforce_db_readonly
        self._owns_transaction = False
        self._guard_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._owns_transaction = not self._event_target().in_transaction()
        self._install_guard()
        if self._owns_transaction and self.enforce_db_readonly:
            bind = self.session.get_bind()
            if bind.dialect.name == "postgresql":
                try:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
                except DBAPIError as exc:
                    log.warning("SET TRANSACTION READ ONLY failed (%s); guards only.", exc)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._owns_transaction:
                self.session.close()
        finally:
            self._remove_guard()
        if isinstance(exc, OperationalError):
            raise _unavailable() from exc

    def commit(self) -> None:
        """
        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards -------------------------------------

    def _before_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _install_guard(self) -> None:
        if self._guard_installed:
            return
        event.listen(self._event_target(), "before_flush", self._before_flush)
        self._guard_installed = True

    def _remove_guard(self) -> None:
        if not self._guard_installed:
            return
        with suppress(SQLAlchemyError):
            event.remove(self._event_target(), "before_flush", self._before_flush)
        self._guard_installed = False

    def _event_target(self):
        # scoped_session proxies neither accept listeners nor expose in_transaction().
        registry = getattr(self.session, "registry", None)
        return registry() if registry is not None else self.session
