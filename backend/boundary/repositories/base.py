"""Generic repository base and query utilities for SQLAlchemy 2.x.

Persistence-only concerns shared by every resource repository:

- Pagination value objects and a counted, sliced ``SELECT`` executor.
- Sorting restricted to a per-repository whitelist, with the primary key as
  the final tiebreaker so pages are deterministic.
- Owner scoping: resources created by a user are only visible to that user.
- Update helpers restricted to a per-repository field whitelist.

Repositories never commit or roll back; the unit of work owns the transaction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from boundary.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


@dataclass(slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param sort: Public sort tokens (e.g. ``["-start_time", "title"]``).
    :type sort: list[str]
    """

    page: int
    limit: int
    sort: list[str]


@dataclass(slots=True)
class Page(Generic[E]):
    """Result page with metadata.

    :param items: Entities in the current page.
    :param total: Total matching rows.
    :param page: 1-based page number.
    :param limit: Page size.
    """

    items: Sequence[E]
    total: int
    page: int
    limit: int


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples."""
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        name = (token[1:] if is_desc else token).strip()
        if name:
            parsed.append((name, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply ``ORDER BY`` clauses for whitelisted tokens; unknown tokens are ignored."""
    orders = [
        (col.desc() if is_desc else col.asc())
        for name, is_desc in parse_sort_tokens(tokens)
        if (col := sortable_fields.get(name)) is not None
    ]
    if orders:
        stmt = stmt.order_by(*orders)
    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())
    return stmt


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
) -> tuple[list[Any], int]:
    """Execute ``stmt`` for one page and count all matching rows.

    The ``ORDER BY`` is stripped from the count query.

    :returns: ``(items, total)``.
    :rtype: tuple[list[Any], int]
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())
    sliced = stmt.limit(limit).offset((page - 1) * limit)
    items = list(session.execute(sliced).scalars().all())
    return items, total


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses set ``model`` and may override:

    * ``owner_attr`` - attribute holding the owning user id (``None`` for
      shared reference data).
    * ``_sortable_fields`` - public sort key -> column.
    * ``_default_sort`` - tokens used when the caller gives none.
    * ``_updatable_fields`` - keys accepted by :meth:`assign_updates`.
    """

    model: type[E]
    owner_attr: str | None = None

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """Injected session, or the Flask-scoped session of the shared client."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _default_sort(self) -> list[str]:
        return []

    def _updatable_fields(self) -> set[str]:
        return set()

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _owned(self, stmt: Select[Any], owner_id: str | None) -> Select[Any]:
        if self.owner_attr is None or owner_id is None:
            return stmt
        return stmt.where(getattr(self.model, self.owner_attr) == owner_id)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize its primary key."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def get(self, entity_id: Any, *, owner_id: str | None = None) -> E | None:
        """Return the entity with ``entity_id`` (restricted to ``owner_id`` when given)."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._owned(select(self.model).where(pk_attr == entity_id), owner_id)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def delete(self, instance: E) -> None:
        """Delete an entity and flush."""
        self.session.delete(instance)
        self.session.flush()

    def assign_updates(self, instance: E, fields: Mapping[str, Any]) -> E:
        """Assign whitelisted keys to ``instance`` and flush.

        :raises ValueError: When a key is not in ``_updatable_fields``.
        """
        allowed = self._updatable_fields()
        unknown = sorted(k for k in fields if k not in allowed)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            setattr(instance, key, value)
        self.session.flush()
        return instance

    # ------------------------------- Listing ---------------------------------

    def list(
        self,
        *,
        owner_id: str | None = None,
        where: Sequence[ColumnElement[bool]] = (),
        sort: Iterable[str] | None = None,
    ) -> list[E]:
        """List entities matching ``where`` in whitelisted sort order."""
        stmt = self._owned(select(self.model), owner_id)
        if where:
            stmt = stmt.where(*where)
        stmt = apply_sorting(
            stmt, self._sortable_fields(), sort or self._default_sort(), pk_attr=self._pk_attr()
        )
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    def paginate(
        self,
        pagination: Pagination,
        *,
        owner_id: str | None = None,
        where: Sequence[ColumnElement[bool]] = (),
    ) -> Page[E]:
        """Return one page of entities matching ``where`` with a total count."""
        stmt = self._owned(select(self.model), owner_id)
        if where:
            stmt = stmt.where(*where)
        stmt = apply_sorting(
            stmt,
            self._sortable_fields(),
            pagination.sort or self._default_sort(),
            pk_attr=self._pk_attr(),
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=cast(list[E], items), total=total, page=pagination.page, limit=pagination.limit)

    def count(
        self, *, owner_id: str | None = None, where: Sequence[ColumnElement[bool]] = ()
    ) -> int:
        """Count entities matching ``where``."""
        stmt = self._owned(select(func.count()).select_from(self.model), owner_id)
        if where:
            stmt = stmt.where(*where)
        return int(self.session.execute(stmt).scalar_one())
