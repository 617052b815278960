from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import ColumnElement, String, cast, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute

from boundary.models.expense import EXPENSE_CATEGORIES, Expense
from boundary.repositories.base import BaseRepository


class ExpenseRepository(BaseRepository[Expense]):
    """
    Persistence-only repository for :class:`Expense`.

    Expenses are private to ``user_id``. Aggregates exclude cancelled rows
    unless stated otherwise.
    """

    model = Expense
    owner_attr = "user_id"

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "date": self.model.date,
            "amount": self.model.amount,
            "title": self.model.title,
            "created_at": self.model.created_at,
        }

    def _default_sort(self) -> list[str]:
        return ["-date"]

    def _updatable_fields(self) -> set[str]:
        return {
            "title",
            "description",
            "amount",
            "currency",
            "category",
            "subcategory",
            "date",
            "payment_method",
            "is_recurring",
            "recurrence_pattern",
            "next_due_date",
            "status",
            "tags",
            "circle_id",
            "split_type",
        }

    # ---------------------------- Filters ----------------------------
    def filters(
        self,
        *,
        category: str | None = None,
        status: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        search: str | None = None,
        amount: Decimal | None = None,
        min_amount: Decimal | None = None,
        max_amount: Decimal | None = None,
    ) -> list[ColumnElement[bool]]:
        """Build ``WHERE`` clauses for the expense listing."""
        clauses: list[ColumnElement[bool]] = []
        if category:
            clauses.append(self.model.category == category)
        if status:
            clauses.append(self.model.status == status)
        if date_from is not None:
            clauses.append(self.model.date >= date_from)
        if date_to is not None:
            clauses.append(self.model.date <= date_to)
        if amount is not None:
            clauses.append(self.model.amount == amount)
        if min_amount is not None:
            clauses.append(self.model.amount >= min_amount)
        if max_amount is not None:
            clauses.append(self.model.amount <= max_amount)
        if search:
            needle = search.lower()
            clauses.append(
                or_(
                    func.lower(self.model.title).contains(needle, autoescape=True),
                    func.lower(self.model.description).contains(needle, autoescape=True),
                    # Tags are a JSON array; match against its text rendering.
                    func.lower(cast(self.model.tags, String)).contains(needle, autoescape=True),
                )
            )
        return clauses

    # ---------------------------- Aggregates ----------------------------
    def _active(self, owner_id: str) -> list[ColumnElement[bool]]:
        return [self.model.user_id == owner_id, self.model.status != "cancelled"]

    def sum_amount(
        self, owner_id: str, *, start: datetime | None = None, end: datetime | None = None
    ) -> Decimal:
        """Sum non-cancelled amounts, optionally for dates in ``[start, end)``."""
        stmt = select(func.coalesce(func.sum(self.model.amount), 0)).where(*self._active(owner_id))
        if start is not None:
            stmt = stmt.where(self.model.date >= start)
        if end is not None:
            stmt = stmt.where(self.model.date < end)
        return Decimal(str(self.session.execute(stmt).scalar_one()))

    def sum_by_category(self, owner_id: str) -> dict[str, Decimal]:
        """Non-cancelled totals for every category, zero-filled."""
        stmt = (
            select(self.model.category, func.sum(self.model.amount))
            .where(*self._active(owner_id))
            .group_by(self.model.category)
        )
        totals = {name: Decimal("0") for name in EXPENSE_CATEGORIES}
        for category, total in self.session.execute(stmt).all():
            totals[category] = Decimal(str(total or 0))
        return totals

    def count_by_status(self, owner_id: str) -> dict[str, int]:
        stmt = (
            select(self.model.status, func.count())
            .where(self.model.user_id == owner_id)
            .group_by(self.model.status)
        )
        return {status: int(total) for status, total in self.session.execute(stmt).all()}

    def first_date(self, owner_id: str) -> datetime | None:
        """Date of the oldest non-cancelled expense."""
        stmt = select(func.min(self.model.date)).where(*self._active(owner_id))
        return self.session.execute(stmt).scalar_one()
