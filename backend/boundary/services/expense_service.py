"""Expense use cases: CRUD, split computation and statistics."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
from decimal import ROUND_DOWN, Decimal
from typing import Any

from boundary.core.clock import as_utc, month_start, next_month_start, utcnow
from boundary.models.expense import Expense, ExpenseSplit
from boundary.services._shared.base import BaseService
from boundary.services._shared.dto import ListOut, PageMeta
from boundary.services._shared.errors import DomainValidationError, NotFoundError

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

EXPENSE_CATEGORY_CATALOG: tuple[dict[str, str], ...] = (
    {"name": "food", "icon": "restaurant", "color": "#FF6B6B", "description": "Food and dining expenses"},
    {"name": "transportation", "icon": "directions_car", "color": "#4ECDC4", "description": "Transportation and travel"},
    {"name": "entertainment", "icon": "sports_esports", "color": "#9B59B6", "description": "Entertainment and leisure"},
    {"name": "healthcare", "icon": "local_hospital", "color": "#FF6B6B", "description": "Medical and health expenses"},
    {"name": "education", "icon": "menu_book", "color": "#61DAFB", "description": "Education and learning"},
    {"name": "shopping", "icon": "shopping_bag", "color": "#F7DC6F", "description": "Shopping and retail"},
    {"name": "utilities", "icon": "lightbulb", "color": "#FFC107", "description": "Utilities and bills"},
    {"name": "housing", "icon": "home", "color": "#8D6E63", "description": "Housing and rent"},
    {"name": "insurance", "icon": "shield", "color": "#2196F3", "description": "Insurance premiums"},
    {"name": "other", "icon": "receipt_long", "color": "#95A5A6", "description": "Other expenses"},
)

_SCALARS = (
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
)


def _split_error(message: str) -> DomainValidationError:
    return DomainValidationError(message, {"splits": [message]})


def _distribute(total: Decimal, weights: Sequence[Decimal]) -> list[Decimal]:
    """
    Share ``total`` proportionally to ``weights``, rounded down to the cent.

    The rounding remainder is added to the first share so the parts always
    add up to ``total``.
    """
    weight_sum = sum(weights, Decimal("0"))
    parts = [(total * w / weight_sum).quantize(CENT, rounding=ROUND_DOWN) for w in weights]
    parts[0] += total - sum(parts, Decimal("0"))
    return parts


def compute_splits(
    *,
    amount: Decimal,
    split_type: str,
    shared_with: Sequence[str] | None = None,
    splits: Sequence[Mapping[str, Any]] | None = None,
) -> list[ExpenseSplit]:
    """
    Build the split rows for an expense.

    * ``none``: no rows.
    * ``equal``: one row per ``shared_with`` user (or per ``splits`` user when
      no list is given), amounts as even as cents allow.
    * ``percentage``: every split carries a percentage; they sum to 100.
    * ``fixed``: every split carries an amount; they sum to ``amount``.

    :raises DomainValidationError: When the splits do not satisfy the rule.
    """
    amount = Decimal(amount).quantize(CENT)
    if split_type == "none":
        return []

    if split_type == "equal":
        users = list(shared_with or [s["user_id"] for s in splits or []])
        if not users:
            raise _split_error("Equal splits need at least one user in sharedWith.")
        if len(set(users)) != len(users):
            raise _split_error("Each user can only appear once in a split.")
        parts = _distribute(amount, [Decimal("1")] * len(users))
        return [ExpenseSplit(user_id=u, amount=p) for u, p in zip(users, parts, strict=True)]

    rows = list(splits or [])
    if not rows:
        raise _split_error(f"Splits are required for split type '{split_type}'.")
    user_ids = [row["user_id"] for row in rows]
    if len(set(user_ids)) != len(user_ids):
        raise _split_error("Each user can only appear once in a split.")

    if split_type == "percentage":
        if any(row.get("percentage") is None for row in rows):
            raise _split_error("Every split needs a percentage.")
        percentages = [Decimal(row["percentage"]) for row in rows]
        if sum(percentages, Decimal("0")) != HUNDRED:
            raise _split_error("Split percentages must add up to 100.")
        parts = _distribute(amount, percentages)
        return [
            ExpenseSplit(user_id=u, amount=a, percentage=p)
            for u, a, p in zip(user_ids, parts, percentages, strict=True)
        ]

    # fixed
    if any(row.get("amount") is None for row in rows):
        raise _split_error("Every split needs an amount.")
    amounts = [Decimal(row["amount"]).quantize(CENT) for row in rows]
    if sum(amounts, Decimal("0")) != amount:
        raise _split_error("Split amounts must add up to the expense amount.")
    return [ExpenseSplit(user_id=u, amount=a) for u, a in zip(user_ids, amounts, strict=True)]


class ExpenseService(BaseService):
    """
    Expenses of the authenticated user.

    Splits are derived data: they are recomputed whenever the amount, the
    split type or the split inputs change, so they never drift from the
    expense they belong to.
    """

    @staticmethod
    def categories() -> list[dict[str, str]]:
        """Static category catalog shown by the mobile client."""
        return [dict(item) for item in EXPENSE_CATEGORY_CATALOG]

    def list_expenses(self, *, page: int, limit: int, **filters: Any) -> ListOut[Expense]:
        """
        Page through the caller's expenses, newest first.

        :param filters: Keyword filters accepted by
            :meth:`boundary.repositories.expense.ExpenseRepository.filters`.
        """
        owner = self.require_actor()
        with self.ro_uow() as uow:
            repo = uow.expenses
            result = repo.paginate(
                self.ensure_pagination(page=page, limit=limit),
                owner_id=owner,
                where=repo.filters(**filters),
            )
            return ListOut(
                items=list(result.items),
                meta=PageMeta.build(page=result.page, limit=result.limit, total=result.total),
            )

    def create_expense(self, data: Mapping[str, Any]) -> Expense:
        """:raises DomainValidationError: When the splits break the split-type rule."""
        owner = self.require_actor()
        split_type = data.get("split_type") or "none"
        splits = compute_splits(
            amount=data["amount"],
            split_type=split_type,
            shared_with=data.get("shared_with"),
            splits=data.get("splits"),
        )
        with self.rw_uow() as uow:
            expense = Expense(user_id=owner, **{k: data[k] for k in _SCALARS if k in data})
            expense.split_type = split_type
            expense.splits = splits
            uow.expenses.add(expense)
        self.log_event("expenses.created", resource="expense", resource_id=expense.id)
        return expense

    def update_expense(self, expense_id: int, data: Mapping[str, Any]) -> Expense:
        """
        Apply a partial update, recomputing splits from the merged values.

        :raises NotFoundError: When the caller owns no expense ``expense_id``.
        :raises DomainValidationError: When the merged splits break the rule.
        """
        owner = self.require_actor()
        with self.rw_uow() as uow:
            repo = uow.expenses
            expense = repo.get(expense_id, owner_id=owner)
            if expense is None:
                raise NotFoundError("Expense", expense_id)

            if {"amount", "split_type", "shared_with", "splits"} & set(data):
                current = [
                    {"user_id": s.user_id, "amount": s.amount, "percentage": s.percentage}
                    for s in expense.splits
                ]
                expense.splits = compute_splits(
                    amount=data.get("amount", expense.amount),
                    split_type=data.get("split_type", expense.split_type),
                    shared_with=data.get("shared_with"),
                    splits=data["splits"] if "splits" in data else current,
                )
            repo.assign_updates(expense, {k: data[k] for k in _SCALARS if k in data})
        self.log_event("expenses.updated", resource="expense", resource_id=expense_id)
        return expense

    def delete_expense(self, expense_id: int) -> None:
        """:raises NotFoundError: When the caller owns no expense ``expense_id``."""
        owner = self.require_actor()
        with self.rw_uow() as uow:
            repo = uow.expenses
            expense = repo.get(expense_id, owner_id=owner)
            if expense is None:
                raise NotFoundError("Expense", expense_id)
            repo.delete(expense)
        self.log_event("expenses.deleted", resource="expense", resource_id=expense_id)

    def stats(self, *, now: datetime | None = None) -> dict[str, Any]:
        """
        Spending summary for the caller; cancelled expenses are left out.

        ``averageMonthly`` spreads the total over every calendar month from
        the oldest expense to the current one.
        """
        owner = self.require_actor()
        now = as_utc(now or utcnow())
        this_month = month_start(now)
        last_month = month_start(this_month - timedelta(days=1))
        with self.ro_uow() as uow:
            repo = uow.expenses
            total = repo.sum_amount(owner)
            breakdown = repo.sum_by_category(owner)
            by_status = repo.count_by_status(owner)
            first = repo.first_date(owner)
            recurring = repo.count(
                owner_id=owner,
                where=[repo.model.is_recurring.is_(True), repo.model.status != "cancelled"],
            )
            this_month_total = repo.sum_amount(
                owner, start=this_month, end=next_month_start(now)
            )
            last_month_total = repo.sum_amount(owner, start=last_month, end=this_month)

        months = 1
        if first is not None:
            first = as_utc(first)
            months = max(1, (now.year - first.year) * 12 + now.month - first.month + 1)
        paid = by_status.get("paid", 0)
        active = paid + by_status.get("pending", 0)
        top = max(breakdown.items(), key=lambda item: item[1]) if total > 0 else None
        return {
            "total_expenses": float(total),
            "this_month": float(this_month_total),
            "last_month": float(last_month_total),
            "average_monthly": float((total / months).quantize(CENT)),
            "top_category": top[0] if top else None,
            "category_breakdown": {k: float(v) for k, v in breakdown.items()},
            "paid_percentage": round(paid * 100 / active, 1) if active else 0.0,
            "pending_count": by_status.get("pending", 0),
            "recurring_count": recurring,
        }
