from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from boundary.services import ExpenseService
from boundary.services._shared.base import ServiceContext
from boundary.services._shared.errors import DomainValidationError, NotFoundError, ServiceError
from tests.factories.expense import ExpenseFactory


def _data(**overrides):
    data = {
        "title": "Rent",
        "amount": Decimal("900.00"),
        "currency": "EUR",
        "category": "housing",
        "date": datetime(2030, 5, 1, tzinfo=timezone.utc),
        "payment_method": "bank_transfer",
        "status": "pending",
        "split_type": "none",
    }
    data.update(overrides)
    return data


class TestExpenseService:
    @pytest.fixture()
    def service(self) -> ExpenseService:
        return ExpenseService(ctx=ServiceContext(actor_id="user-1"))

    def test_requires_actor(self):
        with pytest.raises(ServiceError):
            ExpenseService().list_expenses(page=1, limit=10)

    def test_create_with_percentage_splits(self, service):
        expense = service.create_expense(
            _data(
                split_type="percentage",
                splits=[
                    {"user_id": "ana", "percentage": Decimal("50")},
                    {"user_id": "ben", "percentage": Decimal("50")},
                ],
            )
        )

        assert expense.id is not None
        assert expense.user_id == "user-1"
        assert [(s.user_id, s.amount) for s in expense.splits] == [
            ("ana", Decimal("450.00")),
            ("ben", Decimal("450.00")),
        ]

    def test_create_rejects_bad_splits_without_writing(self, service):
        with pytest.raises(DomainValidationError):
            service.create_expense(_data(split_type="fixed", splits=[{"user_id": "a", "amount": Decimal("1")}]))

        assert service.list_expenses(page=1, limit=10).meta.total == 0

    def test_update_switches_split_type(self, service):
        expense = service.create_expense(_data())

        updated = service.update_expense(
            expense.id, {"split_type": "equal", "shared_with": ["a", "b", "c"]}
        )

        assert updated.split_type == "equal"
        assert [s.amount for s in updated.splits] == [Decimal("300.00")] * 3

    def test_update_other_users_expense_is_not_found(self, service):
        theirs = ExpenseFactory(user_id="user-2")

        with pytest.raises(NotFoundError):
            service.update_expense(theirs.id, {"title": "mine now"})

    def test_list_meta(self, service):
        ExpenseFactory.create_batch(3)

        page = service.list_expenses(page=2, limit=2)

        assert len(page.items) == 1
        assert page.meta.total == 3
        assert page.meta.has_more is False

    def test_stats_without_expenses(self, service):
        stats = service.stats(now=datetime(2030, 5, 20, tzinfo=timezone.utc))

        assert stats["total_expenses"] == 0.0
        assert stats["average_monthly"] == 0.0
        assert stats["top_category"] is None
        assert stats["paid_percentage"] == 0.0

    def test_stats_last_month_across_year_boundary(self, service):
        ExpenseFactory(amount=Decimal("12.50"), date=datetime(2029, 12, 31, 23, tzinfo=timezone.utc))
        ExpenseFactory(amount=Decimal("2.00"), date=datetime(2030, 1, 2, tzinfo=timezone.utc), status="paid")

        stats = service.stats(now=datetime(2030, 1, 15, tzinfo=timezone.utc))

        assert stats["this_month"] == 2.0
        assert stats["last_month"] == 12.5
        assert stats["average_monthly"] == 7.25
        assert stats["category_breakdown"]["food"] == 14.5
        assert stats["paid_percentage"] == 50.0

    def test_categories_are_copies(self):
        first = ExpenseService.categories()
        first[0]["name"] = "changed"

        assert ExpenseService.categories()[0]["name"] == "food"
