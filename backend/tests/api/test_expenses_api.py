from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from freezegun import freeze_time
from tests.factories.expense import ExpenseFactory, ExpenseSplitFactory
from tests.helpers.auth import bearer

BASE = "/api/mobile/expenses"


@pytest.fixture()
def payload():
    return {
        "title": "Groceries",
        "amount": "100.00",
        "currency": "usd",
        "category": "food",
        "date": "2030-05-10T18:30:00Z",
        "paymentMethod": "card",
        "tags": ["weekly", "market"],
    }


class TestExpenseCreate:
    def test_create_defaults(self, client, auth_headers, payload):
        resp = client.post(f"{BASE}/create", json=payload, headers=auth_headers)

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["amount"] == 100.0
        assert data["currency"] == "USD"
        assert data["status"] == "pending"
        assert data["splitType"] == "none"
        assert data["splits"] == []
        assert data["userId"] == "user-1"
        assert data["tags"] == ["weekly", "market"]

    def test_equal_split_gives_remainder_to_first_share(self, client, auth_headers, payload):
        payload.update(splitType="equal", sharedWith=["ana", "ben", "cy"])

        resp = client.post(f"{BASE}/create", json=payload, headers=auth_headers)

        assert resp.status_code == 201
        splits = resp.get_json()["data"]["splits"]
        assert [(s["userId"], s["amount"]) for s in splits] == [
            ("ana", 33.34),
            ("ben", 33.33),
            ("cy", 33.33),
        ]

    def test_fixed_split_must_add_up(self, client, auth_headers, payload):
        payload.update(
            splitType="fixed",
            splits=[{"userId": "ana", "amount": "60"}, {"userId": "ben", "amount": "30"}],
        )

        resp = client.post(f"{BASE}/create", json=payload, headers=auth_headers)

        assert resp.status_code == 422
        assert "splits" in resp.get_json()["details"]["errors"]

    def test_missing_fields_are_listed_in_camel_case(self, client, auth_headers):
        resp = client.post(f"{BASE}/create", json={"title": "x"}, headers=auth_headers)

        body = resp.get_json()["details"]["errors"]["body"]
        assert {"amount", "currency", "category", "date", "paymentMethod"} <= set(body)

    @pytest.mark.parametrize("amount", [1e15, "10000000000.00", -1])
    def test_amount_outside_column_range_is_rejected(self, client, auth_headers, payload, amount):
        payload["amount"] = amount

        resp = client.post(f"{BASE}/create", json=payload, headers=auth_headers)

        assert resp.status_code == 422
        assert "amount" in resp.get_json()["details"]["errors"]["body"]

    def test_split_amount_outside_column_range_is_rejected(self, client, auth_headers, payload):
        payload.update(splitType="fixed", splits=[{"userId": "ana", "amount": "1e12"}])

        resp = client.post(f"{BASE}/create", json=payload, headers=auth_headers)

        assert resp.status_code == 422
        errors = resp.get_json()["details"]["errors"]["body"]
        assert "amount" in errors["splits"]["0"]

    def test_blank_title_is_rejected(self, client, auth_headers, payload):
        payload["title"] = " \t "

        resp = client.post(f"{BASE}/create", json=payload, headers=auth_headers)

        assert resp.status_code == 422
        assert "title" in resp.get_json()["details"]["errors"]["body"]


class TestExpenseList:
    def test_newest_first_and_owner_scoped(self, client, auth_headers):
        older = ExpenseFactory(date=datetime(2030, 1, 1, tzinfo=timezone.utc))
        newer = ExpenseFactory(date=datetime(2030, 2, 1, tzinfo=timezone.utc))
        ExpenseFactory(user_id="user-2")

        resp = client.get(f"{BASE}/list", headers=auth_headers)

        body = resp.get_json()
        assert [e["id"] for e in body["data"]] == [newer.id, older.id]
        assert body["meta"]["total"] == 2

    def test_amount_filters(self, client, auth_headers):
        small = ExpenseFactory(amount=Decimal("5.00"))
        mid = ExpenseFactory(amount=Decimal("25.00"))
        big = ExpenseFactory(amount=Decimal("250.00"))

        exact = client.get(f"{BASE}/list?amount=25", headers=auth_headers).get_json()["data"]
        ranged = client.get(
            f"{BASE}/list?minAmount=10&maxAmount=300", headers=auth_headers
        ).get_json()["data"]

        assert [e["id"] for e in exact] == [mid.id]
        assert {e["id"] for e in ranged} == {mid.id, big.id}
        assert small.id not in {e["id"] for e in ranged}

    def test_status_and_search_filters(self, client, auth_headers):
        hit = ExpenseFactory(status="paid", title="Train ticket", category="transportation")
        ExpenseFactory(status="pending", title="Train snack")

        resp = client.get(f"{BASE}/list?status=paid&search=train", headers=auth_headers)

        assert [e["id"] for e in resp.get_json()["data"]] == [hit.id]

    def test_percent_search_is_not_a_wildcard(self, client, auth_headers):
        refund = ExpenseFactory(title="100% refund")
        ExpenseFactory(title="Lunch")

        resp = client.get(f"{BASE}/list", query_string={"search": "%"}, headers=auth_headers)

        assert [e["id"] for e in resp.get_json()["data"]] == [refund.id]


class TestExpenseUpdateDelete:
    def test_amount_change_recomputes_splits(self, client, auth_headers):
        split = ExpenseSplitFactory(
            expense__amount=Decimal("20.00"),
            expense__split_type="equal",
            user_id="ana",
            amount=Decimal("20.00"),
        )

        resp = client.put(
            f"{BASE}/{split.expense.id}", json={"amount": "30.00"}, headers=auth_headers
        )

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["amount"] == 30.0
        assert [(s["userId"], s["amount"]) for s in data["splits"]] == [("ana", 30.0)]

    def test_title_change_keeps_splits(self, client, auth_headers):
        split = ExpenseSplitFactory(
            expense__amount=Decimal("10.00"),
            expense__split_type="fixed",
            user_id="ana",
            amount=Decimal("10.00"),
        )

        resp = client.put(f"{BASE}/{split.expense.id}", json={"title": "Renamed"}, headers=auth_headers)

        data = resp.get_json()["data"]
        assert data["title"] == "Renamed"
        assert [s["userId"] for s in data["splits"]] == ["ana"]

    def test_update_missing_expense(self, client, auth_headers):
        resp = client.put(f"{BASE}/999", json={"title": "x"}, headers=auth_headers)

        assert resp.status_code == 404

    def test_delete(self, client, auth_headers):
        expense_id = ExpenseFactory().id

        assert client.delete(f"{BASE}/{expense_id}", headers=auth_headers).status_code == 204
        assert client.delete(f"{BASE}/{expense_id}", headers=auth_headers).status_code == 404


class TestExpenseCatalogAndStats:
    def test_categories(self, client, auth_headers):
        resp = client.get(f"{BASE}/categories", headers=auth_headers)

        data = resp.get_json()["data"]
        assert len(data) == 10
        assert data[0] == {
            "name": "food",
            "icon": "restaurant",
            "color": "#FF6B6B",
            "description": "Food and dining expenses",
        }

    def test_stats(self, client):
        ExpenseFactory(amount=Decimal("40.00"), date=datetime(2030, 5, 3, tzinfo=timezone.utc), status="paid")
        ExpenseFactory(amount=Decimal("10.50"), date=datetime(2030, 4, 20, tzinfo=timezone.utc))
        ExpenseFactory(amount=Decimal("99.00"), status="cancelled")

        with freeze_time("2030-05-20 08:00:00"):
            resp = client.get(f"{BASE}/stats", headers=bearer())

        data = resp.get_json()["data"]
        assert data["totalExpenses"] == 50.5
        assert data["thisMonth"] == 40.0
        assert data["lastMonth"] == 10.5
        assert data["averageMonthly"] == 25.25
        assert data["topCategory"] == "food"
        assert data["paidPercentage"] == 50.0
        assert data["pendingCount"] == 1
