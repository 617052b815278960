from __future__ import annotations

from boundary.models import CalendarEvent
from sqlalchemy import func, select
from tests.factories.circle_type import CircleTypeFactory

BASE = "/api/mobile"


def _errors(resp):
    return resp.get_json()["details"]["errors"]


class TestValidationGateOverHttp:
    def test_calendar_create_with_empty_body_lists_date_fields(self, client, auth_headers, session):
        resp = client.post(f"{BASE}/calendar/create", json={}, headers=auth_headers)

        assert resp.status_code == 422
        assert resp.mimetype == "application/problem+json"
        problem = resp.get_json()
        assert problem["code"] == "validation_error"
        body = problem["details"]["errors"]["body"]
        assert "startTime" in body and "endTime" in body
        # the handler never ran
        assert session.execute(select(func.count()).select_from(CalendarEvent)).scalar_one() == 0

    def test_circle_type_id_passes_validation_when_absent(self, client):
        resp = client.get(f"{BASE}/circle-types/42")

        assert resp.status_code == 404
        assert resp.get_json()["code"] == "not_found"

    def test_circle_type_id_passes_validation_when_present(self, client):
        CircleTypeFactory(id=42, name="family")

        resp = client.get(f"{BASE}/circle-types/42")

        assert resp.status_code == 200
        assert resp.get_json()["data"]["id"] == 42

    def test_circle_type_non_integer_id_is_rejected(self, client):
        resp = client.get(f"{BASE}/circle-types/abc")

        assert resp.status_code == 422
        assert "id" in _errors(resp)["path"]

    def test_expense_list_rejects_non_numeric_amount(self, client, auth_headers):
        resp = client.get(f"{BASE}/expenses/list?amount=notanumber", headers=auth_headers)

        assert resp.status_code == 422
        assert "amount" in _errors(resp)["query"]

    def test_invalid_json_body_is_rejected(self, client, auth_headers):
        resp = client.post(
            f"{BASE}/calendar/create",
            data="{broken",
            content_type="application/json",
            headers=auth_headers,
        )

        assert resp.status_code == 422
        assert _errors(resp)["body"] == {"_schema": ["Request body must be a JSON object."]}

    def test_path_and_body_errors_are_reported_together(self, client, auth_headers):
        resp = client.put(
            f"{BASE}/expenses/0", json={"amount": "lots"}, headers=auth_headers
        )

        assert resp.status_code == 422
        errors = _errors(resp)
        assert "id" in errors["path"]
        assert "amount" in errors["body"]

    def test_same_request_twice_gets_same_decision(self, client, auth_headers):
        first = client.get(f"{BASE}/expenses/list?limit=500", headers=auth_headers)
        second = client.get(f"{BASE}/expenses/list?limit=500", headers=auth_headers)

        assert first.status_code == second.status_code == 422
        assert _errors(first) == _errors(second)

    def test_authentication_is_checked_before_validation(self, client):
        resp = client.post(f"{BASE}/calendar/create", json={})

        assert resp.status_code == 401
        assert resp.get_json()["code"] == "unauthorized"
