"""Expense endpoints."""

from __future__ import annotations

from typing import Any

from flask import Blueprint

from boundary.api.deps import (
    data_response,
    idempotent,
    no_content,
    page_response,
    require_auth,
    service_for,
    timing,
)
from boundary.api.validation import validate_request
from boundary.schemas import (
    ExpenseCategorySchema,
    ExpenseCreateSchema,
    ExpenseQuerySchema,
    ExpenseSchema,
    ExpenseStatsSchema,
    ExpenseUpdateSchema,
    IdPathSchema,
)
from boundary.services import ExpenseService

bp = Blueprint("expenses", __name__)

expense_schema = ExpenseSchema()
expense_list_schema = ExpenseSchema(many=True)
category_list_schema = ExpenseCategorySchema(many=True)
stats_schema = ExpenseStatsSchema()


@bp.get("/list")
@require_auth
@timing
@validate_request(query=ExpenseQuerySchema)
def list_expenses(query: dict[str, Any]):
    """Return the caller's expenses, newest first."""
    page = service_for(ExpenseService).list_expenses(**query)
    return page_response(page, expense_list_schema.dump)


@bp.post("/create")
@require_auth
@idempotent
@timing
@validate_request(body=ExpenseCreateSchema)
def create_expense(body: dict[str, Any]):
    expense = service_for(ExpenseService).create_expense(body)
    return data_response(expense_schema.dump(expense), status=201)


@bp.put("/<id>")
@require_auth
@timing
@validate_request(path=IdPathSchema, body=ExpenseUpdateSchema)
def update_expense(path: dict[str, Any], body: dict[str, Any]):
    expense = service_for(ExpenseService).update_expense(path["id"], body)
    return data_response(expense_schema.dump(expense))


@bp.delete("/<id>")
@require_auth
@timing
@validate_request(path=IdPathSchema)
def delete_expense(path: dict[str, Any]):
    service_for(ExpenseService).delete_expense(path["id"])
    return no_content()


@bp.get("/categories")
@require_auth
@timing
def expense_categories():
    return data_response(category_list_schema.dump(ExpenseService.categories()))


@bp.get("/stats")
@require_auth
@timing
def expense_stats():
    return data_response(stats_schema.dump(service_for(ExpenseService).stats()))
