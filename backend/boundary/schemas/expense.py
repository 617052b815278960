"""Expense schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from marshmallow import fields, post_load, validate

from boundary.models.expense import (
    EXPENSE_CATEGORIES,
    EXPENSE_STATUSES,
    PAYMENT_METHODS,
    RECURRENCE_PATTERNS,
    SPLIT_TYPES,
)
from boundary.schemas.common import (
    BaseSchema,
    PaginationQuerySchema,
    TrimmedString,
    UpdateSchema,
    UTCDateTime,
    tag_list,
)


MAX_AMOUNT = Decimal("9999999999.99")


def money(**kwargs: Any) -> fields.Decimal:
    """Non-negative amount with two decimal places that fits a ``Numeric(12, 2)`` column."""
    return fields.Decimal(places=2, validate=validate.Range(min=0, max=MAX_AMOUNT), **kwargs)


class ExpenseSplitSchema(BaseSchema):
    user_id = fields.String(required=True, validate=validate.Length(min=1, max=64))
    amount = money(load_default=None, allow_none=True)
    percentage = fields.Decimal(
        places=2, load_default=None, allow_none=True, validate=validate.Range(min=0, max=100)
    )


class ExpenseCreateSchema(BaseSchema):
    """Body of ``POST /expenses/create``."""

    title = TrimmedString(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(allow_none=True, validate=validate.Length(max=500))
    amount = money(required=True)
    currency = fields.String(required=True, validate=validate.Length(equal=3))
    category = fields.String(required=True, validate=validate.OneOf(EXPENSE_CATEGORIES))
    subcategory = fields.String(allow_none=True, validate=validate.Length(max=50))
    date = UTCDateTime(required=True)
    payment_method = fields.String(required=True, validate=validate.OneOf(PAYMENT_METHODS))
    is_recurring = fields.Boolean(load_default=False)
    recurrence_pattern = fields.String(
        allow_none=True, validate=validate.OneOf(RECURRENCE_PATTERNS)
    )
    next_due_date = UTCDateTime(allow_none=True)
    status = fields.String(load_default="pending", validate=validate.OneOf(EXPENSE_STATUSES))
    tags = tag_list(load_default=list)
    circle_id = fields.String(allow_none=True, validate=validate.Length(max=64))
    split_type = fields.String(load_default="none", validate=validate.OneOf(SPLIT_TYPES))
    shared_with = fields.List(fields.String(validate=validate.Length(min=1, max=64)))
    splits = fields.List(fields.Nested(ExpenseSplitSchema))

    @post_load
    def upper_currency(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        if data.get("currency"):
            data["currency"] = data["currency"].upper()
        return data


class ExpenseUpdateSchema(UpdateSchema, ExpenseCreateSchema):
    """Body of ``PUT /expenses/<id>``: any subset of the create fields."""


class ExpenseQuerySchema(PaginationQuerySchema):
    """Query of ``GET /expenses/list``."""

    category = fields.String(load_default=None, validate=validate.OneOf(EXPENSE_CATEGORIES))
    status = fields.String(load_default=None, validate=validate.OneOf(EXPENSE_STATUSES))
    date_from = UTCDateTime(load_default=None)
    date_to = UTCDateTime(load_default=None)
    search = fields.String(load_default=None, validate=validate.Length(max=100))
    amount = fields.Decimal(load_default=None)
    min_amount = fields.Decimal(load_default=None)
    max_amount = fields.Decimal(load_default=None)


class ExpenseSplitOutSchema(BaseSchema):
    user_id = fields.String()
    amount = fields.Float()
    percentage = fields.Float(allow_none=True)


class ExpenseSchema(BaseSchema):
    """Representation of an expense."""

    id = fields.Integer()
    user_id = fields.String()
    circle_id = fields.String(allow_none=True)
    title = fields.String()
    description = fields.String(allow_none=True)
    amount = fields.Float()
    currency = fields.String()
    category = fields.String()
    subcategory = fields.String(allow_none=True)
    date = UTCDateTime()
    payment_method = fields.String()
    is_recurring = fields.Boolean()
    recurrence_pattern = fields.String(allow_none=True)
    next_due_date = UTCDateTime(allow_none=True)
    status = fields.String()
    tags = fields.List(fields.String())
    split_type = fields.String()
    splits = fields.List(fields.Nested(ExpenseSplitOutSchema))
    created_at = UTCDateTime()
    updated_at = UTCDateTime()


class ExpenseCategorySchema(BaseSchema):
    name = fields.String()
    icon = fields.String()
    color = fields.String()
    description = fields.String()


class ExpenseStatsSchema(BaseSchema):
    total_expenses = fields.Float()
    this_month = fields.Float()
    last_month = fields.Float()
    average_monthly = fields.Float()
    top_category = fields.String(allow_none=True)
    category_breakdown = fields.Dict(keys=fields.String(), values=fields.Float())
    paid_percentage = fields.Float()
    pending_count = fields.Integer()
    recurring_count = fields.Integer()
