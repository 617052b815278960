"""Expenses and how they are split between users."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boundary.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

EXPENSE_CATEGORIES = (
    "food",
    "transportation",
    "entertainment",
    "healthcare",
    "education",
    "shopping",
    "utilities",
    "housing",
    "insurance",
    "other",
)
PAYMENT_METHODS = ("cash", "card", "bank_transfer", "mobile_payment", "other")
EXPENSE_STATUSES = ("pending", "paid", "cancelled")
RECURRENCE_PATTERNS = ("daily", "weekly", "monthly", "yearly")
SPLIT_TYPES = ("equal", "percentage", "fixed", "none")

ExpenseCategory = Enum(*EXPENSE_CATEGORIES, name="expense_category")
PaymentMethod = Enum(*PAYMENT_METHODS, name="payment_method")
ExpenseStatus = Enum(*EXPENSE_STATUSES, name="expense_status")
RecurrencePattern = Enum(*RECURRENCE_PATTERNS, name="expense_recurrence_pattern")
SplitType = Enum(*SPLIT_TYPES, name="expense_split_type")


class Expense(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Money spent by a user, optionally inside a circle."""

    __tablename__ = "expenses"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    circle_id: Mapped[str | None] = mapped_column(String(64))
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    category: Mapped[str] = mapped_column(ExpenseCategory, nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(50))
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payment_method: Mapped[str] = mapped_column(PaymentMethod, nullable=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurrence_pattern: Mapped[str | None] = mapped_column(RecurrencePattern)
    next_due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[str] = mapped_column(ExpenseStatus, nullable=False, default="pending")
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    split_type: Mapped[str] = mapped_column(SplitType, nullable=False, default="none")

    splits: Mapped[list[ExpenseSplit]] = relationship(
        "ExpenseSplit",
        back_populates="expense",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="ExpenseSplit.id",
    )

    __table_args__ = (Index("ix_expenses_user_date", "user_id", "date"),)


class ExpenseSplit(PKMixin, ReprMixin, db.Model):
    """One user's share of an :class:`Expense`."""

    __tablename__ = "expense_splits"

    expense_id: Mapped[int] = mapped_column(
        ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2))

    expense: Mapped[Expense] = relationship("Expense", back_populates="splits")
