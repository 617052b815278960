from __future__ import annotations

from decimal import Decimal

import pytest
from boundary.services._shared.errors import DomainValidationError
from boundary.services.expense_service import _distribute, compute_splits


def _rows(splits):
    return [(s.user_id, s.amount, s.percentage) for s in splits]


class TestDistribute:
    def test_parts_always_add_up(self):
        parts = _distribute(Decimal("10.00"), [Decimal("1")] * 3)

        assert parts == [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]
        assert sum(parts) == Decimal("10.00")

    def test_weighted(self):
        parts = _distribute(Decimal("99.99"), [Decimal("50"), Decimal("25"), Decimal("25")])

        assert sum(parts) == Decimal("99.99")
        assert parts[1] == parts[2] == Decimal("24.99")


class TestComputeSplits:
    def test_none_has_no_rows(self):
        assert compute_splits(amount=Decimal("12"), split_type="none", shared_with=["a"]) == []

    def test_equal_from_shared_with(self):
        splits = compute_splits(amount=Decimal("0.05"), split_type="equal", shared_with=["a", "b"])

        assert _rows(splits) == [("a", Decimal("0.03"), None), ("b", Decimal("0.02"), None)]

    def test_equal_falls_back_to_split_users(self):
        splits = compute_splits(
            amount=Decimal("9"), split_type="equal", splits=[{"user_id": "x"}, {"user_id": "y"}]
        )

        assert [s.user_id for s in splits] == ["x", "y"]
        assert [s.amount for s in splits] == [Decimal("4.50"), Decimal("4.50")]

    def test_equal_needs_users(self):
        with pytest.raises(DomainValidationError) as excinfo:
            compute_splits(amount=Decimal("9"), split_type="equal")

        assert "splits" in excinfo.value.errors

    def test_percentage(self):
        splits = compute_splits(
            amount=Decimal("80"),
            split_type="percentage",
            splits=[
                {"user_id": "a", "percentage": Decimal("75")},
                {"user_id": "b", "percentage": Decimal("25")},
            ],
        )

        assert _rows(splits) == [
            ("a", Decimal("60.00"), Decimal("75")),
            ("b", Decimal("20.00"), Decimal("25")),
        ]

    @pytest.mark.parametrize(
        "splits",
        [
            [{"user_id": "a", "percentage": Decimal("60")}, {"user_id": "b", "percentage": Decimal("30")}],
            [{"user_id": "a", "percentage": Decimal("100")}, {"user_id": "b", "percentage": None}],
            [{"user_id": "a", "percentage": Decimal("50")}, {"user_id": "a", "percentage": Decimal("50")}],
            [],
        ],
    )
    def test_percentage_rejections(self, splits):
        with pytest.raises(DomainValidationError):
            compute_splits(amount=Decimal("80"), split_type="percentage", splits=splits)

    def test_fixed(self):
        splits = compute_splits(
            amount=Decimal("30"),
            split_type="fixed",
            splits=[{"user_id": "a", "amount": Decimal("10")}, {"user_id": "b", "amount": Decimal("20")}],
        )

        assert [s.amount for s in splits] == [Decimal("10.00"), Decimal("20.00")]

    def test_fixed_must_match_amount(self):
        with pytest.raises(DomainValidationError, match="add up"):
            compute_splits(
                amount=Decimal("30"),
                split_type="fixed",
                splits=[{"user_id": "a", "amount": Decimal("10")}],
            )
