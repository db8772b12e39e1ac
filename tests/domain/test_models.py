"""Tests for zenith.domain models and parse results."""

import pytest

from zenith.domain.candidate import ParsedCandidate, capitalize_words
from zenith.domain.models import (
    Merchant,
    Money,
    Transaction,
    TransactionCategory,
    TransactionType,
    dollars_to_money,
    find_category,
    format_money,
    validate_amount,
)


class TestFindCategory:
    """Tests for find_category."""

    def test_by_value(self) -> None:
        """Should match the display value ignoring case."""
        assert find_category("food & drink") == TransactionCategory.FOOD_AND_DRINK

    def test_by_name(self) -> None:
        """Should match the enum name."""
        assert find_category("FOOD_AND_DRINK") == TransactionCategory.FOOD_AND_DRINK

    def test_unknown(self) -> None:
        """Should return None for unknown text."""
        assert find_category("Groceries") is None


class TestCategoryIcon:
    """Tests for TransactionCategory.icon and Transaction.display_icon."""

    def test_every_category_has_icon(self) -> None:
        """Should define an icon for each category."""
        assert all(category.icon for category in TransactionCategory)

    def test_display_icon_defaults_to_category(self) -> None:
        """Should fall back to the category icon."""
        txn = Transaction(
            merchant=Merchant("Uber"),
            date="2025-01-01",
            amount=Money(-1200),
            type=TransactionType.EXPENSE,
            category=TransactionCategory.TRANSPORT,
        )
        assert txn.display_icon == "car.fill"


class TestDollarsToMoney:
    """Tests for dollars_to_money."""

    def test_rounds_to_cents(self) -> None:
        """Should round float noise to the nearest cent."""
        assert dollars_to_money(19.99) == Money(1999)
        assert dollars_to_money("0.29") == Money(29)

    def test_invalid(self) -> None:
        """Should raise on non-numeric input."""
        with pytest.raises(ValueError):
            dollars_to_money("abc")


class TestValidateAmount:
    """Tests for validate_amount."""

    @pytest.mark.parametrize("value", [0.0, 12.34, -5.0, 1_000_000_000.0])
    def test_accepts_finite_amounts(self, value: float) -> None:
        """Should accept finite amounts within range."""
        assert validate_amount(value) == (True, None)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite(self, value: float) -> None:
        """Should reject NaN and infinities."""
        assert validate_amount(value) == (False, "Amount must be a finite number")

    def test_rejects_huge_amounts(self) -> None:
        """Should reject amounts beyond the storable range."""
        is_valid, error = validate_amount(1e12)

        assert is_valid is False
        assert error is not None
        assert "must not exceed" in error


class TestFormatMoney:
    """Tests for format_money."""

    def test_positive(self) -> None:
        """Should format with separators."""
        assert format_money(Money(123456)) == "$1,234.56"

    def test_negative(self) -> None:
        """Should prefix a minus sign."""
        assert format_money(Money(-1200)) == "-$12.00"

    def test_include_sign(self) -> None:
        """Should prefix a plus sign when asked."""
        assert format_money(Money(500), "€", include_sign=True) == "+€5.00"


class TestCapitalizeWords:
    """Tests for capitalize_words."""

    def test_mixed_case(self) -> None:
        """Should title-case each word."""
        assert capitalize_words("joe's DINER") == "Joe's Diner"

    def test_preserves_spacing(self) -> None:
        """Should keep whitespace as-is."""
        assert capitalize_words("big  red") == "Big  Red"


class TestParsedCandidate:
    """Tests for ParsedCandidate.to_transaction."""

    def test_builds_expense(self) -> None:
        """Should produce a negative expense on the given date."""
        candidate = ParsedCandidate(
            merchant=Merchant("Starbucks"),
            amount=Money(570),
            category=TransactionCategory.FOOD_AND_DRINK,
        )

        txn = candidate.to_transaction("2025-01-10")

        assert txn.amount == Money(-570)
        assert txn.type == TransactionType.EXPENSE
        assert txn.date == "2025-01-10"
        assert txn.category == TransactionCategory.FOOD_AND_DRINK
        assert txn.id is None
