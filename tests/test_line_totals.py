"""Unit tests for per-line totals."""

from decimal import Decimal

import pytest

from invoice_totals.calculation.line_totals import (
    calculate_line_tax,
    calculate_line_total,
    calculate_line_totals,
)
from invoice_totals.models.line_item import LineItem


class TestCalculateLineTotals:
    """Tests for calculate_line_totals."""

    def test_without_discount_net_is_quantity_times_price(self):
        """Scenario A line: 2 x 100 at 20%."""
        item = LineItem(quantity=2, unit_price=100, tax_rate=20)

        totals = calculate_line_totals(item)

        assert totals.base == Decimal("200")
        assert totals.discount == Decimal("0")
        assert totals.net_total == Decimal("200")
        assert totals.tax == Decimal("40")
        assert totals.total_with_tax == Decimal("240")

    def test_discount_applied_before_tax(self):
        """10% off 100, then 20% tax on 90."""
        item = LineItem(quantity=1, unit_price=100, discount_percent=10, tax_rate=20)

        totals = calculate_line_totals(item)

        assert totals.discount == Decimal("10")
        assert totals.net_total == Decimal("90")
        assert totals.tax == Decimal("18")

    def test_reduced_rate_is_exact(self):
        """50 at 5.5% gives exactly 2.75."""
        item = LineItem(quantity=1, unit_price=50, tax_rate=5.5)

        assert calculate_line_tax(item) == Decimal("2.75")
        assert str(calculate_line_tax(item).normalize()) == "2.75"

    def test_fractional_quantity(self):
        """1.5 hours at 80."""
        item = LineItem(quantity="1,5", unit_price=80, tax_rate=20, unit="heure")

        assert calculate_line_total(item) == Decimal("120")
        assert calculate_line_tax(item) == Decimal("24")

    @pytest.mark.parametrize("quantity,unit_price", [(0, 100), (3, 0)])
    def test_zero_quantity_or_price(self, quantity, unit_price):
        item = LineItem(quantity=quantity, unit_price=unit_price, tax_rate=20)

        totals = calculate_line_totals(item)

        assert totals.net_total == 0
        assert totals.tax == 0

    def test_zero_discount_is_no_discount(self):
        item = LineItem(quantity=1, unit_price=100, discount_percent=0, tax_rate=20)

        assert calculate_line_total(item) == Decimal("100")

    def test_negative_values_not_clamped(self):
        """Inputs are not validated: a negative quantity gives negative totals."""
        item = LineItem(quantity=-1, unit_price=100, tax_rate=20)

        totals = calculate_line_totals(item)

        assert totals.net_total == Decimal("-100")
        assert totals.tax == Decimal("-20")

    def test_full_discount(self):
        item = LineItem(quantity=4, unit_price=25, discount_percent=100, tax_rate=20)

        assert calculate_line_total(item) == 0
        assert calculate_line_tax(item) == 0

    def test_pure_function(self):
        """Same input, same output; the item is not modified."""
        item = LineItem(quantity=3, unit_price="19,99", discount_percent=5, tax_rate=10)
        before = item.to_dict()

        assert calculate_line_totals(item) == calculate_line_totals(item)
        assert item.to_dict() == before
