"""Per-line amounts: discounted pre-tax total and tax."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from ..models.totals import LineTotals, ZERO

if TYPE_CHECKING:
    from ..models.line_item import LineItem

HUNDRED = Decimal("100")


def calculate_line_totals(item: LineItem) -> LineTotals:
    """Compute base, discount, net total and tax for one line item.

    The line discount is taken off before tax. Inputs are not validated:
    negative quantities or prices give negative totals.

    Args:
        item: LineItem to compute

    Returns:
        LineTotals with base, discount, net_total and tax
    """
    base = item.quantity * item.unit_price
    discount = base * (item.discount_percent / HUNDRED) if item.discount_percent else ZERO
    net_total = base - discount
    tax = net_total * (item.tax_rate / HUNDRED)
    return LineTotals(base=base, discount=discount, net_total=net_total, tax=tax)


def calculate_line_total(item: LineItem) -> Decimal:
    """Net (post-discount, pre-tax) total of a line item."""
    return calculate_line_totals(item).net_total


def calculate_line_tax(item: LineItem) -> Decimal:
    """Tax amount of a line item."""
    return calculate_line_totals(item).tax
