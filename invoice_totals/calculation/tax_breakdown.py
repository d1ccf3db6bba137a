"""Aggregation of line taxes per VAT rate."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List

from ..models.totals import TaxBreakdownEntry
from .line_totals import calculate_line_tax

if TYPE_CHECKING:
    from ..models.line_item import LineItem


def calculate_vat_breakdown(items: Iterable[LineItem]) -> List[TaxBreakdownEntry]:
    """Group tax amounts by VAT rate.

    Lines whose tax is exactly zero (0% rate, zero quantity or price) add
    nothing. Rates whose summed amount ends at exactly zero are dropped too.

    Args:
        items: Line items in any order

    Returns:
        One TaxBreakdownEntry per rate, ascending by rate
    """
    breakdown: Dict[Decimal, Decimal] = {}

    for item in items:
        tax = calculate_line_tax(item)
        if tax == 0:
            continue
        # Decimal("20") and Decimal("20.0") hash alike, so they share a key
        breakdown[item.tax_rate] = breakdown.get(item.tax_rate, Decimal("0")) + tax

    return [
        TaxBreakdownEntry(rate=rate, amount=amount)
        for rate, amount in sorted(breakdown.items())
        if amount != 0
    ]


def total_vat(breakdown: Iterable[TaxBreakdownEntry]) -> Decimal:
    """Sum of all breakdown amounts."""
    return sum((entry.amount for entry in breakdown), Decimal("0"))
