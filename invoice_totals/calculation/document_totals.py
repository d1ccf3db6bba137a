"""Document totals: subtotal, VAT and document-level discount."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..models.totals import DocumentDiscount, DocumentTotals, TaxBreakdownEntry
from .line_totals import calculate_line_total
from .tax_breakdown import calculate_vat_breakdown, total_vat

if TYPE_CHECKING:
    from ..models.line_item import LineItem


def calculate_subtotal(items: Iterable[LineItem]) -> Decimal:
    """Sum of the net (pre-tax) totals of all line items."""
    return sum((calculate_line_total(item) for item in items), Decimal("0"))


def calculate_document_totals(
    subtotal: Decimal,
    vat_breakdown: List[TaxBreakdownEntry],
    discount: Optional[DocumentDiscount] = None
) -> DocumentTotals:
    """Combine subtotal, VAT breakdown and document discount.

    Steps:
    1. total_vat = sum of breakdown amounts
    2. raw_total = subtotal + total_vat (VAT is computed before the
       document discount)
    3. effective discount = discount percent of the subtotal when the percent
       is set and > 0, otherwise the flat discount amount
    4. total = raw_total - effective discount, not clamped, so an oversized
       discount gives a negative total

    Args:
        subtotal: Sum of line net totals
        vat_breakdown: Output of calculate_vat_breakdown
        discount: Optional document-level discount

    Returns:
        DocumentTotals
    """
    discount = discount if discount is not None else DocumentDiscount()
    vat = total_vat(vat_breakdown)
    raw_total = subtotal + vat
    effective_discount = discount.effective_amount(subtotal)

    return DocumentTotals(
        subtotal=subtotal,
        vat_breakdown=list(vat_breakdown),
        total_vat=vat,
        raw_total=raw_total,
        effective_discount=effective_discount,
        total=raw_total - effective_discount,
        discount=discount,
    )


def calculate_totals(
    items: Iterable[LineItem],
    discount: Optional[DocumentDiscount] = None
) -> DocumentTotals:
    """Compute all document totals for a sequence of line items.

    An empty sequence gives zero totals.
    """
    items = list(items)
    return calculate_document_totals(
        calculate_subtotal(items),
        calculate_vat_breakdown(items),
        discount,
    )
