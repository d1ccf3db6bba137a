"""Build and read the rows persisted for quotes, invoices and credit notes.

Amounts stay exact during calculation and are rounded here, once, to the
configured number of decimals (ROUND_HALF_UP).
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..calculation.document_totals import calculate_document_totals
from ..calculation.line_totals import calculate_line_totals
from ..calculation.number_normalizer import coerce_decimal, coerce_optional_decimal
from ..config.settings import get_amount_decimals
from ..models.line_item import LineItem
from ..models.totals import DocumentDiscount, DocumentTotals, TaxBreakdownEntry

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = ("quote", "invoice", "credit_note")


def quantize_amount(value: Optional[Decimal], decimals: Optional[int] = None) -> Optional[Decimal]:
    """Round an amount to the persisted precision (None passes through)."""
    if value is None:
        return None
    if decimals is None:
        decimals = get_amount_decimals()
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def build_line_item_rows(
    document_type: str,
    document_id: str,
    items: Iterable[LineItem],
) -> List[Dict[str, Any]]:
    """Rows to insert for a document's line items.

    position is the display index; line_total is net of the line discount and
    pre-tax.

    Raises:
        ValueError: If document_type is not quote, invoice or credit_note
    """
    if document_type not in DOCUMENT_TYPES:
        raise ValueError(
            f"document_type must be one of {', '.join(DOCUMENT_TYPES)}, got '{document_type}'"
        )

    decimals = get_amount_decimals()
    rows = []
    for position, item in enumerate(items):
        line = calculate_line_totals(item)
        rows.append({
            'id': item.id,
            'document_type': document_type,
            'document_id': document_id,
            'position': position,
            'product_id': item.product_id,
            'description': item.description,
            'quantity': item.quantity,
            'unit': item.unit.value,
            'unit_price': item.unit_price,
            'discount_percent': item.discount_percent,
            'vat_rate': item.tax_rate,
            'line_total': quantize_amount(line.net_total, decimals),
            'vat_amount': quantize_amount(line.tax, decimals),
            'line_total_with_vat': quantize_amount(line.total_with_tax, decimals),
        })
    return rows


def build_document_totals_payload(totals: DocumentTotals) -> Dict[str, Any]:
    """Document-level amounts to store with the quote or invoice."""
    decimals = get_amount_decimals()
    payload = totals.to_dict()
    for key in ('subtotal', 'vat_amount', 'total', 'discount_amount'):
        payload[key] = quantize_amount(payload[key], decimals)
    return payload


def recalculate_document_totals(
    rows: Iterable[Mapping[str, Any]],
    discount: Optional[DocumentDiscount] = None,
) -> DocumentTotals:
    """Rebuild document totals from stored line rows.

    Uses the stored line_total and vat_amount of each row, grouped by
    vat_rate, and the same discount precedence as the editor.
    """
    subtotal = Decimal("0")
    by_rate: Dict[Decimal, Decimal] = {}
    for row in rows:
        subtotal += coerce_decimal(row.get('line_total'), 0)
        vat_amount = coerce_decimal(row.get('vat_amount'), 0)
        if vat_amount == 0:
            continue
        rate = coerce_decimal(row.get('vat_rate'), 0)
        by_rate[rate] = by_rate.get(rate, Decimal("0")) + vat_amount

    breakdown = [
        TaxBreakdownEntry(rate=rate, amount=amount)
        for rate, amount in sorted(by_rate.items())
        if amount != 0
    ]
    return calculate_document_totals(subtotal, breakdown, discount)


def line_items_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[LineItem]:
    """Turn stored rows back into editor line items, ordered by position.

    Missing or malformed numbers fall back to quantity 1, price/rate 0 and
    no line discount.
    """
    ordered = sorted(rows, key=lambda row: row.get('position') or 0)
    items = []
    for row in ordered:
        kwargs = {
            'description': row.get('description') or "",
            'quantity': coerce_decimal(row.get('quantity'), 1),
            'unit': row.get('unit'),
            'unit_price': coerce_decimal(row.get('unit_price'), 0),
            'tax_rate': coerce_decimal(row.get('vat_rate'), 0),
            'product_id': row.get('product_id'),
            'discount_percent': coerce_optional_decimal(row.get('discount_percent')),
        }
        if row.get('id'):
            kwargs['id'] = str(row['id'])
        items.append(LineItem(**kwargs))
    logger.debug(f"Loaded {len(items)} line item(s) from stored rows")
    return items
