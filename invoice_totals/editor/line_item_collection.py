"""Ordered, editable collection of line items with always-fresh totals."""

from __future__ import annotations

import dataclasses
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from ..calculation.document_totals import calculate_totals
from ..calculation.line_totals import calculate_line_totals
from ..calculation.number_normalizer import to_decimal
from ..config.settings import get_default_unit, get_default_vat_rate
from ..models.line_item import LineItem
from ..models.product import Product
from ..models.totals import DocumentDiscount, DocumentTotals, LineTotals, TaxBreakdownEntry

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset(
    f.name for f in dataclasses.fields(LineItem) if f.name != "id"
)


class LineItemCollection:
    """Line items of one quote/invoice being edited.

    Owned by a single form session and used synchronously. Every mutating
    operation is followed by exactly one recompute pass, so the derived totals
    (subtotal, vat_breakdown, total_vat, total) always match the items.

    The collection never becomes empty: it starts with one blank row, and
    removing the last row is ignored.
    """

    def __init__(
        self,
        initial_items: Optional[Iterable[LineItem]] = None,
        default_tax_rate: Any = None,
        discount: Optional[DocumentDiscount] = None,
    ):
        self.default_tax_rate = (
            get_default_vat_rate() if default_tax_rate is None else to_decimal(default_tax_rate)
        )
        self.default_unit = get_default_unit()
        self._discount = discount if discount is not None else DocumentDiscount()
        self._items: List[LineItem] = list(initial_items or [])
        if not self._items:
            self._items = [self._new_item()]
        self._totals = self._recompute()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __getitem__(self, index: int) -> LineItem:
        return self._items[index]

    @property
    def items(self) -> List[LineItem]:
        """Copy of the current rows in display order."""
        return list(self._items)

    @property
    def discount(self) -> DocumentDiscount:
        return self._discount

    # Mutations

    def add_item(self) -> None:
        """Append a blank row with the default tax rate."""
        self._items.append(self._new_item())
        logger.debug(f"Added line item, {len(self._items)} rows")
        self._totals = self._recompute()

    def remove_item(self, index: int) -> None:
        """Remove the row at index, unless it is the only one."""
        if len(self._items) <= 1:
            logger.debug("Ignoring removal of the last line item")
            return
        if not self._in_range(index):
            logger.debug(f"Ignoring removal at out-of-range index {index}")
            return
        removed = self._items.pop(index)
        logger.debug(f"Removed line item {removed.id} at index {index}")
        self._totals = self._recompute()

    def update_item(self, index: int, data: Optional[Dict[str, Any]] = None, **fields: Any) -> None:
        """Shallow-merge fields into the row at index.

        Fields not given are left unchanged. The row id cannot be changed.

        Raises:
            TypeError: If a field name is not a LineItem field
        """
        changes = dict(data or {})
        changes.update(fields)
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown line item field(s): {', '.join(sorted(unknown))}")
        if not self._in_range(index):
            logger.debug(f"Ignoring update at out-of-range index {index}")
            return
        self._items[index] = dataclasses.replace(self._items[index], **changes)
        self._totals = self._recompute()

    def select_product(self, index: int, product: Product) -> None:
        """Fill the row at index from a catalog product.

        Overwrites product reference, description, unit price, unit and tax
        rate (0 for tax-exempt products). Quantity and discount are kept.
        """
        if not self._in_range(index):
            logger.debug(f"Ignoring product selection at out-of-range index {index}")
            return
        self._items[index] = dataclasses.replace(
            self._items[index],
            product_id=product.id,
            description=product.name,
            unit_price=product.unit_price,
            unit=product.unit,
            tax_rate=product.effective_tax_rate,
        )
        logger.debug(f"Selected product {product.id} for line {index}")
        self._totals = self._recompute()

    def move_item(self, from_index: int, to_index: int) -> None:
        """Move one row, keeping the relative order of the others.

        The destination is clamped to the list bounds. Totals do not change.
        """
        if not self._in_range(from_index):
            logger.debug(f"Ignoring move from out-of-range index {from_index}")
            return
        item = self._items.pop(from_index)
        to_index = max(0, min(to_index, len(self._items)))
        self._items.insert(to_index, item)
        self._totals = self._recompute()

    def set_items(self, items: Iterable[LineItem]) -> None:
        """Replace all rows, e.g. when loading an existing document."""
        self._items = list(items)
        if not self._items:
            self._items = [self._new_item()]
        logger.debug(f"Replaced line items, {len(self._items)} rows")
        self._totals = self._recompute()

    def set_discount(self, discount: Optional[DocumentDiscount]) -> None:
        """Set or clear the document-level discount."""
        self._discount = discount if discount is not None else DocumentDiscount()
        self._totals = self._recompute()

    # Derived values

    @property
    def totals(self) -> DocumentTotals:
        return self._totals

    @property
    def subtotal(self) -> Decimal:
        return self._totals.subtotal

    @property
    def vat_breakdown(self) -> List[TaxBreakdownEntry]:
        return list(self._totals.vat_breakdown)

    @property
    def total_vat(self) -> Decimal:
        return self._totals.total_vat

    @property
    def raw_total(self) -> Decimal:
        return self._totals.raw_total

    @property
    def effective_discount(self) -> Decimal:
        return self._totals.effective_discount

    @property
    def total(self) -> Decimal:
        return self._totals.total

    def line_totals(self) -> List[LineTotals]:
        """Per-row amounts in display order."""
        return [calculate_line_totals(item) for item in self._items]

    def _new_item(self) -> LineItem:
        return LineItem.empty(self.default_tax_rate, unit=self.default_unit)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def _recompute(self) -> DocumentTotals:
        return calculate_totals(self._items, self._discount)
