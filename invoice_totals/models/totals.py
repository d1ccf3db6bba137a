"""Computed totals: per line, per VAT rate and per document."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..calculation.number_normalizer import to_optional_decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class LineTotals:
    """Amounts derived from a single line item.

    Attributes:
        base: quantity * unit_price
        discount: Line discount amount (0 without discount_percent)
        net_total: base - discount, pre-tax
        tax: net_total * tax_rate / 100
    """

    base: Decimal
    discount: Decimal
    net_total: Decimal
    tax: Decimal

    @property
    def total_with_tax(self) -> Decimal:
        return self.net_total + self.tax


@dataclass(frozen=True)
class TaxBreakdownEntry:
    """Tax owed at one VAT rate."""

    rate: Decimal
    amount: Decimal


@dataclass
class DocumentDiscount:
    """Document-level discount: flat amount or percentage of the subtotal.

    When percent is set and greater than zero it takes precedence over amount.
    """

    amount: Optional[Decimal] = None
    percent: Optional[Decimal] = None

    def __post_init__(self):
        self.amount = to_optional_decimal(self.amount)
        self.percent = to_optional_decimal(self.percent)

    def effective_amount(self, subtotal: Decimal) -> Decimal:
        """Discount actually subtracted from the total for a given subtotal."""
        if self.percent is not None and self.percent > 0:
            return subtotal * (self.percent / Decimal("100"))
        return self.amount if self.amount is not None else ZERO


@dataclass(frozen=True)
class DocumentTotals:
    """Totals for a whole quote or invoice.

    Attributes:
        subtotal: Sum of line net totals (pre-tax)
        vat_breakdown: Tax per rate, ascending by rate
        total_vat: Sum of vat_breakdown amounts
        raw_total: subtotal + total_vat, before the document discount
        effective_discount: Document discount actually applied
        total: raw_total - effective_discount (not clamped at zero)
        discount: The discount the totals were computed with
    """

    subtotal: Decimal
    vat_breakdown: List[TaxBreakdownEntry] = field(default_factory=list)
    total_vat: Decimal = ZERO
    raw_total: Decimal = ZERO
    effective_discount: Decimal = ZERO
    total: Decimal = ZERO
    discount: DocumentDiscount = field(default_factory=DocumentDiscount)

    def to_dict(self) -> Dict[str, Any]:
        """Document-level amounts in the persisted shape."""
        return {
            'subtotal': self.subtotal,
            'vat_amount': self.total_vat,
            'total': self.total,
            'discount_amount': self.effective_discount,
            'discount_percent': self.discount.percent,
        }
