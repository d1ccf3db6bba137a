"""LineItem data model representing one billable row of a quote or invoice."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union

from ..calculation.number_normalizer import to_decimal, to_optional_decimal

logger = logging.getLogger(__name__)


class LineUnit(str, Enum):
    """Unit of measure labels. Display-only, never used in arithmetic."""

    UNIT = "unite"
    HOUR = "heure"
    DAY = "jour"
    MONTH = "mois"
    FLAT_FEE = "forfait"
    KILOGRAM = "kg"
    SQUARE_METER = "m2"

    @classmethod
    def parse(cls, value: Union["LineUnit", str, None]) -> "LineUnit":
        """Return the matching unit, falling back to UNIT for unknown labels."""
        if isinstance(value, cls):
            return value
        if value:
            try:
                return cls(str(value).strip().lower())
            except ValueError:
                logger.warning(f"Unknown unit {value!r}, using '{cls.UNIT.value}'")
        return cls.UNIT


def new_line_item_id() -> str:
    """Generate an opaque id, stable for the lifetime of the row."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class LineItem:
    """One billable row of a quote or invoice.

    Numeric fields are stored as Decimal; ints, floats and numeric strings are
    converted on construction. Ranges are not validated here (quantity > 0,
    discount within [0, 100] etc. are form-level rules), so negative values
    simply produce negative totals. Rows are immutable; edits go through
    dataclasses.replace.

    Attributes:
        id: Opaque unique id, used as the list reconciliation key
        description: Display text
        quantity: Quantity, may be fractional (e.g. hours)
        unit: Unit of measure label
        unit_price: Pre-tax price per unit
        tax_rate: VAT rate in percent, applied after the line discount
        product_id: Catalog product reference, None for free-text lines
        discount_percent: Optional line discount in percent
    """

    id: str = field(default_factory=new_line_item_id)
    description: str = ""
    quantity: Decimal = Decimal("1")
    unit: LineUnit = LineUnit.UNIT
    unit_price: Decimal = Decimal("0")
    tax_rate: Decimal = Decimal("20")
    product_id: Optional[str] = None
    discount_percent: Optional[Decimal] = None

    def __post_init__(self):
        """Normalize numeric fields to Decimal and the unit to LineUnit."""
        object.__setattr__(self, "quantity", to_decimal(self.quantity))
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))
        object.__setattr__(self, "tax_rate", to_decimal(self.tax_rate))
        object.__setattr__(self, "discount_percent", to_optional_decimal(self.discount_percent))
        object.__setattr__(self, "unit", LineUnit.parse(self.unit))
        if self.description is None:
            object.__setattr__(self, "description", "")

    @classmethod
    def empty(
        cls,
        default_tax_rate: Any = Decimal("20"),
        unit: Union[LineUnit, str] = LineUnit.UNIT,
    ) -> "LineItem":
        """Create a blank row: quantity 1, price 0, no product, no discount."""
        return cls(
            id=new_line_item_id(),
            description="",
            quantity=Decimal("1"),
            unit=unit,
            unit_price=Decimal("0"),
            tax_rate=default_tax_rate,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Input shape of a line item."""
        return {
            'id': self.id,
            'product_id': self.product_id,
            'description': self.description,
            'quantity': self.quantity,
            'unit': self.unit.value,
            'unit_price': self.unit_price,
            'discount_percent': self.discount_percent,
            'tax_rate': self.tax_rate,
        }
