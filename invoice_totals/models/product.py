"""Product data model representing a catalog entry."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..calculation.number_normalizer import to_decimal
from .line_item import LineUnit


@dataclass
class Product:
    """Catalog product or service that can be picked for a line item.

    Attributes:
        id: Catalog id
        name: Name, copied into the line description on selection
        unit_price: Pre-tax price
        unit: Unit of measure
        vat_rate: VAT rate in percent
        vat_exempt: When True the line is taxed at 0 regardless of vat_rate
        description: Optional long description
        sku: Optional stock keeping unit
        type: "product" or "service"
        is_active: Inactive products are hidden from selection
    """

    id: str
    name: str
    unit_price: Decimal = Decimal("0")
    unit: LineUnit = LineUnit.UNIT
    vat_rate: Decimal = Decimal("20")
    vat_exempt: bool = False
    description: Optional[str] = None
    sku: Optional[str] = None
    type: str = "service"
    is_active: bool = True

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        self.vat_rate = to_decimal(self.vat_rate)
        self.unit = LineUnit.parse(self.unit)
        if self.type not in ("product", "service"):
            raise ValueError(f"type must be 'product' or 'service', got '{self.type}'")

    @property
    def effective_tax_rate(self) -> Decimal:
        """Rate applied to a line using this product."""
        return Decimal("0") if self.vat_exempt else self.vat_rate
