"""Pydantic form models validating user input before it reaches the editor."""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..calculation.number_normalizer import to_decimal
from ..editor.line_item_collection import LineItemCollection
from ..models.line_item import LineItem, LineUnit, new_line_item_id
from ..models.product import Product
from ..models.totals import DocumentDiscount


def coerce_form_number(value):
    """Accept French-formatted strings ("1 234,50") as well as numbers."""
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        try:
            return to_decimal(value)
        except ValueError:
            # Left as-is so pydantic reports a decimal parsing error
            return value
    return value


class LineItemForm(BaseModel):
    """One line item row as submitted by the form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = None
    product_id: Optional[str] = None
    description: str = Field(..., min_length=1, description="La description est requise")
    quantity: Decimal = Field(Decimal("1"), ge=Decimal("0.01"), description="La quantite doit etre positive")
    unit: LineUnit = LineUnit.UNIT
    unit_price: Decimal = Field(..., ge=0, description="Le prix doit etre positif")
    discount_percent: Optional[Decimal] = Field(None, ge=0, le=100)
    vat_rate: Decimal = Field(Decimal("20"), ge=0, le=100)

    @field_validator("quantity", "unit_price", "discount_percent", "vat_rate", mode="before")
    @classmethod
    def coerce_numbers(cls, value):
        return coerce_form_number(value)

    @field_validator("unit", mode="before")
    @classmethod
    def parse_unit(cls, value):
        return LineUnit.parse(value)

    def to_line_item(self) -> LineItem:
        return LineItem(
            id=self.id or new_line_item_id(),
            product_id=self.product_id,
            description=self.description,
            quantity=self.quantity,
            unit=self.unit,
            unit_price=self.unit_price,
            discount_percent=self.discount_percent,
            tax_rate=self.vat_rate,
        )


class ProductForm(BaseModel):
    """Catalog product form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Le nom est requis")
    description: Optional[str] = None
    sku: Optional[str] = None
    type: Literal["product", "service"] = "service"
    unit_price: Decimal = Field(..., ge=0, description="Le prix doit etre positif")
    currency: str = "EUR"
    unit: LineUnit = LineUnit.UNIT
    vat_rate: Decimal = Field(Decimal("20"), ge=0, le=100)
    vat_exempt: bool = False
    category: Optional[str] = None
    is_active: bool = True

    @field_validator("unit_price", "vat_rate", mode="before")
    @classmethod
    def coerce_numbers(cls, value):
        return coerce_form_number(value)

    @field_validator("unit", mode="before")
    @classmethod
    def parse_unit(cls, value):
        return LineUnit.parse(value)

    def to_product(self, product_id: str) -> Product:
        return Product(
            id=product_id,
            name=self.name,
            unit_price=self.unit_price,
            unit=self.unit,
            vat_rate=self.vat_rate,
            vat_exempt=self.vat_exempt,
            description=self.description,
            sku=self.sku,
            type=self.type,
            is_active=self.is_active,
        )


class DocumentForm(BaseModel):
    """Fields shared by quote and invoice forms."""

    model_config = ConfigDict(str_strip_whitespace=True)

    client_id: str = Field(..., min_length=1, description="Le client est requis")
    issue_date: str
    subject: Optional[str] = None
    introduction: Optional[str] = None
    terms: Optional[str] = None
    notes: Optional[str] = None
    footer: Optional[str] = None
    discount_amount: Optional[Decimal] = Field(None, ge=0)
    discount_percent: Optional[Decimal] = Field(None, ge=0, le=100)
    line_items: List[LineItemForm] = Field(..., min_length=1, description="Au moins une ligne est requise")
    deal_id: Optional[str] = None

    @field_validator("discount_amount", "discount_percent", mode="before")
    @classmethod
    def coerce_numbers(cls, value):
        return coerce_form_number(value)

    def discount(self) -> DocumentDiscount:
        return DocumentDiscount(amount=self.discount_amount, percent=self.discount_percent)

    def to_collection(self, default_tax_rate=None) -> LineItemCollection:
        """Editor state for this document, totals already computed."""
        return LineItemCollection(
            initial_items=[line.to_line_item() for line in self.line_items],
            default_tax_rate=default_tax_rate,
            discount=self.discount(),
        )


class InvoiceForm(DocumentForm):
    due_date: Optional[str] = None
    payment_instructions: Optional[str] = None


class QuoteForm(DocumentForm):
    valid_until: Optional[str] = None
