"""API request and response models."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..schemas.forms import LineItemForm, coerce_form_number


class TotalsRequest(BaseModel):
    """Request model for the totals endpoint."""

    line_items: List[LineItemForm] = Field(..., min_length=1, description="Line items, in display order")
    discount_amount: Optional[Decimal] = Field(None, ge=0, description="Flat document discount")
    discount_percent: Optional[Decimal] = Field(None, ge=0, le=100, description="Percent document discount")

    @field_validator("discount_amount", "discount_percent", mode="before")
    @classmethod
    def coerce_numbers(cls, value):
        return coerce_form_number(value)


class LineTotalsResponse(BaseModel):
    """Computed amounts for a single line item."""

    id: str
    position: int
    description: str
    net_total: Decimal
    vat_amount: Decimal
    total_with_vat: Decimal


class VatBreakdownResponse(BaseModel):
    rate: Decimal
    amount: Decimal


class TotalsResponse(BaseModel):
    """Response model for the totals endpoint."""

    lines: List[LineTotalsResponse] = Field(default_factory=list)
    vat_breakdown: List[VatBreakdownResponse] = Field(default_factory=list)
    subtotal: Decimal
    vat_amount: Decimal
    discount_amount: Decimal
    discount_percent: Optional[Decimal] = None
    total: Decimal
    currency: str
    display: List[List[str]] = Field(default_factory=list, description="Formatted (label, value) rows")


class SettingsResponse(BaseModel):
    """Defaults and choices offered by the line item form."""

    profile: str
    currency: str
    default_vat_rate: Decimal
    vat_rates: List[Decimal] = Field(default_factory=list, description="Selectable VAT rates, ascending")
    default_unit: str
    units: List[str] = Field(default_factory=list)
