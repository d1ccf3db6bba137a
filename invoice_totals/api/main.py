"""FastAPI application computing quote and invoice totals."""

import logging

from fastapi import FastAPI

from ..config.profile_manager import get_profile
from ..config.settings import (
    get_app_name,
    get_currency,
    get_default_unit,
    get_default_vat_rate,
    get_vat_rates,
)
from ..export.totals_display import build_totals_lines
from ..models.line_item import LineUnit
from ..models.totals import DocumentDiscount
from ..editor.line_item_collection import LineItemCollection
from ..persistence.payloads import quantize_amount
from .models import (
    LineTotalsResponse,
    SettingsResponse,
    TotalsRequest,
    TotalsResponse,
    VatBreakdownResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Invoice Totals API",
    description="Calcul des totaux HT, TVA par taux et TTC des devis et factures",
    version="0.1.0",
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": get_app_name(),
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/api/settings", response_model=SettingsResponse)
async def get_settings():
    """Defaults and VAT rates of the active profile, for building the form."""
    vat_rates = get_vat_rates()
    default_vat_rate = get_default_vat_rate()
    if default_vat_rate not in vat_rates:
        vat_rates = sorted(vat_rates + [default_vat_rate])
    return SettingsResponse(
        profile=get_profile().name,
        currency=get_currency(),
        default_vat_rate=default_vat_rate,
        vat_rates=vat_rates,
        default_unit=get_default_unit(),
        units=[unit.value for unit in LineUnit],
    )


@app.post("/api/totals", response_model=TotalsResponse)
async def compute_totals(request: TotalsRequest):
    """Compute line, VAT and document totals.

    Args:
        request: Line items and optional document discount

    Returns:
        TotalsResponse with per-line amounts, VAT per rate and totals
    """
    discount = DocumentDiscount(amount=request.discount_amount, percent=request.discount_percent)
    collection = LineItemCollection(
        initial_items=[line.to_line_item() for line in request.line_items],
        discount=discount,
    )
    totals = collection.totals
    currency = get_currency()

    lines = [
        LineTotalsResponse(
            id=item.id,
            position=position,
            description=item.description,
            net_total=quantize_amount(line.net_total),
            vat_amount=quantize_amount(line.tax),
            total_with_vat=quantize_amount(line.total_with_tax),
        )
        for position, (item, line) in enumerate(zip(collection.items, collection.line_totals()))
    ]
    logger.info(f"Computed totals for {len(lines)} line(s): total={totals.total}")

    return TotalsResponse(
        lines=lines,
        vat_breakdown=[
            VatBreakdownResponse(rate=entry.rate, amount=quantize_amount(entry.amount))
            for entry in totals.vat_breakdown
        ],
        subtotal=quantize_amount(totals.subtotal),
        vat_amount=quantize_amount(totals.total_vat),
        discount_amount=quantize_amount(totals.effective_discount),
        discount_percent=discount.percent,
        total=quantize_amount(totals.total),
        currency=currency,
        display=[list(row) for row in build_totals_lines(totals, discount, currency)],
    )
