"""Central settings for invoice totals.

Environment variables take precedence over the active profile:

- INVOICE_DEFAULT_VAT_RATE: VAT rate for new line items
- INVOICE_CURRENCY: ISO currency code used for display
- INVOICE_AMOUNT_DECIMALS: decimals kept when amounts are persisted
- INVOICE_PROFILE: profile activated when none was set explicitly
"""

import logging
import os
from decimal import Decimal, InvalidOperation
from typing import List

from .profile_manager import get_profile, get_profile_name

logger = logging.getLogger(__name__)

DEFAULT_VAT_RATE = Decimal("20")
DEFAULT_CURRENCY = "EUR"
DEFAULT_AMOUNT_DECIMALS = 2


def get_app_name() -> str:
    """Get application name."""
    return "Invoice Totals"


def get_default_vat_rate() -> Decimal:
    """Get the VAT rate applied to newly added line items.

    Returns:
        Rate in percent from INVOICE_DEFAULT_VAT_RATE, else from the active
        profile, else 20
    """
    raw = os.getenv('INVOICE_DEFAULT_VAT_RATE')
    if raw is None:
        raw = get_profile().default_vat_rate
    try:
        rate = Decimal(str(raw).strip())
    except InvalidOperation:
        logger.warning(f"Invalid default VAT rate: {raw!r}, using {DEFAULT_VAT_RATE}")
        return DEFAULT_VAT_RATE
    if not rate.is_finite() or not 0 <= rate <= 100:
        logger.warning(f"Default VAT rate out of range: {raw!r}, using {DEFAULT_VAT_RATE}")
        return DEFAULT_VAT_RATE
    return rate


def get_currency() -> str:
    """Get display currency code (default: EUR)."""
    currency = os.getenv('INVOICE_CURRENCY') or get_profile().currency or DEFAULT_CURRENCY
    currency = currency.strip().upper()
    if len(currency) != 3 or not currency.isalpha():
        logger.warning(f"Invalid currency code: {currency!r}, using '{DEFAULT_CURRENCY}'")
        return DEFAULT_CURRENCY
    return currency


def get_amount_decimals() -> int:
    """Get number of decimals kept for persisted amounts (default: 2)."""
    raw = os.getenv('INVOICE_AMOUNT_DECIMALS')
    if raw is None:
        raw = get_profile().amount_decimals
    try:
        decimals = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid amount decimals: {raw!r}, using {DEFAULT_AMOUNT_DECIMALS}")
        return DEFAULT_AMOUNT_DECIMALS
    if not 0 <= decimals <= 6:
        logger.warning(f"Amount decimals out of range: {decimals}, using {DEFAULT_AMOUNT_DECIMALS}")
        return DEFAULT_AMOUNT_DECIMALS
    return decimals


def get_default_unit() -> str:
    """Get unit label for new line items from the active profile."""
    return get_profile().default_unit or "unite"


def get_vat_rates() -> List[Decimal]:
    """Get the VAT rates offered for selection, ascending."""
    rates = []
    for value in get_profile().vat_rates:
        try:
            rates.append(Decimal(str(value)))
        except InvalidOperation:
            logger.warning(f"Ignoring invalid VAT rate in profile: {value!r}")
    return sorted(set(rates))
