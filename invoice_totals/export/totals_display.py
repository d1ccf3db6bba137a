"""Human-readable totals block (sous-total, remise, TVA par taux, total TTC)."""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from ..config.settings import get_currency
from ..models.totals import DocumentDiscount, DocumentTotals

# fr-FR groups thousands with a narrow no-break space; symbols and % follow a plain space
_GROUP_SEPARATOR = "\u202f"
_UNIT_SEPARATOR = "\x20"
_CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£", "CHF": "CHF"}


def format_amount(amount: Decimal, currency: Optional[str] = None) -> str:
    """Format an amount as in fr-FR, e.g. Decimal("1234.5") -> "1 234,50 €"."""
    currency = currency or get_currency()
    rounded = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    integer_part, _, fraction = f"{abs(rounded):.2f}".partition(".")
    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)
    symbol = _CURRENCY_SYMBOLS.get(currency, currency)
    return f"{sign}{_GROUP_SEPARATOR.join(groups)},{fraction}{_UNIT_SEPARATOR}{symbol}"


def format_rate(rate: Decimal) -> str:
    """Format a percentage without trailing zeros, e.g. 5.50 -> "5,5 %"."""
    text = f"{Decimal(rate).normalize():f}"
    return f"{text.replace('.', ',')}{_UNIT_SEPARATOR}%"


def build_totals_lines(
    totals: DocumentTotals,
    discount: Optional[DocumentDiscount] = None,
    currency: Optional[str] = None,
) -> List[Tuple[str, str]]:
    """Ordered (label, value) rows of the totals block.

    The discount row only appears when a discount applies; the VAT rows only
    when the breakdown is not empty.
    """
    discount = discount if discount is not None else totals.discount
    lines = [("Sous-total HT", format_amount(totals.subtotal, currency))]

    if totals.effective_discount > 0:
        label = "Remise"
        if discount.percent:
            label += f" ({format_rate(discount.percent)})"
        lines.append((label, f"- {format_amount(totals.effective_discount, currency)}"))

    if totals.vat_breakdown:
        for entry in totals.vat_breakdown:
            lines.append((f"TVA {format_rate(entry.rate)}", format_amount(entry.amount, currency)))
        lines.append(("Total TVA", format_amount(totals.total_vat, currency)))

    lines.append(("Total TTC", format_amount(totals.total, currency)))
    return lines
