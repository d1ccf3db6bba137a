"""CLI computing quote/invoice totals from a JSON document."""

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..api.models import TotalsRequest
from ..config.profile_manager import set_profile
from ..config.settings import get_currency
from ..editor.line_item_collection import LineItemCollection
from ..export.excel_export import export_to_excel
from ..export.totals_display import build_totals_lines
from ..models.totals import DocumentDiscount
from ..persistence.payloads import build_document_totals_payload, quantize_amount

logger = logging.getLogger(__name__)


class TotalsInputError(Exception):
    """Raised when the input document cannot be read or validated."""
    pass


def load_document(input_path: str) -> TotalsRequest:
    """Read and validate a JSON document with line_items and discount fields.

    Raises:
        TotalsInputError: If the file is missing, not JSON or invalid
    """
    path = Path(input_path)
    if not path.is_file():
        raise TotalsInputError(f"Input file not found: {input_path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise TotalsInputError(f"Invalid JSON in {input_path}: {e}") from e
    try:
        return TotalsRequest.model_validate(data)
    except ValidationError as e:
        raise TotalsInputError(f"Invalid document {input_path}: {e}") from e


def compute_document(
    input_path: str,
    excel_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Compute totals for a JSON document, optionally exporting to Excel.

    Returns:
        Dict with document totals (persisted shape), the VAT breakdown,
        formatted display rows and the Excel path when exported
    """
    request = load_document(input_path)
    collection = LineItemCollection(
        initial_items=[line.to_line_item() for line in request.line_items],
        discount=DocumentDiscount(amount=request.discount_amount, percent=request.discount_percent),
    )
    totals = collection.totals

    result: Dict[str, Any] = {
        "line_count": len(collection),
        "currency": get_currency(),
        "totals": build_document_totals_payload(totals),
        "vat_breakdown": [
            {"rate": entry.rate, "amount": quantize_amount(entry.amount)}
            for entry in totals.vat_breakdown
        ],
        "display": build_totals_lines(totals),
    }
    if excel_path:
        result["excel_path"] = export_to_excel(collection, excel_path)
    return result


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Invoice Totals - compute HT, TVA and TTC totals of a quote or invoice"
    )

    parser.add_argument(
        "--input",
        required=True,
        help="JSON file with line_items and optional discount_amount / discount_percent"
    )

    parser.add_argument(
        "--profile",
        type=str,
        default=None,
        help="Configuration profile name (default: INVOICE_PROFILE or 'default')"
    )

    parser.add_argument(
        "--excel",
        required=False,
        help="Also export lines and totals to this Excel file"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        set_profile(args.profile)
        result = compute_document(args.input, excel_path=args.excel)
    except (TotalsInputError, FileNotFoundError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    display = result.pop("display")
    print(json.dumps(result, indent=2, ensure_ascii=False, default=_json_default))
    for label, value in display:
        print(f"{label:<20} {value:>16}")

    if result.get("excel_path"):
        print(f"Excel: {result['excel_path']}")

    sys.exit(0)


if __name__ == "__main__":
    main()
