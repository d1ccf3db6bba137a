"""Excel export of a document's line items and totals with French column names."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from ..editor.line_item_collection import LineItemCollection
from .totals_display import format_rate

logger = logging.getLogger(__name__)

LINES_SHEET = "Lignes"
TOTALS_SHEET = "Totaux"

_AMOUNT_COLUMNS = ("Prix unitaire HT", "Total HT", "TVA", "Total TTC")


def _lines_dataframe(collection: LineItemCollection, metadata: Dict[str, Any]) -> pd.DataFrame:
    rows = []
    for position, (item, line) in enumerate(zip(collection.items, collection.line_totals()), start=1):
        rows.append({
            "Document": metadata.get("document_number", ""),
            "Client": metadata.get("client", ""),
            "Position": position,
            "Description": item.description,
            "Quantité": float(item.quantity),
            "Unité": item.unit.value,
            "Prix unitaire HT": float(item.unit_price),
            "Remise %": float(item.discount_percent) if item.discount_percent is not None else "",
            "Taux TVA %": float(item.tax_rate),
            "Total HT": float(line.net_total),
            "TVA": float(line.tax),
            "Total TTC": float(line.total_with_tax),
        })
    return pd.DataFrame(rows)


def _totals_dataframe(collection: LineItemCollection) -> pd.DataFrame:
    totals = collection.totals
    rows = [{"Libellé": "Sous-total HT", "Montant": float(totals.subtotal)}]
    for entry in totals.vat_breakdown:
        rows.append({"Libellé": f"TVA {format_rate(entry.rate)}", "Montant": float(entry.amount)})
    rows.append({"Libellé": "Total TVA", "Montant": float(totals.total_vat)})
    if totals.effective_discount:
        rows.append({"Libellé": "Remise", "Montant": -float(totals.effective_discount)})
    rows.append({"Libellé": "Total TTC", "Montant": float(totals.total)})
    return pd.DataFrame(rows)


def export_to_excel(
    collection: LineItemCollection,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
) -> str:
    """Export line items and totals of a document to an Excel file.

    Args:
        collection: Edited document lines (totals are taken from it)
        output_path: Path to output Excel file
        metadata: Optional dict with document_number and client, repeated on
            each line row

    Returns:
        Path to created Excel file

    Excel structure:
    - Sheet "Lignes": one row per line item, in display order, with net,
      VAT and gross amounts
    - Sheet "Totaux": subtotal, one row per VAT rate, total VAT, discount
      (only when applied) and total
    """
    lines_df = _lines_dataframe(collection, metadata or {})
    totals_df = _totals_dataframe(collection)

    output_path_obj = Path(output_path)
    output_path_obj.parent.mkdir(parents=True, exist_ok=True)

    from openpyxl.styles.numbers import FORMAT_NUMBER_00

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        lines_df.to_excel(writer, index=False, sheet_name=LINES_SHEET)
        totals_df.to_excel(writer, index=False, sheet_name=TOTALS_SHEET)

        worksheet = writer.sheets[LINES_SHEET]
        amount_indices = [
            lines_df.columns.get_loc(name) for name in _AMOUNT_COLUMNS if name in lines_df.columns
        ]
        for row in worksheet.iter_rows(min_row=2, max_row=worksheet.max_row):
            for idx in amount_indices:
                row[idx].number_format = FORMAT_NUMBER_00

        totals_sheet = writer.sheets[TOTALS_SHEET]
        for row in totals_sheet.iter_rows(min_row=2, max_row=totals_sheet.max_row):
            row[1].number_format = FORMAT_NUMBER_00

    logger.info(f"Exported {len(lines_df)} line(s) to {output_path}")
    return str(output_path)
