"""Data models for line items, catalog products and computed totals."""

from .line_item import LineItem, LineUnit, new_line_item_id
from .product import Product
from .totals import DocumentDiscount, DocumentTotals, LineTotals, TaxBreakdownEntry

__all__ = [
    "LineItem",
    "LineUnit",
    "new_line_item_id",
    "Product",
    "DocumentDiscount",
    "DocumentTotals",
    "LineTotals",
    "TaxBreakdownEntry",
]
