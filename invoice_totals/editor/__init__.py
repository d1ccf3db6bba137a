"""Stateful line item editing for quote and invoice forms."""

from .line_item_collection import LineItemCollection

__all__ = ["LineItemCollection"]
