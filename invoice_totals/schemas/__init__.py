"""Form schemas for products, line items, quotes and invoices."""

from .forms import DocumentForm, InvoiceForm, LineItemForm, ProductForm, QuoteForm

__all__ = ["DocumentForm", "InvoiceForm", "LineItemForm", "ProductForm", "QuoteForm"]
