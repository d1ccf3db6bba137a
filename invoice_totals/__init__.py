"""Quote and invoice line-item totals with per-rate VAT breakdown."""

__version__ = "0.1.0"
