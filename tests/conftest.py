"""Shared fixtures: isolate tests from INVOICE_* env vars and the cached profile."""

import pytest

from invoice_totals.config.profile_manager import reset_profile


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("INVOICE_DEFAULT_VAT_RATE", "INVOICE_CURRENCY", "INVOICE_AMOUNT_DECIMALS", "INVOICE_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    reset_profile()
    yield
    reset_profile()
