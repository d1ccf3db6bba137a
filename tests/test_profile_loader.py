"""Unit tests for profile loader and settings."""

from decimal import Decimal
from unittest.mock import patch

import pytest
import yaml

from invoice_totals.config.profile_loader import (
    ProfileConfig,
    get_default_profile,
    list_available_profiles,
    load_profile,
)
from invoice_totals.config.profile_manager import get_profile, reset_profile, set_profile
from invoice_totals.config.settings import (
    get_amount_decimals,
    get_currency,
    get_default_unit,
    get_default_vat_rate,
    get_vat_rates,
)


@pytest.fixture
def profiles_dir(tmp_path):
    """Temporary profiles directory with a default and a services profile."""
    directory = tmp_path / "profiles"
    directory.mkdir()
    (directory / "default.yaml").write_text(
        yaml.safe_dump({"name": "default", "default_vat_rate": 20, "vat_rates": [20, 0, 5.5, 10]}),
        encoding="utf-8",
    )
    (directory / "services.yaml").write_text(
        yaml.safe_dump({
            "name": "services",
            "default_vat_rate": 10,
            "currency": "CHF",
            "default_unit": "heure",
            "amount_decimals": 3,
        }),
        encoding="utf-8",
    )
    with patch("invoice_totals.config.profile_loader.get_profiles_dir", return_value=directory):
        yield directory


class TestProfileConfig:
    """Test ProfileConfig dataclass."""

    def test_from_dict_defaults(self):
        config = ProfileConfig.from_dict({"name": "x"})

        assert config.name == "x"
        assert config.default_vat_rate == 20.0
        assert config.currency == "EUR"
        assert config.default_unit == "unite"
        assert config.amount_decimals == 2

    def test_round_trip(self):
        config = ProfileConfig(name="test", description="Test", vat_rates=[0, 20])

        assert ProfileConfig.from_dict(config.to_dict()) == config


class TestLoadProfile:
    """Test profile loading."""

    def test_load_profile(self, profiles_dir):
        config = load_profile("services")

        assert config.name == "services"
        assert config.currency == "CHF"
        assert config.amount_decimals == 3

    def test_missing_profile(self, profiles_dir):
        with pytest.raises(FileNotFoundError):
            load_profile("missing")

    def test_invalid_yaml(self, profiles_dir):
        (profiles_dir / "broken.yaml").write_text("name: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError):
            load_profile("broken")

    def test_empty_profile(self, profiles_dir):
        (profiles_dir / "empty.yaml").write_text("", encoding="utf-8")

        with pytest.raises(ValueError):
            load_profile("empty")

    def test_list_available_profiles(self, profiles_dir):
        assert list_available_profiles() == ["default", "services"]

    def test_default_profile_fallback(self, tmp_path):
        with patch("invoice_totals.config.profile_loader.get_profiles_dir", return_value=tmp_path / "none"):
            config = get_default_profile()
            assert list_available_profiles() == ["default"]

        assert config.name == "default"
        assert config.default_vat_rate == 20.0

    def test_bundled_default_profile(self):
        """The repository ships a default profile."""
        config = load_profile("default")

        assert config.currency == "EUR"
        assert 5.5 in config.vat_rates


class TestProfileManager:
    def test_set_and_reset(self, profiles_dir):
        set_profile("services")
        assert get_profile().name == "services"

        reset_profile()
        assert get_profile().name == "default"

    def test_env_profile_activated_lazily(self, profiles_dir, monkeypatch):
        monkeypatch.setenv("INVOICE_PROFILE", "services")

        assert get_profile().name == "services"
        assert get_default_vat_rate() == Decimal("10")

    def test_set_profile_without_name_uses_env(self, profiles_dir, monkeypatch):
        monkeypatch.setenv("INVOICE_PROFILE", "services")

        assert set_profile().name == "services"

    def test_unknown_env_profile_falls_back_to_default(self, profiles_dir, monkeypatch):
        monkeypatch.setenv("INVOICE_PROFILE", "does-not-exist")

        assert get_profile().name == "default"

    def test_unknown_explicit_profile_raises(self, profiles_dir):
        with pytest.raises(FileNotFoundError):
            set_profile("does-not-exist")


class TestSettings:
    """Environment variables override the active profile."""

    def test_values_from_profile(self, profiles_dir):
        set_profile("services")

        assert get_default_vat_rate() == Decimal("10")
        assert get_currency() == "CHF"
        assert get_default_unit() == "heure"
        assert get_amount_decimals() == 3

    def test_env_overrides_profile(self, profiles_dir, monkeypatch):
        set_profile("services")
        monkeypatch.setenv("INVOICE_DEFAULT_VAT_RATE", "5.5")
        monkeypatch.setenv("INVOICE_CURRENCY", "usd")
        monkeypatch.setenv("INVOICE_AMOUNT_DECIMALS", "2")

        assert get_default_vat_rate() == Decimal("5.5")
        assert get_currency() == "USD"
        assert get_amount_decimals() == 2

    @pytest.mark.parametrize("value", ["abc", "150", "-1", "NaN"])
    def test_invalid_vat_rate_falls_back(self, profiles_dir, monkeypatch, value):
        monkeypatch.setenv("INVOICE_DEFAULT_VAT_RATE", value)

        assert get_default_vat_rate() == Decimal("20")

    def test_invalid_currency_and_decimals_fall_back(self, profiles_dir, monkeypatch):
        monkeypatch.setenv("INVOICE_CURRENCY", "euros")
        monkeypatch.setenv("INVOICE_AMOUNT_DECIMALS", "many")

        assert get_currency() == "EUR"
        assert get_amount_decimals() == 2

    def test_vat_rates_sorted(self, profiles_dir):
        assert get_vat_rates() == [Decimal("0"), Decimal("5.5"), Decimal("10"), Decimal("20")]
