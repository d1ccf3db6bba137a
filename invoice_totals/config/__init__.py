"""Configuration package."""

from .profile_loader import ProfileConfig, load_profile, list_available_profiles
from .profile_manager import get_profile, reset_profile, set_profile
from .settings import (
    get_amount_decimals,
    get_app_name,
    get_currency,
    get_default_unit,
    get_default_vat_rate,
    get_profile_name,
    get_vat_rates,
)

__all__ = [
    'ProfileConfig',
    'load_profile',
    'list_available_profiles',
    'get_profile',
    'reset_profile',
    'set_profile',
    'get_amount_decimals',
    'get_app_name',
    'get_currency',
    'get_default_unit',
    'get_default_vat_rate',
    'get_profile_name',
    'get_vat_rates',
]
