"""Active calculation profile (default VAT rate, currency, units).

The profile is chosen once per process, either explicitly through
set_profile() (the CLI does this) or lazily from INVOICE_PROFILE on first
access. Settings read from it on every call, so switching profiles takes
effect for the next line item or totals computation.
"""

import logging
import os
from typing import Optional

from .profile_loader import ProfileConfig, load_profile, get_default_profile

logger = logging.getLogger(__name__)

_active: Optional[ProfileConfig] = None


def get_profile_name() -> str:
    """Get profile name requested via INVOICE_PROFILE (default: 'default')."""
    return os.getenv('INVOICE_PROFILE') or 'default'


def set_profile(profile_name: Optional[str] = None) -> ProfileConfig:
    """Activate a calculation profile.

    Args:
        profile_name: Profile file name under configs/profiles; None uses
            INVOICE_PROFILE

    Returns:
        The activated ProfileConfig

    Raises:
        FileNotFoundError: If the profile doesn't exist
        ValueError: If the profile file is invalid
    """
    global _active
    name = profile_name or get_profile_name()
    _active = load_profile(name)
    logger.info(
        f"Using profile '{_active.name}' (VAT {_active.default_vat_rate}%, {_active.currency})"
    )
    return _active


def get_profile() -> ProfileConfig:
    """Get the active profile, activating INVOICE_PROFILE on first use.

    An unknown or broken INVOICE_PROFILE is logged and replaced by the
    default profile, so totals can always be computed.
    """
    global _active
    if _active is None:
        name = get_profile_name()
        if name == 'default':
            _active = get_default_profile()
        else:
            try:
                _active = load_profile(name)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(f"Cannot load profile '{name}': {e}. Using default profile")
                _active = get_default_profile()
    return _active


def reset_profile():
    """Forget the active profile; the next get_profile() picks it again."""
    global _active
    _active = None
