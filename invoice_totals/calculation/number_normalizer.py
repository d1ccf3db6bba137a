"""Utilities for turning form input into Decimal values."""

from decimal import Decimal, InvalidOperation
import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

_CURRENCY_PATTERN = re.compile(r"(?i)\beur\b|€|%")


def normalize_decimal(text: str) -> Decimal:
    """Normalize French-formatted numeric strings to Decimal.

    Rules:
    - Trim whitespace (including no-break spaces)
    - Remove spaces as thousand separators
    - Remove dots as thousand separators only when followed by three digits
      and a decimal comma is present or the group pattern is unambiguous
    - Convert commas to dot before Decimal parsing
    - Strip euro symbols, "EUR" and percent signs
    - Support negative amounts with leading or trailing '-'
    - Raise ValueError for invalid formats
    """
    if text is None:
        raise ValueError("Input text is None")

    raw = text.strip()
    if not raw:
        raise ValueError("Input text is empty")

    cleaned = _CURRENCY_PATTERN.sub("", raw)
    cleaned = re.sub(r"\s+", "", cleaned).strip()

    negative = False
    if cleaned.startswith("-"):
        negative = True
        cleaned = cleaned[1:]
    if cleaned.endswith("-"):
        negative = True
        cleaned = cleaned[:-1]
    if not cleaned:
        raise ValueError("Input text has no numeric content")

    if "," in cleaned:
        # "1.234,56": dots are grouping, comma is the decimal mark
        cleaned = re.sub(r"(?<=\d)\.(?=\d{3}(\D|$))", "", cleaned)
        cleaned = cleaned.replace(",", ".")
    elif re.fullmatch(r"\d{1,3}(\.\d{3}){2,}", cleaned):
        cleaned = cleaned.replace(".", "")

    if not re.fullmatch(r"\d+(\.\d+)?|\.\d+", cleaned):
        raise ValueError(f"Invalid numeric format: {text!r}")

    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric format: {text!r}") from exc

    return -value if negative else value


def to_decimal(value: Any) -> Decimal:
    """Convert a Decimal, int, float or numeric string to Decimal.

    Floats go through str() so 5.5 becomes Decimal("5.5") rather than the
    binary expansion.

    Raises:
        ValueError: If value is None, a bool, non-finite or not numeric
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = normalize_decimal(value)
    else:
        raise ValueError(f"Not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def to_optional_decimal(value: Any) -> Optional[Decimal]:
    """Like to_decimal, but None and blank strings map to None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_decimal(value)


def coerce_decimal(value: Any, default: Any) -> Decimal:
    """Lenient form-field coercion: malformed input yields the default.

    Used for raw input fields, e.g. an empty or non-numeric quantity falls
    back to 1 and a price to 0.
    """
    try:
        return to_decimal(value)
    except ValueError:
        logger.debug(f"Coercing {value!r} to default {default!r}")
        return to_decimal(default)


def coerce_optional_decimal(value: Any) -> Optional[Decimal]:
    """Lenient variant of to_optional_decimal: malformed input yields None."""
    try:
        return to_optional_decimal(value)
    except ValueError:
        logger.debug(f"Coercing {value!r} to None")
        return None
