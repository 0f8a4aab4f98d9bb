"""Shared utilities used across the service ledger."""

import re
from datetime import date, datetime
from typing import Optional

from suraksha.config import settings

# Country code + 10-digit subscriber number
MIN_VALID_PHONE_DIGITS = 12
LOCAL_NUMBER_DIGITS = 10


def normalize_phone(value: str, country_code: Optional[str] = None) -> str:
    """Normalize free-form phone input to ``+<countrycode><digits>``.

    Examples:
        >>> normalize_phone("98765 43210")
        '+919876543210'
        >>> normalize_phone("+91 (98765) 43210")
        '+919876543210'
        >>> normalize_phone("1-415-555-0100")
        '+14155550100'
    """
    cc = country_code or settings.business.default_country_code
    digits = re.sub(r"\D", "", value)
    if len(digits) == LOCAL_NUMBER_DIGITS:
        return f"+{cc}{digits}"
    if len(digits) == LOCAL_NUMBER_DIGITS + len(cc) and digits.startswith(cc):
        return f"+{digits}"
    if len(digits) >= LOCAL_NUMBER_DIGITS:
        # Already carries a country code
        return f"+{digits}"
    return f"+{cc}{digits}"


def phone_digits(value: str, country_code: Optional[str] = None) -> str:
    """Digits of the normalized number, as used in messaging deep links."""
    return re.sub(r"\D", "", normalize_phone(value, country_code))


def is_valid_phone(value: str, country_code: Optional[str] = None) -> bool:
    """True when the normalized number has a country code plus 10 digits."""
    return len(phone_digits(value, country_code)) >= MIN_VALID_PHONE_DIGITS


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO date or timestamp, returning None for anything unparseable.

    The whole string must parse; a valid date followed by junk is rejected.
    """
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if len(text) <= 10 or text[10] not in "T ":
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def month_key(day: date) -> str:
    """Calendar month bucket key, ``YYYY-MM``."""
    return f"{day.year:04d}-{day.month:02d}"
