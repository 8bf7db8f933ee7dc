# backend/core/validators.py

"""
Input validators shared by request schemas and services.
"""

import re
from typing import Optional

PHONE_NUMBER_PATTERN = r"^[0-9]{8}$"

_phone_re = re.compile(PHONE_NUMBER_PATTERN)


def is_valid_phone_number(phone_number: Optional[str]) -> bool:
    return bool(phone_number) and _phone_re.fullmatch(phone_number) is not None


def validate_phone_number(phone_number: Optional[str]) -> str:
    """Return the trimmed phone number or raise ValueError if it is not 8 digits."""
    value = (phone_number or "").strip()
    if not is_valid_phone_number(value):
        raise ValueError("Phone number must be exactly 8 digits")
    return value


def validate_required_text(value: Optional[str], field_name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field_name} is required")
    return value
