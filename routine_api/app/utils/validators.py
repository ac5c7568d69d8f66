"""
Input validators shared by the services.

Dates are accepted as ``YYYY-M-D`` or ``YYYY-MM-DD`` and must name a
real calendar day.  Times are 24‑hour ``HH:MM`` between 00:00 and
23:59.  E‑mail addresses follow the pattern the user model has
always enforced.
"""

import re
from datetime import date

DATE_PATTERN = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
EMAIL_PATTERN = re.compile(r"^[\w-]+(\.[\w-]+)*@([\w-]+\.)+[a-zA-Z]{2,7}$")

MIN_PASSWORD_LENGTH = 6


def is_valid_date(value: object) -> bool:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return False
    year, month, day = (int(part) for part in value.split("-"))
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def is_valid_time(value: object) -> bool:
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def is_valid_email(value: object) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def normalize_email(value: str) -> str:
    return value.strip().lower()
