import datetime as dt
import re
from typing import Any

MAX_SANITIZED_LENGTH = 500

_LINE_BREAKS = re.compile(r"[\r\n\x0b\x0c\x1c-\x1e\x85\u2028\u2029]+")

_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def sanitize(value: Any, max_length: int = MAX_SANITIZED_LENGTH) -> str:
    """Escape angle brackets, trim, and cap the length of a value for HTML email bodies.

    Only ``<`` and ``>`` are escaped. Truncation runs after escaping, so a
    value cut at the limit may end in a partial entity such as ``&l``.
    """
    if value is None or value == "":
        return ""
    text = str(value).replace("<", "&lt;").replace(">", "&gt;")
    return text.strip()[:max_length]


def format_booking_date(value: dt.date) -> str:
    """Long US form, e.g. 'Monday, March 3, 2025'."""
    return f"{_DAY_NAMES[value.weekday()]}, {_MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def header_safe(value: str) -> str:
    """Collapse line breaks so a value can sit inside a single mail header."""
    return _LINE_BREAKS.sub(" ", value)
