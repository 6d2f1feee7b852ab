"""Tolerant decoding of the service's date fields.

The listing is user-submitted: some games only carry a year, others carry
dates that do not exist (February 30th, 2015). A bad date must never sink a
whole page, so every malformed value decodes to ``UNKNOWN_DATE``.
"""

import re
from datetime import date
from typing import Any

from ..models.game import UNKNOWN_DATE

_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


def parse_date_field(value: Any) -> date:
    """Decode a raw date field, falling back to ``UNKNOWN_DATE``.

    Only the leading ``YYYY-MM-DD`` part is read; any time of day after it
    is ignored.
    """
    if not isinstance(value, str) or len(value) < 10:
        return UNKNOWN_DATE

    match = _ISO_DATE.fullmatch(value[:10])
    if match is None:
        return UNKNOWN_DATE

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return UNKNOWN_DATE


def is_unknown_date(value: date) -> bool:
    return value == UNKNOWN_DATE
