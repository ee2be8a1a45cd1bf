from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def require_month(value: str) -> str:
    """Validate a YYYY-MM month key."""
    value = (value or "").strip()
    if not _MONTH_RE.match(value):
        raise ValidationError("Invalid month format. Use YYYY-MM")
    return value
