# form_input.py
import math
import re
from typing import Optional, Union

# Leading number of a text field, e.g. "12.50 EUR" -> "12.50"
_LEADING_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def clean_name(raw: Optional[str]) -> Optional[str]:
    """Strip a name field, returning None when nothing is left"""
    if not isinstance(raw, str):
        return None
    name = raw.strip()
    return name or None


def parse_number(raw: Union[str, int, float, None]) -> Optional[float]:
    """Read the leading number of a text field ("12.5abc" -> 12.5, "abc" -> None).

    Numbers pass through unchanged. NaN and infinities are rejected.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        match = _LEADING_NUMBER.match(raw.strip())
        if not match:
            return None
        value = float(match.group(0))
    else:
        return None
    return value if math.isfinite(value) else None


def parse_amount(raw: Union[str, int, float, None]) -> Optional[float]:
    """Parse a price or tax value entered in an "add" form; must be >= 0"""
    value = parse_number(raw)
    if value is None or value < 0:
        return None
    return value


def parse_edited_amount(raw: Union[str, int, float, None]) -> Optional[float]:
    """Parse an amount edited in place; clearing the field sets it to 0"""
    if isinstance(raw, str) and raw.strip() == "":
        return 0.0
    return parse_amount(raw)
