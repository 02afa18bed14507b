"""Parsers for the prose values requirement forms put in metadata."""
import re
from typing import Any, List, Optional, Tuple

_RANGE_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(\+)?(?:\s*(?:-|–|to)\s*(\d+(?:\.\d+)?))?",
    re.IGNORECASE,
)
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_UNIT_DAYS = (
    (re.compile(r"year|yr", re.IGNORECASE), 365),
    (re.compile(r"month", re.IGNORECASE), 30),
    (re.compile(r"week", re.IGNORECASE), 7),
)


def parse_range(text: Any) -> Tuple[Optional[float], Optional[float]]:
    """Parse "3-5 years", "3 to 5", "5+", "10-20 LPA" into (min, max).

    A single number is a minimum. Returns (None, None) when no number is found.
    """
    if text is None:
        return None, None
    match = _RANGE_RE.search(str(text))
    if not match:
        return None, None
    low = float(match.group(1))
    high = float(match.group(3)) if match.group(3) else None
    return low, high


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as a float, taking the first number out of strings."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_RE.search(str(value))
    return float(match.group(0)) if match else None


def parse_days(value: Any) -> Optional[int]:
    """Parse a notice period or activity window into days.

    "Immediate" -> 0, "15" / "15 days" -> 15, "2 months" -> 60, "1 week" -> 7.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    if not text:
        return None
    if "immediate" in text.lower():
        return 0
    number = parse_number(text)
    if number is None:
        return None
    for pattern, multiplier in _UNIT_DAYS:
        if pattern.search(text):
            return int(number * multiplier)
    return int(number)


def split_list(value: Any) -> List[str]:
    """Accept a list or a comma-separated string; drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]
