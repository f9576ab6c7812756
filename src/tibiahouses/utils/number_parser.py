"""
Numeric Field Parsing Utilities

Turns upstream numeric text ("30 sqm", "50k gold", "1,234,567 gold") into
integers and back.
"""

import re
from decimal import Decimal
from typing import Optional

from tibiahouses.exceptions import NumericFormat
from tibiahouses.logging_config import get_logger
from tibiahouses.utils.text_utils import sanitize_text

logger = get_logger(__name__)

# One number, optionally grouped with a consistent thousands separator,
# optionally followed by "k" multipliers, surrounded by non-digit decoration.
# A multiplier may run straight into a unit word ("50kgold").
_NUMERIC_RE = re.compile(
    r"^[^\d+-]*?"
    r"(?P<sign>[-+]?)\s*"
    r"(?P<number>\d{1,3}(?P<sep>[,. ])\d{3}(?:(?P=sep)\d{3})*|\d+(?:\.\d+)?)"
    r"\s*(?:(?P<suffix>k+)(?=gold|gp|sqm|[^a-z]|$))?"
    r"(?P<tail>[^\d]*)$",
    re.IGNORECASE,
)

THOUSANDS = 1_000


def parse_int(text: Optional[str]) -> int:
    """Parse decorated numeric text as a non-negative integer.

    Handles:
    - "30 sqm" -> 30
    - "1,234,567 gold" -> 1234567
    - "1.234.567" -> 1234567
    - "50k gold" -> 50000
    - "2kk" -> 2000000

    Args:
        text: Raw cell text.

    Returns:
        The integer value.

    Raises:
        NumericFormat: If the text is not exactly one non-negative integer.
    """
    cleaned = sanitize_text(text)
    if not cleaned:
        raise NumericFormat("empty numeric value", text=text)

    match = _NUMERIC_RE.match(cleaned)
    if not match:
        logger.debug("Could not extract number from: %s", cleaned)
        raise NumericFormat(f"not a number: '{cleaned}'", text=text)

    if match.group("sign") == "-":
        raise NumericFormat(f"negative number: '{cleaned}'", text=text)

    if not match.group("suffix") and match.group("tail").lstrip().lower().startswith("k"):
        raise NumericFormat(f"unreadable multiplier: '{cleaned}'", text=text)

    number = match.group("number")
    if match.group("sep"):
        number = number.replace(match.group("sep"), "")
    suffix = match.group("suffix") or ""

    value = Decimal(number) * THOUSANDS ** len(suffix)

    if value != value.to_integral_value():
        raise NumericFormat(f"not an integer: '{cleaned}'", text=text)

    return int(value)


def format_thousands(value: int, separator: str = ",") -> str:
    """Format an integer with a thousands separator.

    Example:
        >>> format_thousands(1234567)
        "1,234,567"
        >>> format_thousands(1234567, separator=".")
        "1.234.567"
    """
    return f"{int(value):,}".replace(",", separator)


def format_gold(value: int, compact: bool = False) -> str:
    """Format a gold amount the way the upstream prints it.

    Example:
        >>> format_gold(50000, compact=True)
        "50k gold"
        >>> format_gold(1234567)
        "1,234,567 gold"
    """
    if compact and value and value % THOUSANDS == 0:
        suffix = "k"
        value //= THOUSANDS
        while value % THOUSANDS == 0:
            suffix += "k"
            value //= THOUSANDS
        return f"{value}{suffix} gold"
    return f"{format_thousands(value)} gold"
