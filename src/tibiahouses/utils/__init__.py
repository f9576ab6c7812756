"""
Utility modules for the Tibia Houses API.

Provides the field normalizers used by the extraction pipeline.
"""

from tibiahouses.utils.number_parser import (
    parse_int,
    format_thousands,
    format_gold,
)
from tibiahouses.utils.status_parser import (
    parse_status,
    parse_countdown,
    Countdown,
    STATUS_PHRASES,
)
from tibiahouses.utils.text_utils import sanitize_text

__all__ = [
    "parse_int",
    "format_thousands",
    "format_gold",
    "parse_status",
    "parse_countdown",
    "Countdown",
    "STATUS_PHRASES",
    "sanitize_text",
]
