"""
Text cleanup helpers for scraped cell contents.
"""

import re
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")

# Entities and escapes that survive in the upstream markup
_REPLACEMENTS = (
    ("\u00a0", " "),
    ("&nbsp;", " "),
    ("&#39;", "'"),
    ("&amp;", "&"),
    ("\\n", " "),
)


def sanitize_text(text: Optional[str]) -> str:
    """Normalize whitespace and leftover entities in scraped text.

    Example:
        >>> sanitize_text("  Alai Flats,\\u00a0Flat 01 \\n")
        "Alai Flats, Flat 01"
    """
    if not text:
        return ""
    for old, new in _REPLACEMENTS:
        text = text.replace(old, new)
    return _WHITESPACE_RE.sub(" ", text).strip()
