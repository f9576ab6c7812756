"""
Shared Constants for the Tibia Houses API

Contains all constant values used across the application.
"""

from typing import Dict, FrozenSet, Tuple

# Upstream website
COMMUNITY_URL: str = "https://www.tibia.com/community/"
HOUSES_SUBTOPIC: str = "houses"

DEFAULT_USER_AGENT: str = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:109.0) "
    "Gecko/20100101 Firefox/113.0"
)

MAINTENANCE_TITLE: str = "Tibia - Free Multiplayer Online Role Playing Game - Maintenance"

# Content types accepted from the upstream
HTML_CONTENT_TYPES: FrozenSet[str] = frozenset({"text/html", "application/xhtml+xml"})

# Residence types and their upstream query values
RESIDENCE_TYPE_QUERY: Dict[str, str] = {
    "house": "houses",
    "guildhall": "guildhalls",
}

# Listing table anchors
CONTAINER_SELECTORS: Tuple[str, ...] = (
    ".TableContainer table.TableContent",
    "table.TableContent",
    "table",
)
HEADING_SELECTORS: Tuple[str, ...] = (".Text", "h1", "h2")
HOUSE_ID_INPUT: str = "houseid"

# Column labels as printed (lowercased) in the listing header row
REQUIRED_COLUMNS: Tuple[str, ...] = ("name", "size", "rent", "status")

# Server save happens at 08:00 UTC; day-based auction countdowns end there
SERVER_SAVE_HOUR_UTC: int = 8
