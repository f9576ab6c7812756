"""
Tibia Houses API

Republishes the house listings of the Tibia community website as
structured JSON.

Main components:
- scraper: Fetching, parsing and extracting house listings
- utils: Field normalizers (numbers, statuses, countdowns)
- api: Flask REST API server
- cli: Command-line interfaces

Usage:
    from tibiahouses.scraper import extract_houses, scrape_town

    result = extract_houses(html_bytes, town="Thais", world="Antica")
"""

__version__ = "1.0.0"

from tibiahouses.config import get_config
from tibiahouses.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]
