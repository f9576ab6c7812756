"""
Scraper modules for the Tibia house listing pages.

Handles fetching, parsing and extracting house listings.
"""

from tibiahouses.scraper.fetcher import FetchedPage, PageFetcher
from tibiahouses.scraper.pipeline import extract_houses, list_towns, scrape_town, scrape_world

__all__ = [
    "FetchedPage",
    "PageFetcher",
    "extract_houses",
    "list_towns",
    "scrape_town",
    "scrape_world",
]
