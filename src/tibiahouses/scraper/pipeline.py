"""
Extraction Pipeline

Runs fetch -> load -> extract -> assemble for house listing pages.

``extract_houses`` works on bytes from any source (a live fetch or a saved
snapshot); ``scrape_town`` and ``scrape_world`` add the network fetch.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from tibiahouses.config import get_config
from tibiahouses.core.models import ExtractionResult, ResidenceType
from tibiahouses.exceptions import ContainerNotFound
from tibiahouses.logging_config import get_logger
from tibiahouses.scraper.assembler import assemble
from tibiahouses.scraper.dom import load_document
from tibiahouses.scraper.extractor import (
    check_maintenance,
    extract_towns,
    find_listing_table,
    iter_rows,
    verify_listing_heading,
)
from tibiahouses.scraper.fetcher import PageFetcher

logger = get_logger(__name__)


def extract_houses(
    content: Union[bytes, str],
    town: str,
    world: Optional[str] = None,
    residence_type: ResidenceType = ResidenceType.HOUSE,
    encoding: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ExtractionResult:
    """Extract house records from one listing page.

    Args:
        content: Raw page bytes or text.
        town: Town the page was requested for.
        world: World the page was requested for, if any.
        residence_type: Kind of residence listed on the page.
        encoding: Encoding declared by the server.
        now: Reference time for auction expiry estimates.

    Returns:
        Houses and row failures. Zero houses with a found table is a
        successful, empty result.

    Raises:
        MalformedDocument: If the content is not markup.
        UpstreamMaintenance: If the page is the maintenance page.
        TownNotFound: If the page lists a different town or world.
        ContainerNotFound: If the listing table is gone.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    document = load_document(content, encoding)
    check_maintenance(document)
    verify_listing_heading(document, town, world)

    try:
        table = find_listing_table(document)
    except ContainerNotFound as e:
        logger.error("Upstream markup changed for %s/%s: %s", world, town, e.message)
        raise

    return assemble(iter_rows(table), town, world, residence_type, now)


def scrape_town(
    world: str,
    town: str,
    residence_type: ResidenceType = ResidenceType.HOUSE,
    fetcher: Optional[PageFetcher] = None,
    now: Optional[datetime] = None,
) -> ExtractionResult:
    """Fetch and extract the listings of one town."""
    fetcher = fetcher or PageFetcher()
    page = fetcher.fetch_houses_page(world, town, residence_type)
    return extract_houses(page.content, town, world, residence_type, page.encoding, now)


def list_towns(fetcher: Optional[PageFetcher] = None) -> List[str]:
    """Fetch the names of every town that has houses."""
    fetcher = fetcher or PageFetcher()
    page = fetcher.fetch_towns_page()
    document = load_document(page.content, page.encoding)
    check_maintenance(document)
    try:
        return extract_towns(document)
    except ContainerNotFound as e:
        logger.error("Upstream markup changed on the towns page: %s", e.message)
        raise


def scrape_world(
    world: str,
    towns: Optional[Sequence[str]] = None,
    residence_types: Optional[Sequence[ResidenceType]] = None,
    fetcher: Optional[PageFetcher] = None,
    max_workers: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[ExtractionResult]:
    """Scrape several towns of a world concurrently.

    Results keep town order, then residence type order. The first
    page-level failure is re-raised.
    """
    fetcher = fetcher or PageFetcher()
    if towns is None:
        towns = list_towns(fetcher)
    if residence_types is None:
        residence_types = list(ResidenceType)
    if max_workers is None:
        max_workers = get_config().upstream.max_workers
    if now is None:
        now = datetime.now(timezone.utc)

    combinations = [(town, rtype) for town in towns for rtype in residence_types]
    logger.info("Scraping %d pages for %s", len(combinations), world)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(scrape_town, world, town, rtype, fetcher, now)
            for town, rtype in combinations
        ]
        try:
            return [future.result() for future in futures]
        except Exception:
            # Fetches not yet started are dropped; running ones finish
            cancelled = sum(future.cancel() for future in futures)
            logger.warning("Aborted %s scrape, cancelled %d pending pages", world, cancelled)
            raise
