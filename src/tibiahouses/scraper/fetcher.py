"""
Document Fetcher

Retrieves raw HTML for the upstream house pages. One GET per call, no
retries; callers own any retry policy.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from tibiahouses.config import UpstreamConfig, get_config
from tibiahouses.core.constants import HOUSES_SUBTOPIC, HTML_CONTENT_TYPES, RESIDENCE_TYPE_QUERY
from tibiahouses.core.models import ResidenceType
from tibiahouses.exceptions import UnexpectedContentType, Unreachable, UpstreamRejected
from tibiahouses.logging_config import get_logger

logger = get_logger(__name__)

_CHARSET_RE = re.compile(r"charset=[\"']?([\w.:-]+)", re.IGNORECASE)


@dataclass
class FetchedPage:
    """Raw page bytes plus the encoding declared by the server, if any."""

    url: str
    content: bytes
    encoding: Optional[str] = None


class PageFetcher:
    """Fetches house listing and town overview pages.

    Args:
        session: A ``requests.Session`` (or anything with a compatible
            ``get``). A new session is created when omitted.
        config: Upstream configuration; defaults to the global config.
    """

    def __init__(self, session=None, config: Optional[UpstreamConfig] = None):
        self.config = config or get_config().upstream
        self.session = session or requests.Session()
        self.headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
            "Accept-Encoding": "gzip, deflate",
        }

    def fetch_houses_page(
        self,
        world: str,
        town: str,
        residence_type: ResidenceType = ResidenceType.HOUSE,
    ) -> FetchedPage:
        """Fetch the listing page for one town of one world."""
        params = {
            "subtopic": HOUSES_SUBTOPIC,
            "world": world,
            "town": town,
            "type": RESIDENCE_TYPE_QUERY[residence_type.value],
        }
        return self.fetch(params)

    def fetch_towns_page(self) -> FetchedPage:
        """Fetch the houses overview page that lists every town."""
        return self.fetch({"subtopic": HOUSES_SUBTOPIC})

    def fetch(self, params: Dict[str, str]) -> FetchedPage:
        """Perform a single GET against the community page.

        Raises:
            Unreachable: On connection errors and timeouts.
            UpstreamRejected: On a non-2xx status.
            UnexpectedContentType: When the body is not HTML.
        """
        url = self.config.community_url
        logger.debug("Fetching %s with %s", url, params)

        try:
            response = self.session.get(
                url,
                params=params,
                headers=self.headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("Timeout fetching %s: %s", url, e)
            raise Unreachable(f"Timed out after {self.config.timeout}s", url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error("Could not reach %s: %s", url, e)
            raise Unreachable(f"Could not reach upstream: {e}", url=url) from e

        final_url = getattr(response, "url", None) or url

        if not 200 <= response.status_code < 300:
            logger.error("Upstream rejected %s with status %d", final_url, response.status_code)
            raise UpstreamRejected(
                f"Upstream returned status {response.status_code}",
                url=final_url,
                status_code=response.status_code,
            )

        content_type = response.headers.get("Content-Type", "")
        mime_type = content_type.split(";")[0].strip().lower()
        if mime_type and mime_type not in HTML_CONTENT_TYPES:
            logger.error("Unexpected content type '%s' from %s", content_type, final_url)
            raise UnexpectedContentType(
                f"Expected HTML, got '{mime_type}'",
                url=final_url,
                content_type=content_type,
            )

        charset = _CHARSET_RE.search(content_type)
        return FetchedPage(
            url=final_url,
            content=response.content,
            encoding=charset.group(1) if charset else None,
        )
