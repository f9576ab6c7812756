"""
DOM Loader

Parses raw bytes into a BeautifulSoup tree. Knows nothing about houses.
"""

from typing import Optional, Union

from bs4 import BeautifulSoup

from tibiahouses.exceptions import MalformedDocument
from tibiahouses.logging_config import get_logger

logger = get_logger(__name__)


def load_document(content: Union[bytes, str, None], encoding: Optional[str] = None) -> BeautifulSoup:
    """Parse a page into a navigable document.

    The ``html.parser`` backend recovers from unclosed and misnested tags,
    so this only fails for input that is not markup at all.

    Args:
        content: Raw page bytes (or already decoded text).
        encoding: Encoding declared by the server, used as a first guess.

    Returns:
        The parsed document.

    Raises:
        MalformedDocument: For empty, binary or tag-less input.
    """
    if content is None or not content.strip():
        raise MalformedDocument("Empty document")

    if isinstance(content, bytes):
        if b"\x00" in content:
            raise MalformedDocument("Document contains binary data")
        soup = BeautifulSoup(content, "html.parser", from_encoding=encoding)
    else:
        soup = BeautifulSoup(content, "html.parser")

    if soup.find() is None:
        raise MalformedDocument("Document contains no markup")

    logger.debug("Loaded document (%s)", soup.original_encoding or "text")
    return soup
