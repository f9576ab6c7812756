"""
Listing Extractor

Locates the house table in a loaded document and pulls raw cell text per
row. The table and its columns are found by header labels, never by
position, so unrelated markup added upstream does not shift meaning.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from tibiahouses.core.constants import (
    CONTAINER_SELECTORS,
    HEADING_SELECTORS,
    HOUSE_ID_INPUT,
    MAINTENANCE_TITLE,
    REQUIRED_COLUMNS,
)
from tibiahouses.exceptions import ContainerNotFound, TownNotFound, UpstreamMaintenance
from tibiahouses.logging_config import get_logger
from tibiahouses.utils.text_utils import sanitize_text

logger = get_logger(__name__)

_HEADING_RE = re.compile(r"^(?P<kind>.+?) in (?P<town>.+) on (?P<world>.+)$")


@dataclass
class RawRow:
    """Unparsed text of one listing row."""

    index: int
    cells: Dict[str, str] = field(default_factory=dict)
    house_id: Optional[str] = None
    missing: List[str] = field(default_factory=list)


@dataclass
class ListingTable:
    """The located listing table and its label-to-column mapping."""

    element: Tag
    header: Tag
    columns: Dict[str, int]
    anchor: str


def _cell_text(cell: Tag) -> str:
    return sanitize_text(cell.get_text(" "))


def _own_rows(table: Tag) -> List[Tag]:
    """Rows that belong to this table and not to a nested one."""
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def _cells(row: Tag) -> List[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def _match_columns(row: Tag) -> Optional[Dict[str, int]]:
    """Map required labels to column positions if this is a header row."""
    labels = [_cell_text(cell).lower() for cell in _cells(row)]
    columns = {}
    for name in REQUIRED_COLUMNS:
        for position, label in enumerate(labels):
            if label == name or label.startswith(name + " "):
                columns[name] = position
                break
    if len(columns) == len(REQUIRED_COLUMNS):
        return columns
    return None


def page_title(document: BeautifulSoup) -> str:
    """Return the document title, or an empty string."""
    title = document.find("title")
    return sanitize_text(title.get_text()) if title else ""


def check_maintenance(document: BeautifulSoup) -> None:
    """Raise ``UpstreamMaintenance`` if this is the maintenance page."""
    if page_title(document) == MAINTENANCE_TITLE:
        logger.warning("Upstream is undergoing maintenance")
        raise UpstreamMaintenance("The upstream website is undergoing maintenance")


def read_listing_heading(document: BeautifulSoup) -> Optional[re.Match]:
    """Find the "<kind> in <town> on <world>" heading, if present."""
    for selector in HEADING_SELECTORS:
        for element in document.select(selector):
            match = _HEADING_RE.match(_cell_text(element))
            if match:
                return match
    return None


def verify_listing_heading(document: BeautifulSoup, town: str, world: Optional[str] = None) -> None:
    """Check that the page lists the requested town and world.

    The upstream falls back to a default town for unknown names, so a
    mismatching heading means the requested town does not exist. Pages
    without a recognizable heading are accepted.

    Raises:
        TownNotFound: If the heading names a different town or world.
    """
    heading = read_listing_heading(document)
    if heading is None:
        logger.debug("No listing heading found, skipping town verification")
        return

    if heading.group("town").lower() != town.strip().lower():
        raise TownNotFound(
            f"Page lists town '{heading.group('town')}', not '{town}'",
            town=town,
            world=world,
        )
    if world is not None and heading.group("world").lower() != world.strip().lower():
        raise TownNotFound(
            f"Page lists world '{heading.group('world')}', not '{world}'",
            town=town,
            world=world,
        )


def find_listing_table(document: BeautifulSoup) -> ListingTable:
    """Locate the house listing table.

    Anchors are tried from most to least specific; a table qualifies when
    one of its rows carries every required column label.

    Raises:
        ContainerNotFound: If no table has the expected header labels.
    """
    seen = set()
    for selector in CONTAINER_SELECTORS:
        for table in document.select(selector):
            if id(table) in seen:
                continue
            seen.add(id(table))
            for row in _own_rows(table):
                columns = _match_columns(row)
                if columns is not None:
                    logger.debug("Listing table found via '%s': %s", selector, columns)
                    return ListingTable(element=table, header=row, columns=columns, anchor=selector)

    raise ContainerNotFound(
        "No table with columns " + ", ".join(REQUIRED_COLUMNS) + " found",
        anchors=list(CONTAINER_SELECTORS),
    )


def iter_rows(table: ListingTable) -> Iterator[RawRow]:
    """Yield the raw text of every listing row below the header.

    A single-cell row (e.g. "No house found.") that is the only body row
    marks an empty listing and is not yielded. Anywhere else it is yielded
    with its missing columns recorded.
    """
    rows = _own_rows(table.element)
    # Tag equality is structural, so locate the header by identity
    start = next(i for i, row in enumerate(rows) if row is table.header)
    body = [row for row in rows[start + 1:] if _cells(row)]

    for index, row in enumerate(body):
        cells = _cells(row)
        id_input = row.find("input", attrs={"name": HOUSE_ID_INPUT})
        if len(body) == 1 and len(cells) == 1 and id_input is None:
            logger.debug("Skipping empty listing marker: %s", _cell_text(cells[0]))
            continue

        raw = RawRow(index=index)
        for name, position in table.columns.items():
            if position < len(cells):
                raw.cells[name] = _cell_text(cells[position])
            else:
                raw.missing.append(name)

        if id_input is not None and id_input.get("value") is not None:
            raw.house_id = id_input["value"]
        else:
            raw.missing.append("id")

        yield raw


def extract_towns(document: BeautifulSoup) -> List[str]:
    """Extract town names from the houses overview page.

    Uses the town radio inputs and their labels, falling back to the
    labels of the town selection cell.

    Raises:
        ContainerNotFound: If no town can be found.
    """
    towns: List[str] = []

    for radio in document.select('input[name="town"]'):
        label = None
        if radio.get("id"):
            label = document.find("label", attrs={"for": radio["id"]})
        if label is None:
            label = radio.find_parent("label")
        name = _cell_text(label) if label is not None else sanitize_text(radio.get("value"))
        if name and name not in towns:
            towns.append(name)

    if not towns:
        tables = document.select("#houses table.TableContent")
        cell = tables[-1].select_one('td[valign="top"]') if tables else None
        if cell is not None:
            for label in cell.find_all("label"):
                name = _cell_text(label)
                if name and name not in towns:
                    towns.append(name)

    if not towns:
        raise ContainerNotFound("No town selection found", anchors=['input[name="town"]'])

    return towns
