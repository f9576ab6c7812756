"""
Unit tests for the listing extractor.
"""

import pytest

from tibiahouses.exceptions import ContainerNotFound, TownNotFound, UpstreamMaintenance
from tibiahouses.scraper.dom import load_document
from tibiahouses.scraper.extractor import (
    check_maintenance,
    extract_towns,
    find_listing_table,
    iter_rows,
    read_listing_heading,
    verify_listing_heading,
)


def _row(cells, house_id=None):
    id_cell = ""
    if house_id is not None:
        id_cell = f'<td><form><input type="hidden" name="houseid" value="{house_id}"/></form></td>'
    return "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + id_cell + "</tr>"


def _page(header, rows):
    header_row = "<tr>" + "".join(f'<td class="LabelV">{h}</td>' for h in header) + "</tr>"
    return (
        "<html><body><div class=\"TableContainer\"><table class=\"TableContent\">"
        + header_row + "".join(rows)
        + "</table></div></body></html>"
    )


class TestFindListingTable:
    """Tests for find_listing_table function."""

    def test_finds_fixture_table(self, thais_page):
        table = find_listing_table(load_document(thais_page))
        assert table.columns == {"name": 0, "size": 1, "rent": 2, "status": 3}
        assert table.anchor == ".TableContainer table.TableContent"

    def test_ignores_unrelated_tables_before_listing(self):
        html = (
            "<table><tr><td>Name</td><td>World</td></tr></table>"
            + _page(["Name", "Size", "Rent", "Status"], [_row(["A", "1 sqm", "1k gold", "rented"], 1)])
        )
        table = find_listing_table(load_document(html))
        assert table.columns["status"] == 3

    def test_falls_back_to_any_table(self):
        html = (
            "<table><tr><th>Name</th><th>Size</th><th>Rent</th><th>Status</th></tr>"
            + _row(["A", "1 sqm", "1k gold", "rented"], 1)
            + "</table>"
        )
        table = find_listing_table(load_document(html))
        assert table.anchor == "table"

    def test_missing_container_raises(self, load_fixture):
        with pytest.raises(ContainerNotFound) as exc_info:
            find_listing_table(load_document(load_fixture("houses-redesigned-200.html")))
        assert exc_info.value.anchors

    def test_renamed_label_raises(self):
        html = _page(["Name", "Size", "Price", "Status"], [_row(["A", "1 sqm", "1k gold", "rented"], 1)])
        with pytest.raises(ContainerNotFound):
            find_listing_table(load_document(html))


class TestIterRows:
    """Tests for iter_rows function."""

    def test_fixture_rows(self, thais_page):
        rows = list(iter_rows(find_listing_table(load_document(thais_page))))
        assert len(rows) == 6
        first = rows[0]
        assert first.index == 0
        assert first.house_id == "10201"
        assert first.cells == {
            "name": "Alai Flats, Flat 01",
            "size": "18 sqm",
            "rent": "25k gold",
            "status": "rented",
        }
        assert not first.missing

    def test_columns_found_by_label_not_position(self):
        html = _page(
            ["Status", "Rent", "Name", "Size"],
            [_row(["rented", "25k gold", "Flat 01", "18 sqm"], 7)],
        )
        rows = list(iter_rows(find_listing_table(load_document(html))))
        assert rows[0].cells["name"] == "Flat 01"
        assert rows[0].cells["size"] == "18 sqm"
        assert rows[0].cells["status"] == "rented"

    def test_short_row_reports_missing_columns(self):
        html = _page(
            ["Name", "Size", "Rent", "Status"],
            [_row(["Flat 01", "18 sqm"], 7)],
        )
        rows = list(iter_rows(find_listing_table(load_document(html))))
        assert rows[0].missing == ["status"]

    def test_missing_house_id(self):
        html = _page(["Name", "Size", "Rent", "Status"], [_row(["A", "1 sqm", "1k gold", "rented"])])
        rows = list(iter_rows(find_listing_table(load_document(html))))
        assert rows[0].house_id is None
        assert rows[0].missing == ["id"]

    def test_empty_marker_row_skipped(self, load_fixture):
        document = load_document(load_fixture("houses-empty-200.html"))
        assert list(iter_rows(find_listing_table(document))) == []

    def test_merged_row_among_listings_reported(self):
        merged = "<tr><td>Flat 02 | 25 sqm | 35k gold | rented</td></tr>"
        html = _page(
            ["Name", "Size", "Rent", "Status"],
            [_row(["A", "1 sqm", "1k gold", "rented"], 1), merged, _row(["B", "2 sqm", "2k gold", "rented"], 3)],
        )
        rows = list(iter_rows(find_listing_table(load_document(html))))
        assert len(rows) == 3
        assert rows[1].index == 1
        assert rows[1].missing == ["size", "rent", "status", "id"]

    def test_nested_table_rows_not_counted(self):
        nested = "<table><tr><td>x</td></tr><tr><td>y</td></tr></table>"
        html = _page(
            ["Name", "Size", "Rent", "Status"],
            [_row(["A" + nested, "1 sqm", "1k gold", "rented"], 1)],
        )
        rows = list(iter_rows(find_listing_table(load_document(html))))
        assert len(rows) == 1
        assert rows[0].house_id == "1"


class TestListingHeading:
    """Tests for heading checks."""

    def test_reads_heading(self, thais_page):
        heading = read_listing_heading(load_document(thais_page))
        assert heading.group("town") == "Thais"
        assert heading.group("world") == "Antica"

    def test_matching_town_passes(self, thais_page):
        verify_listing_heading(load_document(thais_page), "thais", "Antica")

    def test_other_town_raises(self, thais_page):
        with pytest.raises(TownNotFound):
            verify_listing_heading(load_document(thais_page), "Venore", "Antica")

    def test_other_world_raises(self, thais_page):
        with pytest.raises(TownNotFound):
            verify_listing_heading(load_document(thais_page), "Thais", "Secura")

    def test_world_optional(self, thais_page):
        verify_listing_heading(load_document(thais_page), "Thais")

    def test_no_heading_passes(self):
        html = _page(["Name", "Size", "Rent", "Status"], [])
        verify_listing_heading(load_document(html), "Thais", "Antica")


class TestCheckMaintenance:
    """Tests for check_maintenance function."""

    def test_maintenance_page_raises(self, load_fixture):
        with pytest.raises(UpstreamMaintenance):
            check_maintenance(load_document(load_fixture("maintenance-200.html")))

    def test_regular_page_passes(self, thais_page):
        check_maintenance(load_document(thais_page))


class TestExtractTowns:
    """Tests for extract_towns function."""

    def test_towns_page(self, load_fixture):
        towns = extract_towns(load_document(load_fixture("towns-200.html")))
        assert towns == [
            "Ab'Dendriel",
            "Ankrahmun",
            "Carlin",
            "Gray Beach",
            "Liberty Bay",
            "Thais",
            "Venore",
        ]

    def test_falls_back_to_labels(self):
        html = (
            '<div id="houses"><table class="TableContent"><tr>'
            '<td valign="top"><label>Edron</label><label>Farmine</label></td>'
            "</tr></table></div>"
        )
        assert extract_towns(load_document(html)) == ["Edron", "Farmine"]

    def test_no_towns_raises(self, load_fixture):
        with pytest.raises(ContainerNotFound):
            extract_towns(load_document(load_fixture("maintenance-200.html")))
