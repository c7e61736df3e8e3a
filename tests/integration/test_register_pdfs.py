#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_register_pdfs.py
"""Integration tests reading register PDFs generated with PyMuPDF.

These documents go through the real PyMuPDF drawing and text extraction, so
they cover the page flip, the per-rectangle drawing instructions and the span
to text matrix mapping that the unit tests only see through mocks.
"""

import pytest
from fixtures.generators.register_fixtures import create_column_register_pdf, create_grid_register_pdf

from devapps import RegisterOptions, parse_register
from devapps.parsers import RegisterParser

INFORMATION_URL = "https://example.org/register.pdf"
COMMENT_URL = "mailto:mail@dclep.sa.gov.au"
SCRAPE_DATE = "2024-01-31"


@pytest.fixture
def options():
    return RegisterOptions(information_url=INFORMATION_URL, scrape_date=SCRAPE_DATE)


@pytest.fixture
def grid_pdf_bytes():
    doc = create_grid_register_pdf()
    try:
        return doc.tobytes()
    finally:
        doc.close()


@pytest.fixture
def column_pdf_bytes():
    doc = create_column_register_pdf()
    try:
        return doc.tobytes()
    finally:
        doc.close()


@pytest.mark.integration
class TestGridRegisterPdf:
    """A ruled register read from PDF bytes."""

    def test_records(self, dictionaries, options, grid_pdf_bytes):
        """Every application row on both pages becomes a record."""
        records = RegisterParser(dictionaries, options).parse(grid_pdf_bytes)

        assert [record.as_row() for record in records] == [
            (
                "910/144/16",
                "12 MAIN STREET, SOMETON SA 5000",
                "Dwelling",
                INFORMATION_URL,
                COMMENT_URL,
                SCRAPE_DATE,
                "2019-03-05",
                "Lot 12 DP 1234",
            ),
            (
                "910/145/16",
                "3 BAY ROAD, PORT TOWN SA 5001",
                "No Description Provided",
                INFORMATION_URL,
                COMMENT_URL,
                SCRAPE_DATE,
                "2019-03-06",
                "",
            ),
            (
                "910/146/16",
                "5 FIRST TERRACE NORTH, SOMETON SA 5000",
                "Shed",
                INFORMATION_URL,
                COMMENT_URL,
                SCRAPE_DATE,
                "2019-03-07",
                "Allot 4",
            ),
        ]

    def test_grid_strategy_is_detected(self, dictionaries, options, grid_pdf_bytes):
        """Ruling lines drawn as filled rectangles select the grid strategy."""
        events = []
        RegisterParser(dictionaries, options, progress_callback=events.append).parse(grid_pdf_bytes)

        [detected] = [event for event in events if event.event_type == "detected"]
        assert detected.metadata["strategy"] == "grid"

    def test_page_selection(self, dictionaries, grid_pdf_bytes):
        """Only the selected page is read."""
        records = RegisterParser(dictionaries, RegisterOptions(pages="2")).parse(grid_pdf_bytes)
        assert [record.application_number for record in records] == ["910/146/16"]

    def test_from_path(self, dictionaries, options, grid_pdf_bytes, tmp_path):
        """A register can be read from a file on disk."""
        path = tmp_path / "register.pdf"
        path.write_bytes(grid_pdf_bytes)

        records = parse_register(path, dictionaries, options=options)

        assert len(records) == 3


@pytest.mark.integration
class TestColumnRegisterPdf:
    """An unruled register read from PDF bytes."""

    def test_records_merge_across_sections(self, dictionaries, options, column_pdf_bytes):
        """Descriptions from the continuation page complete the first page's rows."""
        records = RegisterParser(dictionaries, options).parse(column_pdf_bytes)

        assert [record.as_row() for record in records] == [
            (
                "371/002/17",
                "34 MAIN STREET, SOMETON SA 5000",
                "Dwelling",
                INFORMATION_URL,
                COMMENT_URL,
                SCRAPE_DATE,
                "2017-01-05",
                "Lot 12, Plan D1234, Hundred CLARE",
            ),
            (
                "371/003/17",
                "36 HIGH STREET, PORT TOWN SA 5001",
                "Carport",
                INFORMATION_URL,
                COMMENT_URL,
                SCRAPE_DATE,
                "2017-02-12",
                "Lot 7, Plan F555, Hundred PENOLA",
            ),
        ]

    def test_column_strategy_is_detected(self, dictionaries, options, column_pdf_bytes):
        """A document without ruling lines is read by column."""
        events = []
        parse_register(column_pdf_bytes, dictionaries, options=options, progress_callback=events.append)

        [detected] = [event for event in events if event.event_type == "detected"]
        assert detected.metadata["strategy"] == "column"
