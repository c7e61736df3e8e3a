#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/parsers/_grid.py
"""Ruled grid table reconstruction.

Registers laid out as a ruled table are rebuilt from their ruling lines: every
pair of adjacent horizontal lines and every pair of adjacent vertical lines
bounds one cell, each text element is given to the cell that holds most of it,
and the cells are grouped into rows. Heading cells are recognized by their
text, and each row's field cells are the cells aligned under a heading.

"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from functools import cmp_to_key
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from devapps.address import AddressNormalizer
from devapps.constants import (
    CELL_OWNERSHIP_MIN_PERCENTAGE,
    CELL_ROW_TOLERANCE,
    ELEMENT_ROW_TOLERANCE,
    GRID_APPLICATION_NUMBER_PATTERN,
    GRID_COLUMN_MIN_OVERLAP,
    GRID_DATE_FORMAT,
    GRID_DATE_PATTERN,
    GRID_HEADINGS,
    GRID_MANDATORY_HEADINGS,
    OUTPUT_DATE_FORMAT,
)
from devapps.exceptions import PageLayoutError
from devapps.geometry import Cell, Element, Rectangle, containment_percentage, horizontal_overlap_percentage
from devapps.parsers.base import PageSynthesizer
from devapps.records import RecordUpdate

if TYPE_CHECKING:
    from devapps.parsers._page_content import DecodedPage

logger = logging.getLogger(__name__)

__all__ = [
    "GridSynthesizer",
    "assign_elements",
    "build_grid_cells",
    "find_heading_cells",
    "group_rows",
    "sort_by_position",
]

_WHITESPACE = re.compile(r"\s")
_WHITESPACE_RUN = re.compile(r"\s\s+")


def build_grid_cells(horizontal_lines: Iterable[Rectangle], vertical_lines: Iterable[Rectangle]) -> list[Cell]:
    """Build one cell for every pair of adjacent horizontal and vertical lines.

    The grid is dense: a cell is produced for every combination even where the
    document does not actually rule one.

    Parameters
    ----------
    horizontal_lines : Iterable[Rectangle]
        Horizontal ruling lines
    vertical_lines : Iterable[Rectangle]
        Vertical ruling lines

    Returns
    -------
    list[Cell]
        Empty cells in the same coordinate space as the lines

    """
    horizontal_lines = sorted(horizontal_lines, key=lambda line: line.y)
    vertical_lines = sorted(vertical_lines, key=lambda line: line.x)

    cells = []
    for top, bottom in zip(horizontal_lines, horizontal_lines[1:]):
        for left, right in zip(vertical_lines, vertical_lines[1:]):
            cells.append(Cell(x=left.x, y=top.y, width=right.x - left.x, height=bottom.y - top.y))
    return cells


def _position_comparer(tolerance: float):
    def compare(a: Rectangle, b: Rectangle) -> int:
        if abs(a.y - b.y) < tolerance:
            return (a.x > b.x) - (a.x < b.x)
        return 1 if a.y > b.y else -1

    return cmp_to_key(compare)


def sort_by_position(rectangles: Iterable[Rectangle], tolerance: float) -> list:
    """Sort by approximate y (within ``tolerance``) and then by x."""
    return sorted(rectangles, key=_position_comparer(tolerance))


def assign_elements(cells: Sequence[Cell], elements: Iterable[Element]) -> None:
    """Give each element to the first cell that holds more than half of it.

    Elements split evenly between cells, or lying outside the grid, are owned
    by no cell.
    """
    for element in elements:
        for cell in cells:
            if containment_percentage(element, cell) > CELL_OWNERSHIP_MIN_PERCENTAGE:
                cell.elements.append(element)
                break


def group_rows(cells: Iterable[Cell]) -> list[list[Cell]]:
    """Group cells whose y is within tolerance of a row's first cell.

    Returns
    -------
    list[list[Cell]]
        Rows sorted by y, each sorted by x

    """
    rows: list[list[Cell]] = []
    for cell in cells:
        row = next((row for row in rows if abs(row[0].y - cell.y) < CELL_ROW_TOLERANCE), None)
        if row is None:
            rows.append([cell])
        else:
            row.append(cell)

    rows.sort(key=lambda row: row[0].y)
    for row in rows:
        row.sort(key=lambda cell: cell.x)
    return rows


def _heading_key(text: str) -> str:
    return _WHITESPACE.sub("", text.lower())


def _find_heading_cell(cells: Sequence[Cell], tokens: Sequence[str]) -> Optional[Cell]:
    for token in tokens:
        for cell in cells:
            if any(_heading_key(text) == token for text in cell.texts) or _heading_key("".join(cell.texts)) == token:
                return cell
    return None


def find_heading_cells(cells: Sequence[Cell]) -> dict[str, Optional[Cell]]:
    """Locate the heading cell of every known column.

    A cell is a heading when one of its element texts, or all of them joined,
    equals a heading token once lowercased and stripped of whitespace. Tokens
    are tried in order of preference, so ``"Allotment or"`` wins over
    ``"Allotment /"`` wherever both appear.

    Returns
    -------
    dict[str, Cell or None]
        Heading cell per field name, None where the heading is absent

    """
    return {name: _find_heading_cell(cells, tokens) for name, tokens in GRID_HEADINGS.items()}


def _joined_text(cell: Optional[Cell]) -> str:
    if cell is None:
        return ""
    return _WHITESPACE_RUN.sub(" ", " ".join(cell.texts)).strip()


def _parse_received_date(cell: Optional[Cell]) -> str:
    if cell is None or not cell.elements:
        return ""
    text = cell.elements[0].text.strip()
    if not GRID_DATE_PATTERN.match(text):
        return ""
    try:
        return datetime.strptime(text, GRID_DATE_FORMAT).strftime(OUTPUT_DATE_FORMAT)
    except ValueError:
        return ""


class GridSynthesizer(PageSynthesizer):
    """Read applications from pages ruled into a grid of cells.

    Parameters
    ----------
    normalizer : AddressNormalizer
        Formats the street and suburb of each row into an address

    """

    name = "grid"

    def __init__(self, normalizer: AddressNormalizer):
        """Initialize the synthesizer."""
        self.normalizer = normalizer

    def synthesize(self, page: DecodedPage) -> list[RecordUpdate]:
        """Read one update per application row of a ruled page.

        Raises
        ------
        PageLayoutError
            If the page has no rows, or lacks the application number, street
            name or town heading

        """
        cells = sort_by_position(page.cells, CELL_ROW_TOLERANCE)
        elements = sort_by_position(page.elements, ELEMENT_ROW_TOLERANCE)
        for cell in cells:
            cell.elements = []
        assign_elements(cells, elements)

        rows = group_rows(cells)
        if not rows:
            raise PageLayoutError(
                "No development applications can be parsed from the current page because no rows were found "
                "(based on the grid).",
                page_number=page.number,
                element_summary=page.element_summary(),
            )

        headings = find_heading_cells(cells)
        for name, label in GRID_MANDATORY_HEADINGS:
            if headings[name] is None:
                raise PageLayoutError(
                    f'No development applications can be parsed from the current page because the "{label}" '
                    "column heading was not found.",
                    page_number=page.number,
                    element_summary=page.element_summary(),
                )

        updates = []
        for row in rows:
            update = self._read_row(row, headings)
            if update is not None:
                updates.append(update)
        return updates

    def _read_row(self, row: Sequence[Cell], headings: dict[str, Optional[Cell]]) -> Optional[RecordUpdate]:
        """Read one row; heading rows and malformed rows give None."""
        field_cells = {
            name: next(
                (cell for cell in row if horizontal_overlap_percentage(cell, heading) > GRID_COLUMN_MIN_OVERLAP),
                None,
            )
            for name, heading in headings.items()
        }

        application_number_cell = field_cells["application_number"]
        if application_number_cell is None:
            return None
        application_number = "".join(application_number_cell.texts).strip()
        if not GRID_APPLICATION_NUMBER_PATTERN.search(application_number):
            return None

        logger.info(f"Found development application {application_number}.")

        street_name_cell = field_cells["street_name"]
        suburb_name_cell = field_cells["suburb_name"]
        if street_name_cell is None:
            logger.info("Ignoring the development application because it has no street name cell.")
            return None
        if suburb_name_cell is None:
            logger.info("Ignoring the development application because it has no suburb name cell.")
            return None

        street_name = _joined_text(street_name_cell)
        suburb_name = _joined_text(suburb_name_cell)
        if not street_name:
            logger.info("Ignoring the development application because it has no street name.")
            return None
        if not suburb_name:
            logger.info("Ignoring the development application because it has no suburb name.")
            return None

        address = self.normalizer.format_address(f"{street_name}, {suburb_name}")

        return RecordUpdate(
            application_number=application_number,
            fields={
                "address": address,
                "description": _joined_text(field_cells["description"]),
                "received_date": _parse_received_date(field_cells["received_date"]),
                "legal_description": _joined_text(field_cells["legal_description"]),
            },
        )
