#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/parsers/_columns.py
"""Anchor column table reconstruction.

Registers without ruling lines are read by treating the leftmost column of
text (application numbers, plus the ``DEV NO.`` heading) as anchors. Each
anchor closes a row: the row holds every element at or above the anchor and
below the previous one. Fields are read from the elements that sit under the
column headings captured from the most recent heading row.

Long registers repeat the table half way through with a second set of
headings that continue the rows of the first. Headings therefore persist from
page to page, and later sections only fill in the fields their headings
define.

"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Sequence

from devapps.address import AddressNormalizer
from devapps.constants import (
    ANCHOR_BAND_WIDTH,
    ANCHOR_COLUMN_MIN_OVERLAP,
    COLUMN_DATE_FORMAT,
    COLUMN_DATE_PATTERN,
    COLUMN_HEADING_ROW_TOKEN,
    COLUMN_HEADINGS,
    ELEMENT_ROW_TOLERANCE,
    HUNDRED_PREFIX_PATTERN,
    OUTPUT_DATE_FORMAT,
)
from devapps.geometry import Element, horizontal_overlap_percentage
from devapps.parsers._grid import sort_by_position
from devapps.parsers.base import PageSynthesizer
from devapps.records import RecordUpdate

if TYPE_CHECKING:
    from devapps.parsers._page_content import DecodedPage

logger = logging.getLogger(__name__)

__all__ = ["ColumnSynthesizer", "find_anchors", "split_suburb_and_hundred"]

_NON_LETTERS = re.compile(r"[^A-Z]")
_WHITESPACE = re.compile(r"\s")
_WHITESPACE_RUN = re.compile(r"\s\s+")

# Record fields and the headings that define them
_FIELD_HEADINGS: dict[str, tuple[str, ...]] = {
    "received_date": ("received_date",),
    "address": ("house_number", "street_name", "suburb_name"),
    "legal_description": ("lot_number", "plan", "suburb_name"),
    "description": ("description",),
}


def _heading_key(text: str) -> str:
    return _NON_LETTERS.sub("", text.upper())


def find_anchors(elements: Sequence[Element]) -> list[Element]:
    """Return the elements in the band of the leftmost element, top to bottom."""
    if not elements:
        return []
    leftmost = min(elements, key=lambda element: element.x)
    anchors = [element for element in elements if abs(element.x - leftmost.x) < ANCHOR_BAND_WIDTH]
    return sorted(anchors, key=lambda element: element.y)


def split_suburb_and_hundred(text: str) -> tuple[str, str]:
    """Split ``"SUBURB/HD HUNDRED"`` (in either order) into ``(suburb, hundred)``.

    Examples
    --------
        >>> split_suburb_and_hundred("EMU FLAT/HD CLARE")
        ('EMU FLAT', 'CLARE')
        >>> split_suburb_and_hundred("HD CLARE/EMU FLAT")
        ('EMU FLAT', 'CLARE')
        >>> split_suburb_and_hundred("CLARE")
        ('CLARE', '')

    """
    suburb_name = text
    hundred_name = ""

    tokens = text.split("/")
    if len(tokens) == 2:
        first, second = tokens[0].strip(), tokens[1].strip()
        if HUNDRED_PREFIX_PATTERN.match(second):
            suburb_name, hundred_name = first, second
        else:
            # Without a prefix on either side the hundred is assumed to come first
            hundred_name, suburb_name = first, second

    return HUNDRED_PREFIX_PATTERN.sub("", suburb_name), HUNDRED_PREFIX_PATTERN.sub("", hundred_name)


def _parse_received_date(text: str) -> str:
    if not COLUMN_DATE_PATTERN.match(text):
        return ""
    try:
        return datetime.strptime(text, COLUMN_DATE_FORMAT).strftime(OUTPUT_DATE_FORMAT)
    except ValueError:
        return ""


class ColumnSynthesizer(PageSynthesizer):
    """Read applications from unruled pages using the leftmost column as anchors.

    A single instance must be used for all pages of one document, since the
    captured headings carry over from page to page.

    Parameters
    ----------
    normalizer : AddressNormalizer
        Formats the house number, street and suburb of each row into an address

    """

    name = "column"

    def __init__(self, normalizer: AddressNormalizer):
        """Initialize the synthesizer with no headings captured."""
        self.normalizer = normalizer
        self.headings: dict[str, Optional[Element]] = dict.fromkeys(COLUMN_HEADINGS)

    def synthesize(self, page: DecodedPage) -> list[RecordUpdate]:
        """Read one update per anchor row of the page.

        A heading row (its anchor reads ``DEV NO.``) only recaptures headings.
        Pages with no text produce no updates.
        """
        elements = sort_by_position(page.elements, ELEMENT_ROW_TOLERANCE)
        anchors = find_anchors(elements)

        updates = []
        for index, anchor in enumerate(anchors):
            previous_y = anchors[index - 1].y if index > 0 else None
            row = [
                element
                for element in elements
                if element.y <= anchor.y and (previous_y is None or element.y > previous_y)
            ]

            if index == 0 and _heading_key(anchor.text) == COLUMN_HEADING_ROW_TOKEN:
                self._capture_headings(row)
                continue

            updates.append(self._read_row(anchor, row))
        return updates

    def _capture_headings(self, row: Sequence[Element]) -> None:
        self.headings = {
            name: next((element for element in row if _heading_key(element.text) == token), None)
            for name, token in COLUMN_HEADINGS.items()
        }
        logger.debug(
            "Captured column headings: %s",
            ", ".join(name for name, heading in self.headings.items() if heading is not None) or "none",
        )

    def _field_text(self, row: Sequence[Element], name: str) -> str:
        heading = self.headings.get(name)
        texts = [
            element.text
            for element in row
            if horizontal_overlap_percentage(heading, element) > ANCHOR_COLUMN_MIN_OVERLAP
        ]
        return _WHITESPACE_RUN.sub(" ", " ".join(texts)).strip()

    def _read_row(self, anchor: Element, row: Sequence[Element]) -> RecordUpdate:
        application_number = _WHITESPACE.sub("", anchor.text)

        lot_number = self._field_text(row, "lot_number")
        house_number = self._field_text(row, "house_number")
        street_name = self._field_text(row, "street_name")
        plan = self._field_text(row, "plan")
        suburb_name, hundred_name = split_suburb_and_hundred(self._field_text(row, "suburb_name"))

        address = ""
        if street_name and suburb_name:
            address = self.normalizer.format_address(f"{house_number} {street_name}, {suburb_name}".upper())

        legal_description_items = []
        if lot_number:
            legal_description_items.append(f"Lot {lot_number}")
        if plan:
            legal_description_items.append(f"Plan {plan}")
        if hundred_name:
            legal_description_items.append(f"Hundred {hundred_name}")

        values = {
            "received_date": _parse_received_date(self._field_text(row, "received_date")),
            "address": address,
            "legal_description": ", ".join(legal_description_items),
            "description": self._field_text(row, "description"),
        }

        logger.debug("Read development application %s", application_number)
        return RecordUpdate(
            application_number=application_number,
            fields={
                field_name: value
                for field_name, value in values.items()
                if any(self.headings.get(name) is not None for name in _FIELD_HEADINGS[field_name])
            },
        )
