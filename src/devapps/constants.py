#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the devapps library.

This module centralizes the hardcoded values, geometric tolerances and
heading vocabularies used while reconstructing development application
registers from PDF pages.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Record Defaults - Values written into newly created records
3. Dependencies - Package requirements for optional collaborators
4. Page Decoding - Line classification thresholds
5. Grid Layout - Ruled table reconstruction
6. Column Layout - Anchor column reconstruction
7. Address Normalization - Fuzzy matching policy and substitutions
8. Reference Data - Dictionary file names
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

RecordField = Literal[
    "application_number",
    "address",
    "description",
    "information_url",
    "comment_url",
    "scrape_date",
    "received_date",
    "legal_description",
]

StrategyName = Literal["grid", "column"]

# Field order used when records are persisted positionally
RECORD_FIELD_ORDER: tuple[str, ...] = (
    "application_number",
    "address",
    "description",
    "information_url",
    "comment_url",
    "scrape_date",
    "received_date",
    "legal_description",
)

# =============================================================================
# Record Defaults
# =============================================================================

DEFAULT_COMMENT_URL = "mailto:mail@dclep.sa.gov.au"
DEFAULT_INFORMATION_URL = ""
DEFAULT_DESCRIPTION = "No Description Provided"
OUTPUT_DATE_FORMAT = "%Y-%m-%d"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_PDF = [("pymupdf", "fitz", ">=1.26.4")]

# =============================================================================
# Page Decoding
# =============================================================================

# Filled rectangles this flat and this long are horizontal ruling lines
HORIZONTAL_LINE_MAX_HEIGHT = 2.0
HORIZONTAL_LINE_MIN_WIDTH = 200.0

# Vertical ruling lines may be short when a page holds few applications
VERTICAL_LINE_MAX_WIDTH = 2.0
VERTICAL_LINE_MIN_HEIGHT = 10.0

IDENTITY_TRANSFORM: tuple[float, float, float, float, float, float] = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

FILL_OPERATORS = frozenset({"fill", "eoFill", "fillStroke", "eoFillStroke"})
DISCARD_PATH_OPERATORS = frozenset({"stroke", "endPath"})

# =============================================================================
# Grid Layout
# =============================================================================

CELL_ROW_TOLERANCE = 2.0
ELEMENT_ROW_TOLERANCE = 1.0
CELL_OWNERSHIP_MIN_PERCENTAGE = 50.0
GRID_COLUMN_MIN_OVERLAP = 90.0

# Heading vocabulary: lowercase with all whitespace removed, in order of preference
GRID_HEADINGS: dict[str, tuple[str, ...]] = {
    "application_number": ("d/anumber",),
    "received_date": ("received",),
    "legal_description": ("allotmentor", "allotment/"),
    "street_name": ("streetname",),
    "suburb_name": ("town", "suburb"),
    "description": ("proposal",),
}
GRID_MANDATORY_HEADINGS: tuple[tuple[str, str], ...] = (
    ("application_number", "D/A Number"),
    ("street_name", "Street Name"),
    ("suburb_name", "Town"),
)

GRID_APPLICATION_NUMBER_PATTERN = re.compile(r"[0-9]+/[0-9]+/[0-9]+")
GRID_DATE_FORMAT = "%d/%m/%Y"
GRID_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{2}/\d{4}$")

# =============================================================================
# Column Layout
# =============================================================================

ANCHOR_BAND_WIDTH = 20.0
ANCHOR_COLUMN_MIN_OVERLAP = 0.0

# Heading vocabulary: uppercase letters only
COLUMN_HEADING_ROW_TOKEN = "DEVNO"
COLUMN_HEADINGS: dict[str, str] = {
    "received_date": "LODGED",
    "lot_number": "LOTNO",
    "house_number": "STNO",
    "street_name": "STNAME",
    "plan": "FPDP",
    "suburb_name": "SUBURBHDOF",
    "description": "DESCRIPTIONOFDEVELOPMENT",
}

COLUMN_DATE_FORMAT = "%d-%b-%y"
COLUMN_DATE_PATTERN = re.compile(r"^\d{1,2}-[A-Za-z]{3}-\d{2}$")

HUNDRED_PREFIX_PATTERN = re.compile(r"^HD ", re.IGNORECASE)

# =============================================================================
# Address Normalization
# =============================================================================

# Street names have at most five words; allow one errant space
STREET_WINDOW_MAX = 6
STREET_WINDOW_MIN = 2
STREET_THRESHOLD_BASE = 7
SUBURB_MATCH_THRESHOLD = 2

TERRACE_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    (" TCE NTH", " TERRACE NORTH"),
    (" TCE STH", " TERRACE SOUTH"),
    (" TCE EAST", " TERRACE EAST"),
    (" TCE WEST", " TERRACE WEST"),
)

MOUNT_PREFIX = "MOUNT "
MOUNT_ABBREVIATIONS: tuple[str, ...] = ("MT ", "MT.", "MT. ")

# =============================================================================
# Reference Data
# =============================================================================

STREET_NAMES_FILENAME = "streetnames.txt"
STREET_SUFFIXES_FILENAME = "streetsuffixes.txt"
SUBURB_NAMES_FILENAME = "suburbnames.txt"
