"""devapps - Read council development application registers into records.

devapps rebuilds the tables of a development application register PDF from
the page geometry alone: the ruling lines, the filled rectangles and the
position of every run of text. Two layouts are understood, a ruled grid and
an unruled table anchored on its leftmost column. Addresses are then
normalized against reference dictionaries of street names, street suffixes
and suburbs, tolerating small spelling errors.

Requirements
------------
- Python 3.10+
- PyMuPDF for reading PDF documents
- rapidfuzz for edit distance matching

Examples
--------
Basic usage:

    >>> from devapps import ReferenceDictionaries, parse_register
    >>> dictionaries = ReferenceDictionaries.from_directory("data")
    >>> for record in parse_register("register.pdf", dictionaries):
    ...     print(record.application_number, record.address)

Reading pages from another decoder:

    >>> from devapps.parsers import RegisterParser
    >>> records = RegisterParser(dictionaries).parse_pages(page_sources)

See Also
--------
devapps.address : Street and suburb normalization
devapps.parsers : Table reconstruction strategies

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "devapps requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from devapps.address import AddressNormalizer
from devapps.api import parse_register
from devapps.dictionaries import ReferenceDictionaries
from devapps.exceptions import DependencyError, DevAppsError, PageLayoutError, ParsingError, ReferenceDataError
from devapps.options.register import RegisterOptions
from devapps.progress import ProgressCallback, ProgressEvent
from devapps.records import ApplicationRecord, RecordAssembler, RecordUpdate

__all__ = [
    "__version__",
    "parse_register",
    "AddressNormalizer",
    "ApplicationRecord",
    "DependencyError",
    "DevAppsError",
    "PageLayoutError",
    "ParsingError",
    "ProgressCallback",
    "ProgressEvent",
    "RecordAssembler",
    "RecordUpdate",
    "ReferenceDataError",
    "ReferenceDictionaries",
    "RegisterOptions",
]
