#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/records.py
"""Application records and the assembler that accumulates them.

Both table strategies report what they read from a row as a
:class:`RecordUpdate`. The :class:`RecordAssembler` folds updates into one
record per application number, in order of first appearance, and at the end
of the document drops records that lack an application number or address.

"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Iterator, Optional

from devapps.constants import (
    DEFAULT_COMMENT_URL,
    DEFAULT_DESCRIPTION,
    DEFAULT_INFORMATION_URL,
    RECORD_FIELD_ORDER,
)

logger = logging.getLogger(__name__)

__all__ = ["ApplicationRecord", "RecordAssembler", "RecordUpdate"]

MERGEABLE_FIELDS = frozenset({"address", "description", "received_date", "legal_description"})


@dataclass
class ApplicationRecord:
    """One development application read from a register.

    Parameters
    ----------
    application_number : str
        Council reference, for example ``"910/144/16"``; the record key
    address : str
        Normalized address, empty until a row supplies one
    description : str
        Description of the development
    information_url : str
        Where the register came from
    comment_url : str
        Where the public can comment
    scrape_date : str
        Date the register was read, ``YYYY-MM-DD``
    received_date : str
        Date the application was lodged, ``YYYY-MM-DD`` or empty
    legal_description : str
        Lot, plan and hundred, e.g. ``"Lot 12, Plan D1234, Hundred Yaranyacka"``

    """

    application_number: str
    address: str = ""
    description: str = DEFAULT_DESCRIPTION
    information_url: str = DEFAULT_INFORMATION_URL
    comment_url: str = DEFAULT_COMMENT_URL
    scrape_date: str = ""
    received_date: str = ""
    legal_description: str = ""

    @property
    def is_valid(self) -> bool:
        """True when both the application number and the address are present."""
        return bool(self.application_number) and bool(self.address)

    def as_row(self) -> tuple[str, ...]:
        """Return the field values in persisted column order."""
        return tuple(getattr(self, name) for name in RECORD_FIELD_ORDER)

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain dictionary."""
        return asdict(self)


@dataclass
class RecordUpdate:
    """Field values read from one table row.

    Parameters
    ----------
    application_number : str
        Key of the record to update
    fields : dict[str, str]
        Values for the fields the current headings define. Empty values are
        carried but never overwrite existing data.

    """

    application_number: str
    fields: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Reject field names that a row cannot set."""
        unknown = set(self.fields) - MERGEABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")


class RecordAssembler:
    """Accumulate record updates for one document and produce the final records.

    Parameters
    ----------
    information_url : str
        Information URL for new records
    comment_url : str
        Comment URL for new records
    scrape_date : str
        Scrape date for new records
    default_description : str
        Description for new records until a row supplies one

    """

    def __init__(
        self,
        information_url: str = DEFAULT_INFORMATION_URL,
        comment_url: str = DEFAULT_COMMENT_URL,
        scrape_date: str = "",
        default_description: str = DEFAULT_DESCRIPTION,
    ):
        """Initialize an empty assembler."""
        self.information_url = information_url
        self.comment_url = comment_url
        self.scrape_date = scrape_date
        self.default_description = default_description
        self._records: dict[str, ApplicationRecord] = {}

    def __len__(self) -> int:
        """Number of records seen so far, valid or not."""
        return len(self._records)

    def __iter__(self) -> Iterator[ApplicationRecord]:
        """Iterate records in first-insertion order."""
        return iter(self._records.values())

    def __contains__(self, application_number: object) -> bool:
        """Whether a record with this application number exists."""
        return application_number in self._records

    def get(self, application_number: str) -> Optional[ApplicationRecord]:
        """Return the record for an application number, if any."""
        return self._records.get(application_number)

    def merge(self, update: RecordUpdate) -> ApplicationRecord:
        """Apply an update, creating the record on first sight.

        Only non-empty values are written, so a field that was filled in by an
        earlier row is never cleared by a later one.

        Parameters
        ----------
        update : RecordUpdate
            Values read from one row

        Returns
        -------
        ApplicationRecord
            The created or updated record

        """
        record = self._records.get(update.application_number)
        if record is None:
            record = ApplicationRecord(
                application_number=update.application_number,
                description=self.default_description,
                information_url=self.information_url,
                comment_url=self.comment_url,
                scrape_date=self.scrape_date,
            )
            self._records[update.application_number] = record

        for name, value in update.fields.items():
            if value:
                setattr(record, name, value)

        return record

    def assemble(self) -> list[ApplicationRecord]:
        """Return the valid records in first-insertion order.

        Records with a blank application number or a blank address are
        dropped and logged, naming the previous valid application number so
        the offending row can be found in the document.

        Returns
        -------
        list[ApplicationRecord]
            Valid records

        """
        records: list[ApplicationRecord] = []
        previous_application_number: Optional[str] = None

        for record in self._records.values():
            context = (
                f"  The previous application number was {previous_application_number}."
                if previous_application_number is not None
                else ""
            )
            if not record.application_number:
                logger.info(f"Ignoring a development application because the application number was blank.{context}")
                continue
            if not record.address:
                logger.info(
                    f"Ignoring development application {record.application_number} because the address was blank "
                    f"(the street name or suburb name is blank).{context}"
                )
                continue

            previous_application_number = record.application_number
            records.append(record)

        return records
