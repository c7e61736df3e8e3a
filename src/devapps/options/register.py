#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/options/register.py
"""Configuration options for development application register parsing.

This module defines options for reading register PDFs into application
records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from devapps.constants import (
    DEFAULT_COMMENT_URL,
    DEFAULT_DESCRIPTION,
    DEFAULT_INFORMATION_URL,
    OUTPUT_DATE_FORMAT,
)
from devapps.options.base import BaseParserOptions


@dataclass(frozen=True)
class RegisterOptions(BaseParserOptions):
    """Configuration options for register-to-records parsing.

    Parameters
    ----------
    information_url : str, default ""
        URL recorded as every record's information link, normally the URL the
        register document was downloaded from.
    comment_url : str, default "mailto:mail@dclep.sa.gov.au"
        Where the public can comment on an application.
    scrape_date : str or None, default None
        Date stamped on every record (``YYYY-MM-DD``). If None, today's date
        is used.
    default_description : str, default "No Description Provided"
        Description given to applications whose description column is blank.
    pages : list[int], str, or None, default None
        Pages to read (1-based), as a list or a range string like "1-3,5".
        If None, reads all pages.
    password : str or None, default None
        Password for encrypted register documents.

    Examples
    --------
        >>> options = RegisterOptions(information_url="https://example.org/register.pdf")
        >>> options = options.create_updated(pages="1-2")

    """

    information_url: str = field(
        default=DEFAULT_INFORMATION_URL,
        metadata={"help": "Information URL written into every record", "importance": "core"},
    )
    comment_url: str = field(
        default=DEFAULT_COMMENT_URL,
        metadata={"help": "Comment URL written into every record", "importance": "core"},
    )
    scrape_date: str | None = field(
        default=None,
        metadata={"help": "Scrape date (YYYY-MM-DD) for every record; defaults to today", "importance": "advanced"},
    )
    default_description: str = field(
        default=DEFAULT_DESCRIPTION,
        metadata={"help": "Description used when an application has none", "importance": "advanced"},
    )
    pages: list[int] | str | None = field(
        default=None,
        metadata={
            "help": "Pages to read. Supports ranges: '1-3,5,10-' or list like [1,2,3]. Always 1-based.",
            "type": str,
            "importance": "core",
        },
    )
    password: str | None = field(
        default=None,
        metadata={"help": "Password for encrypted register documents", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the scrape date and explicit page numbers.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.scrape_date is not None:
            try:
                date.fromisoformat(self.scrape_date)
            except ValueError as e:
                raise ValueError(f"scrape_date must be formatted as YYYY-MM-DD, got {self.scrape_date!r}") from e

        if isinstance(self.pages, list) and any(not isinstance(p, int) or p < 1 for p in self.pages):
            raise ValueError(f"pages must contain 1-based integers, got {self.pages}")

    def resolved_scrape_date(self) -> str:
        """Return the configured scrape date, or today's date."""
        return self.scrape_date or date.today().strftime(OUTPUT_DATE_FORMAT)
