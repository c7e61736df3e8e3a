#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/parsers/register.py
"""Development application register parser.

This module reads a council development application register (a PDF of one or
more tables of applications) into :class:`~devapps.records.ApplicationRecord`
objects.

Every page is decoded into ruling lines, cells and text elements first. If any
page carries a ruled grid the whole document is read with the grid strategy,
otherwise with the anchor column strategy. Pages whose table cannot be
reconstructed are logged and skipped; the rest of the document is still read.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Iterable, Optional, Sequence, Union

from devapps.address import AddressNormalizer
from devapps.constants import DEPS_PDF
from devapps.dictionaries import ReferenceDictionaries
from devapps.exceptions import (
    MalformedFileError,
    PageLayoutError,
    PasswordProtectedError,
    ValidationError,
)
from devapps.options.register import RegisterOptions
from devapps.parsers._columns import ColumnSynthesizer
from devapps.parsers._grid import GridSynthesizer
from devapps.parsers._page_content import DecodedPage, decode_page
from devapps.parsers._pdf_source import PyMuPDFPageSource
from devapps.parsers.base import BaseParser, PageSource, PageSynthesizer
from devapps.progress import ProgressCallback
from devapps.records import ApplicationRecord, RecordAssembler
from devapps.utils.decorators import debug_timer, requires_dependencies
from devapps.utils.inputs import load_document_bytes, validate_page_range

logger = logging.getLogger(__name__)

__all__ = ["RegisterParser", "select_synthesizer"]


def select_synthesizer(pages: Sequence[DecodedPage], normalizer: AddressNormalizer) -> PageSynthesizer:
    """Choose the table strategy for a whole document.

    Parameters
    ----------
    pages : Sequence[DecodedPage]
        Every decoded page of the document
    normalizer : AddressNormalizer
        Address normalizer handed to the strategy

    Returns
    -------
    PageSynthesizer
        A grid synthesizer if any page has both horizontal and vertical ruling
        lines, otherwise a fresh column synthesizer

    """
    if any(page.has_grid for page in pages):
        return GridSynthesizer(normalizer)
    return ColumnSynthesizer(normalizer)


class RegisterParser(BaseParser):
    """Read development application records from a register document.

    Parameters
    ----------
    dictionaries : ReferenceDictionaries
        Street, suffix and suburb lookups for address normalization
    options : RegisterOptions or None, default = None
        Parsing options
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates

    Examples
    --------
        >>> parser = RegisterParser(dictionaries, RegisterOptions(information_url=url))
        >>> for record in parser.parse("register.pdf"):
        ...     print(record.application_number, record.address)

    """

    def __init__(
        self,
        dictionaries: ReferenceDictionaries,
        options: RegisterOptions | None = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        """Initialize the register parser."""
        BaseParser._validate_options_type(options, RegisterOptions, "register")
        options = options or RegisterOptions()
        super().__init__(options, progress_callback)
        self.options: RegisterOptions = options
        self.dictionaries = dictionaries
        self.normalizer = AddressNormalizer(dictionaries)

    @requires_dependencies("pdf", DEPS_PDF)
    def parse(self, input_data: Union[str, Path, IO[bytes], bytes, Any]) -> list[ApplicationRecord]:
        """Parse a register PDF into application records.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], bytes, or fitz.Document
            The register document

        Returns
        -------
        list[ApplicationRecord]
            Valid records in order of first appearance

        Raises
        ------
        DependencyError
            If the ``pdf`` extra (PyMuPDF) is not installed
        MalformedFileError
            If the document cannot be opened
        PasswordProtectedError
            If the document is encrypted and no correct password was given
        ValidationError
            If the input type or page selection is invalid

        """
        import fitz

        filename = str(input_data) if isinstance(input_data, (str, Path)) else None
        owns_document = True

        if hasattr(input_data, "page_count") and hasattr(input_data, "__getitem__"):
            doc = input_data
            owns_document = False
        else:
            stream_bytes = None if filename is not None else load_document_bytes(input_data)
            try:
                if filename is not None:
                    doc = fitz.open(filename=filename)
                else:
                    doc = fitz.open(stream=stream_bytes, filetype="pdf")
            except Exception as e:
                raise MalformedFileError(
                    f"Failed to open register document: {e!r}", file_path=filename, original_error=e
                ) from e

        try:
            if doc.is_encrypted:
                if not self.options.password:
                    raise PasswordProtectedError(
                        message=(
                            "Register document is password-protected. "
                            "Please provide a password using the 'password' option."
                        ),
                        filename=filename,
                    )
                if doc.authenticate(self.options.password) == 0:
                    raise PasswordProtectedError(
                        message="Failed to authenticate register document with provided password.",
                        filename=filename,
                    )

            try:
                validated_pages = validate_page_range(self.options.pages, doc.page_count)
            except Exception as e:
                raise ValidationError(
                    f"Invalid page range: {str(e)}", parameter_name="register.pages", parameter_value=self.options.pages
                ) from e
            page_indices = validated_pages if validated_pages is not None else list(range(doc.page_count))

            source = filename or self.options.information_url or "document"
            logger.info(f"Reading development applications from {source}.")
            return self.parse_pages(
                [PyMuPDFPageSource(doc[index]) for index in page_indices],
                page_numbers=[index + 1 for index in page_indices],
                total_pages=doc.page_count,
            )
        finally:
            if owns_document:
                doc.close()

    def parse_pages(
        self,
        pages: Iterable[PageSource],
        page_numbers: Sequence[int] | None = None,
        total_pages: int | None = None,
    ) -> list[ApplicationRecord]:
        """Read application records from already opened pages.

        Parameters
        ----------
        pages : Iterable[PageSource]
            Pages in document order
        page_numbers : Sequence[int] or None, default = None
            1-based page numbers for logging; defaults to 1, 2, ...
        total_pages : int or None, default = None
            Page count of the whole document for logging; defaults to the
            number of pages given

        Returns
        -------
        list[ApplicationRecord]
            Valid records in order of first appearance

        """
        pages = list(pages)
        if page_numbers is None:
            page_numbers = range(1, len(pages) + 1)
        if total_pages is None:
            total_pages = len(pages)

        self._emit_progress("started", "Parsing register", current=0, total=len(pages))

        with debug_timer(logger, f"Decoding {len(pages)} pages"):
            decoded_pages = [
                decode_page(page.instructions(), page.text_runs(), page_number)
                for page, page_number in zip(pages, page_numbers)
            ]

        synthesizer = select_synthesizer(decoded_pages, self.normalizer)
        logger.debug("Using the %s strategy", synthesizer.name)
        self._emit_progress(
            "detected",
            f"Using the {synthesizer.name} strategy",
            total=len(pages),
            detected_type="strategy",
            strategy=synthesizer.name,
        )

        assembler = RecordAssembler(
            information_url=self.options.information_url,
            comment_url=self.options.comment_url,
            scrape_date=self.options.resolved_scrape_date(),
            default_description=self.options.default_description,
        )

        for position, page in enumerate(decoded_pages, start=1):
            logger.info(f"Reading and parsing applications from page {page.number} of {total_pages}.")
            try:
                updates = synthesizer.synthesize(page)
            except PageLayoutError as e:
                logger.info(str(e))
                self._emit_progress(
                    "error",
                    f"Skipped page {page.number}",
                    current=position,
                    total=len(decoded_pages),
                    error=e.message,
                    page=page.number,
                )
                continue

            for update in updates:
                assembler.merge(update)

            self._emit_progress(
                "item_done",
                f"Page {page.number} parsed",
                current=position,
                total=len(decoded_pages),
                item_type="page",
                page=page.number,
                updates=len(updates),
            )

        records = assembler.assemble()
        self._emit_progress(
            "finished",
            "Register parsing completed",
            current=len(decoded_pages),
            total=len(decoded_pages),
            records=len(records),
        )
        return records
