#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/parsers/base.py
"""Base classes for register parsing.

This module defines the two seams of the reconstruction pipeline:

- :class:`PageSource` is anything that can hand over one page's drawing
  instructions and positioned text runs (the PyMuPDF adapter, or a test
  double).
- :class:`PageSynthesizer` turns a decoded page into record updates. The grid
  and column strategies are its two implementations; one is chosen per
  document.

:class:`BaseParser` carries the option and progress plumbing shared by
parsers.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Optional, Protocol, runtime_checkable

from devapps.exceptions import InvalidOptionsError
from devapps.options.base import BaseParserOptions
from devapps.progress import ProgressCallback, ProgressEvent

if TYPE_CHECKING:
    from devapps.parsers._page_content import DecodedPage, Instruction, TextRun
    from devapps.records import RecordUpdate

logger = logging.getLogger(__name__)


@runtime_checkable
class PageSource(Protocol):
    """One page of a register document, as seen by the decoder."""

    def instructions(self) -> Iterable[Instruction]:
        """Return the page's drawing operations in content-stream order."""
        ...

    def text_runs(self) -> Iterable[TextRun]:
        """Return the page's positioned text runs."""
        ...


class PageSynthesizer(ABC):
    """Turn one decoded page into record updates.

    Implementations may keep state between pages of the same document (the
    column strategy remembers its headings), so a fresh instance is created for
    every document.

    """

    name: str = ""

    @abstractmethod
    def synthesize(self, page: DecodedPage) -> list[RecordUpdate]:
        """Read the application rows of a page.

        Parameters
        ----------
        page : DecodedPage
            Cells and elements of the page, in reading space

        Returns
        -------
        list[RecordUpdate]
            One update per application row, in reading order

        Raises
        ------
        PageLayoutError
            If no table can be reconstructed from the page

        """
        raise NotImplementedError


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates during parsing

    """

    def __init__(self, options: BaseParserOptions | None = None, progress_callback: Optional[ProgressCallback] = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options
        self.progress_callback: Optional[ProgressCallback] = progress_callback

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                parser_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: Any) -> Any:
        """Parse the input document."""
        raise NotImplementedError

    def _emit_progress(self, event_type: str, message: str, current: int = 0, total: int = 0, **metadata: Any) -> None:
        """Emit a progress event to the callback if registered.

        If the callback raises an exception, it is caught and logged so that
        parsing is never interrupted by a faulty callback.

        Examples
        --------
        Emit an item done event (page):
            >>> self._emit_progress("item_done", f"Page {n}", current=n, total=10, item_type="page", page=n)

        """
        if not self.progress_callback:
            return

        try:
            event = ProgressEvent(
                event_type=event_type,  # type: ignore[arg-type]
                message=message,
                current=current,
                total=total,
                metadata=metadata,
            )
            self.progress_callback(event)
        except Exception as e:
            logger.warning(f"Progress callback raised exception: {e}", exc_info=True)
