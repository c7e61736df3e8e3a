#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/api.py
"""Public entry point for reading development application registers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Optional, Union

from devapps.dictionaries import ReferenceDictionaries
from devapps.options.register import RegisterOptions
from devapps.parsers.register import RegisterParser
from devapps.progress import ProgressCallback
from devapps.records import ApplicationRecord

logger = logging.getLogger(__name__)

__all__ = ["parse_register"]


def parse_register(
    source: Union[str, Path, IO[bytes], bytes, Any],
    dictionaries: ReferenceDictionaries,
    *,
    options: Optional[RegisterOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs: Any,
) -> list[ApplicationRecord]:
    """Read the development applications in a register document.

    Parameters
    ----------
    source : str, Path, IO[bytes], bytes, or fitz.Document
        The register PDF
    dictionaries : ReferenceDictionaries
        Street, suffix and suburb lookups used to normalize addresses
    options : RegisterOptions, optional
        Pre-configured parsing options
    progress_callback : ProgressCallback, optional
        Receives a ProgressEvent as parsing proceeds. See devapps.progress.
    kwargs : Any
        Individual option overrides, applied on top of ``options``
        (e.g. ``information_url=...``)

    Returns
    -------
    list[ApplicationRecord]
        Records with an application number and an address, in order of first
        appearance in the document

    Examples
    --------
        >>> dictionaries = ReferenceDictionaries.from_directory("data")
        >>> records = parse_register("register.pdf", dictionaries, information_url="https://example.org/register.pdf")
        >>> records[0].as_row()

    """
    options = options or RegisterOptions()
    if kwargs:
        logger.debug("Overriding register options: %s", ", ".join(sorted(kwargs)))
        options = options.create_updated(**kwargs)

    parser = RegisterParser(dictionaries, options=options, progress_callback=progress_callback)
    return parser.parse(source)
