#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/utils/inputs.py
"""Input validation helpers for register documents."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Union

from devapps.exceptions import PageRangeError, ValidationError

__all__ = ["load_document_bytes", "parse_page_ranges", "validate_page_range"]


def parse_page_ranges(page_spec: str, total_pages: int) -> list[int]:
    """Parse page range specification into list of 0-based page indices.

    Supports various formats:
    - "1-3" → [0, 1, 2]
    - "5" → [4]
    - "10-" → [9, 10, ..., total_pages-1]
    - "1-3,5,10-" → combined ranges

    Reversed ranges (where start > end) are swapped.

    Parameters
    ----------
    page_spec : str
        Page range specification (1-based page numbers)
    total_pages : int
        Total number of pages in document

    Returns
    -------
    list of int
        Sorted list of 0-based page indices

    Examples
    --------
    >>> parse_page_ranges("1-3,5", 10)
    [0, 1, 2, 4]
    >>> parse_page_ranges("8-", 10)
    [7, 8, 9]

    """
    pages = set()

    for part in page_spec.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            start_str, end_str = (value.strip() for value in part.split("-", 1))
            start = int(start_str) - 1 if start_str else 0
            end = int(end_str) - 1 if end_str else total_pages - 1

            if start > end:
                start, end = end, start

            pages.update(p for p in range(start, end + 1) if 0 <= p < total_pages)
        else:
            page = int(part) - 1
            if 0 <= page < total_pages:
                pages.add(page)

    return sorted(pages)


def validate_page_range(pages: list[int] | str | None, max_pages: int | None = None) -> list[int] | None:
    """Validate and normalize a page range specification.

    All page numbers are 1-based and converted to 0-based indices.

    Parameters
    ----------
    pages : list[int], str, or None
        Page specification (1-based):
        - list[int]: List of page numbers [1, 2, 3]
        - str: Page range string, e.g. "1-3,5,10-"
        - None: Use all pages
    max_pages : int or None, optional
        Maximum number of pages available for validation

    Returns
    -------
    list[int] or None
        Validated list of 0-based page indices, or None if input was None

    Raises
    ------
    PageRangeError
        If page numbers are invalid or out of range

    Examples
    --------
    >>> validate_page_range([1, 2, 3], max_pages=5)
    [0, 1, 2]
    >>> validate_page_range("1-3,5", max_pages=10)
    [0, 1, 2, 4]

    """
    if pages is None:
        return None

    if isinstance(pages, str):
        if max_pages is None:
            raise PageRangeError(
                "Cannot parse page range string without knowing document page count",
                parameter_value=pages,
            )
        try:
            pages = parse_page_ranges(pages, max_pages)
        except ValueError as e:
            raise PageRangeError(
                f"Invalid page range format: {str(e)}. Use format like '1-3,5,10-'",
                parameter_value=pages,
            ) from e
        return pages

    if not isinstance(pages, list):
        raise PageRangeError(
            f"Pages must be a list of integers or a string range, got {type(pages).__name__}",
            parameter_value=pages,
        )

    converted_pages = []
    for page_num in pages:
        if not isinstance(page_num, int):
            raise PageRangeError(
                f"Page numbers must be integers, got {type(page_num).__name__}: {page_num}",
                parameter_value=pages,
            )

        if page_num < 1:
            raise PageRangeError(
                f"Invalid page number: {page_num}. Pages must be >= 1 (1-based indexing).",
                parameter_value=pages,
            )

        if max_pages is not None and page_num > max_pages:
            raise PageRangeError(
                f"Page number {page_num} is out of range. Document has {max_pages} pages (1-{max_pages}).",
                parameter_value=pages,
            )

        converted_pages.append(page_num - 1)

    return converted_pages


def load_document_bytes(input_data: Union[str, Path, IO[bytes], bytes]) -> bytes:
    """Load a register document as bytes from a path, stream or buffer.

    Parameters
    ----------
    input_data : str, Path, IO[bytes], or bytes
        Input data to load

    Returns
    -------
    bytes
        Raw document bytes

    Raises
    ------
    ValidationError
        If the input type is not supported

    """
    if isinstance(input_data, (bytes, bytearray)):
        return bytes(input_data)
    if isinstance(input_data, (str, Path)):
        return Path(input_data).read_bytes()
    if hasattr(input_data, "read"):
        if hasattr(input_data, "seek"):
            input_data.seek(0)
        data = input_data.read()
        if isinstance(data, str):
            raise ValidationError(
                "Register documents must be opened in binary mode",
                parameter_name="input_data",
                parameter_value=input_data,
            )
        return data
    raise ValidationError(
        f"Unsupported input type: {type(input_data).__name__}",
        parameter_name="input_data",
        parameter_value=input_data,
    )
