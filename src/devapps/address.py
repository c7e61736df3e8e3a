#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/address.py
"""Address normalization against street and suburb reference dictionaries.

Register addresses are free text such as ``"12 MAIN ST, SOMETON"``. The
normalizer expands the street suffix, corrects small spelling errors in the
street and suburb names, and appends the suburb's state and postcode, giving
``"12 MAIN STREET, SOMETON SA 5000"``.

Neither method raises on unrecognized input: a street or suburb that cannot be
matched comes back unchanged, and the caller decides whether the result is
usable.

"""

from __future__ import annotations

import logging
from typing import Optional

from devapps.constants import (
    STREET_THRESHOLD_BASE,
    STREET_WINDOW_MAX,
    STREET_WINDOW_MIN,
    SUBURB_MATCH_THRESHOLD,
    TERRACE_SUBSTITUTIONS,
)
from devapps.dictionaries import ReferenceDictionaries
from devapps.utils.fuzzy import closest_match

logger = logging.getLogger(__name__)

__all__ = ["AddressNormalizer"]


class AddressNormalizer:
    """Format street names and addresses using injected reference dictionaries.

    Parameters
    ----------
    dictionaries : ReferenceDictionaries
        Known street names, street suffixes and suburb names

    Examples
    --------
        >>> normalizer = AddressNormalizer(dictionaries)
        >>> normalizer.format_address("12 MAIN ST, SOMETON")
        '12 MAIN STREET, SOMETON SA 5000'

    """

    def __init__(self, dictionaries: ReferenceDictionaries):
        """Initialize the normalizer with its lookup tables."""
        self.dictionaries = dictionaries
        self._street_candidates = tuple(dictionaries.street_names)
        self._suburb_candidates = tuple(dictionaries.suburb_names)

    def format_street_name(self, text: Optional[str]) -> Optional[str]:
        """Expand the suffix and correct the street name at the end of ``text``.

        Leading tokens (house numbers, unit numbers and so on) are preserved.
        Trailing windows of 6 down to 2 tokens are first looked up exactly;
        failing that, the same windows are matched fuzzily with ``7 - size``
        allowed edits, so shorter windows tolerate more errors.

        Parameters
        ----------
        text : str or None
            Street text, e.g. ``"12 MAIN ST"``

        Returns
        -------
        str or None
            The upper-cased street with a canonical name, or ``text`` unchanged
            if no window matched

        """
        if text is None or not text.strip():
            return text

        tokens = text.strip().upper().split(" ")

        # Expand the street suffix, for example "ST" to "STREET"
        suffix = tokens.pop()
        tokens.append(self.dictionaries.street_suffixes.get(suffix, suffix))

        for size in range(STREET_WINDOW_MAX, STREET_WINDOW_MIN - 1, -1):
            if " ".join(tokens[-size:]) in self.dictionaries.street_names:
                return " ".join(tokens)

        for size in range(STREET_WINDOW_MAX, STREET_WINDOW_MIN - 1, -1):
            threshold = STREET_THRESHOLD_BASE - size
            window = " ".join(tokens[-size:])
            street_name = closest_match(window, self._street_candidates, threshold)
            if street_name is not None:
                logger.debug("Corrected street name %r to %r", window, street_name)
                return (" ".join(tokens[:-size]) + " " + street_name).strip()

        return text

    def format_address(self, address: str) -> str:
        """Normalize ``"street, suburb"`` into ``"STREET, SUBURB STATE POSTCODE"``.

        Parameters
        ----------
        address : str
            Raw address; the last comma separates the street from the suburb

        Returns
        -------
        str
            The normalized address, or the trimmed input when it has no comma
            or the suburb is not recognized

        """
        address = address.strip()
        for abbreviation, expansion in TERRACE_SUBSTITUTIONS:
            address = address.replace(abbreviation, expansion)

        comma_index = address.rfind(",")
        if comma_index < 0:
            return address

        street_name = address[:comma_index]
        suburb_name = closest_match(address[comma_index + 1 :], self._suburb_candidates, SUBURB_MATCH_THRESHOLD)
        if suburb_name is None:
            logger.debug("No suburb matches %r", address[comma_index + 1 :].strip())
            return address

        return f"{self.format_street_name(street_name)}, {self.dictionaries.suburb_names[suburb_name]}"
