#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/utils/fuzzy.py
"""Edit-distance lookup for misspelled street and suburb names.

The register documents are typed by hand, so street and suburb names arrive
with transpositions, dropped letters and stray spaces. This module answers the
question "which known name did the clerk mean?" within a bounded number of
edits.

"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from rapidfuzz.distance import Levenshtein

__all__ = ["closest_match", "normalize_for_match"]

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_for_match(text: str) -> str:
    """Lowercase, trim and collapse whitespace runs to a single space.

    Parameters
    ----------
    text : str
        Text to normalize

    Returns
    -------
    str
        Comparison key for ``text``

    """
    return _WHITESPACE_RUN.sub(" ", text.strip()).lower()


def closest_match(text: str, candidates: Iterable[str], threshold: int) -> Optional[str]:
    """Return the first candidate with the smallest edit distance to ``text``.

    Matching is case-insensitive and ignores leading, trailing and repeated
    whitespace. Only candidates within ``threshold`` edits are considered; when
    several candidates share the smallest distance, the one that comes first in
    ``candidates`` wins.

    Parameters
    ----------
    text : str
        Possibly misspelled input
    candidates : Iterable[str]
        Known spellings, in priority order
    threshold : int
        Maximum Levenshtein distance accepted

    Returns
    -------
    str or None
        The matching candidate exactly as given, or None if nothing is close
        enough

    Examples
    --------
        >>> closest_match("mian street", ["MAIN STREET", "MAINS STREET"], 2)
        'MAIN STREET'
        >>> closest_match("elsewhere", ["MAIN STREET"], 2) is None
        True

    """
    if threshold < 0:
        return None

    key = normalize_for_match(text)
    best: Optional[str] = None
    best_distance = threshold + 1

    for candidate in candidates:
        # score_cutoff lets rapidfuzz bail out once the distance cannot win
        distance = Levenshtein.distance(key, normalize_for_match(candidate), score_cutoff=best_distance - 1)
        if distance < best_distance:
            best = candidate
            best_distance = distance
            if distance == 0:
                break

    return best
