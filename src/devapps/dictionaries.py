#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/dictionaries.py
"""Reference dictionaries of known street names, suffixes and suburbs.

The dictionaries are built once, frozen, and handed to the address normalizer.
They are usually loaded from three comma-separated text files:

- ``streetnames.txt``: ``STREET NAME,SUBURB`` (a street may appear once per
  suburb it runs through)
- ``streetsuffixes.txt``: ``ABBREVIATION,FULL WORD`` (e.g. ``ST,STREET``)
- ``suburbnames.txt``: ``SUBURB,SUBURB STATE POSTCODE``

Examples
--------
    >>> dictionaries = ReferenceDictionaries.from_directory("data")
    >>> dictionaries.street_suffixes["ST"]
    'STREET'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Union

from devapps.constants import (
    MOUNT_ABBREVIATIONS,
    MOUNT_PREFIX,
    STREET_NAMES_FILENAME,
    STREET_SUFFIXES_FILENAME,
    SUBURB_NAMES_FILENAME,
)
from devapps.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

__all__ = ["ReferenceDictionaries", "build_suburb_names"]

PathLike = Union[str, Path]


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ReferenceDictionaries:
    """Immutable lookup tables used by :class:`~devapps.address.AddressNormalizer`.

    Parameters
    ----------
    street_names : Mapping[str, tuple[str, ...]]
        Upper-case street name to the suburbs it appears in
    street_suffixes : Mapping[str, str]
        Upper-case suffix abbreviation to its full word
    suburb_names : Mapping[str, str]
        Upper-case suburb spelling to the canonical ``SUBURB STATE POSTCODE``

    Notes
    -----
    The mappings are wrapped in read-only proxies at construction, so one
    instance can be shared by every parse in a process.

    """

    street_names: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    street_suffixes: Mapping[str, str] = field(default_factory=dict)
    suburb_names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the mappings."""
        object.__setattr__(
            self, "street_names", _frozen({name: tuple(suburbs) for name, suburbs in self.street_names.items()})
        )
        object.__setattr__(self, "street_suffixes", _frozen(self.street_suffixes))
        object.__setattr__(self, "suburb_names", _frozen(self.suburb_names))

    @classmethod
    def from_lines(
        cls,
        street_name_lines: Iterable[str],
        street_suffix_lines: Iterable[str],
        suburb_name_lines: Iterable[str],
    ) -> ReferenceDictionaries:
        """Build dictionaries from the text lines of the three reference files."""
        street_names: dict[str, list[str]] = {}
        for street_name, suburb_name in _read_pairs(street_name_lines, STREET_NAMES_FILENAME):
            street_names.setdefault(street_name, []).append(suburb_name)

        street_suffixes = {
            abbreviation: word for abbreviation, word in _read_pairs(street_suffix_lines, STREET_SUFFIXES_FILENAME)
        }

        suburb_names = build_suburb_names(_read_pairs(suburb_name_lines, SUBURB_NAMES_FILENAME))

        return cls(
            street_names={name: tuple(suburbs) for name, suburbs in street_names.items()},
            street_suffixes=street_suffixes,
            suburb_names=suburb_names,
        )

    @classmethod
    def from_files(
        cls, street_names_path: PathLike, street_suffixes_path: PathLike, suburb_names_path: PathLike
    ) -> ReferenceDictionaries:
        """Load dictionaries from three comma-separated text files.

        Raises
        ------
        ReferenceDataError
            If a file cannot be read or contains a line without a comma

        """
        return cls.from_lines(
            _read_file(street_names_path),
            _read_file(street_suffixes_path),
            _read_file(suburb_names_path),
        )

    @classmethod
    def from_directory(cls, directory: PathLike) -> ReferenceDictionaries:
        """Load ``streetnames.txt``, ``streetsuffixes.txt`` and ``suburbnames.txt`` from a directory."""
        directory = Path(directory)
        dictionaries = cls.from_files(
            directory / STREET_NAMES_FILENAME,
            directory / STREET_SUFFIXES_FILENAME,
            directory / SUBURB_NAMES_FILENAME,
        )
        logger.debug(
            "Loaded %d street names, %d street suffixes and %d suburb names from %s",
            len(dictionaries.street_names),
            len(dictionaries.street_suffixes),
            len(dictionaries.suburb_names),
            directory,
        )
        return dictionaries


def build_suburb_names(entries: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Map each suburb, plus abbreviated spellings of "MOUNT" suburbs, to its suffix.

    Parameters
    ----------
    entries : Iterable[tuple[str, str]]
        ``(suburb, "SUBURB STATE POSTCODE")`` pairs, upper case

    Returns
    -------
    dict[str, str]
        Lookup including ``MT ``, ``MT.`` and ``MT. `` variants

    Examples
    --------
        >>> build_suburb_names([("MOUNT HOPE", "MOUNT HOPE SA 5607")])["MT. HOPE"]
        'MOUNT HOPE SA 5607'

    """
    suburb_names: dict[str, str] = {}
    for suburb_name, suffix in entries:
        suburb_names[suburb_name] = suffix
        if suburb_name.startswith(MOUNT_PREFIX):
            remainder = suburb_name[len(MOUNT_PREFIX) :]
            for abbreviation in MOUNT_ABBREVIATIONS:
                suburb_names[abbreviation + remainder] = suffix
    return suburb_names


def _read_file(path: PathLike) -> list[str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ReferenceDataError(
            f"Could not read reference dictionary {path}: {e}", file_path=str(path), original_error=e
        ) from e
    return text.replace("\r", "").strip().split("\n")


def _read_pairs(lines: Iterable[str], source: str) -> Iterator[tuple[str, str]]:
    """Yield ``(first, second)`` from upper-cased comma-separated lines."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        tokens = line.upper().split(",")
        if len(tokens) < 2:
            raise ReferenceDataError(
                f"Expected two comma-separated values in {source} line {line_number}: {line!r}",
                file_path=source,
                line_number=line_number,
            )
        yield tokens[0].strip(), tokens[1].strip()
