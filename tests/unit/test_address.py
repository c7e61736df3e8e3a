#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_address.py
"""Unit tests for address normalization.

Tests cover:
- Street suffix expansion and exact street name lookup
- Fuzzy street name correction within the window thresholds
- Suburb matching, including abbreviated "Mount" suburbs
- Terrace direction substitutions
- Inputs that cannot be normalized

"""

import pytest

from devapps.address import AddressNormalizer
from devapps.dictionaries import ReferenceDictionaries


@pytest.mark.unit
class TestFormatStreetName:
    """Tests for AddressNormalizer.format_street_name()."""

    def test_expands_suffix(self, normalizer):
        """The suffix abbreviation is expanded and the house number kept."""
        assert normalizer.format_street_name("12 MAIN ST") == "12 MAIN STREET"

    def test_uppercases(self, normalizer):
        """Matched street names come back upper case."""
        assert normalizer.format_street_name("12 main st") == "12 MAIN STREET"

    def test_keeps_leading_tokens(self, normalizer):
        """Unit and lot prefixes before the street name are preserved."""
        assert normalizer.format_street_name("UNIT 4 12 PORT WAKEFIELD RD") == "UNIT 4 12 PORT WAKEFIELD ROAD"

    def test_corrects_transposition(self, normalizer):
        """A transposed street name is corrected within the two-word threshold."""
        assert normalizer.format_street_name("12 MIAN STREET") == "12 MAIN STREET"

    def test_corrects_after_suffix_expansion(self, normalizer):
        """Correction happens after the suffix has been expanded."""
        assert normalizer.format_street_name("12 HIHG ST") == "12 HIGH STREET"

    def test_unmatched_street_is_returned_unchanged(self, normalizer):
        """A street that matches nothing is returned exactly as given."""
        assert normalizer.format_street_name("7 Xylophone Quay") == "7 Xylophone Quay"

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_input(self, normalizer, text):
        """Blank or missing text is returned as is."""
        assert normalizer.format_street_name(text) == text

    def test_longer_windows_need_closer_matches(self):
        """A six-word window only tolerates one edit."""
        dictionaries = ReferenceDictionaries(street_names={"ONE TWO THREE FOUR FIVE SIX": ("SOMETON",)})
        normalizer = AddressNormalizer(dictionaries)
        assert normalizer.format_street_name("ONE TWO THREE FOUR FIVE SIXX") == "ONE TWO THREE FOUR FIVE SIX"
        assert normalizer.format_street_name("ONE TWO THREE FOUR FIVE SIXXX") == "ONE TWO THREE FOUR FIVE SIXXX"


@pytest.mark.unit
class TestFormatAddress:
    """Tests for AddressNormalizer.format_address()."""

    def test_full_address(self, normalizer):
        """Street and suburb are normalized and the state and postcode appended."""
        assert normalizer.format_address("12 MAIN ST, SOMETON") == "12 MAIN STREET, SOMETON SA 5000"

    def test_misspelled_suburb(self, normalizer):
        """Suburbs within two edits are corrected."""
        assert normalizer.format_address("12 MAIN ST, SOMETNO") == "12 MAIN STREET, SOMETON SA 5000"

    def test_mount_abbreviation(self, normalizer):
        """Abbreviated "MT" spellings of "MOUNT" suburbs are recognized."""
        assert normalizer.format_address("3 BAY RD, MT HOPE") == "3 BAY ROAD, MOUNT HOPE SA 5607"
        assert normalizer.format_address("3 BAY RD, MT. HOPE") == "3 BAY ROAD, MOUNT HOPE SA 5607"

    def test_terrace_direction(self, normalizer):
        """Abbreviated terrace directions are spelled out before matching."""
        assert normalizer.format_address("5 FIRST TCE NTH, SOMETON") == "5 FIRST TERRACE NORTH, SOMETON SA 5000"

    def test_last_comma_separates_suburb(self, normalizer):
        """Only the last comma splits the street from the suburb."""
        assert normalizer.format_address("LOT 1, 12 MAIN ST, PORT TOWN") == "LOT 1, 12 MAIN STREET, PORT TOWN SA 5001"

    def test_no_comma(self, normalizer):
        """Without a comma the trimmed input is returned."""
        assert normalizer.format_address("  12 MAIN ST SOMETON  ") == "12 MAIN ST SOMETON"

    def test_unknown_suburb(self, normalizer):
        """An unrecognized suburb leaves the address as given."""
        assert normalizer.format_address("12 MAIN ST, NOWHERESVILLE") == "12 MAIN ST, NOWHERESVILLE"

    def test_unmatched_street_keeps_suburb(self, normalizer):
        """A street that matches nothing is kept while the suburb is still normalized."""
        assert normalizer.format_address("7 Xylophone Quay, CLARE") == "7 Xylophone Quay, CLARE SA 5453"

    def test_empty(self, normalizer):
        """Empty input stays empty."""
        assert normalizer.format_address("") == ""
