"""Pytest configuration and shared fixtures for the devapps test suite.

This module provides the reference dictionaries and address normalizer shared
by the unit tests, and the Hypothesis profiles used by property-based tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from devapps.address import AddressNormalizer
from devapps.dictionaries import ReferenceDictionaries

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

STREET_NAME_LINES = [
    "MAIN STREET,SOMETON",
    "MAIN STREET,PORT TOWN",
    "HIGH STREET,SOMETON",
    "BAY ROAD,PORT TOWN",
    "FIRST TERRACE NORTH,SOMETON",
    "PORT WAKEFIELD ROAD,PORT TOWN",
]

STREET_SUFFIX_LINES = [
    "ST,STREET",
    "RD,ROAD",
    "TCE,TERRACE",
    "AVE,AVENUE",
]

SUBURB_NAME_LINES = [
    "SOMETON,SOMETON SA 5000",
    "PORT TOWN,PORT TOWN SA 5001",
    "MOUNT HOPE,MOUNT HOPE SA 5607",
    "CLARE,CLARE SA 5453",
    "EMU FLAT,EMU FLAT SA 5453",
]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - real PDF documents parsed end to end")


@pytest.fixture
def dictionaries() -> ReferenceDictionaries:
    """Provide small street, suffix and suburb dictionaries.

    Returns
    -------
    ReferenceDictionaries
        Dictionaries covering the streets and suburbs used across the tests.

    """
    return ReferenceDictionaries.from_lines(STREET_NAME_LINES, STREET_SUFFIX_LINES, SUBURB_NAME_LINES)


@pytest.fixture
def normalizer(dictionaries) -> AddressNormalizer:
    """Provide an address normalizer over the shared dictionaries."""
    return AddressNormalizer(dictionaries)


@pytest.fixture
def reference_dir(tmp_path):
    """Provide a directory holding the three reference dictionary files."""
    (tmp_path / "streetnames.txt").write_text("\n".join(STREET_NAME_LINES) + "\n", encoding="utf-8")
    (tmp_path / "streetsuffixes.txt").write_text("\r\n".join(STREET_SUFFIX_LINES), encoding="utf-8")
    (tmp_path / "suburbnames.txt").write_text("\n".join(SUBURB_NAME_LINES) + "\n\n", encoding="utf-8")
    return tmp_path
