#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_decorators.py
"""Unit tests for the dependency guard and the debug timer."""

import logging
from unittest.mock import patch

import pytest

from devapps.exceptions import DependencyError
from devapps.utils.decorators import debug_timer, requires_dependencies


@pytest.mark.unit
class TestRequiresDependencies:
    """Tests for requires_dependencies()."""

    def test_available_package_runs_method(self):
        """The wrapped method runs when every package imports and satisfies its spec."""

        @requires_dependencies("pdf", [("packaging", "packaging", ">=1.0")])
        def parse(value):
            return value * 2

        assert parse(21) == 42

    def test_missing_package(self):
        """A package that cannot be imported is reported with an install hint."""

        @requires_dependencies("pdf", [("devapps-missing", "devapps_missing_module", ">=1.0")])
        def parse():
            raise AssertionError("should not run")

        with pytest.raises(DependencyError) as exc_info:
            parse()

        assert exc_info.value.missing_packages == [("devapps-missing", ">=1.0")]
        assert isinstance(exc_info.value.original_import_error, ImportError)
        assert 'pip install --upgrade "devapps[pdf]"' in str(exc_info.value)

    def test_version_mismatch(self):
        """An installed version outside the spec is reported."""

        @requires_dependencies("pdf", [("packaging", "packaging", ">=9999")])
        def parse():
            raise AssertionError("should not run")

        with pytest.raises(DependencyError, match="version mismatches"):
            parse()

    def test_unknown_distribution_version(self):
        """A module that imports but has no distribution metadata fails a version spec."""
        with patch("devapps.utils.decorators._installed_version", return_value=None):

            @requires_dependencies("pdf", [("pymupdf", "json", ">=1.26.4")])
            def parse():
                raise AssertionError("should not run")

            with pytest.raises(DependencyError) as exc_info:
                parse()

        assert exc_info.value.version_mismatches == [("pymupdf", ">=1.26.4", "unknown")]

    def test_empty_spec_accepts_any_version(self):
        """Without a version spec only the import is checked."""

        @requires_dependencies("pdf", [("not-installed-anywhere", "json", "")])
        def parse():
            return "parsed"

        assert parse() == "parsed"


@pytest.mark.unit
class TestDebugTimer:
    """Tests for debug_timer()."""

    def test_logs_at_debug(self, caplog):
        """The elapsed time is logged when DEBUG is enabled."""
        logger = logging.getLogger("devapps.test.timer")
        with caplog.at_level(logging.DEBUG, logger="devapps.test.timer"):
            with debug_timer(logger, "Decoding 3 pages"):
                pass
        assert "Decoding 3 pages completed in" in caplog.text

    def test_silent_above_debug(self, caplog):
        """Nothing is logged when DEBUG is disabled."""
        logger = logging.getLogger("devapps.test.timer")
        with caplog.at_level(logging.INFO, logger="devapps.test.timer"):
            with debug_timer(logger, "Decoding 3 pages"):
                pass
        assert caplog.text == ""
