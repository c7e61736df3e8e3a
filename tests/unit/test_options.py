#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_options.py
"""Unit tests for register parsing options."""

from datetime import date

import pytest

from devapps.options import RegisterOptions


@pytest.mark.unit
class TestRegisterOptions:
    """Tests for RegisterOptions."""

    def test_defaults(self):
        """Defaults match the register's published contact details."""
        options = RegisterOptions()
        assert options.information_url == ""
        assert options.comment_url == "mailto:mail@dclep.sa.gov.au"
        assert options.default_description == "No Description Provided"
        assert options.pages is None
        assert options.password is None

    def test_resolved_scrape_date_defaults_to_today(self):
        """Without a scrape date today's date is used."""
        assert RegisterOptions().resolved_scrape_date() == date.today().strftime("%Y-%m-%d")

    def test_explicit_scrape_date(self):
        """An explicit scrape date is used as given."""
        assert RegisterOptions(scrape_date="2024-01-31").resolved_scrape_date() == "2024-01-31"

    def test_invalid_scrape_date(self):
        """Scrape dates must be ISO formatted."""
        with pytest.raises(ValueError, match="scrape_date"):
            RegisterOptions(scrape_date="31/01/2024")

    @pytest.mark.parametrize("pages", [[0], [1, -2], [1, "2"]])
    def test_invalid_pages(self, pages):
        """Explicit page lists must hold 1-based integers."""
        with pytest.raises(ValueError, match="pages"):
            RegisterOptions(pages=pages)

    def test_page_range_string_is_accepted(self):
        """Range strings are validated once the page count is known."""
        assert RegisterOptions(pages="1-3,5").pages == "1-3,5"

    def test_create_updated(self):
        """Updating returns a modified copy and leaves the original alone."""
        options = RegisterOptions(information_url="https://example.org/a.pdf")
        updated = options.create_updated(information_url="https://example.org/b.pdf")

        assert updated.information_url == "https://example.org/b.pdf"
        assert options.information_url == "https://example.org/a.pdf"
        assert updated.comment_url == options.comment_url

    def test_frozen(self):
        """Options cannot be modified in place."""
        with pytest.raises(AttributeError):
            RegisterOptions().password = "secret"

    def test_fields_carry_help(self):
        """Every option documents itself through field metadata."""
        from dataclasses import fields

        assert all(field.metadata.get("help") for field in fields(RegisterOptions))
