"""
ETAPilot Template Tests

Tests for placeholder substitution, markdown rendering and money formatting.
"""
from __future__ import annotations

import pytest

from etapilot.engine import (
    format_money,
    normalize_url,
    render_markdown,
    split_lines,
    strip_bold,
    substitute_placeholders,
)
from etapilot.engine.templates import has_placeholder


class TestSubstitutePlaceholders:
    """Tests for placeholder replacement."""

    def test_every_occurrence_replaced(self) -> None:
        """Test repeated placeholders."""
        result = substitute_placeholders(
            "{arrival} / {arrival} / {express}",
            {"arrival": "Jan 16-20", "express": "Jan 14"},
        )
        assert result == "Jan 16-20 / Jan 16-20 / Jan 14"

    def test_missing_values_left_untouched(self) -> None:
        """Test None and absent names keep the placeholder text."""
        result = substitute_placeholders(
            "Order within {countdown} for {arrival}",
            {"countdown": None},
        )
        assert result == "Order within {countdown} for {arrival}"

    def test_unknown_placeholders_pass_through(self) -> None:
        """Test names outside the vocabulary and line breaks are kept."""
        result = substitute_placeholders("{foo}{lb}{arrival}", {"arrival": "Jan 16", "foo": "x"})
        assert result == "{foo}{lb}Jan 16"

    def test_empty_value_replaces(self) -> None:
        """Test an empty string still replaces the placeholder."""
        assert substitute_placeholders("Order within {countdown}", {"countdown": ""}) == "Order within "

    def test_empty_template(self) -> None:
        """Test empty input."""
        assert substitute_placeholders("", {"arrival": "x"}) == ""

    def test_has_placeholder(self) -> None:
        """Test placeholder presence checks."""
        assert has_placeholder("Ships {express}", "express")
        assert not has_placeholder("Ships soon", "express")
        assert not has_placeholder("", "express")


class TestSplitLines:
    """Tests for line-break markers."""

    def test_split(self) -> None:
        """Test splitting on {lb}."""
        assert split_lines("one{lb}two{lb}") == ["one", "two", ""]

    def test_empty(self) -> None:
        """Test empty text gives no lines."""
        assert split_lines("") == []


class TestRenderMarkdown:
    """Tests for the markdown subset."""

    def test_bold(self) -> None:
        """Test bold markers alternate."""
        assert render_markdown("**Free** and **fast**") == (
            "<strong>Free</strong> and <strong>fast</strong>"
        )

    def test_html_escaped(self) -> None:
        """Test merchant markup is escaped."""
        assert render_markdown("<script>alert(1)</script> & co") == (
            "&lt;script&gt;alert(1)&lt;/script&gt; &amp; co"
        )

    def test_absolute_link(self) -> None:
        """Test http links open in a new tab."""
        assert render_markdown("[Track](https://example.com/t)") == (
            '<a href="https://example.com/t" target="_blank" rel="noopener">Track</a>'
        )

    def test_bare_domain_link(self) -> None:
        """Test bare domains are upgraded to https."""
        assert 'href="https://example.com/faq"' in render_markdown("[FAQ](example.com/faq)")

    def test_link_query_string(self) -> None:
        """Test ampersands in URLs are escaped once."""
        rendered = render_markdown("[Go](https://example.com/?a=1&b=2)")
        assert 'href="https://example.com/?a=1&amp;b=2"' in rendered

    def test_invalid_link_left_literal(self) -> None:
        """Test unacceptable targets are not turned into anchors."""
        text = "[x](javascript:alert(1))"
        assert render_markdown(text) == text

    def test_line_breaks(self) -> None:
        """Test {lb} becomes <br>."""
        assert render_markdown("one{lb}two") == "one<br>two"

    def test_empty(self) -> None:
        """Test empty input."""
        assert render_markdown("") == ""

    def test_strip_bold(self) -> None:
        """Test bold markers are removed for plain text."""
        assert strip_bold("**Ships** today") == "Ships today"
        assert strip_bold(None) == ""


class TestNormalizeUrl:
    """Tests for link target validation."""

    @pytest.mark.parametrize("url", ["https://a.com", "http://a.com/x", "/pages/shipping"])
    def test_kept(self, url: str) -> None:
        """Test absolute and site-relative URLs are unchanged."""
        assert normalize_url(url) == url

    def test_bare_domain(self) -> None:
        """Test https:// is prepended to bare domains."""
        assert normalize_url("shop.example.com/page") == "https://shop.example.com/page"

    @pytest.mark.parametrize("url", ["javascript:alert(1)", "mailto:me", "page", ".com"])
    def test_rejected(self, url: str) -> None:
        """Test other targets are rejected."""
        assert normalize_url(url) is None


class TestFormatMoney:
    """Tests for minor-unit money formatting."""

    def test_known_symbols(self) -> None:
        """Test currencies with symbols."""
        assert format_money(5000, "GBP") == "£50.00"
        assert format_money(123456, "USD") == "$1,234.56"
        assert format_money(999, "eur") == "€9.99"

    def test_unknown_currency(self) -> None:
        """Test unknown codes are used as a prefix."""
        assert format_money(5000, "SEK") == "SEK 50.00"

    def test_negative(self) -> None:
        """Test the sign precedes the symbol."""
        assert format_money(-250, "GBP") == "-£2.50"
