"""Tests for front matter and introduction records."""

import logging
from datetime import datetime, timezone

import pytest

from book_builder.core.book.front_matter import FrontMatter, validate_email, validate_site
from book_builder.core.book.introduction import (
    Introduction,
    IntroductionMetadata,
    SectionedPage,
    TextPage,
)
from book_builder.core.document_processor import parse_markdown
from book_builder.exceptions.structure_exceptions import MetadataSchemaError

WHEN = datetime(2024, 1, 1, tzinfo=timezone.utc)

FRONT_MATTER = """\
title: Cucina *di casa*
subtitle: Recipes
author: Ada Cook
email: ada@example.com
site: https://example.com/book
"""


class TestFrontMatter:
    """Tests for FrontMatter decoding."""

    def test_from_yaml(self):
        """Test a complete front matter file."""
        front_matter = FrontMatter.from_yaml(FRONT_MATTER, WHEN)
        assert front_matter.title.to_text() == "Cucina *di casa*"
        assert front_matter.author == "Ada Cook"
        assert front_matter.site == "https://example.com/book"
        assert front_matter.modified == WHEN

    def test_missing_field(self):
        """Test every field is required."""
        text = FRONT_MATTER.replace("author: Ada Cook\n", "")
        with pytest.raises(MetadataSchemaError) as exc_info:
            FrontMatter.from_yaml(text)
        assert "author" in str(exc_info.value)

    def test_unknown_field(self):
        """Test unexpected fields are rejected."""
        with pytest.raises(MetadataSchemaError):
            FrontMatter.from_yaml(FRONT_MATTER + "edition: 2\n")

    def test_invalid_yaml(self):
        """Test YAML syntax errors are schema errors."""
        with pytest.raises(MetadataSchemaError):
            FrontMatter.from_yaml("title: [unclosed\n")

    def test_modified_key_ignored(self, caplog):
        """Test the file cannot set its own freshness."""
        with caplog.at_level(logging.WARNING):
            front_matter = FrontMatter.from_yaml(FRONT_MATTER + "modified: 2000-01-01\n", WHEN)
        assert front_matter.modified == WHEN
        assert "Ignoring 'modified'" in caplog.text

    def test_to_dict(self):
        """Test the plain form includes freshness only when known."""
        assert "modified" not in FrontMatter.from_yaml(FRONT_MATTER).to_dict()
        assert FrontMatter.from_yaml(FRONT_MATTER, WHEN).to_dict()["modified"] == WHEN

    @pytest.mark.parametrize("value", ["ada", "ada@", "ada@example", "a b@example.com"])
    def test_invalid_email(self, value):
        """Test malformed addresses."""
        with pytest.raises(MetadataSchemaError):
            validate_email(value)

    @pytest.mark.parametrize("value", ["example.com", "ftp://example.com", "https://", "/book"])
    def test_invalid_site(self, value):
        """Test non-absolute or non-http URLs."""
        with pytest.raises(MetadataSchemaError):
            validate_site(value)


class TestIntroductionPages:
    """Tests for introduction page types."""

    def test_sectioned_page(self):
        """Test a page of titled sections."""
        page = SectionedPage.parse(parse_markdown("---\ntitle: Zen\n---\n# One\n\nA\n\n# Two\n\nB\n"))
        assert page.metadata.title.to_text() == "Zen"
        assert [section.title.to_text() for section in page.content] == ["One", "Two"]

    def test_text_page(self):
        """Test a free text page."""
        page = TextPage.parse(parse_markdown("---\ntitle: Thanks\n---\nThank *you*.\n"))
        assert page.content.to_text() == "Thank *you*."

    def test_metadata_requires_title(self):
        """Test the title is required."""
        with pytest.raises(MetadataSchemaError):
            IntroductionMetadata.from_dict({})

    def test_introduction_freshness(self):
        """Test the introduction is as fresh as its newest page, if all are known."""
        text_page = TextPage.parse(parse_markdown("---\ntitle: T\n---\nText\n"))
        sectioned = SectionedPage.parse(parse_markdown("---\ntitle: S\n---\n# A\n\nB\n"))
        later = datetime(2024, 6, 1, tzinfo=timezone.utc)

        introduction = Introduction(
            zen=sectioned.stamped(WHEN),
            prologue=text_page.stamped(later),
            warnings=sectioned.stamped(WHEN),
            thanks=text_page.stamped(WHEN),
        )
        assert introduction.modified == later

        partial = Introduction(
            zen=sectioned.stamped(WHEN),
            prologue=text_page,
            warnings=sectioned.stamped(WHEN),
            thanks=text_page.stamped(WHEN),
        )
        assert partial.modified is None
