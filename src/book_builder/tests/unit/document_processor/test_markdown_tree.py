"""Tests for the markdown-it-py tree boundary."""

import pytest

from book_builder.core.document_processor.markdown_tree import (
    copy_tree,
    heading_depth,
    heading_title,
    inline_text,
    is_metadata_block,
    list_shape,
    make_heading,
    make_list,
    make_metadata_block,
    make_root,
    parse_markdown,
    render_markdown,
    tree_signature,
)
from book_builder.exceptions.structure_exceptions import StructuralError


class TestParseAndRender:
    """Tests for text <-> tree conversion."""

    def test_parse_recognizes_metadata_block(self):
        """Test a leading YAML block becomes a metadata node."""
        root = parse_markdown("---\ntitle: Zen\n---\n# Heading\n")
        assert is_metadata_block(root.children[0])
        assert root.children[0].content.strip() == "title: Zen"
        assert heading_depth(root.children[1]) == 1

    def test_fragment_has_no_metadata(self):
        """Test fragments treat a leading rule as Markdown."""
        root = parse_markdown("---\ntitle: Zen\n---\n", with_metadata=False)
        assert not any(is_metadata_block(child) for child in root.children)

    def test_render_simple_document(self):
        """Test rendering a heading and a paragraph."""
        root = parse_markdown("# Title\n\nSome *text*.")
        assert render_markdown(root) == "# Title\n\nSome *text*.\n"

    def test_render_metadata_block(self):
        """Test metadata blocks are written with delimiters."""
        root = make_root([make_metadata_block("title: Zen\n")])
        assert render_markdown(root) == "---\ntitle: Zen\n---\n"

    def test_reference_links_render_inline(self):
        """Test reference links survive the loss of their definitions."""
        root = parse_markdown("See [the site][site].\n\n[site]: https://example.com\n")
        rendered = render_markdown(make_root(root.children))
        assert "https://example.com" in rendered

    def test_empty_root_renders_empty(self):
        """Test an empty tree renders to an empty string."""
        assert render_markdown(make_root([])) == ""


class TestBuilders:
    """Tests for tree builders."""

    def test_make_root_copies_nodes(self):
        """Test the new root does not share tokens with its source."""
        source = parse_markdown("Hello")
        root = make_root(source.children)
        root.children[0].children[0].children[0].token.content = "Changed"
        assert inline_text(source.children[0]) == "Hello"

    def test_make_heading_from_paragraph(self):
        """Test a plain-text title becomes a heading of the given depth."""
        title = parse_markdown("Zen", with_metadata=False)
        heading = make_heading(title.children, depth=2)
        assert heading_depth(heading) == 2
        assert render_markdown(make_root([heading])) == "## Zen\n"

    def test_make_heading_rejects_block_content(self):
        """Test a title holding a list cannot become a heading."""
        title = parse_markdown("- item", with_metadata=False)
        with pytest.raises(StructuralError):
            make_heading(title.children)

    def test_make_heading_rejects_several_paragraphs(self):
        """Test a title of two paragraphs is not merged into one heading."""
        title = parse_markdown("a\n\nb", with_metadata=False)
        with pytest.raises(StructuralError) as exc_info:
            make_heading(title.children)
        assert "single paragraph" in str(exc_info.value)

    def test_heading_title_roundtrip(self):
        """Test a heading rebuilt from its title tree is structurally unchanged."""
        heading = parse_markdown("# A *bold* move").children[0]
        title = heading_title(heading)
        assert title.children[0].type == "paragraph"
        rebuilt = make_heading(title.children, depth=1)
        assert tree_signature(rebuilt) == tree_signature(heading)

    def test_make_ordered_list(self):
        """Test building an ordered list from item contents."""
        items = [parse_markdown(text, with_metadata=False).children for text in ("One", "Two")]
        node = make_list(items, ordered=True)
        assert list_shape(node) == (True, 1)
        lines = [line for line in render_markdown(make_root([node])).splitlines() if line]
        assert lines == ["1. One", "2. Two"]

    def test_make_bullet_list(self):
        """Test building a bullet list."""
        items = [parse_markdown("Only", with_metadata=False).children]
        node = make_list(items, ordered=False)
        assert list_shape(node) == (False, 1)
        assert render_markdown(make_root([node])).startswith("- Only")


class TestInspectors:
    """Tests for node inspectors."""

    def test_heading_depth_of_non_heading(self):
        """Test non-headings have no depth."""
        root = parse_markdown("Paragraph")
        assert heading_depth(root.children[0]) is None

    def test_list_shape_start(self):
        """Test the start number of an ordered list is reported."""
        root = parse_markdown("3. three\n4. four\n")
        assert list_shape(root.children[0]) == (True, 3)

    def test_list_shape_of_non_list(self):
        """Test non-lists have no shape."""
        assert list_shape(parse_markdown("text").children[0]) is None

    def test_inline_text_plain(self):
        """Test plain heading text is returned."""
        heading = parse_markdown("# Notes").children[0]
        assert inline_text(heading) == "Notes"

    def test_inline_text_formatted(self):
        """Test formatted text is not reduced to its letters."""
        heading = parse_markdown("# **Notes**").children[0]
        assert inline_text(heading) is None


class TestCopyAndSignature:
    """Tests for copy_tree and tree_signature."""

    def test_copy_is_structurally_equal(self):
        """Test a copy has the same signature."""
        root = parse_markdown("# Title\n\n- a\n- b\n")
        assert tree_signature(copy_tree(root)) == tree_signature(root)

    def test_signature_ignores_positions(self):
        """Test the same text at different places compares equal."""
        first = parse_markdown("Hello").children[0]
        second = parse_markdown("\n\n\nHello").children[0]
        assert tree_signature(first) == tree_signature(second)

    def test_signature_distinguishes_content(self):
        """Test different text gives different signatures."""
        assert tree_signature(parse_markdown("a")) != tree_signature(parse_markdown("b"))
