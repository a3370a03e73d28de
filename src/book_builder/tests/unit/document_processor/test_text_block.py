"""Tests for the TextBlock leaf type."""

from datetime import datetime, timezone

from book_builder.core.document_processor import TextBlock, parse_markdown, tree_signature


class TestTextBlock:
    """Tests for TextBlock parsing, rendering and equality."""

    def test_parse_render_preserves_structure(self):
        """Test rendering a parsed block yields an equivalent tree."""
        tree = parse_markdown("Some *rich* text.\n\n- with\n- a list\n")
        block = TextBlock.parse(tree)
        assert tree_signature(block.render()) == tree_signature(tree)

    def test_render_returns_independent_tree(self):
        """Test rendered trees do not share nodes with the block."""
        block = TextBlock.from_text("Hello")
        first = block.render()
        first.children[0].children[0].children[0].token.content = "Changed"
        assert block.to_text() == "Hello"

    def test_parse_non_root_node(self):
        """Test a single node is wrapped into a root."""
        paragraph = parse_markdown("Hello").children[0]
        block = TextBlock.parse(paragraph)
        assert block.node.is_root
        assert block.to_text() == "Hello"

    def test_from_text_and_to_text(self):
        """Test Markdown text survives a round trip."""
        assert TextBlock.from_text("Cucina *di casa*").to_text() == "Cucina *di casa*"

    def test_plain_text(self):
        """Test plain text is available only for unformatted blocks."""
        assert TextBlock.from_text("Pasta").plain_text() == "Pasta"
        assert TextBlock.from_text("*Pasta*").plain_text() is None

    def test_equality_is_structural(self):
        """Test blocks from equal text compare equal, regardless of freshness."""
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        first = TextBlock.from_text("Same")
        second = TextBlock.from_text("Same", modified=when)
        assert first == second
        assert hash(first) == hash(second)
        assert first != TextBlock.from_text("Other")

    def test_stamped(self):
        """Test stamping sets freshness and leaves the original unchanged."""
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        block = TextBlock.from_text("Text")
        stamped = block.stamped(when)
        assert stamped.modified == when
        assert block.modified is None
        assert list(stamped.iter_modified()) == [when]

    def test_repr_shows_text(self):
        """Test the representation shows the Markdown text."""
        assert repr(TextBlock.from_text("Zen")) == "TextBlock('Zen')"
