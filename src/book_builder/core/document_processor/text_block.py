"""
TextBlock - the leaf of every structure.

A TextBlock carries one document subtree opaquely. It is never decomposed
further and no normalization is applied, so rendering a parsed block yields a
tree structurally equivalent to the source.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterator, Optional

from .contract import StructuredDocument
from .freshness import Freshness
from .markdown_tree import (
    DocumentNode,
    copy_tree,
    inline_text,
    make_root,
    parse_markdown,
    render_markdown,
    tree_signature,
)


@dataclass(frozen=True, eq=False)
class TextBlock(StructuredDocument):
    """
    Opaque rich text.

    Attributes:
        node: Root of the wrapped subtree (owned, never shared)
        modified: Freshness of the text; not part of equality
    """
    node: DocumentNode
    modified: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def parse(cls, tree: DocumentNode) -> "TextBlock":
        if not tree.is_root:
            tree = make_root([tree])
        return cls(node=copy_tree(tree))

    def render(self) -> DocumentNode:
        return copy_tree(self.node)

    @classmethod
    def from_text(cls, text: str, modified: Freshness = None) -> "TextBlock":
        """Build a block from Markdown text (e.g. a metadata value)."""
        return cls(node=parse_markdown(text, with_metadata=False), modified=modified)

    def to_text(self) -> str:
        """Markdown text of the block, without the trailing newline."""
        return render_markdown(self.node).rstrip("\n")

    def plain_text(self) -> Optional[str]:
        """Unformatted text of a single-line block, None if it carries formatting."""
        children = list(self.node.children)
        if len(children) == 1 and children[0].type == "paragraph":
            return inline_text(children[0])
        return inline_text(self.node)

    def stamped(self, modified: Freshness) -> "TextBlock":
        return replace(self, modified=modified)

    def iter_modified(self) -> Iterator[Freshness]:
        yield self.modified

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextBlock):
            return NotImplemented
        return tree_signature(self.node) == tree_signature(other.node)

    def __hash__(self) -> int:
        return hash(tree_signature(self.node))

    def __repr__(self) -> str:
        return f"TextBlock({self.to_text()!r})"
