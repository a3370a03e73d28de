"""
Document Processor Package

Generic structural extraction over parsed Markdown trees. Every type here
implements the two-direction conversion contract (``parse`` a tree into a
typed value, ``render`` a value into a new tree), so the types compose.

Components:
- markdown_tree: boundary with markdown-it-py / mdformat
- contract: ParseableDocument and RenderableDocument
- text_block: opaque rich-text leaf
- freshness: modification-time aggregation
- metadata/: YAML metadata block codec
- structure/: HeadedDocument and SectionedList splitters
"""

from .contract import ParseableDocument, RenderableDocument, StructuredDocument
from .freshness import Freshness, aggregate_modified, file_modified
from .markdown_tree import (
    DocumentNode,
    ListShape,
    parse_markdown,
    render_markdown,
    tree_signature,
)
from .metadata import FrontmatterCodec, validate_metadata
from .structure import HeadedDocument, Section, SectionedList
from .text_block import TextBlock

__all__ = [
    # Contract
    "ParseableDocument",
    "RenderableDocument",
    "StructuredDocument",
    # Trees
    "DocumentNode",
    "ListShape",
    "parse_markdown",
    "render_markdown",
    "tree_signature",
    # Freshness
    "Freshness",
    "aggregate_modified",
    "file_modified",
    # Metadata
    "FrontmatterCodec",
    "validate_metadata",
    # Structure
    "HeadedDocument",
    "Section",
    "SectionedList",
    "TextBlock",
]
