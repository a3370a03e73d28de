"""
Headed Document Module - Metadata block / body separation

This module provides HeadedDocument, a document made of exactly one embedded
YAML metadata block plus body content. The metadata is decoded into a record
type ``M`` and the body is parsed by a content type ``C``, itself any type
implementing the conversion contract.

Key Components:
- HeadedDocument: generic base, specialized with ``HeadedDocument.of(M, C)``

Usage:
    >>> Page = HeadedDocument.of(PageMetadata, TextBlock)
    >>> page = Page.parse(parse_markdown("---\\ntitle: Zen\\n---\\nBody"))
    >>> page.metadata.title
    TextBlock('Zen')
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar, Dict, Iterator, Optional, Tuple, Type

from ....exceptions.structure_exceptions import MissingMetadataError, StructuralError
from ..contract import StructuredDocument, type_label
from ..freshness import Freshness, aggregate_modified, iter_modified, stamp
from ..markdown_tree import DocumentNode, is_metadata_block, make_metadata_block, make_root
from ..metadata.frontmatter import default_codec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeadedDocument(StructuredDocument):
    """
    A metadata record plus parsed body content.

    Attributes:
        metadata: Decoded metadata record (type ``metadata_type``)
        content: Parsed body (type ``content_type``)
        source_modified: Modification time of the source file; not part of
            equality
    """
    metadata: Any
    content: Any
    source_modified: Optional[datetime] = field(default=None, compare=False)

    metadata_type: ClassVar[Optional[type]] = None
    content_type: ClassVar[Optional[type]] = None
    _specializations: ClassVar[Dict[Tuple[type, type], type]] = {}

    @classmethod
    def of(cls, metadata_type: type, content_type: type) -> Type["HeadedDocument"]:
        """
        Specialize the document for a metadata record type and a content type.

        The same parameters always return the same class.
        """
        key = (metadata_type, content_type)
        specialized = cls._specializations.get(key)
        if specialized is None:
            name = f"HeadedDocument[{type_label(metadata_type)}, {type_label(content_type)}]"
            specialized = type(name, (cls,), {
                "metadata_type": metadata_type,
                "content_type": content_type,
                "__module__": cls.__module__,
                "__qualname__": name,
            })
            cls._specializations[key] = specialized
        return specialized

    @classmethod
    def parse(cls, tree: DocumentNode) -> "HeadedDocument":
        """
        Split the metadata block out of a tree and parse the rest as content.

        Raises:
            MissingMetadataError: If the tree does not hold exactly one metadata block
            MetadataSchemaError: If the block cannot be decoded into the record type
            StructuralError: Propagated from the content type, with context
        """
        metadata_type, content_type = cls._parameters()

        children = list(tree.children) if tree.is_root else [tree]
        blocks = [child for child in children if is_metadata_block(child)]
        body = [child for child in children if not is_metadata_block(child)]

        if len(blocks) != 1:
            if blocks:
                message = f"Expected exactly one metadata block, found {len(blocks)}"
            else:
                message = "Document has no metadata block"
            raise MissingMetadataError(message, found=len(blocks))

        try:
            metadata = default_codec.decode(blocks[0].content, metadata_type)
        except StructuralError as e:
            raise e.add_context("While parsing metadata")

        try:
            content = content_type.parse(make_root(body))
        except StructuralError as e:
            raise e.add_context("While parsing content")

        logger.debug(f"Parsed {cls.__name__} with {len(body)} content nodes")
        return cls(metadata=metadata, content=content)

    def render(self) -> DocumentNode:
        """Render the content and prepend a freshly encoded metadata block."""
        content_tree = self.content.render()
        children = list(content_tree.children) if content_tree.is_root else [content_tree]
        block = make_metadata_block(default_codec.encode(self.metadata))
        return make_root([block, *children])

    @property
    def modified(self) -> Freshness:
        return aggregate_modified(self.iter_modified())

    def iter_modified(self) -> Iterator[Freshness]:
        yield self.source_modified
        yield from iter_modified(self.content)

    def stamped(self, modified: Freshness) -> "HeadedDocument":
        """Return a copy whose source and content leaves carry ``modified``."""
        return replace(self, source_modified=modified, content=stamp(self.content, modified))

    @classmethod
    def _parameters(cls) -> Tuple[type, type]:
        if cls.metadata_type is None or cls.content_type is None:
            raise TypeError(
                "HeadedDocument must be specialized with HeadedDocument.of(M, C) before use"
            )
        return cls.metadata_type, cls.content_type
