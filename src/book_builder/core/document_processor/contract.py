"""
Conversion contract shared by every structural type.

A structural type converts a document tree into a typed value (``parse``) and
a typed value back into a new document tree (``render``). Composite types
(HeadedDocument, SectionedList) implement both directions purely in terms of
their type parameters, so they nest freely.
"""

from abc import ABC, abstractmethod
from typing import Type, TypeVar

from .markdown_tree import DocumentNode

T = TypeVar("T", bound="ParseableDocument")


class ParseableDocument(ABC):
    """Capability of being built from a document tree."""

    @classmethod
    @abstractmethod
    def parse(cls: Type[T], tree: DocumentNode) -> T:
        """
        Build a typed value from a document tree.

        Implementations must not modify ``tree`` and must report malformed
        structure by raising a ``StructuralError`` subclass.

        Raises:
            StructuralError: If the tree does not follow the expected shape
        """


class RenderableDocument(ABC):
    """Capability of being written back to a document tree."""

    @abstractmethod
    def render(self) -> DocumentNode:
        """Produce a new document tree from this value."""


class StructuredDocument(ParseableDocument, RenderableDocument):
    """Convenience base for types implementing both directions."""


def type_label(cls: type) -> str:
    """Name of a contract type as shown in specialized class names."""
    return getattr(cls, "__qualname__", getattr(cls, "__name__", repr(cls)))
