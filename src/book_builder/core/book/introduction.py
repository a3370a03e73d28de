"""
Introduction of the book.

Four headed Markdown documents, each with a ``title`` in its metadata block:
``zen`` and ``warnings`` are lists of titled sections, ``prologue`` and
``thanks`` are free text.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

from ..document_processor.freshness import Freshness, aggregate_modified
from ..document_processor.metadata.frontmatter import validate_metadata
from ..document_processor.structure.headed import HeadedDocument
from ..document_processor.structure.sectioned import SectionedList
from ..document_processor.text_block import TextBlock

logger = logging.getLogger(__name__)

INTRODUCTION_METADATA_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {"title": {"type": "string", "minLength": 1}},
    "required": ["title"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class IntroductionMetadata:
    """Metadata block of an introduction document."""
    title: TextBlock

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IntroductionMetadata":
        validate_metadata(data, INTRODUCTION_METADATA_SCHEMA, cls.__name__)
        return cls(title=TextBlock.from_text(data["title"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title.to_text()}


TitledSections = SectionedList.of(TextBlock, TextBlock)
SectionedPage = HeadedDocument.of(IntroductionMetadata, TitledSections)
TextPage = HeadedDocument.of(IntroductionMetadata, TextBlock)

# Load order and content type of each introduction document.
INTRODUCTION_PARTS: Tuple[Tuple[str, type], ...] = (
    ("zen", SectionedPage),
    ("prologue", TextPage),
    ("warnings", SectionedPage),
    ("thanks", TextPage),
)


@dataclass(frozen=True)
class Introduction:
    """The four introduction documents."""
    zen: SectionedPage
    prologue: TextPage
    warnings: SectionedPage
    thanks: TextPage

    @property
    def modified(self) -> Freshness:
        return aggregate_modified(self.iter_modified())

    def iter_modified(self) -> Iterator[Freshness]:
        for name, _ in INTRODUCTION_PARTS:
            yield getattr(self, name).modified

    def to_dict(self) -> Dict[str, Any]:
        return {name: IntroductionPage(getattr(self, name)) for name, _ in INTRODUCTION_PARTS}


@dataclass(frozen=True)
class IntroductionPage:
    """Dump view of one introduction document."""
    page: HeadedDocument

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"title": self.page.metadata.title}
        modified = self.page.modified
        if modified is not None:
            data["modified"] = modified
        if isinstance(self.page.content, SectionedList):
            data["content"] = [
                {"title": section.title, "content": section.content}
                for section in self.page.content
            ]
        else:
            data["content"] = self.page.content
        return data
