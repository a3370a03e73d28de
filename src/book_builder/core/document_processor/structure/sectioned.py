"""
Sectioned List Module - Level-1 heading segmentation

This module provides SectionedList, an ordered sequence of sections cut from
a tree at level-1 headings. Each heading's children become the section title
and the nodes up to the next level-1 heading become its content; both are
parsed by the title type ``T`` and the content type ``C``.

Key Components:
- Section: one (title, content) pair
- SectionedList: generic base, specialized with ``SectionedList.of(T, C)``

Usage:
    >>> Sections = SectionedList.of(TextBlock, TextBlock)
    >>> sections = Sections.parse(parse_markdown("# One\\n\\nA\\n\\n# Two\\n\\nB"))
    >>> [s.title.to_text() for s in sections]
    ['One', 'Two']
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Type

from ....exceptions.structure_exceptions import MissingLeadingHeadingError, StructuralError
from ..contract import StructuredDocument, type_label
from ..freshness import Freshness, aggregate_modified, iter_modified, stamp
from ..markdown_tree import DocumentNode, heading_depth, heading_title, make_heading, make_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    """A parsed title and its parsed content."""
    title: Any
    content: Any

    def iter_modified(self) -> Iterator[Freshness]:
        yield from iter_modified(self.title)
        yield from iter_modified(self.content)

    def stamped(self, modified: Freshness) -> "Section":
        return Section(title=stamp(self.title, modified), content=stamp(self.content, modified))


@dataclass
class _PendingSection:
    title: DocumentNode
    content: List[DocumentNode]


@dataclass(frozen=True)
class SectionedList(StructuredDocument):
    """
    Sections in document order.

    Attributes:
        sections: Parsed sections; never reordered
    """
    sections: Tuple[Section, ...] = ()

    title_type: ClassVar[Optional[type]] = None
    content_type: ClassVar[Optional[type]] = None
    _specializations: ClassVar[Dict[Tuple[type, type], type]] = {}

    @classmethod
    def of(cls, title_type: type, content_type: type) -> Type["SectionedList"]:
        """
        Specialize the list for a title type and a content type.

        The same parameters always return the same class.
        """
        key = (title_type, content_type)
        specialized = cls._specializations.get(key)
        if specialized is None:
            name = f"SectionedList[{type_label(title_type)}, {type_label(content_type)}]"
            specialized = type(name, (cls,), {
                "title_type": title_type,
                "content_type": content_type,
                "__module__": cls.__module__,
                "__qualname__": name,
            })
            cls._specializations[key] = specialized
        return specialized

    @classmethod
    def parse(cls, tree: DocumentNode) -> "SectionedList":
        """
        Split a tree at its level-1 headings.

        Raises:
            MissingLeadingHeadingError: If the first node is not a level-1 heading
            StructuralError: Propagated from the title or content type, tagged
                with the 1-based section number
        """
        title_type, content_type = cls._parameters()

        pending = cls._split(tree)
        logger.debug(f"Split tree into {len(pending)} sections")

        sections = []
        for number, raw in enumerate(pending, 1):
            try:
                title = title_type.parse(raw.title)
            except StructuralError as e:
                raise e.add_context(f"While parsing section {number} (title)")
            try:
                content = content_type.parse(make_root(raw.content))
            except StructuralError as e:
                raise e.add_context(f"While parsing section {number} (content)")
            sections.append(Section(title=title, content=content))

        return cls(sections=tuple(sections))

    @staticmethod
    def _split(tree: DocumentNode) -> List[_PendingSection]:
        children = list(tree.children) if tree.is_root else [tree]
        pending: List[_PendingSection] = []

        for child in children:
            if heading_depth(child) == 1:
                pending.append(_PendingSection(title=heading_title(child), content=[]))
            elif not pending:
                raise MissingLeadingHeadingError(
                    f"Content must start with a level-1 heading, found `{child.type}`",
                    first_node_type=child.type
                )
            else:
                pending[-1].content.append(child)

        return pending

    def render(self) -> DocumentNode:
        """Interleave a level-1 heading per title with the rendered content."""
        children: List[DocumentNode] = []
        for section in self.sections:
            children.append(make_heading(section.title.render().children, depth=1))
            content_tree = section.content.render()
            if content_tree.is_root:
                children.extend(content_tree.children)
            else:
                children.append(content_tree)
        return make_root(children)

    @property
    def modified(self) -> Freshness:
        return aggregate_modified(self.iter_modified())

    def iter_modified(self) -> Iterator[Freshness]:
        for section in self.sections:
            yield from section.iter_modified()

    def stamped(self, modified: Freshness) -> "SectionedList":
        return replace(self, sections=tuple(s.stamped(modified) for s in self.sections))

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __getitem__(self, index: int) -> Section:
        return self.sections[index]

    @classmethod
    def _parameters(cls) -> Tuple[type, type]:
        if cls.title_type is None or cls.content_type is None:
            raise TypeError(
                "SectionedList must be specialized with SectionedList.of(T, C) before use"
            )
        return cls.title_type, cls.content_type
