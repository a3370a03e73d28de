"""
Recipe body partition.

The body of a recipe file is a free description followed by two recognized
level-1 sections:

    # Preparation      exactly one ordered list, numbered from 1
    # Notes            exactly one bullet list

Content under any other level-1 heading is dropped with a warning.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Tuple

from ....exceptions.structure_exceptions import InvalidNotesShapeError, InvalidStepsShapeError
from ...document_processor.contract import StructuredDocument
from ...document_processor.freshness import Freshness, aggregate_modified
from ...document_processor.markdown_tree import (
    DocumentNode,
    heading_depth,
    inline_text,
    list_shape,
    make_heading,
    make_list,
    make_root,
    parse_markdown,
    render_markdown,
)
from ...document_processor.text_block import TextBlock

logger = logging.getLogger(__name__)

PREPARATION_TITLE = "Preparation"
NOTES_TITLE = "Notes"

_DESCRIPTION = "description"
_STEPS = "steps"
_NOTES = "notes"
_BUCKETS = {PREPARATION_TITLE: _STEPS, NOTES_TITLE: _NOTES}


@dataclass(frozen=True)
class RecipeContent(StructuredDocument):
    """Description, preparation steps and notes of a recipe."""
    description: TextBlock
    steps: Tuple[TextBlock, ...]
    notes: Tuple[TextBlock, ...]

    @classmethod
    def parse(cls, tree: DocumentNode) -> "RecipeContent":
        """
        Partition a recipe body.

        Raises:
            InvalidStepsShapeError: If "Preparation" is not one ordered list from 1
            InvalidNotesShapeError: If "Notes" is not one bullet list
        """
        buckets: Dict[str, List[DocumentNode]] = {_DESCRIPTION: [], _STEPS: [], _NOTES: []}
        collecting: Optional[List[DocumentNode]] = buckets[_DESCRIPTION]

        children = list(tree.children) if tree.is_root else [tree]
        for child in children:
            if heading_depth(child) != 1:
                if collecting is not None:
                    collecting.append(child)
                continue

            title = inline_text(child)
            bucket = _BUCKETS.get(title.strip()) if title is not None else None
            if bucket is None:
                logger.warning(
                    f"Unrecognized heading: {render_markdown(make_root([child])).strip()}\n"
                    f"The content will be ignored"
                )
                collecting = None
            else:
                collecting = buckets[bucket]

        steps = _single_list(buckets[_STEPS], ordered=True)
        if steps is None:
            raise InvalidStepsShapeError(
                f"The `{PREPARATION_TITLE}` section should be only an ordered list of steps, "
                f"starting from 1"
            )
        notes = _single_list(buckets[_NOTES], ordered=False)
        if notes is None:
            raise InvalidNotesShapeError(
                f"The `{NOTES_TITLE}` section should be only an unordered list"
            )

        return cls(
            description=TextBlock.parse(make_root(buckets[_DESCRIPTION])),
            steps=tuple(TextBlock.parse(make_root(item.children)) for item in steps.children),
            notes=tuple(TextBlock.parse(make_root(item.children)) for item in notes.children),
        )

    def render(self) -> DocumentNode:
        children = list(self.description.render().children)
        for title, items, ordered in (
            (PREPARATION_TITLE, self.steps, True),
            (NOTES_TITLE, self.notes, False),
        ):
            children.append(make_heading(parse_markdown(title, with_metadata=False).children))
            children.append(make_list([item.render().children for item in items], ordered=ordered))
        return make_root(children)

    def iter_modified(self) -> Iterator[Freshness]:
        yield self.description.modified
        for block in self.steps + self.notes:
            yield block.modified

    @property
    def modified(self) -> Freshness:
        return aggregate_modified(self.iter_modified())

    def stamped(self, modified: Freshness) -> "RecipeContent":
        return replace(
            self,
            description=self.description.stamped(modified),
            steps=tuple(block.stamped(modified) for block in self.steps),
            notes=tuple(block.stamped(modified) for block in self.notes),
        )


def _single_list(nodes: List[DocumentNode], ordered: bool) -> Optional[DocumentNode]:
    if len(nodes) != 1:
        return None
    shape = list_shape(nodes[0])
    if shape is None or shape.ordered != ordered:
        return None
    if ordered and shape.start != 1:
        return None
    return nodes[0]
