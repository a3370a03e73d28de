"""
Recipe records.

A recipe file is a headed document: a YAML header (name, time, ingredients,
tools, tags) followed by a Markdown body partitioned by RecipeContent.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Iterator, Optional, Tuple

from ....exceptions.structure_exceptions import MetadataSchemaError, StructuralError
from ...document_processor.contract import StructuredDocument
from ...document_processor.freshness import Freshness
from ...document_processor.markdown_tree import DocumentNode
from ...document_processor.metadata.frontmatter import validate_metadata
from ...document_processor.structure.headed import HeadedDocument
from ...document_processor.text_block import TextBlock
from .content import RecipeContent
from .duration import DurationParseError, format_duration, parse_duration
from .ingredient import Ingredient

logger = logging.getLogger(__name__)

RECIPE_HEADER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "time": {"type": "string", "minLength": 1},
        "ingredients": {
            "type": "array",
            "items": {"type": ["string", "object"]},
        },
        "tools": {"type": "array", "items": {"type": "string"}},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["name", "time", "ingredients", "tools", "tags"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class RecipeHeader:
    """Metadata block of a recipe file."""
    name: TextBlock
    time: timedelta
    ingredients: Tuple[Ingredient, ...]
    tools: Tuple[TextBlock, ...]
    tags: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecipeHeader":
        validate_metadata(data, RECIPE_HEADER_SCHEMA, cls.__name__)
        try:
            time = parse_duration(data["time"])
        except DurationParseError as e:
            raise MetadataSchemaError(
                f"Invalid recipe time {data['time']!r}",
                metadata_type=cls.__name__,
                original_exception=e
            ) from e

        ingredients = []
        for number, value in enumerate(data["ingredients"], 1):
            try:
                ingredients.append(Ingredient.from_value(value))
            except StructuralError as e:
                raise e.add_context(f"While parsing ingredient {number}")

        return cls(
            name=TextBlock.from_text(data["name"]),
            time=time,
            ingredients=tuple(ingredients),
            tools=tuple(TextBlock.from_text(tool) for tool in data["tools"]),
            tags=tuple(data["tags"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name.to_text(),
            "time": format_duration(self.time),
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "tools": [tool.to_text() for tool in self.tools],
            "tags": list(self.tags),
        }


RecipeDocument = HeadedDocument.of(RecipeHeader, RecipeContent)


@dataclass(frozen=True)
class Recipe(StructuredDocument):
    """
    A loaded recipe.

    Attributes:
        name: Recipe name (rich text)
        duration: Preparation time
        ingredients: Ingredients in header order
        tools: Tools in header order
        tags: Plain-text tags
        description: Text before the first recognized section
        steps: Preparation steps
        notes: Notes and variations
        modified: Modification time of the recipe file
    """
    name: TextBlock
    duration: timedelta
    ingredients: Tuple[Ingredient, ...]
    tools: Tuple[TextBlock, ...]
    tags: Tuple[str, ...]
    description: TextBlock
    steps: Tuple[TextBlock, ...]
    notes: Tuple[TextBlock, ...]
    modified: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def parse(cls, tree: DocumentNode) -> "Recipe":
        """Build a recipe from the tree of a recipe file."""
        return cls.from_document(RecipeDocument.parse(tree))

    @classmethod
    def from_document(cls, document: HeadedDocument) -> "Recipe":
        header: RecipeHeader = document.metadata
        content: RecipeContent = document.content
        return cls(
            name=header.name,
            duration=header.time,
            ingredients=header.ingredients,
            tools=header.tools,
            tags=header.tags,
            description=content.description,
            steps=content.steps,
            notes=content.notes,
            modified=document.modified,
        )

    def to_document(self) -> HeadedDocument:
        header = RecipeHeader(
            name=self.name,
            time=self.duration,
            ingredients=self.ingredients,
            tools=self.tools,
            tags=self.tags,
        )
        content = RecipeContent(description=self.description, steps=self.steps, notes=self.notes)
        return RecipeDocument(metadata=header, content=content, source_modified=self.modified)

    def render(self) -> DocumentNode:
        return self.to_document().render()

    def stamped(self, modified: Freshness) -> "Recipe":
        """Return the recipe as loaded from a file modified at ``modified``."""
        return Recipe.from_document(self.to_document().stamped(modified))

    def iter_modified(self) -> Iterator[Freshness]:
        yield self.modified

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form used by the structured dump."""
        data: Dict[str, Any] = {
            "name": self.name,
            "time": self.duration,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "tools": list(self.tools),
            "tags": list(self.tags),
        }
        if self.modified is not None:
            data["modified"] = self.modified
        data["description"] = self.description
        data["steps"] = list(self.steps)
        data["notes"] = list(self.notes)
        return data

