"""
The book aggregate.

A book is its front matter, its introduction and its recipes keyed by file
name. Its freshness is the newest modification time of every loaded file,
or unknown if any of them is unknown.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from ..document_processor.freshness import Freshness, aggregate_modified, iter_modified
from ...utils.config.paths import BookLayout
from .front_matter import FrontMatter
from .introduction import Introduction
from .loader import BookLoader, as_book_dir
from .recipe.recipe import Recipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Book:
    """
    A loaded book.

    Attributes:
        front_matter: Title page
        introduction: The four introduction documents
        recipes: Recipes keyed by file name without suffix, in key order
    """
    front_matter: FrontMatter
    introduction: Introduction
    recipes: Dict[str, Recipe] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Union[str, Path], layout: Optional[BookLayout] = None) -> "Book":
        """
        Load a book directory.

        Args:
            path: Book directory
            layout: File and directory names (default layout if omitted)

        Raises:
            DocumentLoadError: On the first file that cannot be read or parsed
        """
        book_dir = as_book_dir(path)
        logger.info(f"Loading book from {book_dir}")
        loader = BookLoader(layout)
        return cls(
            front_matter=loader.load_front_matter(book_dir),
            introduction=loader.load_introduction(book_dir),
            recipes=loader.load_recipes(book_dir),
        )

    @property
    def modified(self) -> Freshness:
        return aggregate_modified(self.iter_modified())

    def iter_modified(self) -> Iterator[Freshness]:
        yield self.front_matter.modified
        yield self.introduction.modified
        for recipe in self.recipes.values():
            yield from iter_modified(recipe)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "front_matter": self.front_matter,
            "introduction": self.introduction,
            "recipes": dict(sorted(self.recipes.items())),
        }
