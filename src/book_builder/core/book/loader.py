"""
Book Loader Module - Reading a book directory

This module reads the files of a book directory, records the modification time
of each one, and parses them into domain records. Loading is sequential and
stops at the first failure; every failure is reported as a DocumentLoadError
carrying the file path and the logical field being loaded.

Key Components:
- BookLoader: loads front matter, introduction and recipes

Usage:
    >>> loader = BookLoader(BookLayout())
    >>> recipes = loader.load_recipes(Path("my-book"))
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Type, Union

from ...exceptions.structure_exceptions import StructuralError
from ...exceptions.system_exceptions import DocumentIOError, DocumentLoadError
from ...utils.config.paths import BookLayout
from ..document_processor.freshness import Freshness, file_modified
from ..document_processor.markdown_tree import parse_markdown
from ..document_processor.structure.headed import HeadedDocument
from .front_matter import FrontMatter
from .introduction import INTRODUCTION_PARTS, Introduction
from .recipe.recipe import Recipe

logger = logging.getLogger(__name__)


class BookLoader:
    """
    Loads the parts of a book directory.

    Attributes:
        layout: File and directory names inside the book directory
    """

    def __init__(self, layout: Optional[BookLayout] = None) -> None:
        self.layout = layout or BookLayout()

    def read_source(self, path: Path, field: str) -> Tuple[str, Freshness]:
        """
        Read one file and its modification time.

        Raises:
            DocumentIOError: If the file is missing or unreadable
        """
        logger.debug(f"Reading {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentIOError(
                "Cannot read file", file_path=path, field=field, original_exception=e
            ) from e
        return text, file_modified(path)

    def load_front_matter(self, book_dir: Path) -> FrontMatter:
        path = book_dir / self.layout.front_matter
        logger.info(f"Loading front matter from {path}")
        text, modified = self.read_source(path, "front_matter")
        try:
            return FrontMatter.from_yaml(text, modified)
        except StructuralError as e:
            raise DocumentLoadError(
                "Cannot parse front matter", file_path=path, field="front_matter", original_exception=e
            ) from e

    def load_page(self, path: Path, page_type: Type[HeadedDocument], field: str) -> HeadedDocument:
        """Load one headed Markdown document."""
        text, modified = self.read_source(path, field)
        try:
            page = page_type.parse(parse_markdown(text))
        except StructuralError as e:
            raise DocumentLoadError(
                f"Cannot parse {field}", file_path=path, field=field, original_exception=e
            ) from e
        return page.stamped(modified)

    def load_introduction(self, book_dir: Path) -> Introduction:
        directory = book_dir / self.layout.introduction_dir
        logger.info(f"Loading introduction from {directory}")
        pages = {}
        for name, page_type in INTRODUCTION_PARTS:
            path = directory / f"{name}.md"
            pages[name] = self.load_page(path, page_type, f"introduction.{name}")
        return Introduction(**pages)

    def load_recipe(self, path: Path, key: Optional[str] = None) -> Recipe:
        key = key or path.stem
        logger.info(f"Loading recipe from {path}")
        field = f"recipes.{key}"
        text, modified = self.read_source(path, field)
        try:
            recipe = Recipe.parse(parse_markdown(text))
        except StructuralError as e:
            raise DocumentLoadError(
                f"Error in parsing recipe {key}", file_path=path, field=field, original_exception=e
            ) from e
        return recipe.stamped(modified)

    def load_recipes(self, book_dir: Path) -> Dict[str, Recipe]:
        """
        Load every recipe file, keyed by file name without suffix.

        Subdirectories and files without the recipe suffix are ignored. Recipes
        are loaded and returned in lexicographic key order.
        """
        directory = book_dir / self.layout.recipes_dir
        logger.info(f"Loading recipes from {directory}")
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise DocumentIOError(
                "Cannot read recipes directory", file_path=directory, field="recipes", original_exception=e
            ) from e

        suffix = self.layout.recipe_suffix
        sources = {}
        for entry in entries:
            if not entry.is_file() or not entry.name.endswith(suffix):
                continue
            sources[entry.name[: -len(suffix)]] = entry

        recipes = {}
        for key in sorted(sources):
            recipes[key] = self.load_recipe(sources[key], key)
        logger.debug(f"Loaded {len(recipes)} recipes")
        return recipes


def as_book_dir(path: Union[str, Path]) -> Path:
    """
    Validate a book directory path.

    Raises:
        DocumentIOError: If the path is not an existing directory
    """
    book_dir = Path(path)
    if not book_dir.is_dir():
        raise DocumentIOError("Book directory not found", file_path=book_dir, field="book")
    return book_dir
