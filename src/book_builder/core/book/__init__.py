"""
Book domain records.

Front matter, introduction and recipes assembled from the structural types,
plus the loader reading a book directory and the structured dump.
"""

from .book import Book
from .front_matter import FrontMatter
from .introduction import (
    INTRODUCTION_PARTS,
    Introduction,
    IntroductionMetadata,
    IntroductionPage,
    SectionedPage,
    TextPage,
    TitledSections,
)
from .loader import BookLoader
from .recipe import Ingredient, Recipe, RecipeContent, RecipeHeader
from .serialization import DUMP_FORMATS, dump, to_plain

__all__ = [
    "Book",
    "BookLoader",
    "FrontMatter",
    "Introduction",
    "IntroductionMetadata",
    "IntroductionPage",
    "INTRODUCTION_PARTS",
    "SectionedPage",
    "TextPage",
    "TitledSections",
    "Recipe",
    "RecipeHeader",
    "RecipeContent",
    "Ingredient",
    "DUMP_FORMATS",
    "dump",
    "to_plain",
]
