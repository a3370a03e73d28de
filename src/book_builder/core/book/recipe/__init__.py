"""
Recipe records: header, body partition, ingredient grammar and durations.
"""

from .content import NOTES_TITLE, PREPARATION_TITLE, RecipeContent
from .duration import DurationParseError, format_duration, parse_duration
from .ingredient import (
    INGREDIENT_PATTERN,
    TO_TASTE,
    Exact,
    Ingredient,
    Quantity,
    Range,
    ToTaste,
)
from .recipe import Recipe, RecipeDocument, RecipeHeader

__all__ = [
    "Recipe",
    "RecipeHeader",
    "RecipeDocument",
    "RecipeContent",
    "PREPARATION_TITLE",
    "NOTES_TITLE",
    "Ingredient",
    "INGREDIENT_PATTERN",
    "Quantity",
    "ToTaste",
    "TO_TASTE",
    "Exact",
    "Range",
    "DurationParseError",
    "parse_duration",
    "format_duration",
]
