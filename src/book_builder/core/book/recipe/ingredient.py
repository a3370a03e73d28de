"""
Ingredient Grammar Module

Parses one ingredient line into a quantified record. The line grammar is

    name [ "(" comment ")" ] [ "?" ] [ number [ "-" number ] [ unit ] ]

for instance ``flour (sifted) 200g``, ``eggs 2-3`` or ``salt?``. The name is
the shortest prefix that lets the rest of the line match, so a trailing
quantity is always split off the name.

Key Components:
- Quantity variants: ToTaste, Exact, Range
- Ingredient: record with ``from_text`` (grammar) and ``from_value``
  (grammar string or explicit mapping, as found in recipe metadata)
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ....exceptions.structure_exceptions import EmptyIngredientNameError
from ...document_processor.metadata.frontmatter import validate_metadata
from ...document_processor.text_block import TextBlock

logger = logging.getLogger(__name__)

# Grammar fragments, composed into one anchored pattern below.
_NAME = r"(?P<name>.+?)"
_COMMENT = r"(?:\(\s*(?P<comment>.+?)\s*\))?"
_OPTIONAL_MARK = r"(?P<optional>\?)?"
_NUMBER = r"\d+(?:\.\d+)?"
_UNIT_START = r"(?:[!-/:-@\[-`{-~]|[^\W\d_])"
_UNIT = rf"(?P<unit>{_UNIT_START}.*?)"
_QUANTITY = rf"(?:(?P<low>{_NUMBER})(?:\s*-\s*(?P<high>{_NUMBER}))?\s*{_UNIT}?)?"

INGREDIENT_PATTERN = re.compile(
    rf"^\s*{_NAME}\s*{_COMMENT}\s*{_OPTIONAL_MARK}\s*{_QUANTITY}\s*$",
    re.DOTALL
)


@dataclass(frozen=True)
class ToTaste:
    """No quantity given."""

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return None


@dataclass(frozen=True)
class Exact:
    """A single amount."""
    value: float
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"value": self.value}
        if self.unit is not None:
            data["unit"] = self.unit
        return data


@dataclass(frozen=True)
class Range:
    """An amount between two bounds; ``low <= high`` is not enforced."""
    low: float
    high: float
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"range": [self.low, self.high]}
        if self.unit is not None:
            data["unit"] = self.unit
        return data


Quantity = Union[ToTaste, Exact, Range]

TO_TASTE = ToTaste()

INGREDIENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "comment": {"type": ["string", "null"]},
        "optional": {"type": "boolean"},
        "quantity": {
            "oneOf": [
                {
                    "type": "object",
                    "properties": {
                        "value": {"type": "number"},
                        "unit": {"type": ["string", "null"]},
                    },
                    "required": ["value"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {
                        "range": {
                            "type": "array",
                            "items": {"type": "number"},
                            "minItems": 2,
                            "maxItems": 2,
                        },
                        "unit": {"type": ["string", "null"]},
                    },
                    "required": ["range"],
                    "additionalProperties": False,
                },
            ]
        },
    },
    "required": ["name"],
    "additionalProperties": False,
}


def quantity_from_dict(data: Optional[Dict[str, Any]]) -> Quantity:
    """Build a quantity from its mapping form; None means to taste."""
    if data is None:
        return TO_TASTE
    if "range" in data:
        low, high = data["range"]
        return Range(low=float(low), high=float(high), unit=data.get("unit"))
    return Exact(value=float(data["value"]), unit=data.get("unit"))


@dataclass(frozen=True)
class Ingredient:
    """
    A named, optionally quantified ingredient.

    Attributes:
        name: Ingredient name (may carry inline formatting)
        comment: Parenthesized remark, e.g. "sifted"
        quantity: ToTaste, Exact or Range
        optional: Marked with "?" in the line
    """
    name: TextBlock
    comment: Optional[TextBlock] = None
    quantity: Quantity = TO_TASTE
    optional: bool = False

    @classmethod
    def from_text(cls, line: str) -> "Ingredient":
        """
        Parse one ingredient line.

        Raises:
            EmptyIngredientNameError: If the line is empty or only whitespace
            RuntimeError: If a non-empty line does not match the grammar,
                which the grammar rules out
        """
        stripped = line.strip()
        if not stripped:
            raise EmptyIngredientNameError("Need ingredient name", line=line)

        match = INGREDIENT_PATTERN.match(stripped)
        if match is None:
            raise RuntimeError(f"Ingredient grammar failed to match {stripped!r}")

        groups = match.groupdict()
        unit = groups["unit"] or None
        if groups["low"] is None:
            quantity: Quantity = TO_TASTE
        elif groups["high"] is None:
            quantity = Exact(value=float(groups["low"]), unit=unit)
        else:
            quantity = Range(low=float(groups["low"]), high=float(groups["high"]), unit=unit)

        comment = groups["comment"]
        return cls(
            name=TextBlock.from_text(groups["name"]),
            comment=TextBlock.from_text(comment) if comment else None,
            quantity=quantity,
            optional=groups["optional"] is not None,
        )

    @classmethod
    def from_value(cls, value: Any) -> "Ingredient":
        """
        Build an ingredient from a metadata entry.

        Args:
            value: Either a grammar line or a mapping
                ``{name, comment?, quantity?, optional?}``

        Raises:
            EmptyIngredientNameError: If the name is empty
            MetadataSchemaError: If a mapping has the wrong shape
        """
        if isinstance(value, str):
            return cls.from_text(value)
        if isinstance(value, dict) and not str(value.get("name", "")).strip():
            raise EmptyIngredientNameError("Need ingredient name", line=value)

        validate_metadata(value, INGREDIENT_SCHEMA, "Ingredient")
        comment = value.get("comment")
        return cls(
            name=TextBlock.from_text(value["name"].strip()),
            comment=TextBlock.from_text(comment) if comment else None,
            quantity=quantity_from_dict(value.get("quantity")),
            optional=bool(value.get("optional", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Mapping form; defaults (no comment, to taste, not optional) are omitted."""
        data: Dict[str, Any] = {"name": self.name.to_text()}
        if self.comment is not None:
            data["comment"] = self.comment.to_text()
        quantity = self.quantity.to_dict()
        if quantity is not None:
            data["quantity"] = quantity
        if self.optional:
            data["optional"] = True
        return data
