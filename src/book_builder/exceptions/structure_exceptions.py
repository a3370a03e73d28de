"""
Structural exceptions for Book Builder.

Raised when a document does not follow the heading-driven convention: a
missing or duplicated metadata block, content not starting with a section
heading, a recipe whose steps or notes are not a single list, or an
ingredient line without a name.

There is no local recovery for these errors: malformed input is rejected,
never coerced.
"""

from typing import Any, Optional

from .system_exceptions import BookBuilderError


class StructuralError(BookBuilderError):
    """Base exception for violations of the document convention."""


class MissingMetadataError(StructuralError):
    """Raised when a document does not contain exactly one metadata block."""

    def __init__(self, message: str, found: int = 0) -> None:
        super().__init__(message)
        self.found = found


class MetadataSchemaError(StructuralError):
    """Raised when a metadata block cannot be decoded into its record type."""

    def __init__(
        self,
        message: str,
        metadata_type: Optional[str] = None,
        original_exception: Optional[BaseException] = None
    ) -> None:
        super().__init__(message, original_exception=original_exception)
        self.metadata_type = metadata_type


class MissingLeadingHeadingError(StructuralError):
    """Raised when sectioned content does not begin with a level-1 heading."""

    def __init__(self, message: str, first_node_type: Optional[str] = None) -> None:
        super().__init__(message)
        self.first_node_type = first_node_type


class InvalidStepsShapeError(StructuralError):
    """Raised when the preparation section is not one ordered list starting at 1."""


class InvalidNotesShapeError(StructuralError):
    """Raised when the notes section is not one unordered list."""


class EmptyIngredientNameError(StructuralError):
    """Raised when an ingredient line has no name."""

    def __init__(self, message: str, line: Any = None) -> None:
        super().__init__(message)
        self.line = line
