"""
Exceptions package for Book Builder.

This package contains custom exception classes for the error scenarios of
loading, parsing and configuring a book.
"""

from .system_exceptions import (
    BookBuilderError,
    DocumentLoadError,
    DocumentIOError,
)

from .structure_exceptions import (
    StructuralError,
    MissingMetadataError,
    MetadataSchemaError,
    MissingLeadingHeadingError,
    InvalidStepsShapeError,
    InvalidNotesShapeError,
    EmptyIngredientNameError,
)

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)

__all__ = [
    # Base and loading
    "BookBuilderError",
    "DocumentLoadError",
    "DocumentIOError",
    # Document convention
    "StructuralError",
    "MissingMetadataError",
    "MetadataSchemaError",
    "MissingLeadingHeadingError",
    "InvalidStepsShapeError",
    "InvalidNotesShapeError",
    "EmptyIngredientNameError",
    # Configuration
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
]
