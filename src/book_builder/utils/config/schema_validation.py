"""
Schema validation for configuration management.

The merged configuration (defaults, file, environment) is validated against
the built-in JSON Schema before use.
"""

import logging
from typing import Any, Dict, List, Optional

import jsonschema

from ...exceptions.config_exceptions import ConfigurationValidationError
from .defaults import CONFIG_SCHEMA

logger = logging.getLogger(__name__)


class SchemaValidator:
    """
    Schema validation for configuration management.

    Collects every violation so a single run reports all invalid fields.
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize schema validator.

        Args:
            schema: JSON Schema to validate against (default: CONFIG_SCHEMA)
        """
        self.schema = schema or CONFIG_SCHEMA
        self.logger = logger

    def validate_config(self, config: Dict[str, Any], config_file: str = "unknown") -> bool:
        """
        Validate configuration against the schema.

        Args:
            config: Configuration to validate
            config_file: Configuration file name for error reporting

        Returns:
            True if validation passes

        Raises:
            ConfigurationValidationError: If validation fails
        """
        validator = jsonschema.Draft7Validator(self.schema)
        errors = list(validator.iter_errors(config))
        if not errors:
            return True

        validation_errors: List[str] = []
        invalid_fields: List[str] = []
        for error in errors:
            field_path = ".".join(str(p) for p in error.absolute_path)
            if field_path:
                invalid_fields.append(field_path)
                validation_errors.append(f"{field_path}: {error.message}")
            else:
                validation_errors.append(error.message)

        self.logger.error(f"Configuration validation failed with {len(errors)} error(s)")
        raise ConfigurationValidationError(
            f"Configuration validation failed: {validation_errors[0]}",
            config_file,
            validation_errors,
            invalid_fields
        )
