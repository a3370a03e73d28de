"""
Environment variable handling for configuration management.

Environment variables (from the process or a .env file) override single
configuration keys.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict

from ...exceptions.config_exceptions import EnvironmentVariableError

logger = logging.getLogger(__name__)


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    ENV_MAPPING: Dict[str, str] = {
        'BOOK_BUILDER_LOG_LEVEL': 'logging.level',
        'BOOK_BUILDER_DUMP_FORMAT': 'dump.format',
        'BOOK_BUILDER_DUMP_INDENT': 'dump.indent',
        'BOOK_BUILDER_RECIPES_DIR': 'layout.recipes_dir',
    }

    def __init__(self) -> None:
        """Initialize environment handler."""
        self.logger = logger

    def get_env_mapping(self) -> Dict[str, str]:
        """
        Get mapping of environment variable names to configuration keys.

        Returns:
            Dictionary mapping env var names to config keys
        """
        return dict(self.ENV_MAPPING)

    def convert_env_value(self, var_name: str, value: str, config_key: str) -> Any:
        """
        Convert an environment variable string to the type of its key.

        Raises:
            EnvironmentVariableError: If conversion fails
        """
        if config_key == 'logging.level':
            return value.strip().upper()
        if config_key == 'dump.format':
            return value.strip().lower()
        if config_key == 'dump.indent':
            try:
                return int(value)
            except ValueError as e:
                raise EnvironmentVariableError(
                    f"Failed to convert environment variable value '{value}' to integer",
                    var_name
                ) from e
        return value

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Base configuration dictionary

        Returns:
            Configuration with environment overrides applied

        Raises:
            EnvironmentVariableError: If a value cannot be converted
        """
        result = deepcopy(config)

        for env_var, config_key in self.get_env_mapping().items():
            env_value = os.getenv(env_var)
            if env_value is None or env_value == "":
                continue
            converted_value = self.convert_env_value(env_var, env_value, config_key)
            self._set_nested_value(result, config_key, converted_value)
            self.logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def active_overrides(self) -> Dict[str, str]:
        """Environment variables currently overriding a key, by variable name."""
        return {
            env_var: config_key
            for env_var, config_key in self.get_env_mapping().items()
            if os.getenv(env_var)
        }

    def _set_nested_value(self, config: Dict[str, Any], key_path: str, value: Any) -> None:
        """
        Set a nested value in configuration using dot notation.

        Args:
            config: Configuration dictionary to modify
            key_path: Dot-separated key path (e.g., 'dump.format')
            value: Value to set
        """
        keys = key_path.split('.')
        current = config

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value
