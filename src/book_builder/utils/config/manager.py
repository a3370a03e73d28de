"""
Main configuration manager for Book Builder.

This module provides the ConfigManager class that orchestrates configuration
loading: built-in defaults, an optional JSON file, .env loading, environment
overrides and schema validation.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .defaults import DEFAULT_CONFIG
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import BookLayout, ConfigPaths
from .schema_validation import SchemaValidator

logger = logging.getLogger(__name__)


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge configuration dictionaries; later ones override earlier ones.
    """
    result: Dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = merge_configs(result[key], value)
            else:
                result[key] = deepcopy(value)
    return result


class ConfigManager:
    """
    Configuration manager for Book Builder.

    Handles loading, validation, and merging of configuration from multiple sources:
    - Built-in defaults
    - The configuration file (``bookbuilder.config.json``), optional unless
      given explicitly
    - Environment variables, including those from a .env file
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to configuration file. When given, the file must exist.
            project_root: Directory relative paths are resolved against (default: cwd)
            load_env: Whether to load environment variables from .env file
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.explicit_config_file = config_file is not None
        self.config_file = config_file or self.paths.DEFAULT_CONFIG_FILE

        self._config: Dict[str, Any] = {}
        self._loaded = False
        self.logger = logger

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator()
        self.env_handler = EnvironmentHandler()

        if load_env:
            self.file_ops.load_environment_variables()

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._loaded

    def load_config(self, force_reload: bool = False) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicit config file is missing
            ConfigurationError: If the file cannot be read
            ConfigurationValidationError: If the merged configuration is invalid
        """
        if self._loaded and not force_reload:
            self.logger.debug("Configuration already loaded, returning cached version")
            return deepcopy(self._config)

        file_config = self._load_file_config()
        merged_config = merge_configs(DEFAULT_CONFIG, file_config)

        self.logger.debug("Applying environment variable overrides")
        config = self.env_handler.apply_environment_overrides(merged_config)

        self.schema_validator.validate_config(config, self.config_file)

        self._config = config
        self._loaded = True
        self.logger.info("Configuration loaded successfully")
        return deepcopy(self._config)

    def _load_file_config(self) -> Dict[str, Any]:
        path = self.file_ops.resolve_path(self.config_file)
        if not path.exists() and not self.explicit_config_file:
            self.logger.debug(f"No configuration file at {path}, using defaults")
            return {}
        self.logger.info(f"Loading configuration from {path}")
        return self.file_ops.load_json_file(path)

    def reload_config(self) -> Dict[str, Any]:
        """Force reload configuration from all sources."""
        return self.load_config(force_reload=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (supports dot notation like 'dump.format')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        config = self.config
        try:
            for k in key.split('.'):
                config = config[k]
            return config
        except (KeyError, TypeError):
            return default

    def has(self, key: str) -> bool:
        """Check if a configuration key exists."""
        missing = object()
        return self.get(key, missing) is not missing

    @property
    def layout(self) -> BookLayout:
        """Typed view of the ``layout`` section."""
        return BookLayout.from_dict(self.get("layout", {}))

    def get_config_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the current configuration state.

        Returns:
            Dictionary with the file used, the active environment overrides and
            every configuration key with its value
        """
        config = self.config
        return {
            "config_file": str(self.file_ops.resolve_path(self.config_file)),
            "environment_overrides": self.env_handler.active_overrides(),
            "values": dict(self._flatten(config)),
        }

    def _flatten(self, config: Dict[str, Any], prefix: str = "") -> List[tuple]:
        items = []
        for key, value in config.items():
            full_key = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                items.extend(self._flatten(value, full_key))
            else:
                items.append((full_key, value))
        return items
