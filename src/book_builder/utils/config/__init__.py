"""Configuration management package.

This package provides the configuration system with support for:
- JSON schema validation
- Environment variable overrides (.env included)
- Default value resolution
- The typed book directory layout

Usage:
    from book_builder.utils.config import ConfigManager

    config = ConfigManager()
    fmt = config.get("dump.format", "yaml")
    layout = config.layout
"""

from .defaults import CONFIG_SCHEMA, DEFAULT_CONFIG, DUMP_FORMATS, LOG_LEVELS
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .manager import ConfigManager, merge_configs
from .paths import BookLayout, ConfigPaths
from .schema_validation import SchemaValidator

__all__ = [
    'ConfigManager',
    'ConfigPaths',
    'BookLayout',
    'FileOperations',
    'SchemaValidator',
    'EnvironmentHandler',
    'merge_configs',
    'DEFAULT_CONFIG',
    'CONFIG_SCHEMA',
    'DUMP_FORMATS',
    'LOG_LEVELS',
]
