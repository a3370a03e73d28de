"""
Utilities package for Book Builder.

Configuration management and logging setup used by the CLI and the loader.
"""

from .config import BookLayout, ConfigManager, ConfigPaths
from .logging_config import LogLevel, setup_logging

__all__ = [
    "BookLayout",
    "ConfigManager",
    "ConfigPaths",
    "LogLevel",
    "setup_logging",
]
