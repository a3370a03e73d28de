"""
Filesystem side of the configuration system.

Paths in the configuration are relative to the project root, normally the
directory the CLI runs from. The configuration file is JSON; the ``.env``
file only feeds ``BOOK_BUILDER_*`` variables into the process environment.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from dotenv import load_dotenv

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
)

logger = logging.getLogger(__name__)


class FileOperations:
    """Reads configuration and ``.env`` files below a project root."""

    def __init__(self, project_root: Path, env_file: str) -> None:
        self.project_root = project_root
        self.env_file = env_file
        self.logger = logger

    def resolve_path(self, path: Union[str, Path]) -> Path:
        """Return ``path`` unchanged when absolute, else anchored at the project root."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return (self.project_root / candidate).resolve()

    def load_environment_variables(self) -> bool:
        """
        Feed the ``.env`` file, if any, into ``os.environ``.

        Values already present in the environment win over the file.

        Returns:
            True if a file was found and loaded
        """
        dotenv_path = self.resolve_path(self.env_file)
        if not dotenv_path.is_file():
            self.logger.debug(f"No {self.env_file} at {dotenv_path}")
            return False

        loaded = load_dotenv(dotenv_path, override=False)
        self.logger.info(f"Read environment overrides from {dotenv_path}")
        return loaded

    def load_json_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read a configuration file.

        Args:
            file_path: File to read, relative to the project root or absolute

        Returns:
            The decoded top-level object

        Raises:
            ConfigurationFileNotFoundError: If the file is missing
            ConfigurationError: If it is unreadable, not JSON, or not an object
        """
        source = self.resolve_path(file_path)
        if not source.exists():
            self.logger.error(f"Configuration file {source} does not exist")
            raise ConfigurationFileNotFoundError("Configuration file not found", str(source))

        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            self.logger.error(f"{source} is not valid JSON: {e}")
            raise ConfigurationError(
                "Configuration file is not valid JSON", str(source), original_exception=e
            ) from e
        except OSError as e:
            self.logger.error(f"Cannot read {source}: {e}")
            raise ConfigurationError(
                "Configuration file cannot be read", str(source), original_exception=e
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a JSON object, not {type(data).__name__}", str(source)
            )

        self.logger.debug(f"Configuration loaded from {source}")
        return data
