"""
Configuration file paths and book directory layout.

ConfigPaths holds the names the configuration system looks for; BookLayout is
the typed view of the ``layout`` section, naming the files and directories
of a book.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ConfigPaths:
    """Configuration file paths and constants."""

    DEFAULT_CONFIG_FILE: str = "bookbuilder.config.json"
    ENV_FILE: str = ".env"


@dataclass(frozen=True)
class BookLayout:
    """
    File and directory names inside a book directory.

    Attributes:
        front_matter: YAML file with the title page
        introduction_dir: Directory holding the four introduction documents
        recipes_dir: Directory holding one file per recipe
        recipe_suffix: Suffix of recipe files; other files are ignored
    """
    front_matter: str = "front_matter.yml"
    introduction_dir: str = "introduction"
    recipes_dir: str = "recipes"
    recipe_suffix: str = ".md"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookLayout":
        known = {key: data[key] for key in cls.__dataclass_fields__ if key in data}
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "front_matter": self.front_matter,
            "introduction_dir": self.introduction_dir,
            "recipes_dir": self.recipes_dir,
            "recipe_suffix": self.recipe_suffix,
        }
