"""
Built-in configuration and the JSON Schema every merged configuration must
satisfy.
"""

from typing import Any, Dict

from .paths import BookLayout

DUMP_FORMATS = ("yaml", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_CONFIG: Dict[str, Any] = {
    "layout": BookLayout().to_dict(),
    "dump": {
        "format": "yaml",
        "indent": 2,
    },
    "logging": {
        "level": "WARNING",
    },
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "layout": {
            "type": "object",
            "properties": {
                "front_matter": {"type": "string", "minLength": 1},
                "introduction_dir": {"type": "string", "minLength": 1},
                "recipes_dir": {"type": "string", "minLength": 1},
                "recipe_suffix": {"type": "string", "pattern": "^\\..+"},
            },
            "additionalProperties": False,
        },
        "dump": {
            "type": "object",
            "properties": {
                "format": {"enum": list(DUMP_FORMATS)},
                "indent": {"type": "integer", "minimum": 0, "maximum": 8},
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"enum": list(LOG_LEVELS)},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}
