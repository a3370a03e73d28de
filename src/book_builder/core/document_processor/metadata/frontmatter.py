"""
Frontmatter Codec Module

Decodes the YAML metadata block embedded at the top of a document into a
typed record, and encodes a record back into YAML text.

Metadata record types are plain classes offering ``from_dict(data)`` and
``to_dict()``. Shapes are checked with JSON Schema (``validate_metadata``) so
every decoding failure surfaces as a MetadataSchemaError.
"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from jsonschema import Draft7Validator

from ....exceptions.structure_exceptions import MetadataSchemaError

logger = logging.getLogger(__name__)

M = TypeVar("M")

# Freshness is computed from the file system, never read from content.
RESERVED_KEYS = ("modified",)


class FrontmatterCodec:
    """YAML codec for metadata blocks."""

    def decode(self, raw_text: str, metadata_type: Type[M]) -> M:
        """
        Decode raw YAML into a metadata record.

        Args:
            raw_text: Text of the metadata block (without delimiters)
            metadata_type: Record class offering ``from_dict``

        Returns:
            Decoded record

        Raises:
            MetadataSchemaError: On YAML errors, non-mapping data, or when the
                record class rejects the data
        """
        type_name = metadata_type.__name__
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as e:
            raise MetadataSchemaError(
                f"Invalid YAML in {type_name} metadata",
                metadata_type=type_name,
                original_exception=e
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataSchemaError(
                f"{type_name} metadata must be a mapping, got {type(data).__name__}",
                metadata_type=type_name
            )

        data = self.strip_reserved(data, type_name)

        try:
            return metadata_type.from_dict(data)
        except MetadataSchemaError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise MetadataSchemaError(
                f"Cannot build {type_name} from metadata",
                metadata_type=type_name,
                original_exception=e
            ) from e

    def encode(self, metadata: Any) -> str:
        """Encode a metadata record as YAML text (no delimiters)."""
        return yaml.safe_dump(
            metadata.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False
        )

    @staticmethod
    def strip_reserved(data: Dict[str, Any], type_name: str) -> Dict[str, Any]:
        """Drop keys that may not be set from content, warning about each."""
        kept = dict(data)
        for key in RESERVED_KEYS:
            if key in kept:
                logger.warning(
                    f"Ignoring '{key}' set in {type_name} metadata; "
                    f"it is computed from the file modification time"
                )
                del kept[key]
        return kept


def validate_metadata(
    data: Any,
    schema: Dict[str, Any],
    metadata_type: Optional[str] = None
) -> None:
    """
    Validate decoded metadata against a JSON Schema.

    All violations are collected into one error message.

    Raises:
        MetadataSchemaError: If the data does not match the schema
    """
    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return

    details = []
    for error in errors:
        location = ".".join(str(p) for p in error.absolute_path) or "<root>"
        details.append(f"{location}: {error.message}")
    raise MetadataSchemaError(
        f"Invalid {metadata_type or 'metadata'}: " + "; ".join(details),
        metadata_type=metadata_type
    )


default_codec = FrontmatterCodec()
