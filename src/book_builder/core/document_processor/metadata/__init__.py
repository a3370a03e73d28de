"""
Metadata block decoding for embedded YAML frontmatter.
"""

from .frontmatter import (
    FrontmatterCodec,
    RESERVED_KEYS,
    default_codec,
    validate_metadata,
)

__all__ = [
    "FrontmatterCodec",
    "RESERVED_KEYS",
    "default_codec",
    "validate_metadata",
]
