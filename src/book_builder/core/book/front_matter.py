"""
Front matter of the book.

``front_matter.yml`` is a bare YAML mapping (no Markdown body) holding the
title page of the book: title, subtitle, author, contact email and site.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterator, Optional
from urllib.parse import urlparse

from ...exceptions.structure_exceptions import MetadataSchemaError
from ..document_processor.freshness import Freshness
from ..document_processor.metadata.frontmatter import default_codec, validate_metadata
from ..document_processor.text_block import TextBlock

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

FRONT_MATTER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1},
        "subtitle": {"type": "string"},
        "author": {"type": "string", "minLength": 1},
        "email": {"type": "string"},
        "site": {"type": "string"},
    },
    "required": ["title", "subtitle", "author", "email", "site"],
    "additionalProperties": False,
}


def validate_email(value: str) -> str:
    """Return the address unchanged, raising MetadataSchemaError if malformed."""
    if not EMAIL_PATTERN.match(value):
        raise MetadataSchemaError(f"Invalid email address: {value!r}", metadata_type="FrontMatter")
    return value


def validate_site(value: str) -> str:
    """Return the URL unchanged, raising MetadataSchemaError unless it is absolute http(s)."""
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise MetadataSchemaError(
            f"Invalid site URL: {value!r} (expected an absolute http or https URL)",
            metadata_type="FrontMatter"
        )
    return value


@dataclass(frozen=True)
class FrontMatter:
    """
    Title page of the book.

    Attributes:
        title: Book title (rich text)
        subtitle: Book subtitle (rich text)
        author: Author name
        email: Contact address
        site: Absolute http(s) URL
        modified: Modification time of ``front_matter.yml``
    """
    title: TextBlock
    subtitle: TextBlock
    author: str
    email: str
    site: str
    modified: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrontMatter":
        validate_metadata(data, FRONT_MATTER_SCHEMA, cls.__name__)
        return cls(
            title=TextBlock.from_text(data["title"]),
            subtitle=TextBlock.from_text(data["subtitle"]),
            author=data["author"],
            email=validate_email(data["email"]),
            site=validate_site(data["site"]),
        )

    @classmethod
    def from_yaml(cls, text: str, modified: Freshness = None) -> "FrontMatter":
        """
        Decode the content of ``front_matter.yml``.

        A ``modified`` key in the file is ignored with a warning.

        Raises:
            MetadataSchemaError: If the YAML is invalid or has the wrong shape
        """
        return default_codec.decode(text, cls).stamped(modified)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title.to_text(),
            "subtitle": self.subtitle.to_text(),
            "author": self.author,
            "email": self.email,
            "site": self.site,
        }
        if self.modified is not None:
            data["modified"] = self.modified
        return data

    def stamped(self, modified: Freshness) -> "FrontMatter":
        return replace(self, modified=modified)

    def iter_modified(self) -> Iterator[Freshness]:
        yield self.modified
