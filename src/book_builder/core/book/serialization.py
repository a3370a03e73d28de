"""
Structured dump of a loaded book.

The in-memory model is turned into plain data (dicts, lists, strings,
numbers) and serialized as YAML or JSON. Rich text is written as Markdown
text, timestamps as ISO-8601 UTC strings and durations as humantime strings.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import yaml

from ...utils.config.defaults import DUMP_FORMATS
from ..document_processor.text_block import TextBlock
from .recipe.duration import format_duration

logger = logging.getLogger(__name__)


def to_plain(value: Any, include_modified: bool = True) -> Any:
    """
    Convert a model value to plain data.

    Args:
        value: Record, TextBlock, container or scalar
        include_modified: Keep the ``modified`` field of records; dropping it
            makes two dumps of the same files comparable regardless of file
            times. Mapping keys such as recipe names are never filtered.
    """
    if isinstance(value, TextBlock):
        return value.to_text()
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, dict):
        return {str(key): to_plain(item, include_modified) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item, include_modified) for item in value]
    if hasattr(value, "to_dict"):
        data = dict(value.to_dict())
        if not include_modified:
            data.pop("modified", None)
        return to_plain(data, include_modified)
    return value


def dump(value: Any, fmt: str = "yaml", indent: int = 2, include_modified: bool = True) -> str:
    """
    Serialize a model value.

    Args:
        value: Usually a Book
        fmt: "yaml" or "json"
        indent: Indentation width
        include_modified: Keep freshness values in the output

    Raises:
        ValueError: On an unknown format
    """
    data = to_plain(value, include_modified)
    if fmt == "yaml":
        return yaml.safe_dump(
            data,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            indent=max(indent, 2),
        )
    if fmt == "json":
        return json.dumps(data, ensure_ascii=False, indent=indent) + "\n"
    raise ValueError(f"Unknown dump format: {fmt!r} (expected one of {', '.join(DUMP_FORMATS)})")
