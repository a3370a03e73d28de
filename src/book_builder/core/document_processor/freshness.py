"""
Freshness aggregation.

Every loaded unit carries the best-known modification time of the file it came
from. Composites combine the values of their parts with one rule: the newest
value wins, but only if every value is known. An unknown part makes the whole
aggregate unknown.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

Freshness = Optional[datetime]

T = TypeVar("T")


def aggregate_modified(values: Iterable[Freshness]) -> Freshness:
    """
    Combine freshness values.

    Args:
        values: Freshness of each part

    Returns:
        The maximum value, or None if any value is None or there are no values

    Example:
        >>> aggregate_modified([t1, t2]) == max(t1, t2)
        True
        >>> aggregate_modified([t1, None]) is None
        True
    """
    latest: Freshness = None
    seen = False
    for value in values:
        if value is None:
            return None
        if not seen or value > latest:
            latest = value
        seen = True
    return latest


def iter_modified(value: Any) -> Iterator[Freshness]:
    """
    Yield the freshness of every leaf below a value.

    Values without leaves of their own report their ``modified`` attribute;
    values carrying none count as unknown.
    """
    if hasattr(value, "iter_modified"):
        yield from value.iter_modified()
    else:
        yield getattr(value, "modified", None)


def stamp(value: T, modified: Freshness) -> T:
    """Return ``value`` with every leaf stamped, or unchanged if it cannot be."""
    if hasattr(value, "stamped"):
        return value.stamped(modified)
    return value


def file_modified(path: Union[str, Path]) -> Freshness:
    """
    Read the modification time of a file as an aware UTC datetime.

    Failing to read it is not fatal: a warning is logged and None is returned,
    so the unknown value propagates through every aggregate above the file.
    """
    try:
        mtime = os.stat(path).st_mtime
    except OSError as e:
        logger.warning(f"Freshness unavailable for {path}: {e}")
        return None
    return datetime.fromtimestamp(mtime, tz=timezone.utc)
