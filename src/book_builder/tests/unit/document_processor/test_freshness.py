"""Tests for freshness aggregation."""

import logging
import os
from datetime import datetime, timedelta, timezone

from book_builder.core.document_processor.freshness import (
    aggregate_modified,
    file_modified,
    iter_modified,
    stamp,
)

T1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T2 = T1 + timedelta(days=1)


class TestAggregateModified:
    """Tests for the aggregation rule."""

    def test_newest_value_wins(self):
        """Test the maximum of known values is returned."""
        assert aggregate_modified([T1, T2, T1]) == T2

    def test_single_value(self):
        """Test one value aggregates to itself."""
        assert aggregate_modified([T1]) == T1

    def test_unknown_value_poisons_aggregate(self):
        """Test any unknown value makes the aggregate unknown."""
        assert aggregate_modified([T2, None, T1]) is None

    def test_empty_is_unknown(self):
        """Test nothing to aggregate gives an unknown value."""
        assert aggregate_modified([]) is None

    def test_accepts_generators(self):
        """Test any iterable is accepted."""
        assert aggregate_modified(value for value in (T1, T2)) == T2


class TestLeafHelpers:
    """Tests for iter_modified and stamp on arbitrary values."""

    def test_iter_modified_without_freshness(self):
        """Test values without freshness count as unknown."""
        assert list(iter_modified("plain")) == [None]

    def test_stamp_leaves_plain_values(self):
        """Test values that cannot be stamped are returned unchanged."""
        assert stamp("plain", T1) == "plain"


class TestFileModified:
    """Tests for reading file modification times."""

    def test_reads_mtime_as_utc(self, tmp_path):
        """Test the modification time is an aware UTC datetime."""
        path = tmp_path / "file.md"
        path.write_text("x")
        os.utime(path, (T1.timestamp(), T1.timestamp()))
        assert file_modified(path) == T1
        assert file_modified(path).tzinfo is not None

    def test_missing_file_is_unknown(self, tmp_path, caplog):
        """Test an unreadable modification time is logged and unknown."""
        with caplog.at_level(logging.WARNING):
            assert file_modified(tmp_path / "missing.md") is None
        assert "Freshness unavailable" in caplog.text
