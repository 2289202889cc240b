"""Tests for conflict/detector.py: version and content conflict detection."""

from datetime import datetime, timezone

import pytest

from docsync.conflict.detector import detect_content_conflict, detect_version_conflict
from docsync.models import ConflictType

_T = "2026-03-01T12:00:00.000Z"
_NOW = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)


class TestDetectVersionConflict:
    def test_client_behind_is_conflict(self):
        info = detect_version_conflict(5, 10, _T)
        assert info.has_conflict is True
        assert info.conflict_type is ConflictType.VERSION
        assert info.local_version == 5
        assert info.server_version == 10
        assert info.last_modified == _T

    def test_client_ahead_is_not_conflict(self):
        info = detect_version_conflict(10, 5, _T)
        assert info.has_conflict is False
        assert info.conflict_type is ConflictType.NONE

    def test_equal_versions_are_not_conflict(self):
        info = detect_version_conflict(5, 5, _T)
        assert info.has_conflict is False
        assert info.conflict_type == "none"


class TestDetectContentConflict:
    def test_identical_contents(self):
        info = detect_content_conflict("A", "A")
        assert info.has_conflict is False
        assert info.conflict_type is ConflictType.NONE

    def test_identical_contents_ignore_base(self):
        assert detect_content_conflict("A", "A", "B").has_conflict is False

    def test_different_contents(self):
        info = detect_content_conflict("A", "B")
        assert info.has_conflict is True
        assert info.conflict_type == "content"
        assert info.local_version == 0
        assert info.server_version == 0

    def test_both_sides_changed_from_base(self):
        info = detect_content_conflict("local edit", "server edit", "original")
        assert info.has_conflict is True
        assert info.conflict_type is ConflictType.CONTENT

    @pytest.mark.parametrize(
        ("local", "server", "base"),
        [
            ("edited", "original", "original"),
            ("original", "edited", "original"),
        ],
    )
    def test_one_side_changed_is_still_flagged(self, local, server, base):
        info = detect_content_conflict(local, server, base)
        assert info.has_conflict is True
        assert info.conflict_type is ConflictType.CONTENT

    def test_empty_base_is_ignored(self):
        assert detect_content_conflict("A", "B", "").has_conflict is True

    def test_timestamp_injected(self):
        info = detect_content_conflict("A", "B", now=_NOW)
        assert info.last_modified == "2026-03-01T12:30:00.000Z"
