"""Tests for diff/envelope.py: creating, validating and applying saves."""

import dataclasses
from datetime import datetime, timezone

import pytest

from docsync.diff.codec import compress_diff
from docsync.diff.engine import calculate_diff
from docsync.diff.envelope import (
    apply_incremental_save,
    create_incremental_save,
    validate_incremental_save,
)
from docsync.errors import DocsyncIntegrityError, DocsyncVersionConflictError, ErrorCode
from docsync.models import IncrementalSave
from docsync.utils.checksum import checksum

_NOW = datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def _make_save(old="a\nb\nc", new="a\nx\nc", version=3) -> IncrementalSave:
    return create_incremental_save("doc-1", version, old, new, now=_NOW)


class TestCreateIncrementalSave:
    def test_fields(self):
        save = _make_save()
        assert save.document_id == "doc-1"
        assert save.base_version == 3
        assert save.diff == compress_diff(calculate_diff("a\nb\nc", "a\nx\nc"))
        assert save.checksum == checksum(save.diff)
        assert save.timestamp == "2026-01-02T03:04:05.678Z"

    def test_default_timestamp_is_iso_utc(self):
        save = create_incremental_save("doc-1", 1, "a", "b")
        assert save.timestamp.endswith("Z")
        assert datetime.fromisoformat(save.timestamp.replace("Z", "+00:00")).tzinfo is not None

    def test_envelope_is_frozen(self):
        save = _make_save()
        with pytest.raises(dataclasses.FrozenInstanceError):
            save.diff = "{}"

    def test_dict_round_trip(self):
        save = _make_save()
        payload = save.to_dict()
        assert set(payload) == {"documentId", "baseVersion", "diff", "timestamp", "checksum"}
        assert IncrementalSave.from_dict(payload) == save


class TestValidateIncrementalSave:
    def test_fresh_save_is_valid(self):
        assert validate_incremental_save(_make_save()) is True

    def test_identical_contents_are_valid(self):
        assert validate_incremental_save(_make_save(old="same", new="same")) is True

    def test_tampered_diff_is_invalid(self):
        save = _make_save()
        tampered = dataclasses.replace(save, diff=save.diff.replace('"p":2', '"p":3'))
        assert validate_incremental_save(tampered) is False

    def test_tampered_checksum_is_invalid(self):
        save = _make_save()
        assert validate_incremental_save(dataclasses.replace(save, checksum="0")) is False

    def test_undecodable_diff_with_matching_checksum_is_invalid(self):
        save = dataclasses.replace(_make_save(), diff="not json", checksum=checksum("not json"))
        assert validate_incremental_save(save) is False

    def test_wrong_field_types_never_raise(self):
        save = dataclasses.replace(_make_save(), diff=None)
        assert validate_incremental_save(save) is False


class TestApplyIncrementalSave:
    def test_applies_to_base(self):
        save = _make_save()
        assert apply_incremental_save(save, "a\nb\nc", 3) == "a\nx\nc"

    def test_client_ahead_of_server_is_applied(self):
        save = _make_save(version=5)
        assert apply_incremental_save(save, "a\nb\nc", 4) == "a\nx\nc"

    def test_stale_base_version_raises(self):
        save = _make_save(version=3)
        with pytest.raises(DocsyncVersionConflictError) as exc_info:
            apply_incremental_save(save, "a\nb\nc", 4)
        err = exc_info.value
        assert err.code == ErrorCode.VERSION_CONFLICT
        assert err.context == {"document_id": "doc-1", "base_version": 3, "current_version": 4}

    def test_tampered_save_raises_integrity_error(self):
        save = _make_save()
        tampered = dataclasses.replace(save, checksum="deadbeef")
        with pytest.raises(DocsyncIntegrityError) as exc_info:
            apply_incremental_save(tampered, "a\nb\nc", 3)
        assert exc_info.value.context["expected_checksum"] == "deadbeef"
        assert exc_info.value.context["actual_checksum"] == save.checksum
