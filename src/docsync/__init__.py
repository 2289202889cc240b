"""docsync: incremental document saves with integrity checks and conflict handling.

Public re-exports
-----------------

* **Facade:** :class:`DocumentSync`
* **Configuration:** :class:`DocsyncConfig`
* **Diffs and envelopes:** :func:`calculate_diff`, :func:`apply_diff`,
  :func:`compress_diff`, :func:`create_incremental_save`, ...
* **Conflicts:** :func:`detect_version_conflict`,
  :func:`auto_resolve_conflict`, :func:`create_conflict_markers`, ...
* **Errors:** Every :class:`DocsyncError` subclass and :class:`ErrorCode`
* **Models:** All value dataclasses and enums

Usage::

    from docsync import calculate_diff, apply_diff

    diff = calculate_diff("a\\nb\\nc", "a\\nx\\nc")
    assert apply_diff("a\\nb\\nc", diff.changes) == "a\\nx\\nc"
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from docsync.config import DocsyncConfig

# ── Conflicts ───────────────────────────────────────────────────────────
from docsync.conflict import (
    auto_resolve_conflict,
    check_conflict,
    cleanup_conflict_markers,
    create_conflict_markers,
    create_document_snapshot,
    detect_content_conflict,
    detect_version_conflict,
    has_unresolved_conflicts,
    resolve_conflict,
)

# ── Diffs and envelopes ─────────────────────────────────────────────────
from docsync.diff import (
    apply_diff,
    apply_incremental_save,
    calculate_diff,
    compress_diff,
    create_incremental_save,
    decompress_diff,
    is_significant_change,
    merge_diffs,
    validate_incremental_save,
)

# ── Errors ──────────────────────────────────────────────────────────────
from docsync.errors import (
    DocsyncDecodeError,
    DocsyncError,
    DocsyncIntegrityError,
    DocsyncValidationError,
    DocsyncVersionConflictError,
    ErrorCode,
)

# ── Models ──────────────────────────────────────────────────────────────
from docsync.models import (
    AutoResolveStrategy,
    ChangeType,
    ConflictCheck,
    ConflictInfo,
    ConflictOutcome,
    ConflictResolution,
    ConflictType,
    DiffResult,
    DocumentSnapshot,
    IncrementalSave,
    ManualResolution,
    ResolutionStrategy,
    SnapshotReason,
    TextChange,
)

# ── Facade ──────────────────────────────────────────────────────────────
from docsync.sync import DocumentSync
from docsync.utils.checksum import checksum

__version__ = "0.1.0"

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    "__version__",
    # Facade
    "DocumentSync",
    # Configuration
    "DocsyncConfig",
    # Checksum
    "checksum",
    # Diffs
    "calculate_diff",
    "apply_diff",
    "is_significant_change",
    "merge_diffs",
    "compress_diff",
    "decompress_diff",
    # Envelopes
    "create_incremental_save",
    "validate_incremental_save",
    "apply_incremental_save",
    # Conflicts
    "detect_version_conflict",
    "detect_content_conflict",
    "auto_resolve_conflict",
    "create_conflict_markers",
    "has_unresolved_conflicts",
    "cleanup_conflict_markers",
    "create_document_snapshot",
    "check_conflict",
    "resolve_conflict",
    # Errors
    "DocsyncError",
    "ErrorCode",
    "DocsyncDecodeError",
    "DocsyncIntegrityError",
    "DocsyncValidationError",
    "DocsyncVersionConflictError",
    # Models: enums
    "ChangeType",
    "ConflictType",
    "ResolutionStrategy",
    "AutoResolveStrategy",
    "ManualResolution",
    "SnapshotReason",
    # Models: values
    "TextChange",
    "DiffResult",
    "IncrementalSave",
    "ConflictInfo",
    "ConflictResolution",
    "DocumentSnapshot",
    "ConflictCheck",
    "ConflictOutcome",
]
