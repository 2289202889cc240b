"""Conflict detection and resolution for concurrently edited documents.

Exports
-------
detect_version_conflict / detect_content_conflict
    Decide whether two writers diverged.
auto_resolve_conflict
    Resolve a conflict with a fixed policy.
create_conflict_markers / has_unresolved_conflicts / cleanup_conflict_markers
    Build, detect and strip merge-marker documents.
create_document_snapshot
    Capture a document for manual recovery.
check_conflict / resolve_conflict
    Detection and resolution flows over a fetched server document.
"""

from .detector import detect_content_conflict, detect_version_conflict
from .resolver import (
    auto_resolve_conflict,
    cleanup_conflict_markers,
    create_conflict_markers,
    create_document_snapshot,
    has_unresolved_conflicts,
)
from .workflow import NO_CONFLICT, check_conflict, resolve_conflict

__all__ = [
    "NO_CONFLICT",
    "auto_resolve_conflict",
    "check_conflict",
    "cleanup_conflict_markers",
    "create_conflict_markers",
    "create_document_snapshot",
    "detect_content_conflict",
    "detect_version_conflict",
    "has_unresolved_conflicts",
    "resolve_conflict",
]
