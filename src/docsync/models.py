"""Public data models for docsync.

This module contains every value type, enum, and supporting dataclass
referenced by the public API surface.  All types are plain dataclasses
with no behaviour beyond what is needed for structural equality and the
plain-field mapping used by transports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ChangeType(str, Enum):
    """Kinds of line-level edits emitted by the diff engine."""

    INSERT = "insert"
    """New text spliced in; consumes nothing from the base text."""

    DELETE = "delete"
    """``length`` characters removed from the base text."""

    REPLACE = "replace"
    """``length`` characters removed and ``content`` spliced in their place."""

    EQUAL = "equal"
    """Unchanged span.  Never produced by the scan; accepted on decode."""


class ConflictType(str, Enum):
    """Classification attached to a :class:`ConflictInfo`."""

    VERSION = "version"
    CONTENT = "content"
    NONE = "none"


class ResolutionStrategy(str, Enum):
    """Outcome of a conflict resolution decision."""

    KEEP_LOCAL = "keep_local"
    KEEP_SERVER = "keep_server"
    MERGE = "merge"
    CREATE_BACKUP = "create_backup"


class AutoResolveStrategy(str, Enum):
    """Policies accepted by :func:`~docsync.conflict.auto_resolve_conflict`."""

    LATEST_WINS = "latest_wins"
    """Server content wins."""

    MERGE_ATTEMPT = "merge_attempt"
    """The longer of the two contents wins (ties favour the server)."""

    KEEP_BOTH = "keep_both"
    """Both contents are kept in a manual-merge document."""


class ManualResolution(str, Enum):
    """Explicit choices a user can make when resolving a conflict."""

    KEEP_LOCAL = "keep_local"
    KEEP_SERVER = "keep_server"
    CREATE_MARKERS = "create_markers"


class SnapshotReason(str, Enum):
    """Why a :class:`DocumentSnapshot` was taken."""

    AUTO_SAVE = "auto_save"
    MANUAL_SAVE = "manual_save"
    CONFLICT_BACKUP = "conflict_backup"


# ---------------------------------------------------------------------------
# Diff engine types
# ---------------------------------------------------------------------------

@dataclass
class TextChange:
    """A single edit in a diff.

    Attributes
    ----------
    type:
        The kind of edit.
    position:
        0-based character offset into the *original* text.
    length:
        Characters consumed from the original text.  ``None`` for inserts.
    content:
        New text.  Empty for deletes.
    old_content:
        The text being replaced or deleted.  Informational only; applying a
        change never reads it.
    """

    type: ChangeType
    position: int
    length: int | None = None
    content: str = ""
    old_content: str | None = None


@dataclass
class DiffResult:
    """Output of :func:`~docsync.diff.calculate_diff`.

    Attributes
    ----------
    changes:
        Edits in scan order (position-ascending).
    similarity:
        Fraction of lines judged unchanged.  Not clamped.
    has_changes:
        ``True`` when *changes* is non-empty.
    change_count:
        Number of changes.
    """

    changes: list[TextChange] = field(default_factory=list)
    similarity: float = 1.0
    has_changes: bool = False
    change_count: int = 0

    @classmethod
    def identity(cls) -> DiffResult:
        """The result for two identical texts."""
        return cls(changes=[], similarity=1.0, has_changes=False, change_count=0)


@dataclass(frozen=True)
class IncrementalSave:
    """A diff packaged for transport, with its base version and checksum.

    The class is frozen: a new edit produces a new envelope, never an
    update to an old one.

    Attributes
    ----------
    document_id:
        Opaque identifier owned by the document store.
    base_version:
        Document version the diff was computed against.
    diff:
        The codec's serialized diff.
    timestamp:
        ISO-8601 creation instant.
    checksum:
        :func:`~docsync.utils.checksum` of *diff*.
    """

    document_id: str
    base_version: int
    diff: str
    timestamp: str
    checksum: str

    def to_dict(self) -> dict[str, Any]:
        """Plain camelCase fields for any structured transport."""
        return {
            "documentId": self.document_id,
            "baseVersion": self.base_version,
            "diff": self.diff,
            "timestamp": self.timestamp,
            "checksum": self.checksum,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IncrementalSave:
        """Inverse of :meth:`to_dict`.  Raises ``KeyError`` on missing fields."""
        return cls(
            document_id=data["documentId"],
            base_version=data["baseVersion"],
            diff=data["diff"],
            timestamp=data["timestamp"],
            checksum=data["checksum"],
        )


# ---------------------------------------------------------------------------
# Conflict types
# ---------------------------------------------------------------------------

@dataclass
class ConflictInfo:
    """Result of a single conflict-detection call.

    ``local_version`` and ``server_version`` are ``0`` for content-only
    comparisons, where no version is known.
    """

    has_conflict: bool
    local_version: int
    server_version: int
    conflict_type: ConflictType
    last_modified: str


@dataclass
class ConflictResolution:
    """A resolution decision: which strategy applied and the text to adopt."""

    strategy: ResolutionStrategy
    resolved_content: str
    backup_created: bool | None = None
    backup_id: str | None = None


@dataclass
class DocumentSnapshot:
    """A full-content capture of a document, used for manual recovery.

    The snapshot store owns persistence; docsync only builds the value.
    """

    id: str
    document_id: str
    content: str
    version: int
    created_at: str
    reason: SnapshotReason = SnapshotReason.AUTO_SAVE


@dataclass
class ConflictCheck:
    """Answer to "has the server moved past my version?".

    ``server_content`` is only populated when a conflict was found, so the
    client can recover without a second fetch.
    """

    info: ConflictInfo
    server_content: str | None = None

    @property
    def has_conflict(self) -> bool:
        return self.info.has_conflict


@dataclass
class ConflictOutcome:
    """Result of :func:`~docsync.conflict.resolve_conflict`.

    Attributes
    ----------
    resolved:
        Always ``True``; every strategy produces content to adopt.
    strategy:
        ``"no_conflict"`` when neither detector fired, otherwise the
        :class:`ResolutionStrategy` value that produced *content*.
    content:
        The text the caller should persist.
    version_conflict:
        The version-detector result.
    content_conflict:
        The content-detector result.
    """

    resolved: bool
    strategy: str
    content: str
    version_conflict: ConflictInfo
    content_conflict: ConflictInfo
    backup_created: bool | None = None
