"""Conflict resolution: automatic strategies, merge markers, snapshots.

Every function here is a pure decision over its inputs.  Writing the
resolved content or the snapshot back to storage is the caller's job.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime

from docsync.models import (
    AutoResolveStrategy,
    ConflictInfo,
    ConflictResolution,
    DocumentSnapshot,
    ResolutionStrategy,
    SnapshotReason,
)
from docsync.observability import get_logger
from docsync.utils.clock import epoch_millis, iso_timestamp, utc_now

log = get_logger("docsync.conflict")

LOCAL_MARKER = "<<<<<<<"
SEPARATOR_MARKER = "======="
SERVER_MARKER = ">>>>>>>"

_CONFLICT_MARKERS: tuple[str, ...] = (LOCAL_MARKER, SEPARATOR_MARKER, SERVER_MARKER)

_LOCAL_MARKER_LINE_RE = re.compile(r"<<<<<<< .*?\n")
_SEPARATOR_LINE_RE = re.compile(r"=======\n")
_SERVER_MARKER_LINE_RE = re.compile(r">>>>>>> .*?\n")
_METADATA_BLOCK_RE = re.compile(r"<!-- CONFLICT INFO:[\s\S]*?-->")

_KEEP_BOTH_TEMPLATE = """\
# Conflicting content - manual merge required

## Local version
{local}

## Server version
{server}

---
Merge the two versions above by hand, then delete this notice.
"""

_MARKERS_TEMPLATE = """\
<<<<<<< LOCAL CHANGES (version {local_version})
{local}
=======
{server}
>>>>>>> SERVER CHANGES (version {server_version})

<!-- CONFLICT INFO:
- Conflict type: {conflict_type}
- Last modified: {last_modified}
- Resolve the conflict manually, then remove these markers
-->"""


def auto_resolve_conflict(
    local_content: str,
    server_content: str,
    strategy: AutoResolveStrategy | str = AutoResolveStrategy.LATEST_WINS,
) -> ConflictResolution:
    """Resolve a conflict without user input.

    Strategies
    ----------
    ``latest_wins``
        Keep the server content (``keep_server``).
    ``merge_attempt``
        Keep whichever content is strictly longer; ties keep the server
        content (``merge``).
    ``keep_both``
        Build a document holding both full texts under labelled headings
        for a manual merge (``create_backup``, ``backup_created=True``).

    Any other value falls back to ``latest_wins``.
    """
    try:
        chosen = AutoResolveStrategy(strategy)
    except ValueError:
        log.debug(
            "Unknown auto-resolve strategy, falling back to latest_wins",
            extra={"extra_fields": {"op": "auto_resolve_conflict", "strategy": str(strategy)}},
        )
        chosen = AutoResolveStrategy.LATEST_WINS

    if chosen is AutoResolveStrategy.MERGE_ATTEMPT:
        merged = local_content if len(local_content) > len(server_content) else server_content
        return ConflictResolution(
            strategy=ResolutionStrategy.MERGE,
            resolved_content=merged,
        )

    if chosen is AutoResolveStrategy.KEEP_BOTH:
        return ConflictResolution(
            strategy=ResolutionStrategy.CREATE_BACKUP,
            resolved_content=_KEEP_BOTH_TEMPLATE.format(
                local=local_content, server=server_content,
            ),
            backup_created=True,
        )

    return ConflictResolution(
        strategy=ResolutionStrategy.KEEP_SERVER,
        resolved_content=server_content,
    )


def create_conflict_markers(
    local_content: str,
    server_content: str,
    conflict_info: ConflictInfo,
) -> str:
    """Return a merge-marker document holding both contents.

    The local side sits between the ``<<<<<<<`` and ``=======`` lines, the
    server side between ``=======`` and ``>>>>>>>``.  Each marker carries
    its version from *conflict_info*, and an HTML comment after the
    markers records the conflict type and last-modified time.
    """
    conflict_type = getattr(conflict_info.conflict_type, "value", conflict_info.conflict_type)
    return _MARKERS_TEMPLATE.format(
        local_version=conflict_info.local_version,
        server_version=conflict_info.server_version,
        local=local_content,
        server=server_content,
        conflict_type=conflict_type,
        last_modified=conflict_info.last_modified,
    )


def has_unresolved_conflicts(content: str) -> bool:
    """``True`` if *content* contains any conflict marker."""
    return any(marker in content for marker in _CONFLICT_MARKERS)


def cleanup_conflict_markers(content: str) -> str:
    """Strip marker lines and the conflict metadata block, then trim."""
    content = _LOCAL_MARKER_LINE_RE.sub("", content)
    content = _SEPARATOR_LINE_RE.sub("", content)
    content = _SERVER_MARKER_LINE_RE.sub("", content)
    content = _METADATA_BLOCK_RE.sub("", content)
    return content.strip()


def create_document_snapshot(
    document_id: str,
    content: str,
    version: int,
    reason: SnapshotReason | str = SnapshotReason.AUTO_SAVE,
    *,
    now: datetime | None = None,
    id_prefix: str = "snapshot",
) -> DocumentSnapshot:
    """Capture *content* at *version* as a :class:`DocumentSnapshot`.

    The id is ``{prefix}_{document_id}_{epoch_ms}_{suffix}``; the random
    8-hex-digit suffix keeps two snapshots taken in the same millisecond
    apart.
    """
    if now is None:
        now = utc_now()
    snapshot_id = f"{id_prefix}_{document_id}_{epoch_millis(now)}_{uuid.uuid4().hex[:8]}"
    return DocumentSnapshot(
        id=snapshot_id,
        document_id=document_id,
        content=content,
        version=version,
        created_at=iso_timestamp(now),
        reason=SnapshotReason(reason),
    )
