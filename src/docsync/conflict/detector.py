"""Conflict detection between a local writer and the server copy.

Two independent checks are provided: a version comparison for callers
that track document versions, and a content comparison for callers that
only have the texts.  Both return a fresh :class:`ConflictInfo`; neither
persists anything.
"""

from __future__ import annotations

from datetime import datetime

from docsync.models import ConflictInfo, ConflictType
from docsync.utils.clock import iso_timestamp


def detect_version_conflict(
    client_version: int,
    server_version: int,
    last_modified: str,
) -> ConflictInfo:
    """Report a conflict when the client is behind the server.

    Only ``client_version < server_version`` counts.  Equal versions are
    not a conflict, and neither is a client that is *ahead* of the server:
    the comparison is one-sided.

    Parameters
    ----------
    client_version:
        Version the client last saw.
    server_version:
        Version currently stored.
    last_modified:
        ISO-8601 time of the server's last modification, passed through.

    Returns
    -------
    ConflictInfo
    """
    has_conflict = client_version < server_version
    return ConflictInfo(
        has_conflict=has_conflict,
        local_version=client_version,
        server_version=server_version,
        conflict_type=ConflictType.VERSION if has_conflict else ConflictType.NONE,
        last_modified=last_modified,
    )


def detect_content_conflict(
    local_content: str,
    server_content: str,
    base_content: str | None = None,
    *,
    now: datetime | None = None,
) -> ConflictInfo:
    """Report a conflict whenever the two contents differ.

    When a non-empty *base_content* is given, the three-way case where both
    sides changed relative to the base is classified first.  That check
    does not suppress anything: if only one side changed the contents
    still differ, and the result is still a ``content`` conflict.

    Versions are unknown on this path and are reported as ``0``.
    """
    timestamp = iso_timestamp(now)

    if local_content == server_content:
        return ConflictInfo(
            has_conflict=False,
            local_version=0,
            server_version=0,
            conflict_type=ConflictType.NONE,
            last_modified=timestamp,
        )

    if base_content:
        local_changed = local_content != base_content
        server_changed = server_content != base_content
        if local_changed and server_changed:
            return ConflictInfo(
                has_conflict=True,
                local_version=0,
                server_version=0,
                conflict_type=ConflictType.CONTENT,
                last_modified=timestamp,
            )

    # TODO: fast-forward when only one side moved away from base_content;
    # the stored behaviour flags any difference, so callers rely on it.
    return ConflictInfo(
        has_conflict=True,
        local_version=0,
        server_version=0,
        conflict_type=ConflictType.CONTENT,
        last_modified=timestamp,
    )
