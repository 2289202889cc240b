"""Conflict check and resolution flows over a fetched server document.

These functions combine the detectors and the resolver into the two
decisions a save endpoint needs: "is the client behind?" and "what
content should be stored now?".  The caller fetches the server document
and persists the outcome.
"""

from __future__ import annotations

from docsync.errors import DocsyncValidationError
from docsync.models import (
    ConflictCheck,
    ConflictInfo,
    ConflictOutcome,
    ConflictResolution,
    ManualResolution,
    ResolutionStrategy,
)
from docsync.observability import get_logger

from .detector import detect_content_conflict, detect_version_conflict
from .resolver import auto_resolve_conflict, create_conflict_markers

log = get_logger("docsync.conflict")

NO_CONFLICT = "no_conflict"


def _require_version(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DocsyncValidationError(
            message=f"{name} must be an integer",
            context={"field": name, "value": value, "constraint": "int"},
        )


def _require_text(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise DocsyncValidationError(
            message=f"{name} must be a string",
            context={"field": name, "value": type(value).__name__, "constraint": "str"},
        )


def check_conflict(
    client_version: int,
    server_version: int,
    server_content: str,
    last_modified: str,
) -> ConflictCheck:
    """Compare the client's version against the stored document.

    ``server_content`` is attached only when the client is behind.
    """
    _require_version("client_version", client_version)
    _require_version("server_version", server_version)

    info = detect_version_conflict(client_version, server_version, last_modified)
    return ConflictCheck(
        info=info,
        server_content=server_content if info.has_conflict else None,
    )


def _resolve_manually(
    choice: ManualResolution,
    local_content: str,
    server_content: str,
    version_conflict: ConflictInfo,
) -> ConflictResolution:
    if choice is ManualResolution.KEEP_LOCAL:
        return ConflictResolution(
            strategy=ResolutionStrategy.KEEP_LOCAL,
            resolved_content=local_content,
        )
    if choice is ManualResolution.KEEP_SERVER:
        return ConflictResolution(
            strategy=ResolutionStrategy.KEEP_SERVER,
            resolved_content=server_content,
        )
    return ConflictResolution(
        strategy=ResolutionStrategy.CREATE_BACKUP,
        resolved_content=create_conflict_markers(
            local_content, server_content, version_conflict,
        ),
    )


def resolve_conflict(
    local_content: str,
    client_version: int,
    server_content: str,
    server_version: int,
    last_modified: str,
    resolution_strategy: str = "latest_wins",
) -> ConflictOutcome:
    """Decide what content to store after a client submits *local_content*.

    Both detectors run first.  If neither reports a conflict the local
    content is kept and the strategy is ``"no_conflict"``.  Otherwise:

    * ``keep_local`` / ``keep_server`` pick that side.
    * ``create_markers`` stores a merge-marker document annotated with the
      version conflict (strategy ``create_backup``).
    * Anything else is handed to :func:`auto_resolve_conflict`, which
      treats unknown names as ``latest_wins``.

    Raises
    ------
    DocsyncValidationError
        If a version is not an integer or a content is not a string.
    """
    _require_text("local_content", local_content)
    _require_text("server_content", server_content)
    _require_version("client_version", client_version)
    _require_version("server_version", server_version)

    version_conflict = detect_version_conflict(client_version, server_version, last_modified)
    content_conflict = detect_content_conflict(local_content, server_content)

    if not version_conflict.has_conflict and not content_conflict.has_conflict:
        return ConflictOutcome(
            resolved=True,
            strategy=NO_CONFLICT,
            content=local_content,
            version_conflict=version_conflict,
            content_conflict=content_conflict,
        )

    try:
        choice = ManualResolution(resolution_strategy)
    except ValueError:
        resolution = auto_resolve_conflict(local_content, server_content, resolution_strategy)
    else:
        resolution = _resolve_manually(choice, local_content, server_content, version_conflict)

    log.info(
        "Conflict resolved",
        extra={"extra_fields": {
            "op": "resolve_conflict",
            "requested": str(resolution_strategy),
            "strategy": resolution.strategy.value,
            "client_version": client_version,
            "server_version": server_version,
        }},
    )

    return ConflictOutcome(
        resolved=True,
        strategy=resolution.strategy.value,
        content=resolution.resolved_content,
        version_conflict=version_conflict,
        content_conflict=content_conflict,
        backup_created=resolution.backup_created,
    )
