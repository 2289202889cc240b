"""Incremental-save envelopes: package, verify, and apply a diff.

An :class:`~docsync.models.IncrementalSave` bundles a compressed diff
with the document version it was computed against and a checksum of the
compressed text.  The sending side builds one with
:func:`create_incremental_save`; the receiving side checks it with
:func:`validate_incremental_save` and applies it with
:func:`apply_incremental_save`.

Serializing concurrent envelopes for the same document (so that each
envelope's base matches the stored version when it is applied) is the
storage layer's job.  Wrap the apply, the version check and the version
bump in one atomic unit there.
"""

from __future__ import annotations

from datetime import datetime

from docsync.conflict.detector import detect_version_conflict
from docsync.errors import DocsyncIntegrityError, DocsyncVersionConflictError
from docsync.models import IncrementalSave
from docsync.observability import get_logger
from docsync.utils.checksum import checksum
from docsync.utils.clock import iso_timestamp

from .codec import compress_diff, decompress_diff
from .engine import apply_diff, calculate_diff

log = get_logger("docsync.envelope")


def create_incremental_save(
    document_id: str,
    base_version: int,
    old_content: str,
    new_content: str,
    *,
    now: datetime | None = None,
) -> IncrementalSave:
    """Diff *old_content* against *new_content* and package the result.

    Parameters
    ----------
    document_id:
        Identifier of the document in the external store.
    base_version:
        Version of *old_content* in the store.
    old_content:
        Last content known to be on the server.
    new_content:
        Edited content.
    now:
        Creation instant.  Defaults to the current time.

    Returns
    -------
    IncrementalSave
    """
    compressed = compress_diff(calculate_diff(old_content, new_content))
    return IncrementalSave(
        document_id=document_id,
        base_version=base_version,
        diff=compressed,
        timestamp=iso_timestamp(now),
        checksum=checksum(compressed),
    )


def validate_incremental_save(save: IncrementalSave) -> bool:
    """Return ``True`` if *save* has a matching checksum and a decodable diff.

    This is a pure predicate: every failure, including a malformed
    envelope object, yields ``False`` and nothing is raised.
    """
    try:
        if checksum(save.diff) != save.checksum:
            log.debug(
                "Incremental save checksum mismatch",
                extra={"extra_fields": {
                    "op": "validate_incremental_save",
                    "document_id": save.document_id,
                }},
            )
            return False
        decompress_diff(save.diff)
    except Exception as exc:  # collapse every failure to False
        log.debug(
            "Incremental save could not be verified",
            extra={"extra_fields": {
                "op": "validate_incremental_save",
                "error": str(exc),
            }},
        )
        return False
    return True


def apply_incremental_save(
    save: IncrementalSave,
    base_content: str,
    current_version: int,
) -> str:
    """Verify *save* and apply its diff to *base_content*.

    Parameters
    ----------
    save:
        The received envelope.
    base_content:
        Content of the document at *current_version*.
    current_version:
        Version currently stored for the document.

    Returns
    -------
    str
        The new document content.

    Raises
    ------
    DocsyncIntegrityError
        If the envelope fails :func:`validate_incremental_save`.
    DocsyncVersionConflictError
        If the document has moved past ``save.base_version``.
    """
    if not validate_incremental_save(save):
        log.warning(
            "Rejected incremental save",
            extra={"extra_fields": {
                "op": "apply_incremental_save",
                "document_id": save.document_id,
                "base_version": save.base_version,
            }},
        )
        raise DocsyncIntegrityError(
            message=f"Incremental save for document {save.document_id!r} failed verification",
            context={
                "document_id": save.document_id,
                "expected_checksum": save.checksum,
                "actual_checksum": checksum(save.diff) if isinstance(save.diff, str) else None,
            },
        )

    info = detect_version_conflict(save.base_version, current_version, save.timestamp)
    if info.has_conflict:
        raise DocsyncVersionConflictError(
            message=(
                f"Document {save.document_id!r} is at version {current_version}, "
                f"but the incremental save was computed against version {save.base_version}"
            ),
            context={
                "document_id": save.document_id,
                "base_version": save.base_version,
                "current_version": current_version,
            },
        )

    diff = decompress_diff(save.diff)
    return apply_diff(base_content, diff.changes)
