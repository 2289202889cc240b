"""High-level facade over the diff, envelope and conflict functions.

:class:`DocumentSync` holds a :class:`DocsyncConfig`, reports metrics
through its hook, and logs decisions with the structured logger.  It does
no I/O of its own: the caller fetches documents, transports envelopes and
persists results.

Usage::

    from docsync import DocumentSync

    sync = DocumentSync(significance_threshold=0.05)
    save = sync.prepare_save("doc-1", 3, server_text, edited_text)
    if save is not None:
        payload = save.to_dict()          # send to the server

    # server side
    new_text = sync.receive_save(save, stored_text, stored_version)
"""

from __future__ import annotations

import json
import sys
import time
from collections import Counter
from datetime import datetime
from typing import Any

from docsync.config import DocsyncConfig
from docsync.conflict import check_conflict, create_document_snapshot, resolve_conflict
from docsync.diff import (
    apply_incremental_save,
    calculate_diff,
    create_incremental_save,
    is_significant_change,
)
from docsync.errors import DocsyncIntegrityError, DocsyncVersionConflictError
from docsync.models import (
    ConflictCheck,
    ConflictOutcome,
    DiffResult,
    DocumentSnapshot,
    IncrementalSave,
    SnapshotReason,
)
from docsync.observability import NoopMetricsHook, get_logger

log = get_logger("docsync.sync")


class DocumentSync:
    """Diff, package, verify and reconcile document edits.

    Parameters
    ----------
    config:
        A ready-made configuration.  Mutually exclusive with *kwargs*.
    **kwargs:
        Forwarded to :class:`DocsyncConfig` when *config* is omitted.
    """

    def __init__(self, config: DocsyncConfig | None = None, **kwargs: Any) -> None:
        if config is not None and kwargs:
            raise TypeError("Pass either a DocsyncConfig or keyword options, not both")
        self._config = config if config is not None else DocsyncConfig(**kwargs)
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    @property
    def config(self) -> DocsyncConfig:
        return self._config

    # ------------------------------------------------------------------
    # Diffing
    # ------------------------------------------------------------------

    def diff(self, old_text: str, new_text: str) -> DiffResult:
        """Compute the line diff and report its size."""
        t0 = time.monotonic()
        result = calculate_diff(old_text, new_text)
        elapsed_ms = (time.monotonic() - t0) * 1000

        self._metrics.timing("docsync.diff_duration_ms", elapsed_ms)
        self._metrics.gauge("docsync.diff_similarity", result.similarity)
        for change_type, count in Counter(c.type.value for c in result.changes).items():
            self._metrics.increment(
                "docsync.diff_changes_total", count, tags={"type": change_type},
            )
        return result

    def should_save(self, diff: DiffResult) -> bool:
        """Apply the configured significance thresholds to *diff*."""
        return is_significant_change(
            diff,
            threshold=self._config.significance_threshold,
            max_changes=self._config.significant_change_count,
        )

    # ------------------------------------------------------------------
    # Envelopes
    # ------------------------------------------------------------------

    def prepare_save(
        self,
        document_id: str,
        base_version: int,
        old_content: str,
        new_content: str,
        *,
        force: bool = False,
        now: datetime | None = None,
    ) -> IncrementalSave | None:
        """Build an envelope for the edit, or ``None`` if it is not worth sending.

        Parameters
        ----------
        document_id:
            Identifier of the document.
        base_version:
            Version of *old_content* on the server.
        old_content:
            Last content known to be on the server.
        new_content:
            Edited content.
        force:
            Build the envelope even when the diff is not significant
            (e.g. for a manual save).
        now:
            Creation instant.  Defaults to the current time.
        """
        diff = self.diff(old_content, new_content)
        if not force and not self.should_save(diff):
            self._metrics.increment("docsync.saves_skipped_total")
            log.debug(
                "Skipped insignificant edit",
                extra={"extra_fields": {
                    "op": "prepare_save",
                    "document_id": document_id,
                    "changes": diff.change_count,
                    "similarity": diff.similarity,
                }},
            )
            return None

        save = create_incremental_save(
            document_id, base_version, old_content, new_content, now=now,
        )
        self._metrics.increment("docsync.saves_created_total")

        if self._config.debug_dump_diff:
            print(
                "[docsync] Incremental save diff:",
                json.dumps(json.loads(save.diff), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return save

    def receive_save(
        self,
        save: IncrementalSave,
        base_content: str,
        current_version: int,
    ) -> str:
        """Verify *save* and apply it to the stored content.

        Raises
        ------
        DocsyncIntegrityError
            If the envelope fails verification.
        DocsyncVersionConflictError
            If the stored document moved past the envelope's base version.
        """
        try:
            content = apply_incremental_save(save, base_content, current_version)
        except DocsyncIntegrityError:
            self._metrics.increment("docsync.saves_rejected_total", tags={"reason": "integrity"})
            raise
        except DocsyncVersionConflictError:
            self._metrics.increment("docsync.saves_rejected_total", tags={"reason": "version"})
            self._metrics.increment("docsync.conflicts_detected_total", tags={"type": "version"})
            raise

        self._metrics.increment("docsync.saves_applied_total")
        log.info(
            "Applied incremental save",
            extra={"extra_fields": {
                "op": "receive_save",
                "document_id": save.document_id,
                "base_version": save.base_version,
            }},
        )
        return content

    # ------------------------------------------------------------------
    # Conflicts
    # ------------------------------------------------------------------

    def check_conflict(
        self,
        client_version: int,
        server_version: int,
        server_content: str,
        last_modified: str,
    ) -> ConflictCheck:
        """Version check; see :func:`docsync.conflict.check_conflict`."""
        check = check_conflict(client_version, server_version, server_content, last_modified)
        if check.has_conflict:
            self._metrics.increment(
                "docsync.conflicts_detected_total", tags={"type": check.info.conflict_type.value},
            )
        return check

    def resolve_conflict(
        self,
        local_content: str,
        client_version: int,
        server_content: str,
        server_version: int,
        last_modified: str,
        resolution_strategy: str | None = None,
    ) -> ConflictOutcome:
        """Resolve with *resolution_strategy*, defaulting to the configured one."""
        strategy = resolution_strategy or self._config.default_resolution_strategy
        outcome = resolve_conflict(
            local_content,
            client_version,
            server_content,
            server_version,
            last_modified,
            resolution_strategy=strategy,
        )
        self._metrics.increment(
            "docsync.conflicts_resolved_total", tags={"strategy": outcome.strategy},
        )
        return outcome

    def snapshot(
        self,
        document_id: str,
        content: str,
        version: int,
        reason: SnapshotReason | str = SnapshotReason.AUTO_SAVE,
        *,
        now: datetime | None = None,
    ) -> DocumentSnapshot:
        """Build a snapshot using the configured id prefix."""
        return create_document_snapshot(
            document_id,
            content,
            version,
            reason,
            now=now,
            id_prefix=self._config.snapshot_id_prefix,
        )
