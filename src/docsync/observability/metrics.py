"""Metrics hook protocol and its no-op default.

:class:`~docsync.sync.DocumentSync` reports counters and timings through
whatever object is set as ``DocsyncConfig.metrics``.  Anything with the
three methods of :class:`MetricsHook` works (StatsD, Prometheus, a test
recorder); without one, :class:`NoopMetricsHook` discards everything.

Emitted metric names:

* ``docsync.diff_changes_total``       -- counter, tagged by change type
* ``docsync.diff_duration_ms``         -- timing
* ``docsync.saves_created_total``      -- counter
* ``docsync.saves_skipped_total``      -- counter
* ``docsync.saves_applied_total``      -- counter
* ``docsync.saves_rejected_total``     -- counter, tagged by reason
* ``docsync.conflicts_detected_total`` -- counter, tagged by conflict type
* ``docsync.conflicts_resolved_total`` -- counter, tagged by strategy
* ``docsync.diff_similarity``          -- gauge
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Structural type of a metrics backend.

    *tags* are string key/value pairs; backends map them onto labels,
    tags or name suffixes as they see fit.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Add *value* to the counter *name*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set the gauge *name* to *value*."""
        ...


class NoopMetricsHook:
    """Metrics backend that drops every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
