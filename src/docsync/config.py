"""Configuration for docsync.

:class:`DocsyncConfig` is a frozen-friendly dataclass that captures every
tuneable knob used by :class:`~docsync.sync.DocumentSync`.  The module-level
functions in :mod:`docsync.diff` and :mod:`docsync.conflict` take their
defaults from the constants below so they can be used without a config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_SIGNIFICANCE_THRESHOLD: float = 0.1
"""A diff whose similarity drops below ``1 - threshold`` is significant."""

DEFAULT_SIGNIFICANT_CHANGE_COUNT: int = 5
"""A diff with more changes than this is significant regardless of content."""

RESOLUTION_STRATEGY_NAMES: frozenset[str] = frozenset({
    "latest_wins",
    "merge_attempt",
    "keep_both",
    "keep_local",
    "keep_server",
    "create_markers",
})
"""Every strategy name accepted by :func:`~docsync.conflict.resolve_conflict`."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class DocsyncConfig:
    """Complete configuration for a :class:`~docsync.sync.DocumentSync`.

    Every parameter has a default, so ``DocsyncConfig()`` is valid.

    Parameters
    ----------
    significance_threshold:
        Similarity margin used by :func:`is_significant_change`.  A diff is
        significant when ``similarity < 1 - significance_threshold``.
    significant_change_count:
        A diff with more than this many changes is always significant.
    default_resolution_strategy:
        Strategy used by :meth:`DocumentSync.resolve_conflict` when the
        caller does not pass one.

        * ``"latest_wins"``: adopt the server content.
        * ``"merge_attempt"``: adopt the longer of the two contents.
        * ``"keep_both"``: build a manual-merge document holding both.
        * ``"keep_local"`` / ``"keep_server"``: pick a side explicitly.
        * ``"create_markers"``: emit merge-marker text for manual recovery.
    snapshot_id_prefix:
        Prefix of generated :class:`DocumentSnapshot` ids.
    metrics:
        Optional :class:`~docsync.observability.MetricsHook` backend.
    debug_dump_diff:
        Write the compressed diff of every prepared save to *stderr*.
    """

    # ── Diffing ─────────────────────────────────────────────────────────
    significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD

    significant_change_count: int = DEFAULT_SIGNIFICANT_CHANGE_COUNT

    # ── Conflicts ───────────────────────────────────────────────────────
    default_resolution_strategy: str = "latest_wins"

    snapshot_id_prefix: str = "snapshot"

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_diff: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 0.0 <= self.significance_threshold <= 1.0:
            raise ValueError(
                "significance_threshold must be between 0 and 1, "
                f"got {self.significance_threshold}"
            )
        if self.significant_change_count < 0:
            raise ValueError(
                "significant_change_count must be >= 0, "
                f"got {self.significant_change_count}"
            )
        if self.default_resolution_strategy not in RESOLUTION_STRATEGY_NAMES:
            raise ValueError(
                "default_resolution_strategy must be one of "
                f"{sorted(RESOLUTION_STRATEGY_NAMES)}, "
                f"got {self.default_resolution_strategy!r}"
            )
        if not self.snapshot_id_prefix:
            raise ValueError("snapshot_id_prefix must not be empty")
