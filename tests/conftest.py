"""Shared test fixtures for the docsync test suite."""

from __future__ import annotations

from typing import Any

import pytest

from docsync.config import DocsyncConfig
from docsync.sync import DocumentSync


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})

    def names(self) -> list[str]:
        return [call["name"] for call in self.increments]


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    """A fresh recording metrics hook."""
    return RecordingMetricsHook()


@pytest.fixture
def config(metrics: RecordingMetricsHook) -> DocsyncConfig:
    """Default configuration wired to the recording hook."""
    return DocsyncConfig(metrics=metrics)


@pytest.fixture
def sync(config: DocsyncConfig) -> DocumentSync:
    """A DocumentSync facade using the default test config."""
    return DocumentSync(config)
