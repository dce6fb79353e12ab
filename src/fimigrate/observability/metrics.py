"""Metrics hook protocol and no-op default implementation.

fimigrate emits counters and timings at key points (API requests,
retries, migrated and skipped documents, page durations).  By default a
:class:`NoopMetricsHook` is used.  Supply any object satisfying
:class:`MetricsHook` through :attr:`MigrationConfig.metrics` to route the
data points to StatsD, Prometheus, or similar.

Emitted metric names:

* ``fimigrate.requests_total``             -- counter
* ``fimigrate.retries_total``              -- counter
* ``fimigrate.rate_limited_total``         -- counter
* ``fimigrate.request_duration_ms``        -- timing
* ``fimigrate.documents_migrated_total``   -- counter
* ``fimigrate.documents_skipped_total``    -- counter, tag ``reason``
* ``fimigrate.page_duration_ms``           -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards all data points."""

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


def resolve_metrics(metrics: MetricsHook | None) -> MetricsHook:
    return metrics if metrics is not None else NoopMetricsHook()
