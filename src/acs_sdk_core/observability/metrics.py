# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client metrics for the ACS SDK core.

This module provides:
1. ClientMetrics - Dataclass of in-process counters kept by every client
2. PrometheusClientMetrics - Optional Prometheus metrics for observability

Usage:
    metrics = ClientMetrics()
    metrics.record_attempt()
    metrics.record_outcome(status_code=200)
    stats = metrics.get_stats()

Label values are CATEGORICAL (product codes, status classes). Do not label
with request ids or other unbounded identifiers.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

# Type declarations for optional prometheus_client imports
if TYPE_CHECKING:
    from prometheus_client import Counter as CounterType, Histogram as HistogramType
else:
    CounterType = object
    HistogramType = object

# Try to import prometheus_client for optional Prometheus metrics
try:
    from prometheus_client import Counter as _Counter, Histogram as _Histogram

    Counter: type[CounterType] | None = _Counter
    Histogram: type[HistogramType] | None = _Histogram
    PROMETHEUS_AVAILABLE = True
except ImportError:
    Counter = None
    Histogram = None
    PROMETHEUS_AVAILABLE = False


def status_class(status_code: int) -> str:
    """Collapse an HTTP status into ``2xx``/``4xx``/``5xx``..."""
    return f"{status_code // 100}xx"


@dataclass
class ClientMetrics:
    """
    Per-client request counters.

    Thread Safety:
        Batch callbacks run on the event loop thread while synchronous
        dispatch may run on caller threads, so updates take a lock.
    """

    attempts: int = 0
    retries: int = 0
    successes: int = 0
    client_errors: int = 0
    server_errors: int = 0
    transport_errors: int = 0
    batch_requests: int = 0

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_attempt(self, retry: bool = False) -> None:
        with self._lock:
            self.attempts += 1
            if retry:
                self.retries += 1

    def record_outcome(self, status_code: int) -> None:
        with self._lock:
            if 200 <= status_code < 300:
                self.successes += 1
            elif status_code >= 500:
                self.server_errors += 1
            else:
                self.client_errors += 1

    def record_transport_error(self) -> None:
        with self._lock:
            self.transport_errors += 1

    def record_batch(self, size: int) -> None:
        with self._lock:
            self.batch_requests += size

    def get_stats(self) -> dict[str, Any]:
        """Snapshot suitable for JSON serialization."""
        with self._lock:
            return {
                "attempts": self.attempts,
                "retries": self.retries,
                "successes": self.successes,
                "client_errors": self.client_errors,
                "server_errors": self.server_errors,
                "transport_errors": self.transport_errors,
                "batch_requests": self.batch_requests,
            }

    def reset(self) -> None:
        with self._lock:
            self.attempts = 0
            self.retries = 0
            self.successes = 0
            self.client_errors = 0
            self.server_errors = 0
            self.transport_errors = 0
            self.batch_requests = 0


class PrometheusClientMetrics:
    """
    Prometheus metrics for API calls.

    Metrics exposed:
        - acs_sdk_requests_total: Counter of responses by product and status class
        - acs_sdk_retries_total: Counter of retried attempts by product
        - acs_sdk_transport_errors_total: Counter of transport failures by product
        - acs_sdk_request_duration_seconds: Histogram of attempt durations
    """

    def __init__(self, registry: Any | None = None) -> None:
        """
        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.

        Raises:
            ImportError: If prometheus_client is not available.
        """
        if not PROMETHEUS_AVAILABLE or Counter is None or Histogram is None:
            raise ImportError(
                "prometheus_client is not available. "
                "Install with: pip install acs-sdk-core[metrics]"
            )

        self.requests = Counter(
            "acs_sdk_requests_total",
            "API responses received",
            ["product", "status_class"],
            registry=registry,
        )
        self.retries = Counter(
            "acs_sdk_retries_total",
            "API attempts that were retries",
            ["product"],
            registry=registry,
        )
        self.transport_errors = Counter(
            "acs_sdk_transport_errors_total",
            "API attempts that failed before a response arrived",
            ["product"],
            registry=registry,
        )
        self.request_duration_seconds = Histogram(
            "acs_sdk_request_duration_seconds",
            "Duration of single API attempts",
            ["product"],
            buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
            registry=registry,
        )

        logger.info("Prometheus client metrics initialized")

    def observe_response(self, product: str, status_code: int, duration_seconds: float) -> None:
        self.requests.labels(product=product, status_class=status_class(status_code)).inc()
        self.request_duration_seconds.labels(product=product).observe(duration_seconds)

    def observe_retry(self, product: str) -> None:
        self.retries.labels(product=product).inc()

    def observe_transport_error(self, product: str) -> None:
        self.transport_errors.labels(product=product).inc()


# Module-level singleton for Prometheus metrics (optional)
_prometheus_client_metrics: PrometheusClientMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_client_metrics() -> PrometheusClientMetrics | None:
    """
    Get or create the Prometheus metrics singleton.

    Uses double-checked locking so concurrent clients never register the same
    collector twice.

    Returns:
        PrometheusClientMetrics if prometheus_client is available, None otherwise.
    """
    global _prometheus_client_metrics

    if not PROMETHEUS_AVAILABLE:
        return None

    if _prometheus_client_metrics is None:
        with _prometheus_lock:
            if _prometheus_client_metrics is None:
                try:
                    _prometheus_client_metrics = PrometheusClientMetrics()
                except Exception as e:
                    logger.warning(f"Failed to initialize Prometheus client metrics: {e}")
                    return None

    return _prometheus_client_metrics


def reset_prometheus_client_metrics() -> None:
    """Reset the Prometheus metrics singleton (mainly for testing)."""
    global _prometheus_client_metrics
    _prometheus_client_metrics = None


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "ClientMetrics",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "reset_prometheus_client_metrics",
    "status_class",
]
