# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the ACS SDK core.

Exports:
    ClientMetrics: In-process request counters kept by every client.
    PrometheusClientMetrics: Optional Prometheus collectors.
    get_prometheus_client_metrics: Get or create the Prometheus metrics singleton.
    reset_prometheus_client_metrics: Reset the Prometheus metrics singleton.
    PROMETHEUS_AVAILABLE: Whether prometheus_client is available.
"""

from .metrics import (
    PROMETHEUS_AVAILABLE,
    ClientMetrics,
    PrometheusClientMetrics,
    get_prometheus_client_metrics,
    reset_prometheus_client_metrics,
    status_class,
)

__all__ = [
    "PROMETHEUS_AVAILABLE",
    "ClientMetrics",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "reset_prometheus_client_metrics",
    "status_class",
]
