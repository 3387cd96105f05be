# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the ACS SDK core

This module provides the configuration dataclass for AcsClient: transport
timeouts, retry policy, URL scheme and metrics settings.
"""

from dataclasses import dataclass

from ..types.format import ProtocolType

DEFAULT_USER_AGENT = "acs-sdk-core/1.0.0 (python)"


@dataclass
class ClientConfig:
    """
    Configuration for AcsClient.

    Per-call arguments to ``dispatch`` override the retry settings here.
    """

    # === Transport ===

    timeout: float = 10.0
    """Read/write/pool timeout per request in seconds."""

    connect_timeout: float = 5.0
    """Connection timeout in seconds."""

    protocol: ProtocolType = ProtocolType.HTTPS
    """URL scheme for requests that do not set their own."""

    verify: bool = True
    """Verify TLS certificates."""

    user_agent: str = DEFAULT_USER_AGENT
    """User-Agent header sent with every request."""

    # === Retry ===

    auto_retry: bool = True
    """Retry requests answered with HTTP >= 500 or failing at the transport."""

    max_retries: int = 3
    """Total send attempts per dispatch when auto_retry is on."""

    # === Batch ===

    default_concurrency: int = 1
    """Requests in flight for dispatch_batch when no concurrency is given."""

    # === Metrics ===

    metrics_enabled: bool = False
    """Export Prometheus metrics (requires the ``metrics`` extra)."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.protocol = ProtocolType.coerce(self.protocol)
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.default_concurrency < 1:
            raise ValueError("default_concurrency must be at least 1")
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")


__all__ = ["DEFAULT_USER_AGENT", "ClientConfig"]
