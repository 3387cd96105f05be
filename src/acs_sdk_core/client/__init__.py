# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
API client.

This package provides:
- AcsClient: Request building, signing, dispatch and response classification
- ClientConfig: Transport, retry and metrics configuration
- HttpxTransport: Default httpx-backed transport with a bounded request pool
"""

from .client import AcsClient
from .config import DEFAULT_USER_AGENT, ClientConfig
from .parsing import is_success, parse_response, server_error_from
from .transport import HttpxTransport

__all__ = [
    "DEFAULT_USER_AGENT",
    "AcsClient",
    "ClientConfig",
    "HttpxTransport",
    "is_success",
    "parse_response",
    "server_error_from",
]
