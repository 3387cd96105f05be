# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""ACS SDK core - signed request dispatch for the cloud Open API.

This library assembles signed HTTP requests from typed request objects,
dispatches them with retry or through a bounded-concurrency pool, and turns
responses into decoded bodies or typed exceptions.

Key Features:
    - RPC (query-signed) and ROA (header-signed) request builders
    - HMAC-SHA1, HMAC-SHA256 and bearer token signers
    - Retry on HTTP >= 500 and transport failures, re-signing every attempt
    - JSON/XML/raw response decoding by Content-Type
    - Injected, read-only endpoint table
    - Optional Prometheus metrics

Quick Start:
    >>> from acs_sdk_core import AcsClient, Profile, RpcRequest
    >>>
    >>> profile = Profile.create("cn-hangzhou", "<key-id>", "<secret>")
    >>> with AcsClient(profile) as client:
    ...     body = client.dispatch(RpcRequest("Ecs", "2014-05-26", "DescribeRegions"))

Main Exports:
    - AcsClient, ClientConfig: Dispatching requests
    - Profile, credentials: Per-client defaults
    - RpcRequest, RoaRequest: Request builders
    - EndpointResolver: (region, product) -> domain table
    - ClientException, ServerException: Error hierarchy

Note: PrometheusClientMetrics requires the 'metrics' extra. Install with:
    pip install acs-sdk-core[metrics]

Version: 1.0.0
"""

__version__ = "1.0.0"

from typing import TYPE_CHECKING

from .auth import BearerTokenSigner, ShaHmac1Signer, ShaHmac256Signer
from .client import AcsClient, ClientConfig, HttpxTransport
from .endpoints import EndpointResolver
from .exceptions import AcsError, ClientException, ServerException
from .observability import ClientMetrics
from .profile import Profile
from .protocols import SignerProtocol, TransportProtocol
from .request import AcsRequest, ComposedRequest, RoaRequest, RpcRequest
from .types import (
    AccessKeyCredential,
    BearerTokenCredential,
    FormatType,
    MethodType,
    ProtocolType,
    StsTokenCredential,
)

# Lazy import for optional prometheus collectors
if TYPE_CHECKING:
    from .observability import PrometheusClientMetrics

__all__ = [
    # Credentials
    "AccessKeyCredential",
    # Client
    "AcsClient",
    # Exceptions
    "AcsError",
    # Requests
    "AcsRequest",
    "BearerTokenCredential",
    "BearerTokenSigner",
    "ClientConfig",
    "ClientException",
    # Observability
    "ClientMetrics",
    "ComposedRequest",
    # Endpoints
    "EndpointResolver",
    # Wire enums
    "FormatType",
    "HttpxTransport",
    "MethodType",
    # Profile
    "Profile",
    "PrometheusClientMetrics",  # Lazy loaded - requires metrics extra
    "ProtocolType",
    "RoaRequest",
    "RpcRequest",
    "ServerException",
    # Signers
    "ShaHmac1Signer",
    "ShaHmac256Signer",
    # Protocols
    "SignerProtocol",
    "StsTokenCredential",
    "TransportProtocol",
]


def __getattr__(name: str) -> type:
    """Lazy import for optional prometheus collectors."""
    if name == "PrometheusClientMetrics":
        from .observability import PrometheusClientMetrics

        return PrometheusClientMetrics
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
