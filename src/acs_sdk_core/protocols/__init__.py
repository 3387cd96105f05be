# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable SDK components.

Available protocols:
- SignerProtocol: Interface for signature algorithms
- TransportProtocol: Interface for the HTTP transport owned by the client
"""

from .signer import SignerProtocol
from .transport import ErrorCallback, ResponseCallback, TransportProtocol

__all__ = [
    "ErrorCallback",
    "ResponseCallback",
    "SignerProtocol",
    "TransportProtocol",
]
