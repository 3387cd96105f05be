# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request signing.

This package provides:
- ShaHmac1Signer / ShaHmac256Signer: HMAC signers for access key credentials
- BearerTokenSigner: pass-through signer for bearer tokens
- composer: canonicalization of RPC and ROA requests
"""

from .signers import (
    BearerTokenSigner,
    ShaHmac1Signer,
    ShaHmac256Signer,
    default_signer_for,
)

__all__ = [
    "BearerTokenSigner",
    "ShaHmac1Signer",
    "ShaHmac256Signer",
    "default_signer_for",
]
