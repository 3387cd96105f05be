# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Signature algorithms.

Each signer turns a composed string-to-sign into a base64 signature using the
credential secret. HMAC signers key the digest with ``secret + "&"``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac

from ..types.credentials import BearerTokenCredential, Credential


class ShaHmac1Signer:
    """HMAC-SHA1 signer, the default for access key credentials."""

    signature_method = "HMAC-SHA1"
    signature_version = "1.0"
    signature_type = ""
    _digest = hashlib.sha1

    def sign_string(self, string_to_sign: str, secret: str) -> str:
        key = f"{secret}&".encode()
        digest = hmac.new(key, string_to_sign.encode(), self._digest).digest()
        return base64.b64encode(digest).decode()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ShaHmac256Signer(ShaHmac1Signer):
    """HMAC-SHA256 signer."""

    signature_method = "HMAC-SHA256"
    _digest = hashlib.sha256


class BearerTokenSigner:
    """Signer for bearer tokens; the token itself authenticates the call."""

    signature_method = ""
    signature_version = "1.0"
    signature_type = "BEARERTOKEN"

    def sign_string(self, string_to_sign: str, secret: str) -> str:
        return ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def default_signer_for(credential: Credential) -> ShaHmac1Signer | BearerTokenSigner:
    """Pick the signer matching a credential type."""
    if isinstance(credential, BearerTokenCredential):
        return BearerTokenSigner()
    return ShaHmac1Signer()


__all__ = [
    "BearerTokenSigner",
    "ShaHmac1Signer",
    "ShaHmac256Signer",
    "default_signer_for",
]
