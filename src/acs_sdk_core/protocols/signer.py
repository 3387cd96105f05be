# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for request signers."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SignerProtocol(Protocol):
    """
    Interface for signature algorithms.

    Requests call ``sign_string`` with the canonical string they composed and
    the credential secret; the signer only owns the cryptographic step and the
    metadata advertised alongside the signature.
    """

    @property
    def signature_method(self) -> str:
        """Value of the ``SignatureMethod`` parameter (e.g. ``HMAC-SHA1``)."""
        ...

    @property
    def signature_version(self) -> str:
        """Value of the ``SignatureVersion`` parameter."""
        ...

    @property
    def signature_type(self) -> str:
        """Value of the ``SignatureType`` parameter, empty when not sent."""
        ...

    def sign_string(self, string_to_sign: str, secret: str) -> str:
        """Return the signature for ``string_to_sign``."""
        ...
