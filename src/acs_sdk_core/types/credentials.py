# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Credential value objects.

Credentials are owned by a Profile and are read-only to the client. They are
frozen dataclasses; ``repr`` hides every secret so credentials can appear in
log lines and tracebacks safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AccessKeyCredential:
    """Long-lived access key id/secret pair."""

    access_key_id: str
    access_key_secret: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.access_key_id:
            raise ValueError("access_key_id must not be empty")
        if not self.access_key_secret:
            raise ValueError("access_key_secret must not be empty")

    @property
    def security_token(self) -> str | None:
        return None


@dataclass(frozen=True)
class StsTokenCredential(AccessKeyCredential):
    """Temporary access key issued by the security token service.

    The ``security_token`` travels with every request (``SecurityToken``
    parameter for RPC, ``x-acs-security-token`` header for ROA).
    """

    sts_token: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.sts_token:
            raise ValueError("sts_token must not be empty")

    @property
    def security_token(self) -> str | None:
        return self.sts_token


@dataclass(frozen=True)
class BearerTokenCredential:
    """Bearer token credential; requests carry the token instead of a signature."""

    bearer_token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.bearer_token:
            raise ValueError("bearer_token must not be empty")

    @property
    def access_key_id(self) -> str:
        return ""

    @property
    def access_key_secret(self) -> str:
        return ""

    @property
    def security_token(self) -> str | None:
        return None


Credential = AccessKeyCredential | BearerTokenCredential


__all__ = [
    "AccessKeyCredential",
    "BearerTokenCredential",
    "Credential",
    "StsTokenCredential",
]
