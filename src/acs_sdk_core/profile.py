# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client profile: the per-client defaults for region, credential and format.

A Profile is immutable. It is created when the client is constructed and
lives as long as the client does; requests that leave region or format unset
inherit them from here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .auth.signers import default_signer_for
from .protocols.signer import SignerProtocol
from .types.credentials import AccessKeyCredential, Credential, StsTokenCredential
from .types.format import FormatType


@dataclass(frozen=True)
class Profile:
    """
    Region, credential and format defaults for one client.

    Attributes:
        region_id: Default region for requests that do not set one
        credential: Credential used when none is passed per call
        format: Default response format
        signer: Signature algorithm; derived from the credential type if None
    """

    region_id: str
    credential: Credential
    format: FormatType = FormatType.JSON
    signer: SignerProtocol = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not self.region_id:
            raise ValueError("region_id must not be empty")
        object.__setattr__(self, "format", FormatType.coerce(self.format))
        if self.signer is None:
            object.__setattr__(self, "signer", default_signer_for(self.credential))

    @classmethod
    def create(
        cls,
        region_id: str,
        access_key_id: str,
        access_key_secret: str,
        security_token: str | None = None,
        format: FormatType | str = FormatType.JSON,
        signer: SignerProtocol | None = None,
    ) -> Profile:
        """Build a profile from raw key material.

        Example:
            >>> profile = Profile.create("cn-hangzhou", "<key-id>", "<secret>")
            >>> profile.format
            <FormatType.JSON: 'JSON'>
        """
        credential: Credential
        if security_token:
            credential = StsTokenCredential(access_key_id, access_key_secret, security_token)
        else:
            credential = AccessKeyCredential(access_key_id, access_key_secret)
        return cls(
            region_id=region_id,
            credential=credential,
            format=FormatType.coerce(format),
            signer=signer,  # type: ignore[arg-type]
        )


__all__ = ["Profile"]
