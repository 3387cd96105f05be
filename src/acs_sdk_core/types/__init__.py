# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .credentials import (
    AccessKeyCredential,
    BearerTokenCredential,
    Credential,
    StsTokenCredential,
)
from .format import FORM_CONTENT_TYPE, FormatType, MethodType, ProtocolType

__all__ = [
    # Credentials
    "AccessKeyCredential",
    "BearerTokenCredential",
    "Credential",
    "FORM_CONTENT_TYPE",
    # Wire enums
    "FormatType",
    "MethodType",
    "ProtocolType",
    "StsTokenCredential",
]
