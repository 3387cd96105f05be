# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Wire-level enumerations: response formats, HTTP methods and protocols.

FormatType replaces free-form "JSON"/"XML"/"RAW" strings. Each member knows
the Accept header it asks the service for; unrecognized names coerce to RAW.
"""

from __future__ import annotations

from enum import Enum


class FormatType(Enum):
    """Response body format requested from the service.

    - JSON: ``Accept: application/json``
    - XML: ``Accept: text/xml``
    - RAW: ``Accept: */*``, body returned as text
    """

    JSON = "JSON"
    XML = "XML"
    RAW = "RAW"

    @property
    def accept_header(self) -> str:
        """Value for the ``Accept`` request header."""
        return _ACCEPT_HEADERS[self]

    @classmethod
    def coerce(cls, value: FormatType | str) -> FormatType:
        """Normalize a member or a case-insensitive name, defaulting to RAW."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.RAW

    @classmethod
    def from_content_type(cls, content_type: str | None) -> FormatType:
        """Classify a response ``Content-Type`` header."""
        lowered = (content_type or "").lower()
        if "json" in lowered:
            return cls.JSON
        if "xml" in lowered:
            return cls.XML
        return cls.RAW


_ACCEPT_HEADERS = {
    FormatType.JSON: "application/json",
    FormatType.XML: "text/xml",
    FormatType.RAW: "*/*",
}


class MethodType(Enum):
    """HTTP methods accepted by the Open API gateway."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    @classmethod
    def coerce(cls, value: MethodType | str) -> MethodType:
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())


class ProtocolType(Enum):
    """URL scheme used to reach the endpoint."""

    HTTP = "http"
    HTTPS = "https"

    @classmethod
    def coerce(cls, value: ProtocolType | str) -> ProtocolType:
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


__all__ = ["FORM_CONTENT_TYPE", "FormatType", "MethodType", "ProtocolType"]
