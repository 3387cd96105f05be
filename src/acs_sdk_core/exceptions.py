# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the ACS SDK core.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from AcsError, making it easy to catch every
SDK-originated failure with a single except clause.

Two kinds of failure are distinguished:

- ClientException: raised locally, before or instead of talking to the
  service (missing profile, unresolvable endpoint, transport failure).
- ServerException: raised when the service answered with an HTTP status
  outside the success range.
"""

from __future__ import annotations

INVALID_PROFILE = "SDK.InvalidProfile"
INVALID_REGION_ID = "SDK.InvalidRegionId"
INVALID_REQUEST = "SDK.InvalidRequest"
HTTP_ERROR = "SDK.HttpError"
UNKNOWN_SERVER_ERROR = "SDK.UnknownServerError"


class AcsError(Exception):
    """Base exception for all SDK errors.

    Example:
        try:
            client.dispatch(request)
        except AcsError as e:
            logger.error(f"API call failed: {e}")
    """

    def __init__(self, message: str = "", error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.error_code}: {self.message}"
        return self.message


class ClientException(AcsError):
    """Raised when a request cannot be built or sent.

    Client exceptions are raised synchronously and are never retried by the
    client. Common causes include:
    - No profile and no explicit signer/credential/region/format
    - No endpoint known for the (region, product) pair
    - Connection failures or timeouts after the retry budget is spent

    Attributes:
        error_code: One of the ``SDK.*`` codes defined in this module.

    Example:
        try:
            client.dispatch(request)
        except ClientException as e:
            if e.error_code == INVALID_REGION_ID:
                logger.error(f"Unknown region {request.region_id}")
    """

    pass


class ServerException(AcsError):
    """Raised when the service responds with a non-2xx HTTP status.

    Attributes:
        error_code: Service-reported error code (e.g. ``InvalidParameter``).
        http_status: HTTP status code of the final response.
        request_id: Service-side correlation id, when reported.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None,
        http_status: int,
        request_id: str | None = None,
    ):
        super().__init__(message, error_code)
        self.http_status = http_status
        self.request_id = request_id

    def __str__(self) -> str:
        text = super().__str__()
        if self.request_id:
            return f"{text} (HTTP {self.http_status}, RequestId: {self.request_id})"
        return f"{text} (HTTP {self.http_status})"


__all__ = [
    "HTTP_ERROR",
    "INVALID_PROFILE",
    "INVALID_REGION_ID",
    "INVALID_REQUEST",
    "UNKNOWN_SERVER_ERROR",
    "AcsError",
    "ClientException",
    "ServerException",
]
