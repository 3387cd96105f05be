# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Canonicalization helpers for RPC and ROA signatures.

RPC (query-style) APIs sign::

    METHOD & percent("/") & percent(sorted, percent-encoded parameters)

ROA (REST-style) APIs sign::

    METHOD \\n Accept \\n Content-MD5 \\n Content-Type \\n Date \\n
    sorted x-acs-* headers
    resource path ? sorted query

All functions here are pure; timestamps and nonces are produced by the
``*_now``/``new_nonce`` helpers so tests can pin them.
"""

from __future__ import annotations

import base64
import hashlib
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from email.utils import formatdate
from typing import Any
from urllib.parse import quote

ACS_HEADER_PREFIX = "x-acs-"
RPC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def percent_encode(value: Any) -> str:
    """RFC 3986 encoding: only ``A-Za-z0-9-_.~`` stay literal."""
    return quote(prepare_value(value), safe="~")


def prepare_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def canonicalize_query(parameters: Mapping[str, Any]) -> str:
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}"
        for key, value in sorted(parameters.items())
    )


def rpc_string_to_sign(method: str, parameters: Mapping[str, Any]) -> str:
    canonical = canonicalize_query(parameters)
    return f"{method.upper()}&{percent_encode('/')}&{percent_encode(canonical)}"


def canonicalize_headers(headers: Mapping[str, str]) -> str:
    acs_headers = {
        key.lower(): str(value).strip()
        for key, value in headers.items()
        if key.lower().startswith(ACS_HEADER_PREFIX)
    }
    return "".join(f"{key}:{acs_headers[key]}\n" for key in sorted(acs_headers))


def roa_resource(
    uri_pattern: str,
    path_parameters: Mapping[str, Any] | None = None,
    query_parameters: Mapping[str, Any] | None = None,
) -> str:
    """Expand ``[Name]`` placeholders and append the sorted, unencoded query."""
    path = uri_pattern or "/"
    for key, value in (path_parameters or {}).items():
        path = path.replace(f"[{key}]", prepare_value(value))

    if not query_parameters:
        return path
    pairs = []
    for key, value in sorted(query_parameters.items()):
        text = prepare_value(value)
        pairs.append(f"{key}={text}" if text else key)
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{'&'.join(pairs)}"


def roa_string_to_sign(method: str, headers: Mapping[str, str], resource: str) -> str:
    lowered = {key.lower(): value for key, value in headers.items()}
    return "\n".join(
        [
            method.upper(),
            lowered.get("accept", ""),
            lowered.get("content-md5", ""),
            lowered.get("content-type", ""),
            lowered.get("date", ""),
        ]
    ) + "\n" + canonicalize_headers(headers) + resource


def content_md5(content: bytes) -> str:
    return base64.b64encode(hashlib.md5(content).digest()).decode()  # noqa: S324


def rpc_timestamp_now() -> str:
    return datetime.now(timezone.utc).strftime(RPC_TIMESTAMP_FORMAT)


def http_date_now() -> str:
    return formatdate(usegmt=True)


def new_nonce() -> str:
    return uuid.uuid4().hex


__all__ = [
    "ACS_HEADER_PREFIX",
    "RPC_TIMESTAMP_FORMAT",
    "canonicalize_headers",
    "canonicalize_query",
    "content_md5",
    "http_date_now",
    "new_nonce",
    "percent_encode",
    "prepare_value",
    "roa_resource",
    "roa_string_to_sign",
    "rpc_string_to_sign",
    "rpc_timestamp_now",
]
