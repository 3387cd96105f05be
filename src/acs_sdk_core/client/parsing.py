# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response decoding and classification.

The response ``Content-Type`` selects a decoder through FormatType:

- ``...json...`` -> ``json.loads``
- ``...xml...``  -> children of the root element as a dict
- anything else  -> body text

Malformed XML and JSON decode to None instead of raising; services
occasionally label error pages with a structured content type.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from defusedxml import DefusedXmlException
from defusedxml import ElementTree

from ..exceptions import UNKNOWN_SERVER_ERROR, ServerException
from ..types.format import FormatType

logger = logging.getLogger(__name__)


def decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        logger.debug(f"Discarding malformed JSON body: {e}")
        return None


def decode_xml(text: str) -> Any:
    if not text or not text.strip():
        return None
    try:
        root = ElementTree.fromstring(text)
    except (ElementTree.ParseError, DefusedXmlException) as e:
        logger.debug(f"Discarding malformed XML body: {e}")
        return None
    return _element_to_value(root)


def decode_raw(text: str) -> str:
    return text


DECODERS: Mapping[FormatType, Callable[[str], Any]] = {
    FormatType.JSON: decode_json,
    FormatType.XML: decode_xml,
    FormatType.RAW: decode_raw,
}


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_to_value(element: Any) -> Any:
    children = list(element)
    text = (element.text or "").strip()
    if not children and not element.attrib:
        return text

    value: dict[str, Any] = {f"@{_local_name(k)}": v for k, v in element.attrib.items()}
    for child in children:
        key = _local_name(child.tag)
        child_value = _element_to_value(child)
        if key not in value:
            value[key] = child_value
        elif isinstance(value[key], list):
            value[key].append(child_value)
        else:
            value[key] = [value[key], child_value]
    if text and not children:
        value["#text"] = text
    return value


def parse_response(response: httpx.Response) -> Any:
    """Decode a response body according to its ``Content-Type``."""
    body_format = FormatType.from_content_type(response.headers.get("Content-Type"))
    return DECODERS[body_format](response.text)


def is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def _first(body: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = body.get(key)
        if value:
            return value
    return None


def server_error_from(body: Any, http_status: int) -> ServerException:
    """Build a ServerException from a decoded error body."""
    if isinstance(body, Mapping):
        message = _first(body, "Message", "message")
        code = _first(body, "Code", "code")
        request_id = _first(body, "RequestId", "requestId")
    else:
        message, code, request_id = None, None, None
        if isinstance(body, str) and body.strip():
            message = body.strip()

    return ServerException(
        message=str(message) if message is not None else f"HTTP {http_status} returned by server",
        error_code=str(code) if code is not None else UNKNOWN_SERVER_ERROR,
        http_status=http_status,
        request_id=str(request_id) if request_id is not None else None,
    )


__all__ = [
    "DECODERS",
    "decode_json",
    "decode_raw",
    "decode_xml",
    "is_success",
    "parse_response",
    "server_error_from",
]
