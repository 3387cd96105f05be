# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request builders for RPC-style and ROA-style APIs.

A request is a mutable, per-call builder: callers set the action, parameters
and headers, hand it to the client, and discard it afterwards. Signing never
mutates the builder. ``compose`` produces a fresh ComposedRequest (URL,
headers, body) every time it is called, so each retry carries a new nonce and
timestamp.

Example:
    >>> request = RpcRequest("Ecs", "2014-05-26", "DescribeRegions")
    >>> request.add_query_param("PageSize", 50).set_region_id("cn-hangzhou")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from typing_extensions import Self

from .auth import composer
from .exceptions import INVALID_REQUEST, ClientException
from .protocols.signer import SignerProtocol
from .types.credentials import BearerTokenCredential, Credential
from .types.format import FORM_CONTENT_TYPE, FormatType, MethodType, ProtocolType


@dataclass
class ComposedRequest:
    """Signed wire form of a request, ready to hand to the transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


class AcsRequest(ABC):
    """
    Base request builder.

    Attributes:
        product: Product code used for endpoint resolution (e.g. ``Ecs``)
        version: API version (e.g. ``2014-05-26``)
        action_name: API action (e.g. ``DescribeInstances``)
        method: HTTP method; filled with GET by the client when unset
        region_id: Target region; filled from the Profile when unset
        accept_format: Desired response format; filled from the Profile when unset
        protocol: URL scheme; falls back to the client configuration when unset
    """

    def __init__(
        self,
        product: str,
        version: str | None = None,
        action_name: str | None = None,
        *,
        method: MethodType | str | None = None,
        region_id: str | None = None,
        accept_format: FormatType | str | None = None,
        protocol: ProtocolType | str | None = None,
    ) -> None:
        if not product:
            raise ValueError("product must not be empty")
        self.product = product
        self.version = version
        self.action_name = action_name
        self.method = MethodType.coerce(method) if method is not None else None
        self.region_id = region_id
        self.accept_format = (
            FormatType.coerce(accept_format) if accept_format is not None else None
        )
        self.protocol = ProtocolType.coerce(protocol) if protocol is not None else None
        self._query_params: dict[str, Any] = {}
        self._domain_params: dict[str, Any] = {}
        self._headers: dict[str, str] = {}
        self._content: bytes | None = None

    # Builder setters return self so calls can be chained.

    def set_method(self, method: MethodType | str) -> Self:
        self.method = MethodType.coerce(method)
        return self

    def set_region_id(self, region_id: str) -> Self:
        self.region_id = region_id
        return self

    def set_accept_format(self, accept_format: FormatType | str) -> Self:
        self.accept_format = FormatType.coerce(accept_format)
        return self

    def set_protocol(self, protocol: ProtocolType | str) -> Self:
        self.protocol = ProtocolType.coerce(protocol)
        return self

    def add_query_param(self, key: str, value: Any) -> Self:
        self._query_params[key] = value
        return self

    def add_domain_param(self, key: str, value: Any) -> Self:
        """Add a parameter sent form-encoded in the request body."""
        self._domain_params[key] = value
        return self

    def add_header(self, key: str, value: str) -> Self:
        self._headers[key] = value
        return self

    def set_content(self, content: bytes | str, content_type: str | None = None) -> Self:
        """Set a raw body; ignored when domain parameters are present."""
        self._content = content.encode("utf-8") if isinstance(content, str) else content
        if content_type:
            self._headers["Content-Type"] = content_type
        return self

    @property
    def query_params(self) -> dict[str, Any]:
        return dict(self._query_params)

    @property
    def domain_params(self) -> dict[str, Any]:
        return dict(self._domain_params)

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def content(self) -> bytes | None:
        return self._content

    def wire_headers(self) -> dict[str, str]:
        """Headers to send; a form body always carries the form content type."""
        headers = self.headers
        if self._domain_params:
            for key in [k for k in headers if k.lower() == "content-type"]:
                del headers[key]
            headers["Content-Type"] = FORM_CONTENT_TYPE
        return headers

    def body(self) -> bytes | None:
        """Serialized body: form-encoded domain parameters, else raw content."""
        if self._domain_params:
            return urlencode(
                {key: composer.prepare_value(value) for key, value in self._domain_params.items()}
            ).encode("ascii")
        return self._content

    def _require_routing(self) -> tuple[str, str, FormatType]:
        if self.method is None or self.region_id is None or self.accept_format is None:
            raise ClientException(
                "Request method, region and format must be resolved before signing.",
                INVALID_REQUEST,
            )
        return self.method.value, self.region_id, self.accept_format

    @abstractmethod
    def compose(
        self,
        signer: SignerProtocol,
        credential: Credential,
        domain: str,
        protocol: ProtocolType = ProtocolType.HTTPS,
    ) -> ComposedRequest:
        """Sign the request for ``domain`` and return its wire form."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(product={self.product!r}, "
            f"action={self.action_name!r}, region={self.region_id!r})"
        )


class RpcRequest(AcsRequest):
    """
    Query-style request: every parameter is signed.

    System parameters (Action, Version, Timestamp, nonce, ...) and query
    parameters travel in the URL; domain parameters travel form-encoded in the
    body and are included in the signature.
    """

    def __init__(self, product: str, version: str, action_name: str, **kwargs: Any) -> None:
        if not action_name:
            raise ValueError("action_name must not be empty")
        super().__init__(product, version, action_name, **kwargs)

    def system_params(
        self,
        signer: SignerProtocol,
        credential: Credential,
        region_id: str,
        accept_format: FormatType,
    ) -> dict[str, str]:
        params = {
            "Version": self.version or "",
            "Action": self.action_name or "",
            "RegionId": region_id,
            "SignatureVersion": signer.signature_version,
            "SignatureNonce": composer.new_nonce(),
            "Timestamp": composer.rpc_timestamp_now(),
        }
        if accept_format is not FormatType.RAW:
            params["Format"] = accept_format.value
        if signer.signature_method:
            params["SignatureMethod"] = signer.signature_method
        if credential.access_key_id:
            params["AccessKeyId"] = credential.access_key_id
        if credential.security_token:
            params["SecurityToken"] = credential.security_token
        if isinstance(credential, BearerTokenCredential):
            params["BearerToken"] = credential.bearer_token
            params["SignatureType"] = signer.signature_type
        return params

    def compose(
        self,
        signer: SignerProtocol,
        credential: Credential,
        domain: str,
        protocol: ProtocolType = ProtocolType.HTTPS,
    ) -> ComposedRequest:
        method, region_id, accept_format = self._require_routing()
        url_params = {key: composer.prepare_value(value) for key, value in self._query_params.items()}
        url_params.update(self.system_params(signer, credential, region_id, accept_format))

        sign_params = dict(url_params)
        sign_params.update(
            {key: composer.prepare_value(value) for key, value in self._domain_params.items()}
        )
        string_to_sign = composer.rpc_string_to_sign(method, sign_params)
        signature = signer.sign_string(string_to_sign, credential.access_key_secret)

        query = composer.canonicalize_query(url_params)
        url = f"{protocol.value}://{domain}/?{query}&Signature={composer.percent_encode(signature)}"
        return ComposedRequest(
            method=method, url=url, headers=self.wire_headers(), body=self.body()
        )


class RoaRequest(AcsRequest):
    """
    REST-style request signed through the ``Authorization`` header.

    ``uri_pattern`` may contain ``[Name]`` placeholders filled from path
    parameters, e.g. ``/clusters/[ClusterId]/nodes``.
    """

    def __init__(
        self,
        product: str,
        version: str,
        action_name: str | None = None,
        uri_pattern: str = "/",
        **kwargs: Any,
    ) -> None:
        super().__init__(product, version, action_name, **kwargs)
        self.uri_pattern = uri_pattern
        self._path_params: dict[str, Any] = {}

    def add_path_param(self, key: str, value: Any) -> Self:
        self._path_params[key] = value
        return self

    @property
    def path_params(self) -> dict[str, Any]:
        return dict(self._path_params)

    def signed_headers(
        self,
        signer: SignerProtocol,
        credential: Credential,
        region_id: str,
        accept_format: FormatType,
        body: bytes | None,
    ) -> dict[str, str]:
        headers = self.wire_headers()
        headers["Date"] = composer.http_date_now()
        headers["Accept"] = accept_format.accept_header
        headers["x-acs-signature-version"] = signer.signature_version
        headers["x-acs-signature-nonce"] = composer.new_nonce()
        headers["x-acs-region-id"] = region_id
        if self.version:
            headers["x-acs-version"] = self.version
        if signer.signature_method:
            headers["x-acs-signature-method"] = signer.signature_method
        if credential.security_token:
            headers["x-acs-security-token"] = credential.security_token
        if isinstance(credential, BearerTokenCredential):
            headers["x-acs-bearer-token"] = credential.bearer_token
            headers["x-acs-signature-type"] = signer.signature_type
        if not _has_header(headers, "Content-Type"):
            headers["Content-Type"] = FORM_CONTENT_TYPE
        if body:
            headers["Content-MD5"] = composer.content_md5(body)
        return headers

    def compose(
        self,
        signer: SignerProtocol,
        credential: Credential,
        domain: str,
        protocol: ProtocolType = ProtocolType.HTTPS,
    ) -> ComposedRequest:
        method, region_id, accept_format = self._require_routing()
        body = self.body()
        headers = self.signed_headers(signer, credential, region_id, accept_format, body)

        resource = composer.roa_resource(self.uri_pattern, self._path_params, self._query_params)
        string_to_sign = composer.roa_string_to_sign(method, headers, resource)
        signature = signer.sign_string(string_to_sign, credential.access_key_secret)
        if not isinstance(credential, BearerTokenCredential):
            headers["Authorization"] = f"acs {credential.access_key_id}:{signature}"

        path = composer.roa_resource(self.uri_pattern, self._path_params)
        url = f"{protocol.value}://{domain}{path}"
        if self._query_params:
            query = urlencode(
                sorted(
                    (key, composer.prepare_value(value))
                    for key, value in self._query_params.items()
                )
            )
            url = f"{url}{'&' if '?' in path else '?'}{query}"
        return ComposedRequest(method=method, url=url, headers=headers, body=body)


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


__all__ = ["AcsRequest", "ComposedRequest", "RoaRequest", "RpcRequest"]
