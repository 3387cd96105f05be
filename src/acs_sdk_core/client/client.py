# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
AcsClient: builds, signs, sends and classifies Open API calls.

The client owns a transport (composition, never inheritance) plus the
immutable Profile and EndpointResolver it was constructed with. Request flow:

1. Fill missing region/format/method from the Profile
2. Resolve the endpoint domain for (region, product)
3. Compose the signed URL/headers with the signer and credential
4. Send; retry HTTP >= 500 and transport failures up to ``max_retries``
   total attempts, re-signing every attempt
5. Decode the body by Content-Type; raise ServerException outside 2xx
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import warnings
from collections.abc import Callable, Sequence
from typing import Any

import httpx
from typing_extensions import Self

from ..endpoints.resolver import EndpointResolver
from ..exceptions import (
    HTTP_ERROR,
    INVALID_PROFILE,
    INVALID_REGION_ID,
    AcsError,
    ClientException,
)
from ..observability.metrics import (
    ClientMetrics,
    PrometheusClientMetrics,
    get_prometheus_client_metrics,
)
from ..profile import Profile
from ..protocols.signer import SignerProtocol
from ..protocols.transport import TransportProtocol
from ..request import AcsRequest
from ..types.credentials import Credential
from ..types.format import FORM_CONTENT_TYPE, FormatType, MethodType
from .config import ClientConfig
from .parsing import is_success, parse_response, server_error_from
from .transport import HttpxTransport

logger = logging.getLogger(__name__)

FulfilledCallback = Callable[..., Any]
RejectedCallback = Callable[[AcsError, int], Any]


class AcsClient:
    """
    Client for the cloud provider's Open API.

    Example:
        >>> profile = Profile.create("cn-hangzhou", "<key-id>", "<secret>")
        >>> with AcsClient(profile) as client:
        ...     regions = client.dispatch(
        ...         RpcRequest("Ecs", "2014-05-26", "DescribeRegions")
        ...     )
    """

    def __init__(
        self,
        profile: Profile | None = None,
        config: ClientConfig | None = None,
        endpoints: EndpointResolver | None = None,
        transport: TransportProtocol | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            profile: Region/credential/format defaults; may be None when every
                call supplies signer, credential, region and format itself
            config: Client configuration
            endpoints: Endpoint table; the packaged table when None
            transport: Transport to send through; an HttpxTransport when None
            http_transport: httpx transport for the default HttpxTransport
                (e.g. ``httpx.MockTransport``)
        """
        self.profile = profile
        self.config = config or ClientConfig()
        self.endpoints = endpoints if endpoints is not None else EndpointResolver.default()
        self._transport: TransportProtocol = transport or HttpxTransport(
            self.config, transport=http_transport
        )
        self.metrics = ClientMetrics()
        self._prometheus: PrometheusClientMetrics | None = None
        if self.config.metrics_enabled:
            self._prometheus = get_prometheus_client_metrics()
            if self._prometheus is None:
                logger.warning("metrics_enabled is set but prometheus_client is not available")

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def _resolve_signing(
        self,
        request: AcsRequest,
        signer: SignerProtocol | None,
        credential: Credential | None,
    ) -> tuple[SignerProtocol, Credential]:
        if self.profile is None:
            if (
                signer is None
                or credential is None
                or request.region_id is None
                or request.accept_format is None
            ):
                raise ClientException("No active profile found.", INVALID_PROFILE)
            return signer, credential
        return signer or self.profile.signer, credential or self.profile.credential

    def _prepare_request(self, request: AcsRequest) -> AcsRequest:
        if self.profile is not None:
            if request.region_id is None:
                request.set_region_id(self.profile.region_id)
            if request.accept_format is None:
                request.set_accept_format(self.profile.format)
        if request.method is None:
            request.set_method(MethodType.GET)
        return request

    def build_http_request(
        self,
        request: AcsRequest,
        signer: SignerProtocol | None = None,
        credential: Credential | None = None,
    ) -> httpx.Request:
        """
        Validate, fill defaults, resolve the endpoint and sign ``request``.

        Raises:
            ClientException: ``SDK.InvalidProfile`` when there is no profile and
                signer, credential, region or format is missing;
                ``SDK.InvalidRegionId`` when no endpoint is known.
        """
        signer, credential = self._resolve_signing(request, signer, credential)
        request = self._prepare_request(request)

        domain = self.endpoints.resolve(request.region_id, request.product)
        if domain is None:
            raise ClientException("Can not find endpoint to access.", INVALID_REGION_ID)

        protocol = request.protocol or self.config.protocol
        composed = request.compose(signer, credential, domain, protocol)
        accept_format = request.accept_format or FormatType.RAW

        headers = httpx.Headers(composed.headers)
        headers.setdefault("Content-Type", FORM_CONTENT_TYPE)
        headers["Accept"] = accept_format.accept_header
        headers.setdefault("User-Agent", self.config.user_agent)

        logger.debug(
            f"Built {composed.method} {request.product}.{request.action_name} "
            f"for {request.region_id} via {domain}"
        )
        return httpx.Request(composed.method, composed.url, headers=headers, content=composed.body)

    # ------------------------------------------------------------------
    # Response handling
    # ------------------------------------------------------------------

    @staticmethod
    def parse_response(response: httpx.Response) -> Any:
        """Decode the body: JSON, XML (None when malformed) or raw text."""
        return parse_response(response)

    @staticmethod
    def is_success(response: httpx.Response) -> bool:
        """True iff the HTTP status is in [200, 300)."""
        return is_success(response)

    def _record_response(self, product: str, response: httpx.Response) -> None:
        self.metrics.record_outcome(response.status_code)
        if self._prometheus is not None:
            self._prometheus.observe_response(product, response.status_code, _elapsed(response))

    def _record_transport_error(self, product: str) -> None:
        self.metrics.record_transport_error()
        if self._prometheus is not None:
            self._prometheus.observe_transport_error(product)

    def _record_attempt(self, product: str, retry: bool) -> None:
        self.metrics.record_attempt(retry=retry)
        if retry and self._prometheus is not None:
            self._prometheus.observe_retry(product)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _send_with_retry(
        self,
        request: AcsRequest,
        signer: SignerProtocol | None,
        credential: Credential | None,
        auto_retry: bool | None,
        max_retries: int | None,
    ) -> httpx.Response:
        auto_retry = self.config.auto_retry if auto_retry is None else auto_retry
        max_retries = self.config.max_retries if max_retries is None else max_retries
        attempts = 0

        while True:
            http_request = self.build_http_request(request, signer, credential)
            attempts += 1
            self._record_attempt(request.product, retry=attempts > 1)
            can_retry = auto_retry and attempts < max_retries

            try:
                response = self._transport.send(http_request)
            except httpx.TransportError as e:
                self._record_transport_error(request.product)
                if can_retry:
                    logger.warning(
                        f"{request.product}.{request.action_name} attempt {attempts} "
                        f"failed ({e!r}); retrying"
                    )
                    continue
                raise ClientException(f"Request could not be sent: {e}", HTTP_ERROR) from e

            self._record_response(request.product, response)
            if response.status_code >= 500 and can_retry:
                logger.warning(
                    f"{request.product}.{request.action_name} attempt {attempts} "
                    f"returned HTTP {response.status_code}; retrying"
                )
                continue
            return response

    def dispatch(
        self,
        request: AcsRequest,
        signer: SignerProtocol | None = None,
        credential: Credential | None = None,
        auto_retry: bool | None = None,
        max_retries: int | None = None,
    ) -> Any:
        """
        Send ``request`` and return its decoded body.

        Args:
            request: The request to send; missing fields are filled in place
            signer: Overrides the Profile's signer
            credential: Overrides the Profile's credential
            auto_retry: Retry HTTP >= 500 and transport failures
                (ClientConfig.auto_retry when None)
            max_retries: Total attempts when retrying
                (ClientConfig.max_retries when None)

        Raises:
            ClientException: The request could not be built or sent.
            ServerException: The final response status is outside [200, 300).
        """
        response = self._send_with_retry(request, signer, credential, auto_retry, max_retries)
        body = parse_response(response)
        if not is_success(response):
            raise server_error_from(body, response.status_code)
        return body

    def do_action(
        self,
        request: AcsRequest,
        signer: SignerProtocol | None = None,
        credential: Credential | None = None,
        auto_retry: bool | None = None,
        max_retries: int | None = None,
    ) -> httpx.Response:
        """Deprecated: returns the raw response without classification."""
        warnings.warn(
            "do_action() is deprecated. Please use dispatch() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._send_with_retry(request, signer, credential, auto_retry, max_retries)

    async def dispatch_batch_async(
        self,
        requests: Sequence[AcsRequest | httpx.Request],
        on_fulfilled: FulfilledCallback | None = None,
        on_rejected: RejectedCallback | None = None,
        concurrency: int | None = None,
        extra_args: Sequence[Any] = (),
        signer: SignerProtocol | None = None,
        credential: Credential | None = None,
    ) -> list[Any]:
        """
        Send ``requests`` through a bounded-concurrency pool.

        Each request is attempted once. A 2xx body is passed to
        ``on_fulfilled(body, *extra_args)``; a non-2xx response becomes a
        ServerException and a transport failure a ClientException, either of
        which is passed to ``on_rejected(error, index)``. Callbacks may be
        coroutine functions.

        Returns:
            Outcomes in input order: decoded body or the exception instance.

        Raises:
            ClientException: A request could not be built; nothing is sent.
            ValueError: ``concurrency`` is below 1.
        """
        if concurrency is None:
            concurrency = self.config.default_concurrency
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        http_requests = [
            item if isinstance(item, httpx.Request)
            else self.build_http_request(item, signer, credential)
            for item in requests
        ]
        products = [
            item.product if isinstance(item, AcsRequest) else item.url.host
            for item in requests
        ]
        outcomes: list[Any] = [None] * len(http_requests)
        self.metrics.record_batch(len(http_requests))
        for product in products:
            self._record_attempt(product, retry=False)

        async def handle_response(index: int, response: httpx.Response) -> None:
            self._record_response(products[index], response)
            body = parse_response(response)
            if is_success(response):
                outcomes[index] = body
                if on_fulfilled is not None:
                    await _maybe_await(on_fulfilled(body, *extra_args))
                return
            await reject(index, server_error_from(body, response.status_code))

        async def handle_error(index: int, exc: Exception) -> None:
            self._record_transport_error(products[index])
            error = ClientException(f"Request could not be sent: {exc}", HTTP_ERROR)
            error.__cause__ = exc
            await reject(index, error)

        async def reject(index: int, error: AcsError) -> None:
            outcomes[index] = error
            if on_rejected is not None:
                await _maybe_await(on_rejected(error, index))

        logger.debug(f"Dispatching batch of {len(http_requests)} with concurrency {concurrency}")
        await self._transport.pool(http_requests, handle_response, handle_error, concurrency)
        return outcomes

    def dispatch_batch(
        self,
        requests: Sequence[AcsRequest | httpx.Request],
        on_fulfilled: FulfilledCallback | None = None,
        on_rejected: RejectedCallback | None = None,
        concurrency: int | None = None,
        extra_args: Sequence[Any] = (),
        signer: SignerProtocol | None = None,
        credential: Credential | None = None,
    ) -> list[Any]:
        """
        Blocking variant of ``dispatch_batch_async``.

        Runs its own event loop, so it must not be called from inside a
        running loop; await ``dispatch_batch_async`` there instead.
        """
        return asyncio.run(
            self.dispatch_batch_async(
                requests,
                on_fulfilled=on_fulfilled,
                on_rejected=on_rejected,
                concurrency=concurrency,
                extra_args=extra_args,
                signer=signer,
                credential=credential,
            )
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        region = self.profile.region_id if self.profile else None
        return f"AcsClient(region={region!r}, endpoints={self.endpoints!r})"


def _elapsed(response: httpx.Response) -> float:
    try:
        return response.elapsed.total_seconds()
    except RuntimeError:
        return 0.0


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


__all__ = ["AcsClient"]
