# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
httpx-backed transport.

HttpxTransport owns one ``httpx.Client`` for synchronous dispatch. Batch
dispatch opens a short-lived ``httpx.AsyncClient`` per pool run, because an
async client is bound to the event loop it was first used on.

Both clients share timeout and TLS settings from ClientConfig and
can be pointed at an injected httpx transport (``httpx.MockTransport`` in
tests).

A sync-only transport such as a configured ``httpx.HTTPTransport`` serves
``send`` alone; pooled dispatch then uses httpx's default async transport
unless ``async_transport`` is given.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import Any

import httpx
from typing_extensions import Self

from ..protocols.transport import ErrorCallback, ResponseCallback
from .config import ClientConfig

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Default transport; satisfies TransportProtocol."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration (timeouts, TLS)
            transport: Optional httpx transport for the sync client
            async_transport: Optional httpx transport for pooled dispatch;
                defaults to ``transport`` when that is also an async transport
        """
        self.config = config or ClientConfig()
        if async_transport is None and isinstance(transport, httpx.AsyncBaseTransport):
            async_transport = transport
        if transport is not None and async_transport is None:
            logger.warning(
                f"{type(transport).__name__} is sync-only; pooled dispatch will use "
                "the default async transport"
            )
        self._async_transport = async_transport
        self._client = httpx.Client(transport=transport, **self._client_options())

    def _client_options(self) -> dict[str, Any]:
        return {
            "timeout": httpx.Timeout(self.config.timeout, connect=self.config.connect_timeout),
            "verify": self.config.verify,
            "follow_redirects": False,
        }

    def send(self, request: httpx.Request) -> httpx.Response:
        logger.debug(f"Sending {request.method} {request.url.host}{request.url.path}")
        return self._client.send(request)

    async def pool(
        self,
        requests: Sequence[httpx.Request],
        on_response: ResponseCallback,
        on_error: ErrorCallback,
        concurrency: int = 1,
    ) -> None:
        """
        Send ``requests`` with at most ``concurrency`` in flight.

        Every request is attempted once. Each outcome is reported exactly once,
        to ``on_response(index, response)`` or ``on_error(index, exc)``;
        callbacks may be plain functions or coroutines. Returns when the pool
        has drained.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        semaphore = asyncio.Semaphore(concurrency)

        async with httpx.AsyncClient(
            transport=self._async_transport, **self._client_options()
        ) as client:

            async def run(index: int, request: httpx.Request) -> None:
                async with semaphore:
                    try:
                        response = await client.send(request)
                    except httpx.HTTPError as e:
                        logger.warning(f"Pooled request {index} failed: {e!r}")
                        await _maybe_await(on_error(index, e))
                        return
                await _maybe_await(on_response(index, response))

            await asyncio.gather(*(run(i, r) for i, r in enumerate(requests)))

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


__all__ = ["HttpxTransport"]
