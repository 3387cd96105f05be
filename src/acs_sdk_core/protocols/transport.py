# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for the HTTP transport the client delegates to."""

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol, runtime_checkable

import httpx

ResponseCallback = Callable[[int, httpx.Response], Awaitable[None] | None]
ErrorCallback = Callable[[int, Exception], Awaitable[None] | None]


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal transport contract.

    The client owns one transport instance and never exposes it. A transport
    sends one request synchronously, or drains a bounded-concurrency pool of
    requests, reporting each outcome by index.
    """

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send one request and return the fully read response."""
        ...

    async def pool(
        self,
        requests: Sequence[httpx.Request],
        on_response: ResponseCallback,
        on_error: ErrorCallback,
        concurrency: int = 1,
    ) -> None:
        """Send every request with at most ``concurrency`` in flight."""
        ...

    def close(self) -> None:
        """Release pooled connections."""
        ...
