# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures: a fixed profile, a small endpoint table and a recording
``httpx.MockTransport`` so no test touches the network.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from acs_sdk_core import AcsClient, ClientConfig, EndpointResolver, Profile

REGION = "cn-hangzhou"
ACCESS_KEY_ID = "testid"
ACCESS_KEY_SECRET = "testsecret"


def json_response(status_code: int = 200, body: Any = None) -> httpx.Response:
    return httpx.Response(
        status_code,
        headers={"Content-Type": "application/json;charset=utf-8"},
        content=json.dumps(body if body is not None else {}).encode(),
    )


def error_body(code: str, message: str, request_id: str = "REQ-1") -> dict[str, str]:
    return {"Code": code, "Message": message, "RequestId": request_id}


class RecordingHandler:
    """MockTransport handler that records requests and replays responses.

    ``responses`` is consumed in order; the last one repeats once exhausted.
    Items may be responses, exceptions (raised) or callables taking the request.
    """

    def __init__(self, *responses: httpx.Response | Exception | Callable[[httpx.Request], httpx.Response]):
        self.responses = list(responses) or [json_response(200, {"RequestId": "OK"})]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        item = self.responses[index]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return httpx.Response(item.status_code, headers=item.headers, content=item.content)
        return item(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def profile() -> Profile:
    return Profile.create(REGION, ACCESS_KEY_ID, ACCESS_KEY_SECRET)


@pytest.fixture
def endpoints() -> EndpointResolver:
    return EndpointResolver.from_mapping(
        {
            REGION: {"Ecs": "ecs.cn-hangzhou.aliyuncs.com", "CS": "cs.aliyuncs.com"},
            "cn-beijing": {"Ecs": "ecs.cn-beijing.aliyuncs.com"},
        }
    )


@pytest.fixture
def make_client(profile: Profile, endpoints: EndpointResolver):
    """Factory building an AcsClient over a RecordingHandler."""
    clients: list[AcsClient] = []

    def factory(
        handler: RecordingHandler | Callable[[httpx.Request], Any],
        *,
        profile: Profile | None = profile,
        config: ClientConfig | None = None,
    ) -> AcsClient:
        client = AcsClient(
            profile,
            config=config,
            endpoints=endpoints,
            http_transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def respond() -> Callable[..., httpx.Response]:
    """``respond(status, body)`` builds a JSON response."""
    return json_response


@pytest.fixture
def error() -> Callable[..., dict[str, str]]:
    """``error(code, message, request_id)`` builds an error body."""
    return error_body


@pytest.fixture
def recorder() -> type[RecordingHandler]:
    return RecordingHandler
