"""
Shared fixtures for benchmark tests.
"""

import httpx
import pytest

from acs_sdk_core import AcsClient, EndpointResolver, Profile


def instant_handler(request: httpx.Request) -> httpx.Response:
    """Gateway stand-in that answers every call immediately."""
    return httpx.Response(200, json={"RequestId": "bench", "Ok": True})


@pytest.fixture
def benchmark_profile():
    return Profile.create("cn-hangzhou", "bench-id", "bench-secret")


@pytest.fixture
def benchmark_endpoints():
    return EndpointResolver.from_mapping({"cn-hangzhou": {"Ecs": "ecs.bench.test"}})


@pytest.fixture
def benchmark_client(benchmark_profile, benchmark_endpoints):
    """Client whose transport never leaves the process."""
    client = AcsClient(
        benchmark_profile,
        endpoints=benchmark_endpoints,
        http_transport=httpx.MockTransport(instant_handler),
    )
    yield client
    client.close()
