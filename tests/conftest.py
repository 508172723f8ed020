"""
Shared pytest fixtures for registry client tests.
"""

from typing import Callable

import httpx
import pytest

from vamdc_registry.constants import DEVELOPMENT_REGISTRY_ENDPOINT, VAMDC_TAP_ID

from tests.registry_fixtures import InMemoryRegistryTransport, resource_xml

FIXTURE_IVORN = "ivo://vamdc/registry-client-test-fixture-1"


@pytest.fixture
def in_memory_transport() -> InMemoryRegistryTransport:
    """Empty in-memory registry."""
    return InMemoryRegistryTransport()


@pytest.fixture
def fixture_registry() -> InMemoryRegistryTransport:
    """Registry where the test fixture resource exists only on the development endpoint."""
    transport = InMemoryRegistryTransport()
    transport.register(
        DEVELOPMENT_REGISTRY_ENDPOINT,
        FIXTURE_IVORN,
        resource_xml(FIXTURE_IVORN, [(VAMDC_TAP_ID, [["http://fixture.test/tap"]])]),
    )
    return transport


@pytest.fixture
def mock_http_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Build an httpx client whose requests are answered by a handler."""

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _factory
