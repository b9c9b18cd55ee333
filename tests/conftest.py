from __future__ import annotations

import pytest

from blobfs.Filesystem import AzureBlobStorageAdapter, VisibilityHandling
from tests.fakes import FakeBlobServiceClient, FakeContainerClient

CONTAINER_NAME = 'flysystem'
PREFIX = 'ci'


@pytest.fixture
def service_client() -> FakeBlobServiceClient:
    """Create an in-memory blob service."""
    return FakeBlobServiceClient()


@pytest.fixture
def container(service_client: FakeBlobServiceClient) -> FakeContainerClient:
    """The container every adapter fixture points at."""
    return service_client.get_container_client(CONTAINER_NAME)


@pytest.fixture
def adapter(service_client: FakeBlobServiceClient, container: FakeContainerClient) -> AzureBlobStorageAdapter:
    """Adapter with the default visibility handling (error)."""
    return AzureBlobStorageAdapter(service_client, CONTAINER_NAME, PREFIX)


@pytest.fixture
def ignoring_adapter(service_client: FakeBlobServiceClient, container: FakeContainerClient) -> AzureBlobStorageAdapter:
    """Adapter that silently ignores visibility changes."""
    return AzureBlobStorageAdapter(
        service_client, CONTAINER_NAME, PREFIX, 50000, AzureBlobStorageAdapter.ON_VISIBILITY_IGNORE
    )


@pytest.fixture
def small_chunk_adapter(service_client: FakeBlobServiceClient, container: FakeContainerClient) -> AzureBlobStorageAdapter:
    """Adapter with a tiny chunk size so streamed writes are staged in blocks."""
    return AzureBlobStorageAdapter(
        service_client, CONTAINER_NAME, PREFIX, chunk_size=4, visibility_handling=VisibilityHandling.ERROR
    )
