"""
Runs the adapter against a real storage account or Azurite.

Set BLOBFS_AZURE_DSN to a connection string to enable these tests, e.g. the
Azurite development connection string. Every run works below its own prefix
and removes it afterwards.
"""

from __future__ import annotations

import os
import uuid
from typing import Iterator

import pytest

from blobfs.Filesystem import (
    AzureBlobStorageAdapter,
    Config,
    UnableToReadFile,
    UnableToSetVisibility,
    Visibility,
    ensure_container,
)
from tests.fakes import as_stream

DSN = os.getenv('BLOBFS_AZURE_DSN')
CONTAINER = os.getenv('BLOBFS_AZURE_CONTAINER', 'flysystem')

pytestmark = pytest.mark.skipif(not DSN, reason='BLOBFS_AZURE_DSN is not set')


@pytest.fixture(scope='module')
def blob_service_client():  # type: ignore[no-untyped-def]
    from azure.storage.blob import BlobServiceClient

    client = BlobServiceClient.from_connection_string(DSN)
    ensure_container(client, CONTAINER)
    yield client
    client.close()


@pytest.fixture
def adapter(blob_service_client) -> Iterator[AzureBlobStorageAdapter]:  # type: ignore[no-untyped-def]
    """Adapter confined to a fresh prefix, cleaned up after the test."""
    adapter = AzureBlobStorageAdapter(blob_service_client, CONTAINER, f"ci-{uuid.uuid4().hex}", chunk_size=8)
    yield adapter
    adapter.delete_directory('')


class TestAzureBlobStorageIntegration:
    def test_write_read_and_delete(self, adapter: AzureBlobStorageAdapter) -> None:
        adapter.write('path.txt', 'contents')

        assert adapter.read('path.txt') == b'contents'
        assert adapter.file_size('path.txt').file_size == 8
        assert adapter.mime_type('path.txt').mime_type == 'text/plain'

        adapter.delete('path.txt')
        adapter.delete('path.txt')
        assert adapter.file_exists('path.txt') is False

    def test_staged_stream_upload(self, adapter: AzureBlobStorageAdapter) -> None:
        adapter.write_stream('big.bin', as_stream(b'x' * 30))

        with adapter.read_stream('big.bin') as stream:
            assert stream.read() == b'x' * 30

    def test_copy_and_move(self, adapter: AzureBlobStorageAdapter) -> None:
        adapter.write('source.txt', 'contents to be copied', Config({Config.OPTION_VISIBILITY: Visibility.PUBLIC}))

        adapter.copy('source.txt', 'copy.txt')
        adapter.move('source.txt', 'moved.txt')

        assert adapter.file_exists('source.txt') is False
        assert adapter.read('copy.txt') == b'contents to be copied'
        assert adapter.read('moved.txt') == b'contents to be copied'

    def test_listing(self, adapter: AzureBlobStorageAdapter) -> None:
        adapter.write('a/b.txt', 'x')
        adapter.write('a/c/d.txt', 'y')

        shallow = [(entry.type, entry.path) for entry in adapter.list_contents('a')]
        deep = [entry.path for entry in adapter.list_contents('a', deep=True)]

        assert shallow == [('file', 'a/b.txt'), ('dir', 'a/c')]
        assert deep == ['a/b.txt', 'a/c/d.txt']
        assert adapter.directory_exists('a/c')

    def test_missing_file(self, adapter: AzureBlobStorageAdapter) -> None:
        with pytest.raises(UnableToReadFile):
            adapter.read('missing.txt')

    def test_setting_visibility_fails(self, adapter: AzureBlobStorageAdapter) -> None:
        with pytest.raises(UnableToSetVisibility):
            adapter.set_visibility('path.txt', 'private')
