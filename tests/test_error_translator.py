from __future__ import annotations

import pytest
from azure.core.exceptions import HttpResponseError, ResourceExistsError

from blobfs.Filesystem import ensure_container, is_conflict, is_not_found
from blobfs.Filesystem.ErrorTranslator import describe
from tests.fakes import FakeBlobServiceClient, make_error, not_found


class TestErrorClassification:
    """Test classification of Azure errors."""

    def test_not_found(self) -> None:
        assert is_not_found(not_found())
        assert is_not_found(make_error(status_code=404, error_code='ContainerNotFound'))
        assert is_not_found(make_error(status_code=400, error_code='BlobNotFound'))
        assert not is_not_found(make_error(status_code=500))

    def test_conflict(self) -> None:
        assert is_conflict(make_error(ResourceExistsError, 409, 'ContainerAlreadyExists'))
        assert is_conflict(make_error(status_code=409, error_code='LeaseAlreadyPresent'))
        assert not is_conflict(make_error(status_code=403, error_code='AuthorizationFailure'))

    def test_describe(self) -> None:
        error = make_error(status_code=403, error_code='AuthorizationFailure', message='Denied.\nRequestId:1')

        assert describe(error) == '403 AuthorizationFailure Denied.'


class TestEnsureContainer:
    """Test container bootstrap."""

    def test_creates_a_missing_container(self) -> None:
        client = FakeBlobServiceClient()

        assert ensure_container(client, 'flysystem') is True
        assert client.create_calls == [('flysystem', 'blob')]

    def test_existing_container_is_not_an_error(self) -> None:
        """Test that a 409 conflict means the container is already there."""
        client = FakeBlobServiceClient()
        ensure_container(client, 'flysystem')

        assert ensure_container(client, 'flysystem') is False

    def test_other_failures_propagate(self) -> None:
        class FailingClient:
            def create_container(self, name: str, public_access: object = None) -> None:
                raise make_error(status_code=403, error_code='AuthorizationFailure')

        with pytest.raises(HttpResponseError):
            ensure_container(FailingClient(), 'flysystem')
