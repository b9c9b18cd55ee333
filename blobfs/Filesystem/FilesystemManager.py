from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, Optional, Union

from azure.storage.blob import BlobServiceClient

from .AzureBlobStorageAdapter import AzureBlobStorageAdapter
from .Config import Config
from .ErrorTranslator import ensure_container
from .FilesystemAdapter import FilesystemAdapter
from .StorageAttributes import StorageAttributes

DriverCreator = Callable[[Dict[str, Any]], FilesystemAdapter]


class FilesystemManager:
    """Laravel-style filesystem manager resolving named disks from configuration."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config = config or {}
        self._disks: Dict[str, FilesystemAdapter] = {}
        self._custom_drivers: Dict[str, DriverCreator] = {}
        self._default_disk = self._config.get('default', 'azure')
        self.logger = logging.getLogger(__name__)

    def disk(self, name: Optional[str] = None) -> FilesystemAdapter:
        """Get a filesystem disk, building it on first use."""
        name = name or self._default_disk

        if name not in self._disks:
            self._disks[name] = self._create_disk(name)

        return self._disks[name]

    def _create_disk(self, name: str) -> FilesystemAdapter:
        """Create a filesystem disk."""
        disks = self._config.get('disks', {})
        if name not in disks:
            raise ValueError(f"Filesystem disk '{name}' is not configured")

        config = disks[name]
        driver = config.get('driver', 'azure')
        self.logger.debug("Creating filesystem disk", extra={'context': {'disk': name, 'driver': driver}})

        if driver in self._custom_drivers:
            return self._custom_drivers[driver](config)
        elif driver == 'azure':
            return self._create_azure_adapter(config)
        else:
            raise ValueError(f"Filesystem driver '{driver}' not supported")

    def _create_azure_adapter(self, config: Dict[str, Any]) -> AzureBlobStorageAdapter:
        """Create Azure Blob Storage filesystem adapter."""
        container = config.get('container')
        if not container:
            raise ValueError("Azure disk requires a 'container'")

        client = config.get('client') or self._create_blob_service_client(config)

        if config.get('create_container', False):
            ensure_container(client, container, config.get('public_access') or None)

        return AzureBlobStorageAdapter(
            client,
            container,
            prefix=config.get('prefix') or '',
            chunk_size=int(config.get('chunk_size') or AzureBlobStorageAdapter.DEFAULT_CHUNK_SIZE),
            visibility_handling=config.get('visibility_handling') or AzureBlobStorageAdapter.ON_VISIBILITY_THROW_ERROR,
            max_results_for_contents_listing=int(
                config.get('max_results')
                or AzureBlobStorageAdapter.DEFAULT_MAX_RESULTS_FOR_CONTENTS_LISTING
            ),
            account_key=config.get('account_key'),
        )

    def _create_blob_service_client(self, config: Dict[str, Any]) -> BlobServiceClient:
        connection_string = config.get('connection_string')
        if connection_string:
            return BlobServiceClient.from_connection_string(connection_string)

        account_name = config.get('account_name')
        if not account_name:
            raise ValueError("Azure disk requires a 'connection_string' or an 'account_name'")

        account_url = config.get('url') or f"https://{account_name}.blob.core.windows.net"
        credential = config.get('account_key') or config.get('sas_token')
        return BlobServiceClient(account_url=account_url, credential=credential)

    def get_default_driver(self) -> str:
        """Get the default filesystem disk."""
        return self._default_disk

    def set_default_driver(self, name: str) -> None:
        """Set the default filesystem disk."""
        self._default_disk = name

    def extend(self, driver: str, creator: DriverCreator) -> None:
        """Register a custom filesystem driver."""
        self._custom_drivers[driver] = creator

    def forget_disk(self, name: str) -> None:
        """Drop a resolved disk so the next lookup builds it again."""
        self._disks.pop(name, None)

    # Proxy methods to default disk

    def file_exists(self, path: str) -> bool:
        return self.disk().file_exists(path)

    def read(self, path: str) -> bytes:
        return self.disk().read(path)

    def write(self, path: str, contents: Union[str, bytes], config: Optional[Config] = None) -> None:
        self.disk().write(path, contents, config)

    def delete(self, path: str) -> None:
        self.disk().delete(path)

    def copy(self, source: str, destination: str, config: Optional[Config] = None) -> None:
        self.disk().copy(source, destination, config)

    def move(self, source: str, destination: str, config: Optional[Config] = None) -> None:
        self.disk().move(source, destination, config)

    def list_contents(self, path: str = '', deep: bool = False) -> Iterator[StorageAttributes]:
        return self.disk().list_contents(path, deep)


# Global filesystem manager instance
filesystem_manager_instance: Optional[FilesystemManager] = None


def get_filesystem_manager() -> FilesystemManager:
    """Get the global filesystem manager instance, configured from config.filesystems."""
    global filesystem_manager_instance
    if filesystem_manager_instance is None:
        from config import filesystems
        from ..Log import get_log_manager

        get_log_manager().channel()
        filesystem_manager_instance = FilesystemManager({
            'default': filesystems.default,
            'disks': filesystems.disks,
        })
    return filesystem_manager_instance


def storage(disk: Optional[str] = None) -> FilesystemAdapter:
    """Get a filesystem disk."""
    return get_filesystem_manager().disk(disk)
