"""Filesystem abstraction over Azure Blob Storage containers."""

from __future__ import annotations

from .Filesystem import (
    AzureBlobStorageAdapter,
    Config,
    FilesystemManager,
    Visibility,
    VisibilityHandling,
    storage,
)

__version__ = '1.0.0'

__all__ = [
    'AzureBlobStorageAdapter',
    'Config',
    'FilesystemManager',
    'Visibility',
    'VisibilityHandling',
    'storage',
]
