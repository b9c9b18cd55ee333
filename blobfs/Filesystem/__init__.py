from __future__ import annotations

from .AzureBlobStorageAdapter import AzureBlobStorageAdapter
from .Config import Config
from .ErrorTranslator import ensure_container, is_conflict, is_not_found
from .Exceptions import (
    CorruptedPathDetected,
    FilesystemException,
    FilesystemOperationFailed,
    PathPrefixMismatch,
    PathTraversalDetected,
    UnableToCheckDirectoryExistence,
    UnableToCheckExistence,
    UnableToCheckFileExistence,
    UnableToCopyFile,
    UnableToDeleteFile,
    UnableToGeneratePublicUrl,
    UnableToGenerateTemporaryUrl,
    UnableToListContents,
    UnableToMoveFile,
    UnableToProvideChecksum,
    UnableToReadFile,
    UnableToRetrieveMetadata,
    UnableToSetVisibility,
    UnableToWriteFile,
)
from .FilesystemAdapter import FilesystemAdapter
from .FilesystemManager import FilesystemManager, get_filesystem_manager, storage
from .MimeTypeDetector import MimeTypeDetector
from .PathPrefixer import PathNormalizer, PathPrefixer
from .StorageAttributes import DirectoryAttributes, FileAttributes, StorageAttributes
from .Visibility import Visibility, VisibilityHandling, VisibilityPolicy

__all__ = [
    # Adapters
    'FilesystemAdapter',
    'AzureBlobStorageAdapter',
    'FilesystemManager',
    'get_filesystem_manager',
    'storage',

    # Paths and options
    'Config',
    'PathNormalizer',
    'PathPrefixer',
    'MimeTypeDetector',

    # Metadata
    'StorageAttributes',
    'FileAttributes',
    'DirectoryAttributes',

    # Visibility
    'Visibility',
    'VisibilityHandling',
    'VisibilityPolicy',

    # Error translation
    'ensure_container',
    'is_conflict',
    'is_not_found',

    # Exceptions
    'FilesystemException',
    'FilesystemOperationFailed',
    'UnableToWriteFile',
    'UnableToReadFile',
    'UnableToDeleteFile',
    'UnableToCopyFile',
    'UnableToMoveFile',
    'UnableToCheckExistence',
    'UnableToCheckFileExistence',
    'UnableToCheckDirectoryExistence',
    'UnableToSetVisibility',
    'UnableToListContents',
    'UnableToRetrieveMetadata',
    'UnableToProvideChecksum',
    'UnableToGeneratePublicUrl',
    'UnableToGenerateTemporaryUrl',
    'PathTraversalDetected',
    'CorruptedPathDetected',
    'PathPrefixMismatch',
]
