from __future__ import annotations

from typing import Optional


class FilesystemException(Exception):
    """Base exception for every filesystem error."""
    pass


class FilesystemOperationFailed(FilesystemException):
    """Base exception for a failed filesystem operation."""

    OPERATION_WRITE = 'WRITE'
    OPERATION_READ = 'READ'
    OPERATION_DELETE = 'DELETE'
    OPERATION_COPY = 'COPY'
    OPERATION_MOVE = 'MOVE'
    OPERATION_EXISTENCE_CHECK = 'EXISTENCE_CHECK'
    OPERATION_DIRECTORY_EXISTS = 'DIRECTORY_EXISTS'
    OPERATION_FILE_EXISTS = 'FILE_EXISTS'
    OPERATION_SET_VISIBILITY = 'SET_VISIBILITY'
    OPERATION_RETRIEVE_METADATA = 'RETRIEVE_METADATA'
    OPERATION_LIST_CONTENTS = 'LIST_CONTENTS'

    operation: str = ''

    def __init__(self, message: str, location: str = '', reason: str = '') -> None:
        super().__init__(message)
        self.location = location
        self.reason = reason


def _with_reason(message: str, reason: str) -> str:
    return f"{message} {reason}".rstrip() if reason else message


class UnableToWriteFile(FilesystemOperationFailed):
    """Raised when an upload fails."""

    operation = FilesystemOperationFailed.OPERATION_WRITE

    @classmethod
    def at_location(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToWriteFile:
        error = cls(_with_reason(f"Unable to write file at location: {location}.", reason), location, reason)
        error.__cause__ = previous
        return error


class UnableToReadFile(FilesystemOperationFailed):
    """Raised when an object is missing or cannot be fetched."""

    operation = FilesystemOperationFailed.OPERATION_READ

    def __init__(self, message: str, location: str = '', reason: str = '', existence_unknown: bool = False) -> None:
        super().__init__(message, location, reason)
        self.existence_unknown = existence_unknown

    @classmethod
    def from_location(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToReadFile:
        error = cls(_with_reason(f"Unable to read file from location: {location}.", reason), location, reason)
        error.__cause__ = previous
        return error

    @classmethod
    def because_existence_is_unknown(cls, location: str, previous: Optional[BaseException] = None) -> UnableToReadFile:
        """The fetch failed before the backend could say whether the object exists."""
        reason = 'Unable to determine whether the file exists.'
        error = cls(
            _with_reason(f"Unable to read file from location: {location}.", reason),
            location,
            reason,
            existence_unknown=True,
        )
        error.__cause__ = previous
        return error


class UnableToDeleteFile(FilesystemOperationFailed):
    """Raised when a delete fails for a reason other than a missing object."""

    operation = FilesystemOperationFailed.OPERATION_DELETE

    @classmethod
    def at_location(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToDeleteFile:
        error = cls(_with_reason(f"Unable to delete file located at: {location}.", reason), location, reason)
        error.__cause__ = previous
        return error


class UnableToCopyFile(FilesystemOperationFailed):
    operation = FilesystemOperationFailed.OPERATION_COPY

    def __init__(self, message: str, source: str = '', destination: str = '', reason: str = '') -> None:
        super().__init__(message, source, reason)
        self.source = source
        self.destination = destination

    @classmethod
    def from_location_to(
        cls,
        source: str,
        destination: str,
        previous: Optional[BaseException] = None,
        reason: str = '',
    ) -> UnableToCopyFile:
        message = _with_reason(f"Unable to copy file from {source} to {destination}.", reason)
        error = cls(message, source, destination, reason)
        error.__cause__ = previous
        return error


class UnableToMoveFile(FilesystemOperationFailed):
    operation = FilesystemOperationFailed.OPERATION_MOVE

    def __init__(self, message: str, source: str = '', destination: str = '', reason: str = '') -> None:
        super().__init__(message, source, reason)
        self.source = source
        self.destination = destination

    @classmethod
    def from_location_to(
        cls,
        source: str,
        destination: str,
        previous: Optional[BaseException] = None,
        reason: str = '',
    ) -> UnableToMoveFile:
        message = _with_reason(f"Unable to move file from {source} to {destination}.", reason)
        error = cls(message, source, destination, reason)
        error.__cause__ = previous
        return error


class UnableToCheckExistence(FilesystemOperationFailed):
    """Raised when an existence probe fails, as opposed to reporting absence."""

    operation = FilesystemOperationFailed.OPERATION_EXISTENCE_CHECK

    @classmethod
    def for_location(cls, location: str, previous: Optional[BaseException] = None) -> UnableToCheckExistence:
        reason = str(previous) if previous is not None else ''
        error = cls(_with_reason(f"Unable to check existence for: {location}.", reason), location, reason)
        error.__cause__ = previous
        return error


class UnableToCheckFileExistence(UnableToCheckExistence):
    operation = FilesystemOperationFailed.OPERATION_FILE_EXISTS


class UnableToCheckDirectoryExistence(UnableToCheckExistence):
    operation = FilesystemOperationFailed.OPERATION_DIRECTORY_EXISTS


class UnableToSetVisibility(FilesystemOperationFailed):
    operation = FilesystemOperationFailed.OPERATION_SET_VISIBILITY

    @classmethod
    def at_location(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToSetVisibility:
        error = cls(_with_reason(f"Unable to set visibility for file {location}.", reason), location, reason)
        error.__cause__ = previous
        return error


class UnableToListContents(FilesystemOperationFailed):
    operation = FilesystemOperationFailed.OPERATION_LIST_CONTENTS

    @classmethod
    def at_location(cls, location: str, deep: bool, previous: Optional[BaseException] = None) -> UnableToListContents:
        reason = str(previous) if previous is not None else ''
        message = _with_reason(
            f"Unable to list contents for '{location}', {'deep' if deep else 'shallow'} listing.",
            reason,
        )
        error = cls(message, location, reason)
        error.__cause__ = previous
        return error


class UnableToRetrieveMetadata(FilesystemOperationFailed):
    """Raised when a metadata probe fails or the object is absent."""

    operation = FilesystemOperationFailed.OPERATION_RETRIEVE_METADATA

    METADATA_TYPE_MIME_TYPE = 'mime_type'
    METADATA_TYPE_FILE_SIZE = 'file_size'
    METADATA_TYPE_LAST_MODIFIED = 'last_modified'
    METADATA_TYPE_VISIBILITY = 'visibility'

    def __init__(self, message: str, location: str = '', reason: str = '', metadata_type: str = '') -> None:
        super().__init__(message, location, reason)
        self.metadata_type = metadata_type

    @classmethod
    def create(
        cls,
        location: str,
        metadata_type: str,
        reason: str = '',
        previous: Optional[BaseException] = None,
    ) -> UnableToRetrieveMetadata:
        message = _with_reason(f"Unable to retrieve the {metadata_type} for file at location: {location}.", reason)
        error = cls(message, location, reason, metadata_type)
        error.__cause__ = previous
        return error

    @classmethod
    def mime_type(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToRetrieveMetadata:
        return cls.create(location, cls.METADATA_TYPE_MIME_TYPE, reason, previous)

    @classmethod
    def file_size(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToRetrieveMetadata:
        return cls.create(location, cls.METADATA_TYPE_FILE_SIZE, reason, previous)

    @classmethod
    def last_modified(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToRetrieveMetadata:
        return cls.create(location, cls.METADATA_TYPE_LAST_MODIFIED, reason, previous)

    @classmethod
    def visibility(cls, location: str, reason: str = '', previous: Optional[BaseException] = None) -> UnableToRetrieveMetadata:
        return cls.create(location, cls.METADATA_TYPE_VISIBILITY, reason, previous)


class UnableToProvideChecksum(FilesystemException):
    def __init__(self, reason: str, path: str, previous: Optional[BaseException] = None) -> None:
        super().__init__(f"Unable to get checksum for {path}: {reason}")
        self.location = path
        self.reason = reason
        self.__cause__ = previous


class UnableToGeneratePublicUrl(FilesystemException):
    def __init__(self, reason: str, path: str, previous: Optional[BaseException] = None) -> None:
        super().__init__(f"Unable to generate public url for {path}: {reason}")
        self.location = path
        self.reason = reason
        self.__cause__ = previous


class UnableToGenerateTemporaryUrl(FilesystemException):
    def __init__(self, reason: str, path: str, previous: Optional[BaseException] = None) -> None:
        super().__init__(f"Unable to generate temporary url for {path}: {reason}")
        self.location = path
        self.reason = reason
        self.__cause__ = previous


class PathTraversalDetected(FilesystemException):
    """Raised when a path tries to step outside the adapter root."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path traversal detected: {path}")
        self.path = path


class CorruptedPathDetected(FilesystemException):
    def __init__(self, path: str) -> None:
        super().__init__(f"Corrupted path detected: {path!r}")
        self.path = path


class PathPrefixMismatch(FilesystemException):
    """An object key did not start with the adapter prefix."""

    def __init__(self, key: str, prefix: str) -> None:
        super().__init__(f"Object key '{key}' does not start with the expected prefix '{prefix}'")
        self.key = key
        self.prefix = prefix
