from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Iterator, Optional, Union

from .Config import Config
from .StorageAttributes import FileAttributes, StorageAttributes


class FilesystemAdapter(ABC):
    """Filesystem verbs every storage adapter must provide."""

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Check if a file exists."""
        pass

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        """Check if a directory exists."""
        pass

    @abstractmethod
    def write(self, path: str, contents: Union[str, bytes], config: Optional[Config] = None) -> None:
        """Store file contents."""
        pass

    @abstractmethod
    def write_stream(self, path: str, stream: BinaryIO, config: Optional[Config] = None) -> None:
        """Store file contents read from a binary stream."""
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Get file contents."""
        pass

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """Get file contents as a binary stream."""
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file."""
        pass

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """Delete a directory and everything below it."""
        pass

    @abstractmethod
    def create_directory(self, path: str, config: Optional[Config] = None) -> None:
        """Create a directory."""
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> None:
        """Set file visibility."""
        pass

    @abstractmethod
    def visibility(self, path: str) -> FileAttributes:
        """Get file visibility."""
        pass

    @abstractmethod
    def mime_type(self, path: str) -> FileAttributes:
        """Get file MIME type."""
        pass

    @abstractmethod
    def last_modified(self, path: str) -> FileAttributes:
        """Get last modified timestamp."""
        pass

    @abstractmethod
    def file_size(self, path: str) -> FileAttributes:
        """Get file size in bytes."""
        pass

    @abstractmethod
    def list_contents(self, path: str = '', deep: bool = False) -> Iterator[StorageAttributes]:
        """List the contents of a directory."""
        pass

    @abstractmethod
    def move(self, source: str, destination: str, config: Optional[Config] = None) -> None:
        """Move a file."""
        pass

    @abstractmethod
    def copy(self, source: str, destination: str, config: Optional[Config] = None) -> None:
        """Copy a file."""
        pass

    def read_string(self, path: str, encoding: str = 'utf-8') -> str:
        """Get file contents as string."""
        return self.read(path).decode(encoding)

    def missing(self, path: str) -> bool:
        """Check if a file is missing."""
        return not self.file_exists(path)

    def has(self, path: str) -> bool:
        """Check if a file or a directory exists at the path."""
        return self.file_exists(path) or self.directory_exists(path)
