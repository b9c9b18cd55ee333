from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional


@dataclass(frozen=True)
class StorageAttributes(ABC):
    """Metadata record for an entry in a listing or a metadata probe."""

    TYPE_FILE: ClassVar[str] = 'file'
    TYPE_DIRECTORY: ClassVar[str] = 'dir'

    path: str
    visibility: Optional[str] = None
    last_modified: Optional[int] = None
    extra_metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    @abstractmethod
    def type(self) -> str:
        """Either TYPE_FILE or TYPE_DIRECTORY."""
        pass

    def is_file(self) -> bool:
        return self.type == self.TYPE_FILE

    def is_dir(self) -> bool:
        return self.type == self.TYPE_DIRECTORY

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'path': self.path,
            'visibility': self.visibility,
            'last_modified': self.last_modified,
            'extra_metadata': dict(self.extra_metadata),
        }


@dataclass(frozen=True)
class FileAttributes(StorageAttributes):
    file_size: Optional[int] = None
    mime_type: Optional[str] = None

    @property
    def type(self) -> str:
        return self.TYPE_FILE

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['file_size'] = self.file_size
        data['mime_type'] = self.mime_type
        return data


@dataclass(frozen=True)
class DirectoryAttributes(StorageAttributes):
    @property
    def type(self) -> str:
        return self.TYPE_DIRECTORY
