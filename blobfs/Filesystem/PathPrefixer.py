from __future__ import annotations

import re
from typing import Optional

from .Exceptions import CorruptedPathDetected, PathPrefixMismatch, PathTraversalDetected


class PathNormalizer:
    """Normalizes relative filesystem paths into a canonical '/'-separated form."""

    _CONTROL_CHARACTERS = re.compile(r'[\x00-\x1f\x7f]')

    def normalize_path(self, path: str) -> str:
        path = path.replace('\\', '/')
        if self._CONTROL_CHARACTERS.search(path):
            raise CorruptedPathDetected(path)

        parts = []
        for part in path.split('/'):
            if part in ('', '.'):
                continue
            if part == '..':
                raise PathTraversalDetected(path)
            parts.append(part)

        return '/'.join(parts)


class PathPrefixer:
    """
    Maps relative paths to object keys under a fixed prefix and back.

    The prefix is stored with exactly one trailing separator, so keys never
    contain a doubled separator between prefix and path.
    """

    def __init__(self, prefix: str = '', separator: str = '/', normalizer: Optional[PathNormalizer] = None) -> None:
        self.separator = separator
        self.normalizer = normalizer or PathNormalizer()
        prefix = prefix.strip(separator)
        self.prefix = f"{prefix}{separator}" if prefix else ''

    def prefix_path(self, path: str) -> str:
        """Object key for a file path."""
        return self.prefix + self.normalizer.normalize_path(path)

    def prefix_directory_path(self, path: str) -> str:
        """Key prefix covering everything below a directory path."""
        normalized = self.normalizer.normalize_path(path)
        if normalized == '':
            return self.prefix
        return f"{self.prefix}{normalized}{self.separator}"

    def strip_prefix(self, key: str) -> str:
        if not key.startswith(self.prefix):
            raise PathPrefixMismatch(key, self.prefix)
        return key[len(self.prefix):]

    def strip_directory_prefix(self, key: str) -> str:
        return self.strip_prefix(key).rstrip(self.separator)
