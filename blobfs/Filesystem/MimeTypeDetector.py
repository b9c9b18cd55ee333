from __future__ import annotations

import mimetypes
from typing import Optional, Union

DEFAULT_MIME_TYPE = 'application/octet-stream'


class MimeTypeDetector:
    """Detects a content type from the file extension, then from the contents."""

    def __init__(self, default: str = DEFAULT_MIME_TYPE) -> None:
        self.default = default

    def detect_mime_type(self, path: str, contents: Optional[Union[str, bytes]] = None) -> str:
        mime_type, _ = mimetypes.guess_type(path)
        if mime_type:
            return mime_type

        if contents is None:
            return self.default
        return self.detect_from_contents(contents)

    def detect_from_contents(self, contents: Union[str, bytes]) -> str:
        if isinstance(contents, str):
            return 'text/plain'
        if not contents or b'\x00' in contents:
            return self.default
        try:
            contents.decode('utf-8')
        except UnicodeDecodeError:
            return self.default
        return 'text/plain'
