from __future__ import annotations

from typing import Any, Dict, Optional


class Config:
    """Immutable bag of per-call options passed to adapter operations."""

    OPTION_VISIBILITY = 'visibility'
    OPTION_DIRECTORY_VISIBILITY = 'directory_visibility'
    OPTION_MIMETYPE = 'mimetype'
    OPTION_CHECKSUM_ALGO = 'checksum_algo'

    def __init__(self, options: Optional[Dict[str, Any]] = None) -> None:
        self._options: Dict[str, Any] = dict(options or {})

    def get(self, key: str, default: Any = None) -> Any:
        """Get an option value, or the default when it is not set."""
        return self._options.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._options

    def extend(self, options: Dict[str, Any]) -> Config:
        """Get a new config with the given options overriding these."""
        return Config({**self._options, **options})

    def with_defaults(self, defaults: Dict[str, Any]) -> Config:
        """Get a new config where these options override the given defaults."""
        return Config({**defaults, **self._options})

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._options)

    def __repr__(self) -> str:
        return f"Config({self._options!r})"
