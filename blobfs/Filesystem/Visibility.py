from __future__ import annotations

from enum import StrEnum
from typing import Any, List, Optional

from .Exceptions import UnableToSetVisibility


class Visibility(StrEnum):
    """Abstraction level access values."""

    PUBLIC = 'public'
    PRIVATE = 'private'


class VisibilityHandling(StrEnum):
    """
    What to do when a caller asks to change the visibility of an object.

    Blob access is configured once per container, so a per-object change
    can either fail loudly (ERROR) or be dropped (IGNORE).
    """

    ERROR = 'error'
    IGNORE = 'ignore'

    @classmethod
    def cases(cls) -> List[VisibilityHandling]:
        return list(cls.__members__.values())

    @classmethod
    def from_value(cls, value: Any) -> VisibilityHandling:
        """Create enum instance from value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls.__members__.values():
                if member.value == value.lower():
                    return member
        raise ValueError(f"Invalid value '{value}' for enum {cls.__name__}")


class VisibilityPolicy:
    """Applies the configured visibility handling to mutation requests."""

    REPORTED_VISIBILITY = Visibility.PUBLIC

    def __init__(self, handling: VisibilityHandling = VisibilityHandling.ERROR) -> None:
        self.handling = VisibilityHandling.from_value(handling)

    def set_visibility(self, path: str, visibility: str) -> None:
        """Handle an explicit visibility change. Never touches the backend."""
        if self.handling is VisibilityHandling.ERROR:
            raise UnableToSetVisibility.at_location(path, 'Azure does not support this operation.')

    def apply_requested(self, path: str, visibility: Optional[str]) -> None:
        """
        Handle a visibility option passed along with a write or copy.

        Requesting the visibility the container already serves is accepted;
        anything else goes through the same handling as set_visibility.
        """
        if visibility is None or visibility == self.REPORTED_VISIBILITY:
            return
        self.set_visibility(path, visibility)
