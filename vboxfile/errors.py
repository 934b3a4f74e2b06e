"""
Exception types raised while building or writing VBOX files.

Everything derives from VboxError so callers can catch a single type.
"""

from typing import Any, Optional


class VboxError(Exception):
    """Base class for VBOX document and serialization failures."""


class DuplicateChannelError(VboxError, ValueError):
    """A channel with the same name is already part of the document."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Duplicate channel: {name}")


class TimeFormatError(VboxError):
    """A date or time-of-day value could not be formatted."""

    def __init__(self, value: Any, cause: Optional[BaseException] = None):
        self.value = value
        self.cause = cause
        super().__init__(f"Failed to format time {value!r}: {cause}")


class SinkWriteError(VboxError):
    """The output sink rejected a write."""

    def __init__(self, cause: OSError):
        self.cause = cause
        super().__init__(f"Failed to write to sink: {cause}")


__all__ = ["VboxError", "DuplicateChannelError", "TimeFormatError", "SinkWriteError"]
