"""Exception hierarchy for status tracking and persistence failures."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for all git-status-tracker errors."""


class OpenError(TrackerError):
    """Store could not be opened within the retry budget."""

    def __init__(self, location: str, *, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"failed to open status store at {location} after {attempts} attempts: "
            f"{last_error}"
        )
        self.location = location
        self.attempts = attempts
        self.last_error = last_error


class ParseError(TrackerError, ValueError):
    """Raw status string does not follow the ``<count> <code>|...`` grammar."""

    def __init__(self, message: str, *, segment: str = "", index: int = -1) -> None:
        super().__init__(message)
        self.segment = segment
        self.index = index


class SerializationError(TrackerError):
    """Record could not be encoded for storage."""


class DeserializationError(TrackerError):
    """Stored record bytes are structurally corrupt."""


class StoreIOError(TrackerError, OSError):
    """Database or filesystem failure during read, write or flush."""
