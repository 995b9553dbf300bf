"""Backend-core public surface – re-export runtime API."""

from __future__ import annotations

from .errors import (
    DeserializationError,
    OpenError,
    ParseError,
    SerializationError,
    StoreIOError,
    TrackerError,
)
from .model import StatusRecord, canonicalize
from .status_codec import decode, encode
from .store import StatusStore

__all__ = [
    "StatusRecord",
    "StatusStore",
    "canonicalize",
    "decode",
    "encode",
    "TrackerError",
    "OpenError",
    "ParseError",
    "SerializationError",
    "DeserializationError",
    "StoreIOError",
]
