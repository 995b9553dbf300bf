"""git-status-tracker – all public symbols are re-exported from .core."""

from importlib import metadata

from .core import (  # noqa: F401 – re-exports
    DeserializationError,
    OpenError,
    ParseError,
    SerializationError,
    StatusRecord,
    StatusStore,
    StoreIOError,
    TrackerError,
    canonicalize,
    decode,
    encode,
)

try:
    __version__ = metadata.version("git-status-tracker")
except metadata.PackageNotFoundError:  # editable install before first build
    __version__ = "0.0.0"
